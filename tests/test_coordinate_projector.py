import numpy as np
import pytest

from pyflowbit.chart.coordinate_projector import index_to_x, project, project_many
from pyflowbit.chart.layout import Layout
from pyflowbit.chart.window_state import Bounds

LAYOUT = Layout(
    width=200,
    height=200,
    padding_left=20,
    padding_right=30,
    padding_top=10,
    padding_bottom=40,
)
BOUNDS = Bounds(raw_min=0, raw_max=100, display_min=-10, display_max=110)


class TestProject:
    def test_corners_of_the_plot_area(self):
        assert project(110, 0, 5, LAYOUT, BOUNDS) == pytest.approx((20, 10))
        assert project(-10, 4, 5, LAYOUT, BOUNDS) == pytest.approx((170, 160))

    def test_midpoint(self):
        point = project(50, 2, 5, LAYOUT, BOUNDS)
        assert point.x == pytest.approx(95)
        assert point.y == pytest.approx(85)

    def test_single_point_window_sits_on_the_left_edge(self):
        assert project(50, 0, 1, LAYOUT, BOUNDS).x == pytest.approx(20)
        assert index_to_x(0, 1, LAYOUT) == pytest.approx(20)

    def test_larger_values_are_drawn_higher(self):
        values = np.linspace(-10, 110, 25)
        xy = project_many(values, np.zeros_like(values), 5, LAYOUT, BOUNDS)
        assert np.all(np.diff(xy[:, 1]) < 0)

    def test_matches_index_to_x(self):
        indices = np.arange(7)
        xy = project_many(np.full(7, 50.0), indices, 7, LAYOUT, BOUNDS)
        expected = [index_to_x(i, 7, LAYOUT) for i in indices]
        np.testing.assert_allclose(xy[:, 0], expected)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="same shape"):
            project_many([1.0, 2.0], [0.0], 5, LAYOUT, BOUNDS)

    def test_empty_display_range(self):
        flat = Bounds(raw_min=1, raw_max=1, display_min=1, display_max=1)
        with pytest.raises(ValueError, match="non-empty"):
            project(1, 0, 5, LAYOUT, flat)

    def test_empty_input_gives_empty_output(self):
        xy = project_many([], [], 5, LAYOUT, BOUNDS)
        assert xy.shape == (0, 2)
