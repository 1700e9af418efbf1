import pytest

from pyflowbit.chart.series import ChartData, Series
from pyflowbit.chart.window_state import Window, WindowState, compute_bounds


def _data(length=30, labels=None):
    values = [float(i % 7) for i in range(length)]
    return ChartData([Series("s", values)], labels or [str(i) for i in range(length)])


class TestComputeBounds:
    def test_declared_bounds_are_aggregated_and_padded(self):
        data = ChartData(
            [
                Series("a", [50] * 10, declared_min=0, declared_max=100),
                Series("b", [50] * 8, declared_min=10, declared_max=90),
            ],
            [str(i) for i in range(10)],
        )
        window = Window(total_point_count=10, visible_point_count=10, visible_label_count=10)

        bounds = compute_bounds(data, window, zoom_enabled=False)

        assert bounds.raw_min == 0
        assert bounds.raw_max == 100
        assert bounds.display_min == -10
        assert bounds.display_max == 110

    def test_zoom_bounds_follow_visible_slice(self):
        data = ChartData(
            [
                Series("a", [0, 50, 100, 20, 30, 40], declared_min=-1000, declared_max=1000),
                Series("b", [60, 10, 35, 45], declared_min=-1000, declared_max=1000),
            ],
            [str(i) for i in range(6)],
        )
        window = Window(total_point_count=6, visible_point_count=3, visible_label_count=6)

        bounds = compute_bounds(data, window, zoom_enabled=True)

        assert bounds.raw_min == 20
        assert bounds.raw_max == 45
        assert bounds.display_min == pytest.approx(17.5)
        assert bounds.display_max == pytest.approx(47.5)

    def test_series_without_visible_values_is_skipped(self):
        data = ChartData(
            [Series("a", [1, 2, 3, 4, 5, 6]), Series("b", [100, 200])],
            [str(i) for i in range(6)],
        )
        window = Window(total_point_count=6, visible_point_count=2, visible_label_count=6)

        bounds = compute_bounds(data, window, zoom_enabled=True)

        assert (bounds.raw_min, bounds.raw_max) == (5, 6)

    @pytest.mark.parametrize(
        "value, expected",
        [(5.0, (4.0, 6.0)), (1000.0, (900.0, 1100.0)), (0.0, (-1.0, 1.0))],
    )
    def test_flat_range_gets_non_zero_span(self, value, expected):
        data = ChartData([Series("flat", [value] * 4)], list("abcd"))
        window = Window(total_point_count=4, visible_point_count=4, visible_label_count=4)

        bounds = compute_bounds(data, window, zoom_enabled=False)

        assert (bounds.display_min, bounds.display_max) == pytest.approx(expected)
        assert bounds.display_min < bounds.raw_min <= bounds.raw_max < bounds.display_max


class TestWindowState:
    def test_defaults_to_full_extent(self):
        state = WindowState(_data(30))
        assert state.window.visible_point_count == 30
        assert state.window.visible_label_count == 30

    def test_out_of_range_override_is_clamped(self):
        state = WindowState(_data(30), visible_point_count=100)
        assert state.visible_point_count == 30

    def test_zooming_out_stops_at_total_minus_reserve(self):
        state = WindowState(_data(30), visible_point_count=12, zoom_step=5)
        for _ in range(10):
            state.zoom_by(5)
        assert state.visible_point_count == 25

    def test_zooming_in_stops_at_two_steps(self):
        state = WindowState(_data(30), zoom_step=5)
        for _ in range(10):
            state.zoom_by(-5)
        assert state.visible_point_count == 10

    def test_zoom_reports_whether_window_changed(self):
        state = WindowState(_data(30), visible_point_count=10, zoom_step=5)
        assert state.zoom_by(-5) is False
        assert state.zoom_by(5) is True
        assert state.visible_point_count == 15

    def test_zooming_out_from_the_full_window_keeps_it(self):
        state = WindowState(_data(30), zoom_step=5)

        assert state.zoom_by(5) is False
        assert state.visible_point_count == 30

    def test_zooming_in_below_the_minimum_keeps_the_window(self):
        state = WindowState(_data(30), visible_point_count=4, zoom_step=5)

        assert state.zoom_by(-5) is False
        assert state.visible_point_count == 4

    def test_zoom_moves_towards_the_range_from_outside(self):
        state = WindowState(_data(30), visible_point_count=4, zoom_step=5)
        assert state.zoom_by(5) is True
        assert state.visible_point_count == 9

        state = WindowState(_data(30), zoom_step=5)
        assert state.zoom_by(-2) is True
        assert state.visible_point_count == 28

    def test_restore_puts_back_window_and_bounds(self):
        state = WindowState(_data(30), zoom_enabled=True, zoom_step=5)
        window, bounds = state.window, state.bounds
        state.zoom_by(-15)

        state.restore(window, bounds)

        assert state.visible_point_count == 30
        assert state.bounds is bounds

    def test_zoom_on_short_data_is_ignored(self):
        state = WindowState(_data(12), zoom_step=5)
        assert state.zoom_by(-5) is False
        assert state.visible_point_count == 12

    def test_zoom_recomputes_bounds_when_enabled(self):
        values = [100.0] * 20 + [float(i) for i in range(10)]
        data = ChartData([Series("s", values)], [str(i) for i in range(30)])
        state = WindowState(data, zoom_enabled=True, zoom_step=5)
        assert state.bounds.raw_max == 100.0

        state.zoom_by(-20)

        assert state.visible_point_count == 10
        assert state.bounds.raw_min == 0.0
        assert state.bounds.raw_max == 9.0

    def test_label_step(self):
        state = WindowState(_data(30), visible_point_count=20, visible_label_count=8)
        assert state.visible_label_step() == 3

        state = WindowState(_data(30), visible_point_count=10, visible_label_count=30)
        assert state.visible_label_step() == 1

    def test_invalid_zoom_step(self):
        with pytest.raises(ValueError, match="zoom_step"):
            WindowState(_data(30), zoom_step=0)
