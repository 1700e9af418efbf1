import pytest

from pyflowbit.chart.decorations import (
    build_guide_lines,
    build_hover_line,
    build_x_labels,
    build_y_labels,
    format_y_label,
    y_division_positions,
)
from pyflowbit.chart.layout import Layout
from pyflowbit.chart.series import ChartData, Series
from pyflowbit.chart.window_state import Bounds, WindowState

LAYOUT = Layout(
    width=800,
    height=600,
    padding_left=30,
    padding_right=75,
    padding_top=100,
    padding_bottom=50,
)


def test_y_divisions_span_the_plot_height():
    rows = y_division_positions(LAYOUT, 10)
    assert len(rows) == 11
    assert rows[0] == pytest.approx(LAYOUT.plot_top)
    assert rows[-1] == pytest.approx(LAYOUT.plot_bottom)


def test_y_labels_run_from_max_to_min():
    bounds = Bounds(raw_min=0, raw_max=100, display_min=-10, display_max=110)
    labels = build_y_labels(bounds, LAYOUT, 10, 12)

    assert [item.content for item in labels] == [
        "110", "98", "86", "74", "62", "50", "38", "26", "14", "2", "-10"
    ]
    assert labels[0].position.x == LAYOUT.plot_right + 35


@pytest.mark.parametrize("value, expected", [(12345, "12,345"), (-7, "-7"), (0, "0")])
def test_format_y_label(value, expected):
    assert format_y_label(value) == expected


def test_x_labels_are_thinned_to_the_label_count():
    data = ChartData([Series("s", list(range(30)))], [f"t{i}" for i in range(30)])
    window = WindowState(data, visible_point_count=20, visible_label_count=8)

    labels = build_x_labels(data, window, LAYOUT, 12)

    assert [item.content for item in labels] == ["t10", "t13", "t16", "t19", "t22", "t25", "t28"]
    assert labels[0].position.x == pytest.approx(LAYOUT.plot_left)
    assert labels[0].position.y == LAYOUT.plot_bottom + 35


def test_guides_and_hover_line_cover_the_plot():
    guides = build_guide_lines(LAYOUT, 10)
    assert len(guides) == 11
    assert guides[0].start.x == LAYOUT.plot_left
    assert guides[0].end.x == LAYOUT.plot_right

    hover = build_hover_line(200, LAYOUT)
    assert (hover.start.y, hover.end.y) == (LAYOUT.plot_top, LAYOUT.plot_bottom)
