"""
Axis labels, guide lines and legend entries around the plot area.
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Tuple

from .coordinate_projector import Point, index_to_x
from .layout import Layout
from .series import DRAW_MODE_DOTTED, ChartData
from .style import StrokeStyle, TextStyle
from .window_state import Bounds, WindowState

# Distance between the plot edge and its axis labels
AXIS_LABEL_GAP = 35

LABEL_COLOR = "#666666"
GUIDE_LINE_COLOR = "#dddddd"
GUIDE_LINE_WIDTH = 0.5
HOVER_LINE_COLOR = "#797979"

# Legend geometry
LEGEND_OFFSET = 50
LEGEND_SAMPLE_LENGTH = 50
LEGEND_GAP = 24
LEGEND_FONT_SIZE = 18
LEGEND_TEXT_COLOR = "#616161"
LEGEND_DOTTED_DASH = (7.0, 7.0)


@dataclass(frozen=True)
class TextItem:
    position: Point
    content: str
    style: TextStyle


@dataclass(frozen=True)
class LineItem:
    start: Point
    end: Point
    style: StrokeStyle


def format_y_label(value: float) -> str:
    """Thousands-separated integer label."""
    return f"{int(value):,}"


def build_x_labels(
    data: ChartData, window_state: WindowState, layout: Layout, font_size: float
) -> List[TextItem]:
    """Labels under the plot for the visible window, thinned to the label count."""
    window_size = window_state.visible_point_count
    step = window_state.visible_label_step()
    y = layout.plot_bottom + AXIS_LABEL_GAP
    style = TextStyle(color=LABEL_COLOR, font_size=font_size, anchor="middle")

    items = []
    for i in range(0, window_size, step):
        items.append(
            TextItem(
                position=Point(index_to_x(i, window_size, layout), y),
                content=data.label_at(window_size, i),
                style=style,
            )
        )
    return items


def y_division_positions(layout: Layout, division_count: int) -> List[float]:
    """Pixel rows of the horizontal divisions, top to bottom."""
    return [
        layout.plot_height * (i / division_count) + layout.padding_top
        for i in range(division_count + 1)
    ]


def build_y_labels(
    bounds: Bounds, layout: Layout, division_count: int, font_size: float
) -> List[TextItem]:
    """Value labels in the column to the right of the plot, top to bottom."""
    x = layout.plot_right + AXIS_LABEL_GAP
    style = TextStyle(
        color=LABEL_COLOR, font_size=font_size, anchor="start", baseline="middle"
    )
    items = []
    for i, y in enumerate(y_division_positions(layout, division_count)):
        value = math.floor(
            ((division_count - i) / division_count) * bounds.display_span
            + bounds.display_min
        )
        items.append(
            TextItem(position=Point(x, y), content=format_y_label(value), style=style)
        )
    return items


def build_guide_lines(layout: Layout, division_count: int) -> List[LineItem]:
    """Horizontal guide lines across the plot at every division."""
    style = StrokeStyle(color=GUIDE_LINE_COLOR, width=GUIDE_LINE_WIDTH)
    return [
        LineItem(Point(layout.plot_left, y), Point(layout.plot_right, y), style)
        for y in y_division_positions(layout, division_count)
    ]


def build_legend(
    data: ChartData,
    layout: Layout,
    measure_text_width: Callable[[str, float], float],
) -> List[Tuple[LineItem, TextItem]]:
    """
    One (sample stroke, label) pair per series, laid out left to right above the plot.

    Parameters
    ----------
    data : ChartData
        Series to describe.
    layout : Layout
        Current layout.
    measure_text_width : Callable[[str, float], float]
        Text measurement capability of the drawing surface.

    Returns
    -------
    List[Tuple[LineItem, TextItem]]
        Legend entries in series order.
    """
    x = layout.plot_left
    y = layout.padding_top - LEGEND_OFFSET
    acc = 0.0
    entries = []

    for series in data.series:
        dash = LEGEND_DOTTED_DASH if series.draw_mode == DRAW_MODE_DOTTED else None
        sample = LineItem(
            Point(x + acc, y),
            Point(x + LEGEND_SAMPLE_LENGTH + acc, y),
            StrokeStyle(color=series.color, width=2.0, dash=dash),
        )
        acc += LEGEND_GAP
        text = TextItem(
            position=Point(x + LEGEND_SAMPLE_LENGTH + acc, y),
            content=series.label,
            style=TextStyle(
                color=LEGEND_TEXT_COLOR,
                font_size=LEGEND_FONT_SIZE,
                baseline="middle",
            ),
        )
        acc += (
            LEGEND_GAP
            + LEGEND_SAMPLE_LENGTH
            + measure_text_width(series.label, LEGEND_FONT_SIZE)
        )
        entries.append((sample, text))

    return entries


def build_hover_line(x: float, layout: Layout) -> LineItem:
    """Vertical guide line through the hovered index."""
    return LineItem(
        Point(x, layout.plot_top),
        Point(x, layout.plot_bottom),
        StrokeStyle(color=HOVER_LINE_COLOR, width=GUIDE_LINE_WIDTH),
    )
