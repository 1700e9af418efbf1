from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

import numpy as np
from loguru import logger

from .coordinate_projector import Point, project, project_many
from .layout import Layout
from .series import (
    DRAW_MODE_AREA,
    DRAW_MODE_DOTTED,
    DRAW_MODES,
    ChartData,
)
from .style import CircleStyle, FillStyle, StrokeStyle, translucent
from .window_state import Bounds


class PathCommand(NamedTuple):
    """One SVG-style path command: M/L take (x, y), V takes (y,), H takes (x,)."""

    op: str
    args: Tuple[float, ...]


def path_to_svg(commands: List[PathCommand]) -> str:
    """Render path commands as an SVG ``d`` attribute."""
    return " ".join(
        f"{cmd.op} " + " ".join(f"{a:g}" for a in cmd.args) for cmd in commands
    )


def polyline_path(points: np.ndarray) -> List[PathCommand]:
    """Open path through ``points``: a move to the first one, then lines."""
    commands = []
    for i, (x, y) in enumerate(points):
        commands.append(PathCommand("M" if i == 0 else "L", (float(x), float(y))))
    return commands


@dataclass(frozen=True, eq=False)
class ContactMarker:
    series_index: int
    center: Point
    radius: float
    style: CircleStyle


@dataclass(frozen=True, eq=False)
class SeriesGeometry:
    """
    Drawable geometry for one series.

    ``points`` holds the projected polyline vertices. For area mode,
    ``area_path`` closes the polyline down to the plot bottom and back to
    the first x, and ``area_polygon`` holds the same region as vertices.
    """

    series_index: int
    label: str
    draw_mode: str
    first_absolute_index: int
    points: np.ndarray
    path: List[PathCommand]
    stroke: StrokeStyle
    area_path: Optional[List[PathCommand]] = None
    area_polygon: Optional[np.ndarray] = None
    area_fill: Optional[FillStyle] = None
    contact: Optional[ContactMarker] = None


class GeometryBuilder:
    """
    Turns series values into per-series paths for line, area and dotted modes.

    Series after the first are drawn from where the previous ones stop
    (the shown offset), so a forecast continues from the last actual value
    and a contact marker anchors the join. With ``stagger=False`` every
    series is drawn across the whole window.
    """

    DOTTED_DASH = (13.0, 13.0)
    CONTACT_RADIUS = 6.0
    CONTACT_STROKE_WIDTH = 2.0
    CONTACT_FILL = "white"

    def build(
        self,
        data: ChartData,
        window_size: int,
        layout: Layout,
        bounds: Bounds,
        stagger: bool = True,
    ) -> List[SeriesGeometry]:
        """
        Build geometry for every series.

        Parameters
        ----------
        data : ChartData
            Series and labels.
        window_size : int
            Number of visible points.
        layout : Layout
            Current layout.
        bounds : Bounds
            Current bounds.
        stagger : bool, default=True
            If True, each series starts at the running shown offset. If
            False (hover), the offset is zero for every series.

        Returns
        -------
        List[SeriesGeometry]
            One entry per series, in drawing order.

        Raises
        ------
        ValueError
            If any series has an unknown draw mode. Nothing is built in
            that case.
        """
        for series in data.series:
            if series.draw_mode not in DRAW_MODES:
                raise ValueError(
                    f"Unknown draw mode '{series.draw_mode}' for series '{series.label}'. "
                    f"Expected one of {DRAW_MODES}."
                )

        window_start = data.window_start(window_size)
        shown = 0
        geometries: List[SeriesGeometry] = []

        for i, series in enumerate(data.series):
            diff = data.length_difference(i)
            offset = shown if stagger else 0
            start = len(series) - window_size + diff + offset

            absolute = np.arange(start, len(series))
            points = project_many(
                series.values[start:],
                absolute - window_start,
                window_size,
                layout,
                bounds,
            )
            logger.debug(
                f"Series {i} ('{series.label}'): offset={offset}, start={start}, {len(points)} points"
            )

            contact = self._contact(data, i, shown, window_size, layout, bounds)
            geometries.append(
                self._series_geometry(i, series, start, points, layout, contact)
            )

            shown = max(shown + window_size - diff - 1, 0)

        return geometries

    def _contact(
        self,
        data: ChartData,
        series_idx: int,
        shown: int,
        window_size: int,
        layout: Layout,
        bounds: Bounds,
    ) -> Optional[ContactMarker]:
        """Marker where series ``series_idx`` joins the ones drawn before it."""
        if series_idx == 0:
            return None
        series = data.get_series(series_idx)
        value = data.value_at(series_idx, data.window_start(window_size) + shown)
        if value is None:
            logger.debug(
                f"Series {series_idx} has no value at shown offset {shown}, no contact marker"
            )
            return None
        return ContactMarker(
            series_index=series_idx,
            center=project(value, shown, window_size, layout, bounds),
            radius=self.CONTACT_RADIUS,
            style=CircleStyle(
                fill=self.CONTACT_FILL,
                stroke=series.color,
                stroke_width=self.CONTACT_STROKE_WIDTH,
            ),
        )

    def _series_geometry(
        self,
        series_idx: int,
        series,
        start: int,
        points: np.ndarray,
        layout: Layout,
        contact: Optional[ContactMarker],
    ) -> SeriesGeometry:
        mode = series.draw_mode
        stroke = StrokeStyle(
            color=series.color,
            width=series.stroke_width,
            dash=self.DOTTED_DASH if mode == DRAW_MODE_DOTTED else None,
        )
        path = polyline_path(points)

        area_path = None
        area_polygon = None
        area_fill = None
        if mode == DRAW_MODE_AREA and len(points) > 0:
            bottom = float(layout.plot_bottom)
            first_x = float(points[0, 0])
            last_x = float(points[-1, 0])
            area_path = path + [
                PathCommand("V", (bottom,)),
                PathCommand("H", (first_x,)),
            ]
            area_polygon = np.vstack(
                [points, [[last_x, bottom], [first_x, bottom]]]
            )
            area_fill = FillStyle(
                color=series.area_color
                if series.area_color is not None
                else translucent(series.color)
            )
        elif mode == DRAW_MODE_AREA:
            logger.debug(f"Series {series_idx} has no visible points, skipping area")

        return SeriesGeometry(
            series_index=series_idx,
            label=series.label,
            draw_mode=mode,
            first_absolute_index=start,
            points=points,
            path=path,
            stroke=stroke,
            area_path=area_path,
            area_polygon=area_polygon,
            area_fill=area_fill,
            contact=contact,
        )
