from typing import Callable, Dict, List, Optional, Sequence, Set

from loguru import logger

from .coordinate_projector import CoordinateProjector
from .decorations import (
    LineItem,
    TextItem,
    build_guide_lines,
    build_hover_line,
    build_legend,
    build_x_labels,
    build_y_labels,
)
from .geometry import GeometryBuilder, SeriesGeometry
from .hover import ComparisonTooltip, HoverResolver, HoverResult
from .layout import LayoutEngine, format_axis_value
from .series import ChartData, Series
from .state import ChartState
from .style import CircleStyle, TextStyle
from .window_state import (
    DEFAULT_AXIS_DIVISION_COUNT,
    DEFAULT_ZOOM_STEP,
    WindowState,
)

# Element groups on the surface
GROUP_GUIDES = "guides"
GROUP_X_LABELS = "x-labels"
GROUP_Y_LABELS = "y-labels"
GROUP_LEGEND = "legend"
GROUP_SERIES = "series"
GROUP_HOVER = "hover"


def format_reading(value: Optional[float]) -> str:
    """Tooltip form of a value; missing values show as a dash."""
    if value is None:
        return "-"
    return f"{value:,.10g}"


class TrendChart:
    """
    Windowed multi-series chart with zoom and hover inspection.

    Owns one ``ChartState`` and runs every update in a fixed order: window
    bounds, then layout, then geometry, then drawing. Geometry is handed to
    a drawing surface by stable element id; elements that are no longer
    produced are removed, so the surface is patched rather than rebuilt.
    """

    # Default configuration
    DEFAULT_ZOOM_STEP = DEFAULT_ZOOM_STEP
    DEFAULT_AXIS_DIVISION_COUNT = DEFAULT_AXIS_DIVISION_COUNT
    DEFAULT_HOVER_POINT_RADIUS = 5.0
    DEFAULT_HOVER_POINT_STROKE = "#fff"
    DEFAULT_TOOLTIP_COLOR = "#323743"
    DEFAULT_TOOLTIP_OFFSET = 10.0
    CORRECT_COLOR = "#29D86F"
    INCORRECT_COLOR = "#E74C4C"

    def __init__(
        self,
        surface,
        width: float,
        height: float,
        font_size: float,
        series: Sequence[Series],
        labels: Sequence[str],
        background_color: Optional[str] = None,
        zoom: bool = False,
        show_data_count: Optional[int] = None,
        show_label_count: Optional[int] = None,
        zoom_step: int = DEFAULT_ZOOM_STEP,
        axis_division_count: int = DEFAULT_AXIS_DIVISION_COUNT,
    ):
        """
        Initialise the chart. Nothing is drawn until ``render()``.

        Parameters
        ----------
        surface : DrawingSurface
            Surface to draw on and to receive pointer events from.
        width : float
            Chart width in pixels.
        height : float
            Chart height in pixels.
        font_size : float
            Axis label font size in pixels.
        series : Sequence[Series]
            Series to plot, in drawing order.
        labels : Sequence[str]
            One label per point of the longest series.
        background_color : Optional[str], default=None
            Background colour of the surface.
        zoom : bool, default=False
            Enable wheel zoom and let the value range follow the window.
        show_data_count : Optional[int], default=None
            Initial number of visible points. Defaults to all points.
        show_label_count : Optional[int], default=None
            Number of x-axis labels to aim for. Defaults to all labels.
        zoom_step : int, default=5
            Points added or removed per zoom step.
        axis_division_count : int, default=10
            Number of y-axis divisions.

        Raises
        ------
        ValueError
            If the series, labels or size are unusable.
        """
        if surface is None:
            raise ValueError("A drawing surface is required.")
        if font_size <= 0:
            raise ValueError(f"Font size must be positive. Got {font_size}")

        data = ChartData(series, labels)
        window = WindowState(
            data,
            visible_point_count=show_data_count,
            visible_label_count=show_label_count,
            zoom_enabled=zoom,
            zoom_step=zoom_step,
            axis_division_count=axis_division_count,
        )
        self.state = ChartState(
            data=data,
            window=window,
            width=float(width),
            height=float(height),
            font_size=float(font_size),
            background_color=background_color,
        )
        self.surface = surface

        self.layout_engine = LayoutEngine(width, height)
        self.projector = CoordinateProjector(self.state)
        self.geometry_builder = GeometryBuilder()
        self.hover_resolver = HoverResolver()

        self.last_geometry: List[SeriesGeometry] = []
        self.last_hover: Optional[HoverResult] = None

        self._rendered = False
        self._pending_update: Optional[Callable[[], None]] = None
        self._drawn: Dict[str, Set[str]] = {}

    @property
    def data(self) -> ChartData:
        return self.state.data

    @property
    def window(self) -> WindowState:
        return self.state.window

    def render(self) -> None:
        """
        Draw the chart and start listening for pointer and wheel events.
        """
        if self._rendered:
            logger.warning("Chart already rendered. Call `refresh()` to redraw.")
            return

        logger.info(
            f"Rendering chart: {self.data.num_series} series, {self.data.max_length} points, "
            f"window={self.window.visible_point_count}, zoom={self.state.zoom_enabled}"
        )
        # Build once up front so a bad draw mode fails before anything is drawn
        self._update_layout()
        self._build_series_geometry()

        self.surface.set_background(self.state.background_color)
        self._connect_callbacks()
        self._rendered = True
        self._run_update(self._full_update)
        logger.info("Chart rendering complete.")

    def refresh(self) -> None:
        """Redraw everything for the current window and hover state."""
        self._require_rendered()
        self._run_update(self._full_update)

    def zoom_by(self, delta: int) -> None:
        """Change the number of visible points by ``delta`` (clamped, never raises)."""
        self._require_rendered()
        self._run_update(lambda: self._apply_zoom(delta))

    def zoom_in(self) -> None:
        """Show one zoom step fewer points."""
        self.zoom_by(-self.window.zoom_step)

    def zoom_out(self) -> None:
        """Show one zoom step more points."""
        self.zoom_by(self.window.zoom_step)

    def handle_wheel(self, delta_y: float) -> None:
        """Wheel handler: scrolling down shows more points, up shows fewer."""
        self._require_rendered()
        step = self.window.zoom_step
        self._run_update(lambda: self._apply_zoom(step if delta_y > 0 else -step))

    def handle_pointer_move(self, pointer_fraction: float) -> None:
        """Pointer handler: resolve the hovered index and show it."""
        self._require_rendered()
        self._run_update(lambda: self._apply_hover(pointer_fraction))

    def handle_pointer_leave(self) -> None:
        """Pointer handler: hide hover decorations and restore the staggered view."""
        self._require_rendered()
        self._run_update(self._apply_leave)

    def save(self, filepath: str) -> None:
        """
        Save the chart through the surface.

        Parameters
        ----------
        filepath : str
            Path to save the image.
        """
        self._require_rendered()
        save = getattr(self.surface, "save", None)
        if save is None:
            raise RuntimeError(f"{type(self.surface).__name__} cannot save images.")
        save(filepath)

    def show(self) -> None:
        """Display the chart, rendering it first if needed."""
        if not self._rendered:
            self.render()
        show = getattr(self.surface, "show", None)
        if show is None:
            raise RuntimeError(f"{type(self.surface).__name__} cannot be shown.")
        show()

    def _require_rendered(self) -> None:
        if not self._rendered:
            raise RuntimeError("Chart has not been rendered yet.")

    def _run_update(self, update: Callable[[], None]) -> None:
        """
        Run one update, or queue it if another update is running.

        Only the latest queued update is kept.
        """
        if self.state.updating:
            logger.debug("Update in progress, coalescing request")
            self._pending_update = update
            return

        self.state.updating = True
        try:
            update()
            while self._pending_update is not None:
                pending, self._pending_update = self._pending_update, None
                pending()
        finally:
            self.state.updating = False
        self.surface.present()

    def _connect_callbacks(self) -> None:
        """Register pointer and wheel handlers on the surface."""
        if self.state.zoom_enabled:
            self.surface.on_wheel(self.handle_wheel)
        self.surface.on_pointer_move(self.handle_pointer_move)
        self.surface.on_pointer_leave(self.handle_pointer_leave)

    def _update_layout(self) -> None:
        """Recompute the layout from the current bounds."""
        bounds = self.window.bounds
        label_width = self.surface.measure_text_width(
            format_axis_value(bounds.display_max), self.state.font_size
        )
        self.state.layout = self.layout_engine.compute_layout(
            self.state.font_size, self.data.num_series, label_width
        )
        layout = self.state.layout
        self.surface.set_interaction_region(
            layout.plot_left, layout.plot_top, layout.plot_width, layout.plot_height
        )

    def _full_update(self) -> None:
        self._update_layout()
        self._draw_guides()
        self._draw_y_labels()
        self._draw_x_labels()
        self._draw_legend()
        self._draw_series()
        if self.state.hover.active and self.last_hover is not None:
            self._apply_hover(self.state.hover.pointer_fraction)
        else:
            self._clear_group(GROUP_HOVER)

    def _apply_zoom(self, delta: int) -> None:
        self._hide_hover()
        previous_window, previous_bounds = self.window.window, self.window.bounds
        if not self.window.zoom_by(delta):
            self._draw_series()
            return
        try:
            self._update_layout()
        except ValueError as exc:
            logger.warning(f"Zoom reverted, no layout fits the new window: {exc}")
            self.window.restore(previous_window, previous_bounds)
            self._draw_series()
            return
        self._draw_guides()
        self._draw_y_labels()
        self._draw_x_labels()
        self._draw_legend()
        self._draw_series()

    def _apply_hover(self, pointer_fraction: float) -> None:
        result = self.hover_resolver.resolve(
            pointer_fraction, self.window.visible_point_count, self.data
        )
        hover = self.state.hover
        hover.active = True
        hover.pointer_fraction = float(pointer_fraction)
        hover.resolved_index = result.index
        self.last_hover = result

        self._draw_series()
        self._draw_hover(result, pointer_fraction)

    def _apply_leave(self) -> None:
        self._hide_hover()
        self._draw_series()

    def _hide_hover(self) -> None:
        self.state.hover.reset()
        self.last_hover = None
        self._clear_group(GROUP_HOVER)

    def _sync_group(self, group: str, drawn_ids: Set[str]) -> None:
        """Remove elements of ``group`` that were not drawn in this pass."""
        for element_id in self._drawn.get(group, set()) - drawn_ids:
            self.surface.remove(element_id)
        self._drawn[group] = drawn_ids

    def _clear_group(self, group: str) -> None:
        self._sync_group(group, set())

    def _draw_line_item(self, element_id: str, item: LineItem) -> None:
        self.surface.draw_polyline(element_id, [item.start, item.end], item.style)

    def _draw_text_item(self, element_id: str, item: TextItem) -> None:
        self.surface.draw_text(element_id, item.position, item.content, item.style)

    def _draw_guides(self) -> None:
        drawn = set()
        for i, line in enumerate(
            build_guide_lines(self.state.layout, self.window.axis_division_count)
        ):
            element_id = f"{GROUP_GUIDES}/{i}"
            self._draw_line_item(element_id, line)
            drawn.add(element_id)
        self._sync_group(GROUP_GUIDES, drawn)

    def _draw_y_labels(self) -> None:
        drawn = set()
        for i, item in enumerate(
            build_y_labels(
                self.window.bounds,
                self.state.layout,
                self.window.axis_division_count,
                self.state.font_size,
            )
        ):
            element_id = f"{GROUP_Y_LABELS}/{i}"
            self._draw_text_item(element_id, item)
            drawn.add(element_id)
        self._sync_group(GROUP_Y_LABELS, drawn)

    def _draw_x_labels(self) -> None:
        drawn = set()
        for i, item in enumerate(
            build_x_labels(
                self.data, self.window, self.state.layout, self.state.font_size
            )
        ):
            element_id = f"{GROUP_X_LABELS}/{i}"
            self._draw_text_item(element_id, item)
            drawn.add(element_id)
        self._sync_group(GROUP_X_LABELS, drawn)

    def _draw_legend(self) -> None:
        drawn = set()
        entries = build_legend(
            self.data, self.state.layout, self.surface.measure_text_width
        )
        for i, (sample, text) in enumerate(entries):
            sample_id = f"{GROUP_LEGEND}/{i}/sample"
            text_id = f"{GROUP_LEGEND}/{i}/text"
            self._draw_line_item(sample_id, sample)
            self._draw_text_item(text_id, text)
            drawn.update((sample_id, text_id))
        self._sync_group(GROUP_LEGEND, drawn)

    def _build_series_geometry(self) -> List[SeriesGeometry]:
        self.last_geometry = self.geometry_builder.build(
            self.data,
            self.window.visible_point_count,
            self.state.layout,
            self.window.bounds,
            stagger=not self.state.hover.active,
        )
        return self.last_geometry

    def _draw_series(self) -> None:
        # All geometry is built before anything is drawn
        geometries = self._build_series_geometry()

        drawn = set()
        for geometry in geometries:
            prefix = f"{GROUP_SERIES}/{geometry.series_index}"
            if geometry.area_polygon is not None:
                self.surface.draw_closed_region(
                    f"{prefix}/area", geometry.area_polygon, geometry.area_fill
                )
                drawn.add(f"{prefix}/area")
            if len(geometry.points) > 0:
                self.surface.draw_polyline(
                    f"{prefix}/line", geometry.points, geometry.stroke
                )
                drawn.add(f"{prefix}/line")
            if geometry.contact is not None:
                contact = geometry.contact
                self.surface.draw_circle(
                    f"{prefix}/contact", contact.center, contact.radius, contact.style
                )
                drawn.add(f"{prefix}/contact")
        self._sync_group(GROUP_SERIES, drawn)

    def _draw_hover(self, result: HoverResult, pointer_fraction: float) -> None:
        layout = self.state.layout
        x = self.projector.index_to_x(result.index)
        drawn = set()

        self._draw_line_item(f"{GROUP_HOVER}/line", build_hover_line(x, layout))
        drawn.add(f"{GROUP_HOVER}/line")

        for i, series in enumerate(self.data.series):
            value = self.data.value_at(i, result.absolute_index)
            if value is None:
                continue
            element_id = f"{GROUP_HOVER}/point/{i}"
            self.surface.draw_circle(
                element_id,
                self.projector.project(value, result.index),
                self.DEFAULT_HOVER_POINT_RADIUS,
                CircleStyle(
                    fill=self.state.background_color or series.color,
                    stroke=self.DEFAULT_HOVER_POINT_STROKE,
                ),
            )
            drawn.add(element_id)

        for element_id, position, content, style in self._tooltip_items(
            result, x, pointer_fraction
        ):
            self.surface.draw_text(element_id, position, content, style)
            drawn.add(element_id)

        self._sync_group(GROUP_HOVER, drawn)

    def _tooltip_items(self, result: HoverResult, x: float, pointer_fraction: float):
        """Text lines of the tooltip, placed beside the hover line."""
        layout = self.state.layout
        font_size = self.state.font_size
        right_half = pointer_fraction > 0.5
        anchor = "end" if right_half else "start"
        text_x = x - self.DEFAULT_TOOLTIP_OFFSET if right_half else x + self.DEFAULT_TOOLTIP_OFFSET
        line_height = font_size * 1.5
        y = layout.plot_top + font_size

        tooltip = result.tooltip
        items = []
        style = TextStyle(color=self.DEFAULT_TOOLTIP_COLOR, font_size=font_size, anchor=anchor)
        items.append((f"{GROUP_HOVER}/title", (text_x, y), tooltip.title, style))

        if isinstance(tooltip, ComparisonTooltip):
            y += line_height
            correct = tooltip.prediction_correct
            items.append(
                (
                    f"{GROUP_HOVER}/badge",
                    (text_x, y),
                    "Prediction correct" if correct else "Prediction failed",
                    TextStyle(
                        color=self.CORRECT_COLOR if correct else self.INCORRECT_COLOR,
                        font_size=font_size,
                        anchor=anchor,
                    ),
                )
            )

        for i, reading in enumerate(tooltip.readings):
            y += line_height
            items.append(
                (
                    f"{GROUP_HOVER}/reading/{i}",
                    (text_x, y),
                    f"{reading.label}: {format_reading(reading.current)}",
                    style,
                )
            )
        return items
