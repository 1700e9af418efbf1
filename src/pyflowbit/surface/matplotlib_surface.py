from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger
from matplotlib.artist import Artist
from matplotlib.font_manager import FontProperties
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Polygon
from matplotlib.textpath import TextToPath

from pyflowbit.chart.style import (
    CircleStyle,
    FillStyle,
    StrokeStyle,
    TextStyle,
    parse_color,
)

from .base import (
    Coordinate,
    DrawingSurface,
    PointerLeaveCallback,
    PointerMoveCallback,
    WheelCallback,
)

# One point per pixel, so font sizes and line widths map 1:1 to pixels
DPI = 72

_HORIZONTAL_ALIGNMENT = {"start": "left", "middle": "center", "end": "right"}
_VERTICAL_ALIGNMENT = {"baseline": "baseline", "middle": "center"}


class MatplotlibSurface(DrawingSurface):
    """
    Drawing surface backed by a matplotlib figure.

    The axes fill the whole figure and use pixel coordinates with y pointing
    down. Drawn artists are kept by element id so a redraw replaces them.
    """

    def __init__(
        self,
        width: int,
        height: int,
        background_color: Optional[str] = None,
    ):
        """
        Create the figure.

        Parameters
        ----------
        width : int
            Figure width in pixels.
        height : int
            Figure height in pixels.
        background_color : Optional[str], default=None
            Figure background colour. If None, matplotlib's default is kept.
        """
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Surface size must be positive. Got width={width}, height={height}"
            )
        self.width = width
        self.height = height

        self.fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
        self.ax = self.fig.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()
        self.set_background(background_color)

        self._artists: Dict[str, Artist] = {}
        self._text_to_path = TextToPath()

        self._region: Optional[tuple] = None
        self._pointer_inside = False
        self._move_callbacks: List[PointerMoveCallback] = []
        self._leave_callbacks: List[PointerLeaveCallback] = []
        self._wheel_callbacks: List[WheelCallback] = []

        self._connect_callbacks()

    def _connect_callbacks(self) -> None:
        """Connect matplotlib canvas callbacks."""
        canvas = self.fig.canvas
        canvas.mpl_connect("motion_notify_event", self._on_motion)
        canvas.mpl_connect("figure_leave_event", self._on_figure_leave)
        canvas.mpl_connect("scroll_event", self._on_scroll)

    def measure_text_width(self, text: str, font_size: float) -> float:
        width, _, _ = self._text_to_path.get_text_width_height_descent(
            text, FontProperties(size=font_size), ismath=False
        )
        return float(width)

    def _replace(self, element_id: str, artist: Artist) -> None:
        self.remove(element_id)
        self._artists[element_id] = artist

    def draw_polyline(
        self, element_id: str, points: Sequence[Coordinate], style: StrokeStyle
    ) -> None:
        xy = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        line = Line2D(
            xy[:, 0],
            xy[:, 1],
            color=parse_color(style.color),
            linewidth=style.width,
            solid_capstyle=style.cap,
            solid_joinstyle=style.join,
            dash_capstyle=style.cap,
            dash_joinstyle=style.join,
        )
        if style.dash:
            line.set_dashes(style.dash)
        self.ax.add_line(line)
        self._replace(element_id, line)

    def draw_closed_region(
        self, element_id: str, points: Sequence[Coordinate], fill: FillStyle
    ) -> None:
        xy = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        polygon = Polygon(
            xy, closed=True, facecolor=parse_color(fill.color), edgecolor="none"
        )
        self.ax.add_patch(polygon)
        self._replace(element_id, polygon)

    def draw_circle(
        self, element_id: str, center: Coordinate, radius: float, style: CircleStyle
    ) -> None:
        circle = Circle(
            (center[0], center[1]),
            radius,
            facecolor=parse_color(style.fill),
            edgecolor=parse_color(style.stroke),
            linewidth=style.stroke_width,
            zorder=3,
        )
        self.ax.add_patch(circle)
        self._replace(element_id, circle)

    def draw_text(
        self, element_id: str, position: Coordinate, content: str, style: TextStyle
    ) -> None:
        text = self.ax.text(
            position[0],
            position[1],
            content,
            color=parse_color(style.color),
            fontsize=style.font_size,
            ha=_HORIZONTAL_ALIGNMENT.get(style.anchor, "left"),
            va=_VERTICAL_ALIGNMENT.get(style.baseline, "baseline"),
        )
        self._replace(element_id, text)

    def remove(self, element_id: str) -> None:
        artist = self._artists.pop(element_id, None)
        if artist is not None:
            artist.remove()

    def element_ids(self) -> List[str]:
        """Ids of all elements currently on the surface."""
        return list(self._artists)

    def get_artist(self, element_id: str) -> Optional[Artist]:
        return self._artists.get(element_id)

    def set_background(self, color: Optional[str]) -> None:
        if color is None:
            return
        rgba = parse_color(color)
        self.fig.patch.set_facecolor(rgba)
        self.ax.set_facecolor(rgba)

    def set_interaction_region(
        self, left: float, top: float, width: float, height: float
    ) -> None:
        self._region = (float(left), float(top), float(width), float(height))
        logger.debug(f"Interaction region set to {self._region}")

    def on_pointer_move(self, callback: PointerMoveCallback) -> None:
        self._move_callbacks.append(callback)

    def on_pointer_leave(self, callback: PointerLeaveCallback) -> None:
        self._leave_callbacks.append(callback)

    def on_wheel(self, callback: WheelCallback) -> None:
        self._wheel_callbacks.append(callback)

    def _region_fraction(self, event) -> Optional[float]:
        """Relative x of an event inside the interaction region, or None if outside."""
        if self._region is None or event.inaxes is not self.ax:
            return None
        if event.xdata is None or event.ydata is None:
            return None
        left, top, width, height = self._region
        if not (left <= event.xdata <= left + width and top <= event.ydata <= top + height):
            return None
        return (event.xdata - left) / width if width > 0 else 0.0

    def _leave(self) -> None:
        if not self._pointer_inside:
            return
        self._pointer_inside = False
        for callback in self._leave_callbacks:
            callback()

    def _on_motion(self, event) -> None:
        fraction = self._region_fraction(event)
        if fraction is None:
            self._leave()
            return
        self._pointer_inside = True
        for callback in self._move_callbacks:
            callback(fraction)

    def _on_figure_leave(self, event) -> None:
        self._leave()

    def _on_scroll(self, event) -> None:
        if self._region_fraction(event) is None:
            return
        # matplotlib reports scrolling up as a positive step
        delta_y = -float(event.step)
        for callback in self._wheel_callbacks:
            callback(delta_y)

    def present(self) -> None:
        self.fig.canvas.draw_idle()

    def save(self, filepath: str) -> None:
        """
        Save the surface to an image file.

        Parameters
        ----------
        filepath : str
            Path to save the image.
        """
        self.fig.savefig(filepath, dpi=DPI, facecolor=self.fig.get_facecolor())
        logger.info(f"Chart saved to {filepath}")

    def show(self) -> None:
        """Display the figure."""
        plt.show()

    def close(self) -> None:
        plt.close(self.fig)
