import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from loguru import logger

from .series import ChartData

# Points kept in reserve at the right edge of the widest window
ZOOM_EDGE_RESERVE = 5

DEFAULT_ZOOM_STEP = 5
DEFAULT_AXIS_DIVISION_COUNT = 10


@dataclass(frozen=True)
class Window:
    total_point_count: int
    visible_point_count: int
    visible_label_count: int


@dataclass(frozen=True)
class Bounds:
    raw_min: float
    raw_max: float
    display_min: float
    display_max: float

    @property
    def display_span(self) -> float:
        return self.display_max - self.display_min


def _axis_division(raw_min: float, raw_max: float, axis_division_count: int) -> float:
    """
    Padding added on each side of the raw range.

    A flat range (all values equal) has no natural division, so one is
    derived from the magnitude of the value, with 1.0 as the floor.
    """
    span = raw_max - raw_min
    if span > 0:
        return span / axis_division_count
    fallback = max(1.0, abs(raw_min) / axis_division_count)
    logger.debug(
        f"Flat value range at {raw_min}, using axis division {fallback} instead"
    )
    return fallback


def compute_bounds(
    data: ChartData,
    window: Window,
    zoom_enabled: bool,
    axis_division_count: int = DEFAULT_AXIS_DIVISION_COUNT,
) -> Bounds:
    """
    Compute the raw and padded value range for the current window.

    Parameters
    ----------
    data : ChartData
        Series and labels.
    window : Window
        Current window.
    zoom_enabled : bool
        If True, the range follows the values inside the visible window.
        If False, the declared min/max of each series are used.
    axis_division_count : int, default=10
        Number of y-axis divisions; one division is added above and below.

    Returns
    -------
    Bounds
        Raw and display (padded) range.
    """
    if zoom_enabled:
        mins = []
        maxs = []
        for i in range(data.num_series):
            visible = data.visible_values(i, window.visible_point_count)
            if visible.size == 0:
                logger.debug(f"Series {i} has no values in the visible window")
                continue
            mins.append(float(np.min(visible)))
            maxs.append(float(np.max(visible)))
        raw_min = min(mins)
        raw_max = max(maxs)
    else:
        raw_min = min(s.declared_min for s in data.series)
        raw_max = max(s.declared_max for s in data.series)

    division = _axis_division(raw_min, raw_max, axis_division_count)
    bounds = Bounds(
        raw_min=raw_min,
        raw_max=raw_max,
        display_min=raw_min - division,
        display_max=raw_max + division,
    )
    logger.debug(f"Bounds for window {window.visible_point_count}: {bounds}")
    return bounds


class WindowState:
    """
    Owns the zoom window and the value bounds derived from it.

    The window always ends at the most recent point; zooming changes how
    many trailing points are visible.
    """

    def __init__(
        self,
        data: ChartData,
        visible_point_count: Optional[int] = None,
        visible_label_count: Optional[int] = None,
        zoom_enabled: bool = False,
        zoom_step: int = DEFAULT_ZOOM_STEP,
        axis_division_count: int = DEFAULT_AXIS_DIVISION_COUNT,
    ):
        """
        Initialise the window state.

        Parameters
        ----------
        data : ChartData
            Series and labels the window applies to.
        visible_point_count : Optional[int], default=None
            Initial number of visible points. Defaults to all points.
        visible_label_count : Optional[int], default=None
            Number of x-axis labels to aim for. Defaults to all labels.
        zoom_enabled : bool, default=False
            Whether bounds follow the visible window.
        zoom_step : int, default=5
            Number of points added or removed per zoom step.
        axis_division_count : int, default=10
            Number of y-axis divisions.
        """
        if zoom_step <= 0:
            raise ValueError(f"zoom_step must be positive. Got {zoom_step}")
        if axis_division_count <= 0:
            raise ValueError(
                f"axis_division_count must be positive. Got {axis_division_count}"
            )

        self.data = data
        self.zoom_enabled = zoom_enabled
        self.zoom_step = int(zoom_step)
        self.axis_division_count = int(axis_division_count)

        total = data.max_length
        visible = total if not visible_point_count else int(visible_point_count)
        if visible < 1 or visible > total:
            clamped = min(max(visible, 1), total)
            logger.warning(
                f"Visible point count {visible} outside 1..{total}, using {clamped}"
            )
            visible = clamped
        labels = len(data.labels) if not visible_label_count else int(visible_label_count)
        if labels < 1:
            logger.warning(f"Visible label count {labels} must be positive, using 1")
            labels = 1

        self.window = Window(
            total_point_count=total,
            visible_point_count=visible,
            visible_label_count=labels,
        )
        self.bounds: Bounds = compute_bounds(
            data, self.window, zoom_enabled, self.axis_division_count
        )

    @property
    def visible_point_count(self) -> int:
        return self.window.visible_point_count

    @property
    def min_visible_point_count(self) -> int:
        return 2 * self.zoom_step

    @property
    def max_visible_point_count(self) -> int:
        return self.window.total_point_count - ZOOM_EDGE_RESERVE

    def recompute_bounds(self) -> Bounds:
        """Recompute and store the bounds for the current window."""
        self.bounds = compute_bounds(
            self.data, self.window, self.zoom_enabled, self.axis_division_count
        )
        return self.bounds

    def zoom_by(self, delta: int) -> bool:
        """
        Change the number of visible points by ``delta`` and refresh the bounds.

        The result is clamped to ``[2 * zoom_step, total - 5]``, but a step
        that would leave the window further outside that range than it
        already is does nothing. When the data is too short for the range
        to exist the window is left alone. Never raises for any ``delta``.

        Returns
        -------
        bool
            True if the visible point count changed.
        """
        lower = self.min_visible_point_count
        upper = self.max_visible_point_count
        current = self.window.visible_point_count

        if upper < lower:
            logger.debug(
                f"Zoom ignored: {self.window.total_point_count} points leave no room between {lower} and {upper}"
            )
            return False

        requested = current + int(delta)
        # Clamping never moves the window against the requested direction
        if requested > current:
            new_count = max(current, min(requested, upper))
        elif requested < current:
            new_count = min(current, max(requested, lower))
        else:
            new_count = current
        if new_count != requested:
            logger.debug(f"Zoom request {requested} clamped to {new_count}")
        if new_count == current:
            return False

        self.window = Window(
            total_point_count=self.window.total_point_count,
            visible_point_count=new_count,
            visible_label_count=self.window.visible_label_count,
        )
        self.recompute_bounds()
        logger.info(f"Visible points changed from {current} to {new_count}")
        return True

    def restore(self, window: Window, bounds: Bounds) -> None:
        """Put back a window and its bounds saved before a zoom."""
        self.window = window
        self.bounds = bounds

    def visible_label_step(self) -> int:
        """Spacing, in points, between consecutive x-axis labels."""
        shown = self.window.visible_point_count
        wanted = self.window.visible_label_count
        if wanted > shown:
            return 1
        return int(math.ceil(shown / wanted))
