from typing import NamedTuple, Sequence, Union

import numpy as np
from loguru import logger
from numba import njit

from .layout import Layout
from .window_state import Bounds


class Point(NamedTuple):
    x: float
    y: float


@njit
def _project_numba(
    values: np.ndarray,
    indices: np.ndarray,
    window_size: float,
    plot_left: float,
    plot_top: float,
    plot_width: float,
    plot_height: float,
    display_min: float,
    display_max: float,
) -> np.ndarray:
    """
    Numba-optimized projection of (value, window index) pairs to pixels.

    Parameters
    ----------
    values : np.ndarray
        Data values.
    indices : np.ndarray
        Indices of the values inside the visible window.
    window_size : float
        Number of points in the visible window.
    plot_left, plot_top : float
        Pixel position of the plot area's top-left corner.
    plot_width, plot_height : float
        Pixel size of the plot area.
    display_min, display_max : float
        Value range mapped onto the plot height.

    Returns
    -------
    np.ndarray
        Array of shape (n, 2) holding x and y pixel coordinates.
    """
    n = len(values)
    out = np.empty((n, 2), dtype=np.float64)
    span = display_max - display_min

    for i in range(n):
        if window_size > 1:
            out[i, 0] = (indices[i] / (window_size - 1)) * plot_width + plot_left
        else:
            out[i, 0] = plot_left
        out[i, 1] = (
            plot_height - plot_height * ((values[i] - display_min) / span) + plot_top
        )

    return out


def project_many(
    values: Union[np.ndarray, Sequence[float]],
    indices: Union[np.ndarray, Sequence[float]],
    window_size: int,
    layout: Layout,
    bounds: Bounds,
) -> np.ndarray:
    """
    Project many values at once.

    Parameters
    ----------
    values : Union[np.ndarray, Sequence[float]]
        Data values.
    indices : Union[np.ndarray, Sequence[float]]
        Position of each value inside the visible window (0 = leftmost).
    window_size : int
        Number of points in the visible window. A window of one point puts
        every x at the left edge of the plot.
    layout : Layout
        Current layout.
    bounds : Bounds
        Current bounds.

    Returns
    -------
    np.ndarray
        Array of shape (n, 2) with x and y pixel coordinates.

    Raises
    ------
    ValueError
        If the arrays differ in length or the bounds have no span.
    """
    values_arr = np.ascontiguousarray(values, dtype=np.float64)
    indices_arr = np.ascontiguousarray(indices, dtype=np.float64)
    if values_arr.shape != indices_arr.shape:
        raise ValueError(
            f"Values ({values_arr.shape}) and indices ({indices_arr.shape}) must have the same shape."
        )
    if not bounds.display_span > 0:
        raise ValueError(
            f"Display range must be non-empty. Got [{bounds.display_min}, {bounds.display_max}]"
        )
    if window_size < 1:
        raise ValueError(f"Window size must be positive. Got {window_size}")

    return _project_numba(
        values_arr.ravel(),
        indices_arr.ravel(),
        float(window_size),
        float(layout.plot_left),
        float(layout.plot_top),
        float(layout.plot_width),
        float(layout.plot_height),
        float(bounds.display_min),
        float(bounds.display_max),
    )


def project(
    value: float,
    index_in_window: float,
    window_size: int,
    layout: Layout,
    bounds: Bounds,
) -> Point:
    """
    Project one value to a point in pixel space.

    Larger values land higher on screen (smaller y). This is the same
    computation the geometry path uses, so hover markers line up with the
    drawn lines exactly.
    """
    xy = project_many([value], [index_in_window], window_size, layout, bounds)
    return Point(float(xy[0, 0]), float(xy[0, 1]))


def index_to_x(index_in_window: float, window_size: int, layout: Layout) -> float:
    """Horizontal pixel position of a window index."""
    if window_size <= 1:
        return float(layout.plot_left)
    return (index_in_window / (window_size - 1)) * layout.plot_width + layout.plot_left


class CoordinateProjector:
    """
    Projects data to pixels using the current state of one chart.

    Centralises the value/index to pixel conversion so the geometry and
    hover paths cannot drift apart.
    """

    def __init__(self, chart_state):
        """
        Initialise the projector.

        Parameters
        ----------
        chart_state : ChartState
            Reference to the chart state; read on every call so the
            projection always uses the latest window, layout and bounds.
        """
        self.state = chart_state

    def _require_layout(self) -> Layout:
        if self.state.layout is None:
            raise RuntimeError("Layout has not been computed yet.")
        return self.state.layout

    def project(self, value: float, index_in_window: float) -> Point:
        """Project one value under the current window, layout and bounds."""
        return project(
            value,
            index_in_window,
            self.state.window.visible_point_count,
            self._require_layout(),
            self.state.window.bounds,
        )

    def project_many(self, values: np.ndarray, indices: np.ndarray) -> np.ndarray:
        """Project many values under the current window, layout and bounds."""
        return project_many(
            values,
            indices,
            self.state.window.visible_point_count,
            self._require_layout(),
            self.state.window.bounds,
        )

    def index_to_x(self, index_in_window: float) -> float:
        """Horizontal pixel position of a window index."""
        x = index_to_x(
            index_in_window,
            self.state.window.visible_point_count,
            self._require_layout(),
        )
        logger.debug(f"Window index {index_in_window} -> x={x:.2f}")
        return x
