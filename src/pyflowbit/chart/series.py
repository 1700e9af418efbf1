from typing import List, Optional, Sequence

import numpy as np
from loguru import logger

# Draw modes
DRAW_MODE_LINE = "line"
DRAW_MODE_AREA = "area"
DRAW_MODE_DOTTED = "dotted"
DRAW_MODES = (DRAW_MODE_LINE, DRAW_MODE_AREA, DRAW_MODE_DOTTED)

DEFAULT_SERIES_COLOR = "#fff"


class Series:
    """
    One named, styled sequence of values plotted over the shared label axis.

    The draw mode is stored as given; it is checked when geometry is built so
    that an unknown mode aborts the whole render instead of a single series.
    """

    def __init__(
        self,
        label: str,
        values: Sequence[float],
        declared_min: Optional[float] = None,
        declared_max: Optional[float] = None,
        color: str = DEFAULT_SERIES_COLOR,
        area_color: Optional[str] = None,
        stroke_width: float = 1.0,
        draw_mode: str = DRAW_MODE_LINE,
    ):
        """
        Initialise a series.

        Parameters
        ----------
        label : str
            Name shown in the legend and the hover tooltip.
        values : Sequence[float]
            Ordered values, oldest first.
        declared_min : Optional[float], default=None
            Lower bound used for scaling when zoom is disabled. Defaults to
            the minimum of ``values``.
        declared_max : Optional[float], default=None
            Upper bound used for scaling when zoom is disabled. Defaults to
            the maximum of ``values``.
        color : str, default="#fff"
            Stroke colour.
        area_color : Optional[str], default=None
            Fill colour for area mode. If None, a translucent variant of
            ``color`` is used.
        stroke_width : float, default=1.0
            Stroke width in pixels.
        draw_mode : str, default="line"
            One of "line", "area" or "dotted".

        Raises
        ------
        ValueError
            If ``values`` is empty or contains non-finite numbers, or the
            declared bounds are inverted.
        """
        self.label = label
        self.values = np.asarray(values, dtype=np.float64)

        if self.values.ndim != 1:
            raise ValueError(
                f"Series '{label}' values must be one-dimensional. Got shape {self.values.shape}"
            )
        if self.values.size == 0:
            raise ValueError(f"Series '{label}' has no values.")
        if not np.all(np.isfinite(self.values)):
            raise ValueError(f"Series '{label}' contains non-finite values.")

        if declared_min is None:
            declared_min = float(np.min(self.values))
            logger.debug(f"Series '{label}': no declared min, using {declared_min}")
        if declared_max is None:
            declared_max = float(np.max(self.values))
            logger.debug(f"Series '{label}': no declared max, using {declared_max}")
        if declared_min > declared_max:
            raise ValueError(
                f"Series '{label}' declared min ({declared_min}) is greater than declared max ({declared_max})."
            )

        self.declared_min = float(declared_min)
        self.declared_max = float(declared_max)
        self.color = color
        self.area_color = area_color
        self.stroke_width = float(stroke_width)
        self.draw_mode = draw_mode

    def __len__(self) -> int:
        return int(self.values.size)

    def __repr__(self) -> str:
        return (
            f"Series(label={self.label!r}, length={len(self)}, draw_mode={self.draw_mode!r})"
        )


class ChartData:
    """
    Holds the series list and the shared label axis.

    All series share their first index; the label axis is as long as the
    longest series, so shorter series simply stop earlier. The visible
    window is always the trailing part of the label axis.
    """

    def __init__(self, series: Sequence[Series], labels: Sequence[str]):
        """
        Initialise the chart data.

        Parameters
        ----------
        series : Sequence[Series]
            Series to plot, in drawing order.
        labels : Sequence[str]
            One label per time step of the longest series.

        Raises
        ------
        ValueError
            If there are no series, no labels, or the label count does not
            match the longest series.
        """
        if series is None or len(series) == 0:
            raise ValueError("At least one series is required.")
        if labels is None or len(labels) == 0:
            raise ValueError("At least one label is required.")

        self.series: List[Series] = list(series)
        self.labels: List[str] = [str(label) for label in labels]
        self.max_length = max(len(s) for s in self.series)

        if len(self.labels) != self.max_length:
            raise ValueError(
                f"Number of labels ({len(self.labels)}) must match the longest series ({self.max_length})."
            )

        logger.debug(
            f"Chart data: {self.num_series} series, {self.max_length} points, lengths={[len(s) for s in self.series]}"
        )

    @property
    def num_series(self) -> int:
        """Get the number of series."""
        return len(self.series)

    def get_series(self, series_idx: int) -> Series:
        """Get a series by index."""
        if series_idx < 0 or series_idx >= len(self.series):
            raise ValueError(
                f"Invalid series index: {series_idx}. Must be between 0 and {len(self.series) - 1}."
            )
        return self.series[series_idx]

    def length_difference(self, series_idx: int) -> int:
        """Number of points by which a series is shorter than the longest one."""
        return self.max_length - len(self.get_series(series_idx))

    def window_start(self, window_size: int) -> int:
        """First absolute index of a trailing window of ``window_size`` points."""
        return self.max_length - window_size

    def visible_values(self, series_idx: int, window_size: int) -> np.ndarray:
        """
        Values of a series that fall inside the trailing window.

        May be empty for a series that ends before the window starts.
        """
        values = self.get_series(series_idx).values
        return values[max(self.window_start(window_size), 0) :]

    def value_at(self, series_idx: int, absolute_idx: int) -> Optional[float]:
        """
        Value of a series at an absolute index, or None if there is none.

        Negative indices are treated as missing rather than counted from the end.
        """
        values = self.get_series(series_idx).values
        if absolute_idx < 0 or absolute_idx >= values.size:
            return None
        return float(values[absolute_idx])

    def label_at(self, window_size: int, window_idx: int) -> str:
        """Label of the ``window_idx``-th point of the trailing window."""
        return self.labels[len(self.labels) - window_size + window_idx]
