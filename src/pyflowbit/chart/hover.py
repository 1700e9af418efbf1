import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .series import ChartData


@dataclass(frozen=True)
class SeriesReading:
    label: str
    current: Optional[float]
    previous: Optional[float]


@dataclass(frozen=True)
class Tooltip:
    title: str
    readings: Tuple[SeriesReading, ...]


@dataclass(frozen=True)
class ComparisonTooltip(Tooltip):
    """Both series have values; ``prediction_correct`` tells whether they moved the same way."""

    prediction_correct: bool = False


@dataclass(frozen=True)
class NoComparisonTooltip(Tooltip):
    """The first series has no value (or no previous value) at the hovered index."""


@dataclass(frozen=True)
class HoverResult:
    index: int
    absolute_index: int
    tooltip: Tooltip


def directional_agreement(previous: float, current: float, other_current: float) -> bool:
    """
    True if ``current`` and ``other_current`` moved the same way from ``previous``.

    A zero move on either side counts as disagreement.
    """
    return (previous - current) * (previous - other_current) > 0


def snap_index(pointer_fraction: float, window_size: int) -> int:
    """
    Nearest window index for a relative pointer position.

    Halves round up. The fraction is clamped to [0, 1] first.
    """
    fraction = min(max(float(pointer_fraction), 0.0), 1.0)
    index = int(math.floor(abs((window_size - 1) * fraction) + 0.5))
    return min(max(index, 0), max(window_size - 1, 0))


class HoverResolver:
    """
    Maps a pointer position to a data index and the tooltip for that index.

    Purely computational; the caller decides what to redraw.
    """

    def resolve(
        self, pointer_fraction: float, window_size: int, data: ChartData
    ) -> HoverResult:
        """
        Resolve a pointer position.

        Parameters
        ----------
        pointer_fraction : float
            Horizontal pointer position relative to the plot area, 0 at the
            left edge and 1 at the right edge.
        window_size : int
            Number of visible points.
        data : ChartData
            Series and labels.

        Returns
        -------
        HoverResult
            Window index, absolute index and tooltip payload.
        """
        index = snap_index(pointer_fraction, window_size)
        readings: List[SeriesReading] = []
        absolute_index = data.window_start(window_size) + index

        for i, series in enumerate(data.series):
            diff = data.length_difference(i)
            idx = len(series) - window_size + index + diff
            readings.append(
                SeriesReading(
                    label=series.label,
                    current=data.value_at(i, idx),
                    previous=data.value_at(i, idx - 1),
                )
            )

        title = data.label_at(window_size, index)
        tooltip = self._tooltip(title, readings[:2])
        logger.debug(
            f"Hover at {pointer_fraction:.3f} -> index {index} (absolute {absolute_index}), {type(tooltip).__name__}"
        )
        return HoverResult(index=index, absolute_index=absolute_index, tooltip=tooltip)

    def _tooltip(self, title: str, readings: List[SeriesReading]) -> Tooltip:
        first = readings[0]
        if (
            len(readings) < 2
            or first.current is None
            or first.previous is None
            or readings[1].current is None
        ):
            return NoComparisonTooltip(title=title, readings=tuple(readings))

        return ComparisonTooltip(
            title=title,
            readings=tuple(readings),
            prediction_correct=directional_agreement(
                first.previous, first.current, readings[1].current
            ),
        )
