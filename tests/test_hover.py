import pytest

from pyflowbit.chart.hover import (
    ComparisonTooltip,
    HoverResolver,
    NoComparisonTooltip,
    directional_agreement,
    snap_index,
)
from pyflowbit.chart.series import ChartData, Series


@pytest.mark.parametrize("fraction, expected", [(0.0, 0), (0.5, 5), (1.0, 9)])
def test_snap_index_for_ten_points(fraction, expected):
    assert snap_index(fraction, 10) == expected


@pytest.mark.parametrize("fraction, expected", [(-0.3, 0), (1.7, 9)])
def test_snap_index_clamps_outside_the_plot(fraction, expected):
    assert snap_index(fraction, 10) == expected


def test_snap_index_single_point_window():
    assert snap_index(0.8, 1) == 0


@pytest.mark.parametrize(
    "previous, current, other, expected",
    [
        (100, 90, 80, True),
        (100, 90, 110, False),
        (100, 110, 120, True),
        (100, 100, 90, False),
        (100, 90, 100, False),
    ],
)
def test_directional_agreement(previous, current, other, expected):
    assert directional_agreement(previous, current, other) is expected


@pytest.fixture
def data():
    return ChartData(
        [
            Series("Actual", [100, 90, 95]),
            Series("Forecast", [100, 110, 96, 97, 98]),
        ],
        ["mon", "tue", "wed", "thu", "fri"],
    )


class TestHoverResolver:
    def test_failed_prediction(self, data):
        result = HoverResolver().resolve(0.25, 5, data)

        assert result.index == 1
        assert result.absolute_index == 1
        assert isinstance(result.tooltip, ComparisonTooltip)
        assert result.tooltip.prediction_correct is False
        assert result.tooltip.title == "tue"
        actual, forecast = result.tooltip.readings
        assert (actual.current, actual.previous) == (90, 100)
        assert forecast.current == 110

    def test_correct_prediction(self, data):
        result = HoverResolver().resolve(0.5, 5, data)

        assert result.index == 2
        assert isinstance(result.tooltip, ComparisonTooltip)
        assert result.tooltip.prediction_correct is True

    def test_first_point_has_no_previous_value(self, data):
        result = HoverResolver().resolve(0.0, 5, data)

        assert isinstance(result.tooltip, NoComparisonTooltip)
        assert result.tooltip.readings[0].previous is None

    def test_past_the_end_of_the_first_series(self, data):
        result = HoverResolver().resolve(0.75, 5, data)

        assert result.index == 3
        assert isinstance(result.tooltip, NoComparisonTooltip)
        assert result.tooltip.title == "thu"
        assert result.tooltip.readings[0].current is None
        assert result.tooltip.readings[1].current == 97

    def test_single_series_never_compares(self):
        data = ChartData([Series("only", [1, 2, 3])], list("abc"))
        result = HoverResolver().resolve(1.0, 3, data)

        assert isinstance(result.tooltip, NoComparisonTooltip)
        assert len(result.tooltip.readings) == 1

    def test_zoomed_window_counts_from_window_start(self, data):
        result = HoverResolver().resolve(0.0, 3, data)

        assert result.index == 0
        assert result.absolute_index == 2
        assert result.tooltip.title == "wed"
        assert isinstance(result.tooltip, ComparisonTooltip)
        assert result.tooltip.prediction_correct is True

    def test_most_recent_label_belongs_to_the_longest_series(self, data):
        # Series share their first index, so a shorter series ends before labels[-1]
        result = HoverResolver().resolve(1.0, 5, data)

        assert result.absolute_index == len(data.labels) - 1
        assert result.tooltip.title == data.labels[-1]
        assert data.value_at(0, result.absolute_index) is None
        assert result.tooltip.readings[0].current is None
        assert result.tooltip.readings[1].current == data.series[1].values[-1]
        assert isinstance(result.tooltip, NoComparisonTooltip)

    def test_last_index_reads_the_most_recent_label(self, data):
        result = HoverResolver().resolve(1.0, 5, data)

        assert result.tooltip.title == "fri"
        assert result.tooltip.readings[1].current == 98
