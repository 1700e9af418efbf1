"""
Core charting engine for PyFlowbit.

This package turns series values into windowed, scaled geometry and
resolves pointer positions to data indices. It draws through an abstract
surface and does not depend on any particular rendering backend.
"""

from pyflowbit.chart.coordinate_projector import CoordinateProjector, project
from pyflowbit.chart.geometry import GeometryBuilder
from pyflowbit.chart.hover import HoverResolver
from pyflowbit.chart.layout import LayoutEngine
from pyflowbit.chart.series import ChartData, Series
from pyflowbit.chart.state import ChartState
from pyflowbit.chart.trend_chart import TrendChart
from pyflowbit.chart.window_state import WindowState, compute_bounds

__all__ = [
    "TrendChart",
    "ChartState",
    "ChartData",
    "Series",
    "WindowState",
    "compute_bounds",
    "LayoutEngine",
    "CoordinateProjector",
    "project",
    "GeometryBuilder",
    "HoverResolver",
]
