"""
PyFlowbit: Python Trend Charting Library

A library for drawing windowed multi-series trend charts with zoom and
point-wise hover comparison.
"""

# Import from chart subpackage
from pyflowbit.chart.coordinate_projector import CoordinateProjector
from pyflowbit.chart.geometry import GeometryBuilder
from pyflowbit.chart.hover import HoverResolver
from pyflowbit.chart.layout import LayoutEngine
from pyflowbit.chart.series import ChartData, Series
from pyflowbit.chart.trend_chart import TrendChart
from pyflowbit.chart.window_state import WindowState

# Import from forecast subpackage
from pyflowbit.forecast.app import configure_logging, create_chart

# Import from surface subpackage
from pyflowbit.surface.base import DrawingSurface
from pyflowbit.surface.matplotlib_surface import MatplotlibSurface

__all__ = [
    # Core charting
    "TrendChart",
    "Series",
    "ChartData",
    "WindowState",
    "LayoutEngine",
    "CoordinateProjector",
    "GeometryBuilder",
    "HoverResolver",
    # Surfaces
    "DrawingSurface",
    "MatplotlibSurface",
    # Forecast charts
    "configure_logging",
    "create_chart",
]
