"""
Drawing surfaces for PyFlowbit charts.
"""

from pyflowbit.surface.base import DrawingSurface
from pyflowbit.surface.matplotlib_surface import MatplotlibSurface

__all__ = [
    "DrawingSurface",
    "MatplotlibSurface",
]
