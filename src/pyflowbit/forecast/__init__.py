"""
Forecast-versus-actual charts built from a configuration dictionary.
"""

from pyflowbit.forecast.app import (
    configure_logging,
    create_chart,
    parse_chart_config,
    run_chart,
)

__all__ = [
    "configure_logging",
    "parse_chart_config",
    "create_chart",
    "run_chart",
]
