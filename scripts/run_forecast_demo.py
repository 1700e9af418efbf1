import numpy as np

from pyflowbit.forecast import run_chart

# --- User configuration dictionary ---
N_DAYS = 60  # number of daily prices
FORECAST_DAYS = 10  # days the forecast runs past the last actual price
RNG_SEED = 7

CONFIG = {
    "LOG_LEVEL": "INFO",  # logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    "SAVE_PATH": None,  # set to a .png path to also save the chart
    "size": {"width": 1200, "height": 640, "font": 14},
    "backgroundColor": "#1f2430",
    "zoom": True,  # wheel zoom; value range follows the visible window
    "zoomStep": 5,  # points added/removed per wheel step
    "showDataCount": 40,  # initially visible points
    "showLabelCount": 8,  # x-axis labels to aim for
}


def _demo_series():
    """Random-walk actual prices and a forecast continuing from the last one."""
    rng = np.random.default_rng(RNG_SEED)
    actual = 50000 + np.cumsum(rng.normal(0, 400, N_DAYS - FORECAST_DAYS))
    forecast_steps = np.cumsum(rng.normal(50, 300, FORECAST_DAYS))
    forecast = np.concatenate([actual, actual[-1] + forecast_steps])
    today = N_DAYS - FORECAST_DAYS - 1
    labels = [f"D{i - today:+d}" if i != today else "Today" for i in range(N_DAYS)]
    return actual, forecast, labels


def main() -> None:
    """
    Main function to build and show the demo chart.
    """
    actual, forecast, labels = _demo_series()

    config = CONFIG.copy()
    config["labels"] = labels
    config["datas"] = [
        {
            "label": "Actual",
            "data": actual.tolist(),
            "min": float(actual.min()),
            "max": float(actual.max()),
            "color": "#4e9bff",
            "width": 2,
            "drawMode": "area",
            "areaColor": "rgba(0, 86, 202, 0.16)",
        },
        {
            "label": "Forecast",
            "data": forecast.tolist(),
            "min": float(forecast.min()),
            "max": float(forecast.max()),
            "color": "#ffb347",
            "width": 2,
            "drawMode": "dotted",
        },
    ]

    run_chart(config, show=True)


if __name__ == "__main__":
    main()
