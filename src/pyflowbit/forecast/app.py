import sys
from typing import Any, Dict, List, Optional

from loguru import logger

from pyflowbit.chart.series import DEFAULT_SERIES_COLOR, DRAW_MODE_LINE, Series
from pyflowbit.chart.trend_chart import TrendChart
from pyflowbit.surface.matplotlib_surface import MatplotlibSurface


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure loguru logging with specified level.

    Parameters
    ----------
    log_level : str, default="INFO"
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )


def _require(config: Dict[str, Any], key: str, context: str = "config") -> Any:
    if key not in config or config[key] is None:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return config[key]


def _parse_series(entry: Dict[str, Any], idx: int) -> Series:
    """Build a Series from one entry of the ``datas`` list."""
    context = f"datas[{idx}]"
    return Series(
        label=str(_require(entry, "label", context)),
        values=_require(entry, "data", context),
        declared_min=entry.get("min"),
        declared_max=entry.get("max"),
        color=entry.get("color") or DEFAULT_SERIES_COLOR,
        area_color=entry.get("areaColor"),
        stroke_width=_require(entry, "width", context),
        draw_mode=entry.get("drawMode", DRAW_MODE_LINE),
    )


def parse_chart_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Turn a chart configuration dictionary into ``TrendChart`` keyword arguments.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration with required keys ``size`` (``width``, ``height``,
        ``font``), ``datas`` and ``labels``, and optional keys
        ``backgroundColor``, ``zoom``, ``showDataCount``, ``showLabelCount``
        and ``zoomStep``.

    Returns
    -------
    Dict[str, Any]
        Keyword arguments for ``TrendChart`` (without the surface).

    Raises
    ------
    ValueError
        If a required key is missing or a value is unusable.
    """
    size = _require(config, "size")
    datas = _require(config, "datas")
    labels = _require(config, "labels")

    if not isinstance(datas, list) or len(datas) == 0:
        raise ValueError("'datas' must be a non-empty list of series definitions.")

    series: List[Series] = [_parse_series(entry, i) for i, entry in enumerate(datas)]

    kwargs = {
        "width": _require(size, "width", "size"),
        "height": _require(size, "height", "size"),
        "font_size": _require(size, "font", "size"),
        "series": series,
        "labels": list(labels),
        "background_color": config.get("backgroundColor"),
        "zoom": bool(config.get("zoom", False)),
        "show_data_count": config.get("showDataCount"),
        "show_label_count": config.get("showLabelCount"),
    }
    if config.get("zoomStep") is not None:
        kwargs["zoom_step"] = int(config["zoomStep"])

    logger.debug(
        f"Parsed chart config: {len(series)} series, {len(kwargs['labels'])} labels, zoom={kwargs['zoom']}"
    )
    return kwargs


def create_chart(config: Dict[str, Any], surface=None) -> TrendChart:
    """
    Create a chart from a configuration dictionary.

    Parameters
    ----------
    config : Dict[str, Any]
        Chart configuration, see ``parse_chart_config``.
    surface : Optional[DrawingSurface], default=None
        Surface to draw on. If None, a ``MatplotlibSurface`` of the
        configured size is created.

    Returns
    -------
    TrendChart
        The chart, not yet rendered.
    """
    kwargs = parse_chart_config(config)
    if surface is None:
        surface = MatplotlibSurface(
            int(kwargs["width"]),
            int(kwargs["height"]),
            background_color=kwargs["background_color"],
        )
    return TrendChart(surface, **kwargs)


def run_chart(config: Dict[str, Any], show: bool = True) -> TrendChart:
    """
    Configure logging, build and render a chart, then optionally save and show it.

    Parameters
    ----------
    config : Dict[str, Any]
        Chart configuration. Besides the chart keys, ``LOG_LEVEL`` and
        ``SAVE_PATH`` are honoured.
    show : bool, default=True
        Whether to open the interactive window.

    Returns
    -------
    TrendChart
        The rendered chart.
    """
    configure_logging(config.get("LOG_LEVEL", "INFO"))

    chart = create_chart(config)
    chart.render()

    save_path: Optional[str] = config.get("SAVE_PATH")
    if save_path:
        chart.save(save_path)
    if show:
        chart.show()
    return chart
