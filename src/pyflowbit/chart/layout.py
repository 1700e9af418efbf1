from dataclasses import dataclass

from loguru import logger

# Padding multipliers
FONT_PADDING_MULTIPLIER = 5
LEGEND_ROW_HEIGHT = 25
RIGHT_PADDING_FACTOR = 2.5

# Smallest plot width/height, in pixels, that is still drawable
MIN_PLOT_EXTENT = 1.0


@dataclass(frozen=True)
class Layout:
    width: float
    height: float
    padding_left: float
    padding_right: float
    padding_top: float
    padding_bottom: float

    @property
    def plot_width(self) -> float:
        return self.width - self.padding_left - self.padding_right

    @property
    def plot_height(self) -> float:
        return self.height - self.padding_top - self.padding_bottom

    @property
    def plot_left(self) -> float:
        return self.padding_left

    @property
    def plot_right(self) -> float:
        return self.width - self.padding_right

    @property
    def plot_top(self) -> float:
        return self.padding_top

    @property
    def plot_bottom(self) -> float:
        return self.height - self.padding_bottom


def format_axis_value(value: float) -> str:
    """
    Plain string form of a y-axis extreme, used to size the label column.

    Integral values drop the trailing ``.0``.
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class LayoutEngine:
    """
    Computes paddings and the plot area for a chart of fixed pixel size.
    """

    def __init__(self, width: float, height: float):
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Chart size must be positive. Got width={width}, height={height}"
            )
        self.width = float(width)
        self.height = float(height)

    def compute_layout(
        self, font_size: float, series_count: int, y_label_width: float
    ) -> Layout:
        """
        Compute the layout for the current font size, series count and label width.

        Parameters
        ----------
        font_size : float
            Font size in pixels.
        series_count : int
            Number of series; each one reserves a legend row at the top.
        y_label_width : float
            Measured pixel width of the widest y-axis label.

        Returns
        -------
        Layout
            Paddings and plot area.

        Raises
        ------
        ValueError
            If the resulting plot area is narrower or shorter than one pixel.
        """
        layout = Layout(
            width=self.width,
            height=self.height,
            padding_left=float(y_label_width),
            padding_right=float(y_label_width) * RIGHT_PADDING_FACTOR,
            padding_top=font_size * FONT_PADDING_MULTIPLIER
            + series_count * LEGEND_ROW_HEIGHT,
            padding_bottom=font_size * FONT_PADDING_MULTIPLIER,
        )

        if layout.plot_width < MIN_PLOT_EXTENT or layout.plot_height < MIN_PLOT_EXTENT:
            raise ValueError(
                f"Plot area too small: {layout.plot_width:.1f}x{layout.plot_height:.1f}px "
                f"for a {self.width:.0f}x{self.height:.0f}px chart with font size {font_size} "
                f"and {series_count} series."
            )

        logger.debug(
            f"Layout: padding l={layout.padding_left:.1f} r={layout.padding_right:.1f} "
            f"t={layout.padding_top:.1f} b={layout.padding_bottom:.1f}, "
            f"plot {layout.plot_width:.1f}x{layout.plot_height:.1f}"
        )
        return layout
