import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from pyflowbit.chart.series import Series  # noqa: E402
from pyflowbit.surface.base import DrawingSurface  # noqa: E402


class RecordingSurface(DrawingSurface):
    """Surface that keeps drawn elements in a dict instead of rendering them."""

    CHAR_WIDTH_FACTOR = 0.5

    def __init__(self):
        self.elements = {}
        self.region = None
        self.move_callbacks = []
        self.leave_callbacks = []
        self.wheel_callbacks = []
        self.background = None
        self.present_count = 0

    def measure_text_width(self, text, font_size):
        return len(text) * font_size * self.CHAR_WIDTH_FACTOR

    def draw_polyline(self, element_id, points, style):
        self.elements[element_id] = ("polyline", [tuple(p) for p in points], style)

    def draw_closed_region(self, element_id, points, fill):
        self.elements[element_id] = ("region", [tuple(p) for p in points], fill)

    def draw_circle(self, element_id, center, radius, style):
        self.elements[element_id] = ("circle", (tuple(center), radius), style)

    def draw_text(self, element_id, position, content, style):
        self.elements[element_id] = ("text", (tuple(position), content), style)

    def remove(self, element_id):
        self.elements.pop(element_id, None)

    def set_interaction_region(self, left, top, width, height):
        self.region = (left, top, width, height)

    def on_pointer_move(self, callback):
        self.move_callbacks.append(callback)

    def on_pointer_leave(self, callback):
        self.leave_callbacks.append(callback)

    def on_wheel(self, callback):
        self.wheel_callbacks.append(callback)

    def set_background(self, color):
        self.background = color

    def present(self):
        self.present_count += 1

    def ids_with_prefix(self, prefix):
        return sorted(i for i in self.elements if i.startswith(prefix))


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def forecast_series():
    """An 8-point actual series followed by a 10-point forecast."""
    actual = Series(
        "Actual",
        [100, 90, 95, 97, 92, 94, 99, 101],
        declared_min=80,
        declared_max=120,
        color="#4e9bff",
        stroke_width=2,
        draw_mode="area",
    )
    forecast = Series(
        "Forecast",
        [100, 80, 96, 99, 91, 95, 98, 103, 106, 104],
        declared_min=80,
        declared_max=120,
        color="#ffb347",
        stroke_width=2,
        draw_mode="dotted",
    )
    return [actual, forecast]


@pytest.fixture
def ten_labels():
    return [f"day {i}" for i in range(10)]
