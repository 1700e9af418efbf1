from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, Tuple

from pyflowbit.chart.style import CircleStyle, FillStyle, StrokeStyle, TextStyle

Coordinate = Tuple[float, float]
PointerMoveCallback = Callable[[float], None]
PointerLeaveCallback = Callable[[], None]
WheelCallback = Callable[[float], None]


class DrawingSurface(ABC):
    """
    Rendering capability a chart draws onto.

    Every drawn element has a stable id. Drawing with an id that is already
    on the surface replaces the old element, so redraws never stack up.
    Coordinates are pixels with the origin at the top-left corner and y
    growing downwards.
    """

    @abstractmethod
    def measure_text_width(self, text: str, font_size: float) -> float:
        """Pixel width of ``text`` rendered at ``font_size`` pixels."""
        raise NotImplementedError

    @abstractmethod
    def draw_polyline(
        self, element_id: str, points: Sequence[Coordinate], style: StrokeStyle
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_closed_region(
        self, element_id: str, points: Sequence[Coordinate], fill: FillStyle
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_circle(
        self, element_id: str, center: Coordinate, radius: float, style: CircleStyle
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(
        self, element_id: str, position: Coordinate, content: str, style: TextStyle
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, element_id: str) -> None:
        """Remove an element. Unknown ids are ignored."""
        raise NotImplementedError

    @abstractmethod
    def set_interaction_region(
        self, left: float, top: float, width: float, height: float
    ) -> None:
        """Area in which pointer and wheel events are reported."""
        raise NotImplementedError

    @abstractmethod
    def on_pointer_move(self, callback: PointerMoveCallback) -> None:
        """Register a callback receiving the pointer's x position as a 0..1 fraction of the region."""
        raise NotImplementedError

    @abstractmethod
    def on_pointer_leave(self, callback: PointerLeaveCallback) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_wheel(self, callback: WheelCallback) -> None:
        """Register a callback receiving the wheel delta; positive means scrolling down."""
        raise NotImplementedError

    def set_background(self, color: Optional[str]) -> None:
        """Optional hook for surfaces that support a background colour."""
        return

    def present(self) -> None:
        """Optional hook to flush pending drawing to the screen."""
        return
