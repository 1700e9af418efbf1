from dataclasses import dataclass, field
from typing import Optional

from .layout import Layout
from .series import ChartData
from .window_state import WindowState


@dataclass
class HoverState:
    active: bool = False
    pointer_fraction: float = 0.0
    resolved_index: Optional[int] = None

    def reset(self) -> None:
        self.active = False
        self.pointer_fraction = 0.0
        self.resolved_index = None


@dataclass
class ChartState:
    """
    Everything one chart instance knows about its data and view.

    Owned by exactly one chart; nothing here is shared between charts.
    """

    data: ChartData
    window: WindowState
    width: float
    height: float
    font_size: float
    background_color: Optional[str] = None
    layout: Optional[Layout] = None
    hover: HoverState = field(default_factory=HoverState)
    updating: bool = False

    @property
    def zoom_enabled(self) -> bool:
        return self.window.zoom_enabled
