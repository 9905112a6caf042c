import enum
from abc import ABC, abstractmethod
from typing import Any


class GesturePhase(str, enum.Enum):
    IDLE = "idle"
    TRACKING = "tracking"


class BaseGesture(ABC):
    """
    Base class for pointer gestures.

    A gesture is idle until start(), tracks movement until end() resolves an
    action, and then returns to idle with its offset reset to zero whatever
    the outcome. One pointer at a time: start() while tracking is ignored.
    """

    def __init__(self) -> None:
        self.phase = GesturePhase.IDLE
        self.offset = 0.0

    @property
    def is_tracking(self) -> bool:
        return self.phase is GesturePhase.TRACKING

    @abstractmethod
    def start(self, x: float, y: float = 0.0) -> None:
        """Pointer went down."""
        pass

    @abstractmethod
    def move(self, x: float, y: float = 0.0) -> None:
        """Pointer moved while down. Ignored when idle."""
        pass

    @abstractmethod
    def end(self) -> Any:
        """Pointer released (or left the element); resolve the action and reset."""
        pass

    def cancel(self) -> None:
        """Abandon the gesture without resolving an action"""
        self._reset()

    def _reset(self) -> None:
        self.phase = GesturePhase.IDLE
        self.offset = 0.0
