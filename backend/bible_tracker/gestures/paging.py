import enum
from typing import Callable, Optional

from bible_tracker.gestures.base import BaseGesture, GesturePhase

PAGE_TURN_THRESHOLD = 100


class PageTurn(str, enum.Enum):
    NONE = "none"
    NEXT = "next"
    PREVIOUS = "previous"


class PageDragGesture(BaseGesture):
    """Drag the month grid sideways: left goes to the next month, right to the previous."""

    def __init__(
        self,
        page_turn_threshold: float = PAGE_TURN_THRESHOLD,
        on_next: Optional[Callable[[], None]] = None,
        on_previous: Optional[Callable[[], None]] = None,
    ) -> None:
        if page_turn_threshold <= 0:
            raise ValueError("page_turn_threshold must be positive")
        super().__init__()
        self.page_turn_threshold = page_turn_threshold
        self.on_next = on_next
        self.on_previous = on_previous
        self._start_x = 0.0

    def classify(self, offset: float) -> PageTurn:
        if offset < -self.page_turn_threshold:
            return PageTurn.NEXT
        if offset > self.page_turn_threshold:
            return PageTurn.PREVIOUS
        return PageTurn.NONE

    def start(self, x: float, y: float = 0.0) -> None:
        if self.is_tracking:
            return
        self.phase = GesturePhase.TRACKING
        self._start_x = x
        self.offset = 0.0

    def move(self, x: float, y: float = 0.0) -> None:
        if not self.is_tracking:
            return
        self.offset = x - self._start_x

    def end(self) -> PageTurn:
        if not self.is_tracking:
            return PageTurn.NONE

        turn = self.classify(self.offset)
        self._reset()

        if turn is PageTurn.NEXT and self.on_next is not None:
            self.on_next()
        elif turn is PageTurn.PREVIOUS and self.on_previous is not None:
            self.on_previous()
        return turn
