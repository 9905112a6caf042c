import enum
from typing import Callable, Optional

from bible_tracker.gestures.base import BaseGesture, GesturePhase

EDIT_THRESHOLD = 80
DELETE_THRESHOLD = 150
DIRECTION_LOCK_DISTANCE = 5


class SwipeAction(str, enum.Enum):
    NONE = "none"
    EDIT = "edit"
    DELETE = "delete"


class SwipeGesture(BaseGesture):
    """
    Swipe-left-to-act on a single entry.

    The direction is locked on the first movement larger than lock_distance
    in either axis; vertical gestures are left to the page to scroll. Only
    leftward travel moves the entry.
    """

    def __init__(
        self,
        edit_threshold: float = EDIT_THRESHOLD,
        delete_threshold: float = DELETE_THRESHOLD,
        lock_distance: float = DIRECTION_LOCK_DISTANCE,
        on_edit: Optional[Callable[[], None]] = None,
        on_delete: Optional[Callable[[], None]] = None,
    ) -> None:
        if edit_threshold <= 0 or delete_threshold <= edit_threshold:
            raise ValueError("Thresholds must satisfy 0 < edit_threshold < delete_threshold")
        super().__init__()
        self.edit_threshold = edit_threshold
        self.delete_threshold = delete_threshold
        self.lock_distance = lock_distance
        self.on_edit = on_edit
        self.on_delete = on_delete
        self._start_x = 0.0
        self._start_y = 0.0
        self._delta_x = 0.0
        self._horizontal: Optional[bool] = None

    def classify(self, delta_x: float) -> SwipeAction:
        if delta_x <= -self.delete_threshold:
            return SwipeAction.DELETE
        if delta_x <= -self.edit_threshold:
            return SwipeAction.EDIT
        return SwipeAction.NONE

    @property
    def action(self) -> SwipeAction:
        """Action the current offset would trigger if released now"""
        return self.classify(self.offset)

    def start(self, x: float, y: float = 0.0) -> None:
        if self.is_tracking:
            return
        self.phase = GesturePhase.TRACKING
        self.offset = 0.0
        self._start_x = x
        self._start_y = y
        self._delta_x = 0.0
        self._horizontal = None

    def move(self, x: float, y: float = 0.0) -> None:
        if not self.is_tracking:
            return
        delta_x = x - self._start_x
        delta_y = y - self._start_y

        if self._horizontal is None and (
            abs(delta_x) > self.lock_distance or abs(delta_y) > self.lock_distance
        ):
            self._horizontal = abs(delta_x) > abs(delta_y)

        if self._horizontal:
            self._delta_x = delta_x
            self.offset = min(0.0, delta_x)

    def end(self) -> SwipeAction:
        if not self.is_tracking:
            return SwipeAction.NONE

        action = SwipeAction.NONE
        if self._horizontal:
            action = self.classify(self._delta_x)
            # Without a delete handler a long swipe still counts as an edit
            if action is SwipeAction.DELETE and self.on_delete is None and self.on_edit is not None:
                action = SwipeAction.EDIT

        self._reset()

        if action is SwipeAction.DELETE and self.on_delete is not None:
            self.on_delete()
        elif action is SwipeAction.EDIT and self.on_edit is not None:
            self.on_edit()
        return action

    def _reset(self) -> None:
        super()._reset()
        self._delta_x = 0.0
        self._horizontal = None
