from __future__ import annotations

import enum
import logging
import threading
from typing import Optional

from .calendar import CalendarWindow
from .month import CalendarMonth

logger = logging.getLogger(__name__)


class Reached(enum.Enum):
    TOP = "top"
    BOTTOM = "bottom"


def edge_reached(
    first_visible: Optional[int],
    last_visible: Optional[int],
    total: int,
    buffer: int = 0,
    update_when_empty: bool = True,
) -> Optional[Reached]:
    """
    Which end of a list of ``total`` items the viewport has reached, if any.

    ``first_visible``/``last_visible`` are item indices, or None when nothing
    is visible.  ``buffer`` items before an edge already count as reaching it.
    The bottom edge wins when both are reached.
    """
    if buffer < 0:
        raise ValueError(f"buffer cannot be negative, but was {buffer}.")

    if last_visible is None:
        bottom = update_when_empty
    else:
        bottom = last_visible >= total - 1 - buffer

    if first_visible is None:
        top = update_when_empty
    else:
        top = first_visible <= buffer

    if bottom:
        return Reached.BOTTOM
    if top:
        return Reached.TOP
    return None


class WindowScroller:
    """Extends a window from scroll callbacks, one extension at a time."""

    def __init__(
        self,
        window: CalendarWindow,
        buffer: int = 0,
        update_when_empty: bool = True,
    ) -> None:
        if buffer < 0:
            raise ValueError(f"buffer cannot be negative, but was {buffer}.")
        self._window = window
        self._buffer = buffer
        self._update_when_empty = update_when_empty
        self._lock = threading.Lock()

    def on_scroll(
        self, first_visible: Optional[int], last_visible: Optional[int]
    ) -> Optional[CalendarMonth]:
        with self._lock:
            reached = edge_reached(
                first_visible,
                last_visible,
                len(self._window),
                buffer=self._buffer,
                update_when_empty=self._update_when_empty,
            )
            if reached is None:
                return None
            logger.debug(
                "Viewport [%s, %s] of %d reached %s.",
                first_visible, last_visible, len(self._window), reached.value,
            )
            if reached is Reached.BOTTOM:
                return self._window.extend_forward()
            return self._window.extend_backward()

    @property
    def window(self) -> CalendarWindow:
        return self._window
