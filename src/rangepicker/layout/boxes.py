from __future__ import annotations

from typing import Optional

import numpy as np
import numpy.typing as npt

from rangepicker.calendar.month import CalendarMonth

from .grid import day_index_grid

Box = tuple[float, float, float, float]


class DayBoxes:
    """
    Bounding boxes of rendered days, indexed by flat day index.

    Boxes are ``(left, top, right, bottom)`` and half-open, so a point on a
    shared edge belongs to the right/lower box only.
    """

    def __init__(self, boxes: Optional[npt.ArrayLike] = None) -> None:
        if boxes is None:
            arr = np.empty((0, 4), dtype=np.float64)
        else:
            arr = np.asarray(boxes, dtype=np.float64).reshape(-1, 4)
        if np.any(arr[:, 2] < arr[:, 0]) or np.any(arr[:, 3] < arr[:, 1]):
            raise ValueError("Boxes must satisfy left <= right and top <= bottom.")
        self._boxes: np.ndarray = arr

    @classmethod
    def from_month(
        cls,
        month: CalendarMonth,
        cell_width: float,
        cell_height: float,
        origin: tuple[float, float] = (0.0, 0.0),
    ) -> "DayBoxes":
        """One box per day, laid out on the month's week grid."""
        if cell_width <= 0 or cell_height <= 0:
            raise ValueError("Cell width and height must be positive.")
        # Row-major order of occupied cells is flat day order.
        rows, cols = np.nonzero(day_index_grid(month) >= 0)
        left = origin[0] + cols * float(cell_width)
        top = origin[1] + rows * float(cell_height)
        return cls(np.column_stack([left, top, left + cell_width, top + cell_height]))

    def add_day(self, left: float, top: float, right: float, bottom: float) -> int:
        if right < left or bottom < top:
            raise ValueError("Boxes must satisfy left <= right and top <= bottom.")
        self._boxes = np.vstack([self._boxes, [[left, top, right, bottom]]])
        return len(self._boxes) - 1

    def box(self, index: int) -> Optional[Box]:
        if not 0 <= index < len(self._boxes):
            return None
        left, top, right, bottom = self._boxes[index]
        return float(left), float(top), float(right), float(bottom)

    def click(self, x: float, y: float) -> Optional[int]:
        """Index of the first box containing ``(x, y)``, or None."""
        b = self._boxes
        inside = (b[:, 0] <= x) & (x < b[:, 2]) & (b[:, 1] <= y) & (y < b[:, 3])
        hits = np.flatnonzero(inside)
        return int(hits[0]) if hits.size else None

    def __len__(self) -> int:
        return len(self._boxes)

    def __repr__(self) -> str:
        return f"DayBoxes(count={len(self)})"
