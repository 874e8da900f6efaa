from bisect import bisect_left
from dataclasses import dataclass

from yolist.models.position_store import PositionStore

DIRECTION_DOWN = "down"
DIRECTION_UP = "up"


def direction_between(previous_offset: float, offset: float) -> str:
    return DIRECTION_DOWN if offset - previous_offset >= 0 else DIRECTION_UP


@dataclass(frozen=True)
class ListWindow:
    """Half-open index range `[start_index, end_index)` of live items."""

    start_index: int
    end_index: int

    def __len__(self) -> int:
        return self.end_index - self.start_index

    def __contains__(self, index: int) -> bool:
        return self.start_index <= index < self.end_index


class ListWindowPlannerService:
    """Plans the live item window for an infinite list."""

    def __init__(self, store: PositionStore):
        self._store = store

    def adjusted_offset(self, offset: float, lookahead: float) -> float:
        return max(0.0, offset - lookahead)

    def is_border_item(self, item, border_y: float) -> bool:
        """True if the item straddles `border_y` or has no known position yet."""
        record = self._store.get(item)
        if record is None or not record.resolved:
            return True
        return record.translate_y <= border_y <= record.bottom

    def scan_start_index(self, *, border_y: float, cached_start: int, direction: str, items) -> int:
        """Walk from the cached start toward the scroll direction.

        Small scroll deltas stay O(1); a jump far from the cached start is O(n).
        """
        length = len(items)
        start_index = max(0, min(cached_start, length - 1))
        if direction == DIRECTION_DOWN or start_index == 0:
            candidates = range(start_index, length)
        else:
            candidates = range(start_index, -1, -1)
        for i in candidates:
            if self.is_border_item(items[i], border_y):
                return i
        return start_index

    def search_start_index(self, *, border_y: float, items) -> int:
        """Binary search over bottoms; valid once every item is resolved."""
        def bottom_of(item):
            record = self._store.get(item)
            if record is None or not record.resolved:
                return float("inf")
            return record.bottom

        return min(bisect_left(items, border_y, key=bottom_of), max(0, len(items) - 1))

    def compute_window(
        self,
        *,
        offset: float,
        cached_start: int,
        direction: str,
        items,
        window_size: int,
        lookahead: float = 0.0,
        infinite: bool = True,
        fixed: bool = False,
    ) -> ListWindow:
        total_items = len(items)
        if not infinite:
            return ListWindow(0, total_items)

        border_y = self.adjusted_offset(offset, lookahead)
        if fixed:
            start_index = self.search_start_index(border_y=border_y, items=items)
        else:
            start_index = self.scan_start_index(
                border_y=border_y,
                cached_start=cached_start,
                direction=direction,
                items=items,
            )

        if start_index > total_items - window_size:
            start_index = max(0, total_items - window_size)
        end_index = min(start_index + window_size, total_items)
        return ListWindow(start_index, end_index)

    def materialize(self, items, window: ListWindow) -> list[dict]:
        return [
            item.materialize(self._store.get(item))
            for item in items[window.start_index:window.end_index]
        ]
