from yolist.models.position_store import PositionStore


class ListHeightModeService:
    """Decides whether item heights are all known up front."""

    def __init__(self, store: PositionStore):
        self._store = store

    def has_known_height(self, item) -> bool:
        return item.declared_height is not None or self._store.is_resolved(item)

    def is_fixed(self, items, fixed_item_height=None, infinite: bool = True) -> bool:
        """Return True when windowing can use resolved geometry directly.

        Non-infinite lists never window, so they count as fixed.
        """
        if not infinite or fixed_item_height is not None:
            return True
        return all(self.has_known_height(item) for item in items)
