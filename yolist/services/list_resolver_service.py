class ListResolverService:
    """Records measured heights and advances the positioned frontier.

    Each call commits one item and moves at most one further item (the
    frontier) onto its predecessor's bottom. Chains of unmeasured items
    therefore need one call per item.
    """

    def __init__(self, engine):
        self._engine = engine

    def predecessor_bottom(self, index: int):
        """Return where item `index` starts, or None while that is unknown."""
        if index == 0:
            return 0
        record = self._engine._store.get(self._engine._items[index - 1])
        if record is None or not record.resolved:
            return None
        return record.bottom

    def resolve(self, key, height) -> bool:
        """Commit `height` for `key`. Returns True when geometry changed."""
        if height < 0:
            raise ValueError(f"measured height must not be negative, got {height!r}")

        engine = self._engine
        index = engine._index_by_key.get(key)
        if index is None:
            engine._logger.log("RESOLVE", f"Ignoring unknown key {key!r}", level="WARN")
            return False

        translate_y = self.predecessor_bottom(index)
        if translate_y is None:
            engine._logger.log(
                "RESOLVE",
                f"Deferred {key!r}: predecessor at {index - 1} not resolved",
                throttle_key="resolve_deferred",
                every_s=0.5,
            )
            return False

        item = engine._items[index]
        record = engine._store.ensure(item)
        was_resolved = record.resolved
        previous_height = record.height if was_resolved else 0
        engine._store.set(
            item,
            translate_y=translate_y,
            bottom=translate_y + height,
            resolved=True,
            height=height,
        )
        engine._total_height += height - previous_height
        self.refresh_visible_entry(index)

        if was_resolved and previous_height != height:
            self.shift_resolved_successors(index, height - previous_height)
        self.advance_frontier()
        return True

    def shift_resolved_successors(self, index: int, delta) -> None:
        """Keep the resolved chain contiguous after an item changed height."""
        engine = self._engine
        for i in range(index + 1, len(engine._items)):
            record = engine._store.get(engine._items[i])
            if record is None or not record.resolved:
                break
            record.update(translate_y=record.translate_y + delta, bottom=record.bottom + delta)
            self.refresh_visible_entry(i)

    def find_frontier_index(self) -> int | None:
        """First unresolved item whose predecessor is resolved."""
        store = self._engine._store
        items = self._engine._items
        for i in range(1, len(items)):
            if not store.is_resolved(items[i]) and store.is_resolved(items[i - 1]):
                return i
        return None

    def advance_frontier(self) -> int | None:
        frontier = self.find_frontier_index()
        if frontier is None:
            return None
        engine = self._engine
        engine._store.set(engine._items[frontier], translate_y=self.predecessor_bottom(frontier))
        self.refresh_visible_entry(frontier)
        return frontier

    def refresh_visible_entry(self, index: int) -> None:
        engine = self._engine
        if not engine._start_index <= index < engine._end_index:
            return
        position = index - engine._start_index
        if position >= len(engine._visible_window):
            return
        item = engine._items[index]
        engine._visible_window[position] = item.materialize(engine._store.get(item))
