"""
Virtualization engine for long and infinite lists.

The engine decides which items of a data source are live, where each one
sits vertically, and folds measured heights into that geometry as the
rendering layer reports them. It never measures or paints anything itself;
callers feed it scroll offsets and measured heights and listen on `changed`.
"""

import itertools
import warnings
from collections.abc import Callable, Hashable, Mapping
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import QObject, Signal

from yolist.models.errors import (DuplicateKeyError, EmptyDataSourceError,
                                  MissingIdentityError, MissingIdentityWarning)
from yolist.models.list_engine_config import DEFAULT_WINDOW_SIZE, ListEngineConfig
from yolist.models.list_item import ItemKind, PositionRecord, SourceItem
from yolist.models.position_store import PositionStore
from yolist.services.list_height_mode_service import ListHeightModeService
from yolist.services.list_resolver_service import ListResolverService
from yolist.services.list_window_planner_service import (DIRECTION_DOWN,
                                                         ListWindowPlannerService,
                                                         direction_between)
from yolist.utils.flow_log import FlowLogger


class ListEngine(QObject):
    """
    Stateful window/geometry model behind a virtualized list.

    In infinite mode only `window_size` items are materialized at a time and
    unknown heights are discovered through `resolve_item`. In non-infinite
    mode the window is always the whole data source.
    """

    # Emitted with (visible_window, total_height) whenever observable output changes
    changed = Signal(object, object)

    def __init__(self, data_source, offset: float = 0, infinite: bool = True,
                 fixed_item_height: Optional[float] = None,
                 window_size: int = DEFAULT_WINDOW_SIZE, *,
                 lookahead: float = 0.0,
                 on_change: Optional[Callable] = None,
                 key_factory: Optional[Callable[[], Hashable]] = None,
                 logger: Optional[FlowLogger] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        # Fixed for the engine's lifetime; everything else can change on refresh
        self.fixed_item_height = fixed_item_height
        self.lookahead = lookahead

        self._store = PositionStore()
        self._height_mode = ListHeightModeService(self._store)
        self._planner = ListWindowPlannerService(self._store)
        self._resolver = ListResolverService(self)
        self._logger = logger or FlowLogger()

        self._key_counter = itertools.count()
        self._key_factory = key_factory or self._next_generated_key
        self._generated_keys: dict[int, tuple[Mapping, Hashable]] = {}

        self._items: list[SourceItem] = []
        self._index_by_key: dict[Hashable, int] = {}
        self._window_size = window_size
        self._infinite = infinite
        self._offset = offset
        self._direction = DIRECTION_DOWN
        self._start_index = 0
        self._end_index = 0
        self._visible_window: list[dict] = []
        self._total_height = 0
        self._is_height_fixed = False

        if on_change is not None:
            self.changed.connect(on_change)
        self.refresh(data_source, False, window_size, offset, infinite)

    @classmethod
    def from_config(cls, data_source, config: ListEngineConfig, offset: float = 0,
                    **kwargs) -> 'ListEngine':
        return cls(data_source, offset, config.infinite, config.fixed_item_height,
                   config.window_size, lookahead=config.lookahead, **kwargs)

    # State

    @property
    def data_source(self) -> list[SourceItem]:
        return list(self._items)

    @property
    def visible_window(self) -> list[dict]:
        return list(self._visible_window)

    @property
    def total_height(self):
        return self._total_height

    @property
    def start_index(self) -> int:
        return self._start_index

    @property
    def end_index(self) -> int:
        return self._end_index

    @property
    def offset(self):
        return self._offset

    @property
    def direction(self) -> str:
        return self._direction

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def infinite(self) -> bool:
        return self._infinite

    @property
    def is_height_fixed(self) -> bool:
        return self._is_height_fixed

    def index_of(self, key: Hashable) -> Optional[int]:
        return self._index_by_key.get(key)

    def position_of(self, key: Hashable) -> Optional[PositionRecord]:
        """Return a copy of the key's position record, or None if unknown."""
        index = self._index_by_key.get(key)
        if index is None:
            return None
        record = self._store.get(self._items[index])
        return replace(record) if record is not None else None

    # Operations

    def refresh(self, data_source=None, refresh_all: bool = False,
                window_size: Optional[int] = None, offset: Optional[float] = None,
                infinite: Optional[bool] = None):
        """Reset the engine from props. Arguments left as None keep their current value."""
        data_source = self._items if data_source is None else list(data_source)
        window_size = self._window_size if window_size is None else window_size
        offset = self._offset if offset is None else offset
        infinite = self._infinite if infinite is None else infinite

        if not data_source:
            raise EmptyDataSourceError()
        if window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")
        items, index_by_key, generated_keys = self._normalize(data_source, infinite)

        self._infinite = infinite
        self._window_size = window_size
        self._items = items
        self._index_by_key = index_by_key
        self._generated_keys = generated_keys
        self._store.retain(item.table_key for item in items)
        self._layout_items(refresh_all)
        self._is_height_fixed = self._height_mode.is_fixed(items, self.fixed_item_height, infinite)
        self._direction = direction_between(self._offset, offset)
        self._offset = offset
        self._update_window()
        self._total_height = self._sum_resolved_heights()

        self._logger.log(
            "REFRESH",
            f"items={len(items)} window=[{self._start_index}, {self._end_index}) "
            f"fixed={self._is_height_fixed} total_height={self._total_height}",
        )
        self.emit_change()

    def on_scroll_to(self, offset: float, manually: bool = False):
        """Track a new scroll offset; `manually` marks a jump that breaks scan locality."""
        previous_offset = self._offset
        previous_start = self._start_index
        self._direction = direction_between(previous_offset, offset)
        self._offset = offset
        if manually:
            self._start_index = 0
        if not self._infinite:
            return

        self._update_window()
        # Only notify when the window content really moved, to keep re-renders minimal
        returned_to_origin = offset == 0 and previous_offset != 0 and self._start_index == 0
        if self._start_index != previous_start or returned_to_origin:
            self.emit_change()

    def resolve_item(self, key: Hashable, height: float):
        """Record the measured height of one rendered item."""
        if self._resolver.resolve(key, height):
            self.emit_change()

    def emit_change(self):
        self.changed.emit(list(self._visible_window), self._total_height)

    # Internals

    def _next_generated_key(self) -> str:
        return f"auto-{next(self._key_counter)}"

    def _normalize(self, data_source, infinite: bool):
        """Wrap caller items and check identities without touching engine state."""
        items = []
        index_by_key = {}
        generated_keys = {}
        missing_keys = 0
        supplied_keys = set()
        if not infinite:
            supplied_keys = {
                raw.key if isinstance(raw, SourceItem) else raw.get("key")
                for raw in data_source
            }
            supplied_keys.discard(None)
        for i, raw in enumerate(data_source):
            if isinstance(raw, SourceItem):
                if raw.key is None:
                    raise MissingIdentityError(i)
                item = raw
            else:
                key = raw.get("key")
                if key is None:
                    if infinite:
                        raise MissingIdentityError(i)
                    # Reuse the key given to this same mapping on the previous refresh
                    previous = self._generated_keys.get(id(raw))
                    if previous is not None and previous[0] is raw and previous[1] not in supplied_keys:
                        key = previous[1]
                    else:
                        key = self._key_factory()
                        while key in supplied_keys:
                            key = self._key_factory()
                    supplied_keys.add(key)
                    generated_keys[id(raw)] = (raw, key)
                    missing_keys += 1
                item = SourceItem(key=key, payload=raw)

            if item.key in index_by_key:
                if infinite:
                    raise DuplicateKeyError(item.key, index_by_key[item.key], i)
                # Repeated keys still get one record per position
                if item.kind is ItemKind.EXTERNAL:
                    item = replace(item, record_key=(item.key, i))
            else:
                index_by_key[item.key] = i
                if item.record_key is not None:
                    item = replace(item, record_key=None)
            items.append(item)

        if missing_keys:
            message = (
                f"yolist: {missing_keys} list item(s) have no 'key'; generated keys were assigned. "
                "Give every item a unique key to avoid replacing content on each refresh."
            )
            warnings.warn(message, MissingIdentityWarning, stacklevel=3)
            self._logger.log("REFRESH", message, level="WARN")
        return items, index_by_key, generated_keys

    def _layout_items(self, refresh_all: bool):
        """Recompute heights, slots and the resolved prefix for every item."""
        previous = None
        for i, item in enumerate(self._items):
            record = self._store.ensure(item)
            if refresh_all:
                record.reset()

            height = item.declared_height
            if height is None:
                height = record.height
            if height is None:
                height = self.fixed_item_height

            # An item can only be placed once everything above it is placed
            resolved = height is not None and (previous is None or previous.resolved)
            if previous is None:
                translate_y = 0
            elif previous.resolved:
                translate_y = previous.bottom
            else:
                translate_y = None

            record.update(
                height=height,
                order=i % self._window_size,
                resolved=resolved,
                translate_y=translate_y,
                bottom=translate_y + height if resolved else None,
                index=i,
            )
            previous = record

    def _update_window(self):
        window = self._planner.compute_window(
            offset=self._offset,
            cached_start=self._start_index,
            direction=self._direction,
            items=self._items,
            window_size=self._window_size,
            lookahead=self.lookahead,
            infinite=self._infinite,
            fixed=self._is_height_fixed,
        )
        self._start_index = window.start_index
        self._end_index = window.end_index
        self._visible_window = self._planner.materialize(self._items, window)

    def _sum_resolved_heights(self):
        total = 0
        for item in self._items:
            record = self._store.get(item)
            if record is not None and record.resolved:
                total += record.height
        return total


def create_list_engine(data_source, initial_offset: float = 0, infinite: bool = True,
                       fixed_item_height: Optional[float] = None,
                       window_size: int = DEFAULT_WINDOW_SIZE, **kwargs) -> ListEngine:
    """Build a `ListEngine`; pass `on_change=` to receive the first notification too."""
    return ListEngine(data_source, initial_offset, infinite, fixed_item_height,
                      window_size, **kwargs)
