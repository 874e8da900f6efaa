from collections.abc import Hashable

from yolist.models.list_item import ItemKind, PositionRecord, SourceItem


class PositionStore:
    """Keyed table of position records for caller-owned items.

    Records are keyed by `item.table_key`, which is the item key unless a
    non-infinite list repeats a key.

    Synthetic items keep their record inline, so `get`/`set` read and write
    `item.inline` for them and never touch the table.
    """

    def __init__(self):
        self._records: dict[Hashable, PositionRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._records

    def lookup(self, key: Hashable) -> PositionRecord | None:
        return self._records.get(key)

    def get(self, item: SourceItem) -> PositionRecord | None:
        if item.kind is ItemKind.SYNTHETIC:
            return item.inline
        return self._records.get(item.table_key)

    def ensure(self, item: SourceItem) -> PositionRecord:
        """Return the item's record, creating an empty one if needed."""
        if item.kind is ItemKind.SYNTHETIC:
            if item.inline is None:
                item.inline = PositionRecord()
            return item.inline
        record = self._records.get(item.table_key)
        if record is None:
            record = self._records[item.table_key] = PositionRecord()
        return record

    def set(self, item: SourceItem, **fields) -> None:
        """Merge `fields` into the item's record. Unknown keys are ignored."""
        record = self.get(item)
        if record is not None:
            record.update(**fields)

    def is_resolved(self, item: SourceItem) -> bool:
        record = self.get(item)
        return record is not None and record.resolved

    def retain(self, keys) -> None:
        """Drop table entries whose keys are not in `keys`."""
        keep = set(keys)
        for key in [key for key in self._records if key not in keep]:
            del self._records[key]
