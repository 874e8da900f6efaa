"""Item types handled by the list engine."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum


@dataclass
class PositionRecord:
    """Positional facts for one item of the data source."""

    height: float | None = None
    order: int | None = None  # slot in the live window, used as a reuse key
    resolved: bool = False
    translate_y: float | None = None
    bottom: float | None = None
    index: int | None = None

    def update(self, **fields) -> None:
        for name, value in fields.items():
            if not hasattr(self, name):
                raise AttributeError(f"PositionRecord has no field {name!r}")
            setattr(self, name, value)

    def reset(self) -> None:
        self.update(height=None, order=None, resolved=False,
                    translate_y=None, bottom=None)

    def as_dict(self) -> dict:
        return asdict(self)


class ItemKind(Enum):
    EXTERNAL = "external"  # caller-owned; geometry kept in the store table
    SYNTHETIC = "synthetic"  # engine-owned group boundary; geometry kept inline


@dataclass(eq=False)
class SourceItem:
    key: Hashable
    payload: Mapping = field(default_factory=dict)
    kind: ItemKind = ItemKind.EXTERNAL
    inline: PositionRecord | None = None
    record_key: Hashable | None = None  # set when a repeated key needs its own record

    @classmethod
    def group_boundary(cls, key: Hashable, payload: Mapping | None = None) -> SourceItem:
        """Create a boundary marker that carries its own position record."""
        return cls(key=key, payload=dict(payload or {}),
                   kind=ItemKind.SYNTHETIC, inline=PositionRecord())

    @property
    def table_key(self) -> Hashable:
        return self.key if self.record_key is None else self.record_key

    @property
    def declared_height(self) -> float | None:
        return self.payload.get("height")

    def materialize(self, record: PositionRecord | None) -> dict:
        entry = dict(self.payload)
        entry["key"] = self.key
        if record is not None:
            entry.update(record.as_dict())
        return entry
