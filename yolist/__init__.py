from yolist.models.errors import (DuplicateKeyError, EmptyDataSourceError,
                                  ListEngineError, MissingIdentityError,
                                  MissingIdentityWarning)
from yolist.models.list_engine import ListEngine, create_list_engine
from yolist.models.list_engine_config import ListEngineConfig
from yolist.models.list_item import ItemKind, PositionRecord, SourceItem

__all__ = [
    "DuplicateKeyError",
    "EmptyDataSourceError",
    "ItemKind",
    "ListEngine",
    "ListEngineConfig",
    "ListEngineError",
    "MissingIdentityError",
    "MissingIdentityWarning",
    "PositionRecord",
    "SourceItem",
    "create_list_engine",
]
