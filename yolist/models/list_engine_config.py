from __future__ import annotations

from dataclasses import dataclass, replace

from yolist.utils.settings import get_lookahead_ratio, get_window_size

DEFAULT_WINDOW_SIZE = 12


@dataclass(frozen=True)
class ListEngineConfig:
    """Construction-time configuration for a `ListEngine`."""

    window_size: int = DEFAULT_WINDOW_SIZE
    lookahead: float = 0.0  # pixels subtracted from the scroll offset
    fixed_item_height: float | None = None
    infinite: bool = True

    def __post_init__(self):
        if self.window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {self.window_size}")
        if self.lookahead < 0:
            raise ValueError(f"lookahead must not be negative, got {self.lookahead}")
        if self.fixed_item_height is not None and self.fixed_item_height < 0:
            raise ValueError(f"fixed_item_height must not be negative, got {self.fixed_item_height}")

    @classmethod
    def from_settings(cls, viewport_height: float, **overrides) -> ListEngineConfig:
        """Build a config from persisted settings and the current viewport height."""
        config = cls(
            window_size=get_window_size(),
            lookahead=max(0.0, float(viewport_height)) * get_lookahead_ratio(),
        )
        return replace(config, **overrides) if overrides else config
