"""Timestamped flow logging for list engine diagnostics."""

import time

from yolist.utils.settings import DEFAULT_SETTINGS, settings


class FlowLogger:
    """Prints `[ts][TRACE][COMPONENT][LEVEL] message` lines, optionally throttled.

    Output is gated by the `list_trace_logs` setting unless `enabled` is
    given explicitly.
    """

    def __init__(self, enabled: bool | None = None):
        self._enabled = enabled
        self._last: dict[str, float] = {}

    @property
    def enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        try:
            return bool(settings.value(
                'list_trace_logs',
                DEFAULT_SETTINGS['list_trace_logs'], type=bool))
        except Exception:
            return False

    def log(self, component: str, message: str, *, level: str = "DEBUG",
            throttle_key: str | None = None, every_s: float | None = None) -> bool:
        """Print one flow line. Returns False when gated or throttled."""
        if not self.enabled:
            return False

        now = time.time()
        if throttle_key and every_s is not None:
            last = self._last.get(throttle_key, 0.0)
            if (now - last) < every_s:
                return False
            self._last[throttle_key] = now
        ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
        print(f"[{ts}][TRACE][{component}][{level}] {message}")
        return True
