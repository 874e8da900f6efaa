from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    'list_window_size': 12,  # How many items an infinite list keeps live at once
    'list_lookahead_ratio': 0.2,  # Fraction of the viewport height prepared ahead of the scroll position
    'list_trace_logs': False,  # Print timestamped engine flow logs
}

MIN_WINDOW_SIZE = 1
MAX_WINDOW_SIZE = 200


class Settings(QSettings):
    """Persisted list preferences; `change` fires with (key, value) after each write."""

    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('yolist', 'yolist')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# One process-wide instance so every listener hears the same change signal
settings = Settings()


def get_window_size() -> int:
    try:
        window_size = int(settings.value(
            'list_window_size',
            defaultValue=DEFAULT_SETTINGS['list_window_size'], type=int))
    except Exception:
        window_size = DEFAULT_SETTINGS['list_window_size']
    return max(MIN_WINDOW_SIZE, min(window_size, MAX_WINDOW_SIZE))


def get_lookahead_ratio() -> float:
    try:
        ratio = float(settings.value(
            'list_lookahead_ratio',
            defaultValue=DEFAULT_SETTINGS['list_lookahead_ratio'], type=float))
    except Exception:
        ratio = DEFAULT_SETTINGS['list_lookahead_ratio']
    return max(0.0, min(ratio, 1.0))
