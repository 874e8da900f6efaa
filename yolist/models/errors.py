class ListEngineError(Exception):
    """Base class for list engine precondition violations."""


class EmptyDataSourceError(ListEngineError, ValueError):
    def __init__(self):
        super().__init__("yolist: data_source must not be empty")


class MissingIdentityError(ListEngineError, ValueError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(
            f"yolist: every item of an infinite list needs a 'key' (item {index} has none)"
        )


class DuplicateKeyError(ListEngineError, ValueError):
    def __init__(self, key, first_index: int, second_index: int):
        self.key = key
        self.first_index = first_index
        self.second_index = second_index
        super().__init__(
            f"yolist: key {key!r} is used by items {first_index} and {second_index}; "
            "keys of an infinite list must be unique"
        )


class MissingIdentityWarning(UserWarning):
    """Raised as a warning when keyless items receive generated keys."""
