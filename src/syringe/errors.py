__all__ = [
    "SyringeError",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "NotAnArrayError",
    "PathConflictError",
    "ConfigurationError",
    "BindingNotFoundError",
]


class SyringeError(Exception):
    """Base class for every error raised by a registry or its bindings."""

    pass


class DuplicateKeyError(SyringeError, KeyError):
    """Raised when adding a value at a path that already holds one."""

    def __init__(self, name: str):
        super().__init__(
            f'Key "{name}" already exists in the map; use .remove() to unregister it first!'
        )
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class KeyNotFoundError(SyringeError, KeyError):
    """Raised when setting a value at a path that does not exist."""

    def __init__(self, name: str):
        super().__init__(f'Key "{name}" does not exist in the map!')
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class NotAnArrayError(SyringeError, TypeError):
    """Raised when a list operation targets something other than a list."""

    pass


class PathConflictError(SyringeError, TypeError):
    """Raised when a write runs into a value that cannot hold the next segment."""

    pass


class ConfigurationError(SyringeError, ValueError):
    """Raised for malformed bindings, listener specs or settings."""

    pass


class BindingNotFoundError(SyringeError, LookupError):
    """Raised when a function was not produced by this registry's binder."""

    pass
