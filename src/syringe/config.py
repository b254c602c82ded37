"""Settings shared by a registry and everything it binds.

A registry needs three pieces of ambient configuration: the delimiter used to
split paths, the root object used as the default receiver for bound methods
(and as the namespace behind ``global:`` dependency tokens), and an optional
cap on how many binding records its cabinet retains.
"""

from dataclasses import dataclass, field, fields
from types import SimpleNamespace
from typing import Any, Mapping, Optional

from syringe.errors import ConfigurationError

__all__ = ["ROOT", "DEFAULT_SEPARATOR", "RegistrySettings", "is_valid_separator"]


ROOT = SimpleNamespace()
"""Application-wide root namespace.

Named bindings without an explicit target are installed here, and
``global:<path>`` tokens are resolved against it.
"""

DEFAULT_SEPARATOR = "."


def is_valid_separator(candidate: Any) -> bool:
    """Check that ``candidate`` is one non-alphanumeric, non-whitespace character.

    Example:
        >>> is_valid_separator("#")    # True
        >>> is_valid_separator("A")    # False
        >>> is_valid_separator("##")   # False
    """
    return (
        isinstance(candidate, str)
        and len(candidate) == 1
        and not candidate.isalnum()
        and not candidate.isspace()
    )


@dataclass(frozen=True)
class RegistrySettings:
    """Configuration for a :class:`~syringe.registry.Registry`.

    Attributes:
        separator: Initial path delimiter for the registry.
        root: Default receiver for bound methods and namespace for ``global:``
            dependency tokens.
        max_bindings: If set, the cabinet keeps at most this many binding
            records, discarding the oldest first. None keeps every record.
    """

    separator: str = DEFAULT_SEPARATOR
    root: Any = field(default_factory=lambda: ROOT, compare=False)
    max_bindings: Optional[int] = None

    def __post_init__(self):
        if not is_valid_separator(self.separator):
            raise ConfigurationError(
                f"Invalid separator {self.separator!r}: expected one "
                "non-alphanumeric, non-whitespace character"
            )
        if self.max_bindings is not None and self.max_bindings < 1:
            raise ConfigurationError(
                f"max_bindings must be a positive integer, got {self.max_bindings}"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RegistrySettings":
        """Build settings from a plain mapping, e.g. a parsed JSON or TOML section.

        Raises:
            ConfigurationError: If the mapping contains unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown registry settings: {sorted(unknown)}")
        return cls(**values)
