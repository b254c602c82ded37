"""Domain models used throughout the library."""

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Optional

from syringe.errors import ConfigurationError

__all__ = ["Kind", "BindingRecord", "BindingConfig", "Listener", "ACTIONS"]


class Kind(Enum):
    """How a bound target is invoked once its dependencies are resolved.

    Attributes:
        FUNCTION: Called with the resolved and caller arguments only.
        METHOD: Called with the binding's context as the first argument.
        FACTORY: A class, instantiated with the resolved and caller arguments.
    """

    FUNCTION = "function"
    METHOD = "method"
    FACTORY = "factory"

    @staticmethod
    def infer(target: Callable, context: Any) -> "Kind":
        """Pick the kind used when a binding does not state one.

        Classes are factories, targets bound with a context are methods, and
        everything else is a plain function.
        """
        if inspect.isclass(target):
            return Kind.FACTORY
        if context is not None:
            return Kind.METHOD
        return Kind.FUNCTION


@dataclass(frozen=True)
class BindingRecord:
    """One entry in a registry's cabinet.

    Attributes:
        target: The original callable supplied by the caller.
        dependency_paths: Tokens resolved against the registry on every call.
        context: The receiver passed to METHOD targets.
        kind: How the target is invoked.
        bound: The callable handed back to the caller.
    """

    target: Callable
    dependency_paths: tuple[str, ...]
    context: Any
    kind: Kind
    bound: Callable


@dataclass(frozen=True)
class BindingConfig:
    """Keyword form of a binding request.

    Attributes:
        bindings: Dependency tokens to resolve.
        fn: The callable to bind.
        name: Optional path at which the bound function is installed.
        ctx: Optional receiver for the bound function.
        target: Object to install a named binding on; the root namespace if None.
        kind: Optional explicit invocation kind.
    """

    bindings: tuple[str, ...]
    fn: Callable
    name: Optional[str] = None
    ctx: Any = None
    target: Any = None
    kind: Optional[Kind] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BindingConfig":
        """Validate a plain mapping and turn it into a :class:`BindingConfig`.

        Raises:
            ConfigurationError: If required keys are missing or unknown keys are present.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unexpected binding options {sorted(unknown)}")
        missing = {"bindings", "fn"} - set(values)
        if missing:
            raise ConfigurationError(f"Missing binding options {sorted(missing)}")
        return cls(**values)


ACTIONS = frozenset({"add", "set", "get", "remove", "listops", "all"})
"""Action types a listener may subscribe to; ``all`` matches every action."""


@dataclass(frozen=True)
class Listener:
    """A callback subscribed to registry actions, optionally for a single path."""

    action: str
    path_filter: Optional[str]
    callback: Callable[..., Any]
