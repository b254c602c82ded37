"""Call-time resolution of dependency tokens.

A binding declares an ordered list of tokens. Each time the bound function is
called, every token is resolved against the owning registry's *current*
state and the resulting values are passed ahead of the caller's arguments:

    ``""``              -> None, a placeholder slot
    ``"*"``             -> the registry's live entries tree
    ``"this"``          -> the registry itself
    ``"global:<path>"`` -> ``<path>`` read from the settings' root namespace
    anything else       -> ``<path>`` read from the registry's entries
"""

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from syringe.domain import BindingRecord, Kind
from syringe.paths import read_path

if TYPE_CHECKING:
    from syringe.registry import Registry

__all__ = ["WILDCARD", "SELF", "GLOBAL_PREFIX", "resolve_token", "resolve_dependencies", "run"]

logger = logging.getLogger(__name__)

WILDCARD = "*"
SELF = "this"
GLOBAL_PREFIX = "global:"


def resolve_token(token: str, registry: "Registry") -> Any:
    """Resolve a single dependency token against ``registry``."""
    if token == "":
        return None
    if token == WILDCARD:
        return registry.get()
    if token == SELF:
        return registry
    separator = registry.separator()
    if token.startswith(GLOBAL_PREFIX):
        return read_path(token[len(GLOBAL_PREFIX):], registry.settings.root, separator)
    return read_path(token, registry.get(), separator)


def resolve_dependencies(tokens: Iterable[str], registry: "Registry") -> list[Any]:
    return [resolve_token(token, registry) for token in tokens]


def run(
    record: BindingRecord,
    registry: "Registry",
    args: tuple,
    kwargs: dict[str, Any],
    context: Optional[Any] = None,
) -> Any:
    """Resolve ``record``'s dependencies and invoke its target.

    Args:
        record: The binding being called.
        registry: The registry owning the binding.
        args: Positional arguments from the caller, appended after the
            resolved dependencies.
        kwargs: Keyword arguments from the caller, passed through unchanged.
        context: Overrides the binding's receiver for this call only. A
            FUNCTION binding called with an override is invoked as a METHOD.

    Returns:
        Whatever the target returns; for FACTORY bindings, the constructed object.
    """
    arguments = resolve_dependencies(record.dependency_paths, registry)
    arguments.extend(args)

    kind = record.kind
    receiver = record.context
    if context is not None:
        receiver = context
        if kind is Kind.FUNCTION:
            kind = Kind.METHOD

    logger.debug(
        "Running %s binding of %r with %d resolved dependencies",
        kind.value,
        record.target,
        len(record.dependency_paths),
    )
    if kind is Kind.METHOD:
        return record.target(receiver, *arguments, **kwargs)
    return record.target(*arguments, **kwargs)
