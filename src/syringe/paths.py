"""Reading and writing values inside nested containers by delimited path.

Containers may be mappings (indexed by key), sequences (indexed by integer
segment) or arbitrary objects (indexed by attribute). Scalars terminate a
walk.
"""

from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from numbers import Number
from types import SimpleNamespace
from typing import Any, Optional

from syringe.errors import PathConflictError

__all__ = ["split_path", "read_path", "write_path", "assign", "has_own"]

_SCALARS = (str, bytes, bytearray, Number, bool)


def split_path(path: str, separator: str) -> list[str]:
    """Split ``path`` on ``separator``, dropping empty segments.

    Example:
        >>> split_path("a..b.c", ".")    # ["a", "b", "c"]
    """
    return [segment for segment in path.split(separator) if segment]


def _is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALARS)


def _index(sequence: Sequence, segment: str) -> Optional[int]:
    try:
        index = int(segment)
    except ValueError:
        return None
    return index if -len(sequence) <= index < len(sequence) else None


def _child(container: Any, segment: str) -> Any:
    if container is None or _is_scalar(container):
        return None
    if isinstance(container, Mapping):
        return container.get(segment)
    if isinstance(container, Sequence):
        index = _index(container, segment)
        return None if index is None else container[index]
    return getattr(container, segment, None)


def read_path(path: str, root: Any, separator: str) -> Any:
    """Resolve ``path`` inside ``root``.

    A missing segment anywhere along the path yields None, as does a value
    explicitly stored as None. A path with no segments yields ``root``.
    """
    current = root
    for segment in split_path(path, separator):
        current = _child(current, segment)
        if current is None:
            return None
    return current


def write_path(path: str, root: Any, separator: str) -> Any:
    """Walk ``path`` inside ``root``, creating missing containers on the way.

    The final container is returned so the caller can assign the leaf itself.
    New containers are dicts inside mappings and sequences, and namespaces
    inside other objects.

    Raises:
        PathConflictError: If a scalar sits on the path. Nothing has been
            written at that point, since containers are only created below
            the last existing segment.
    """
    current = root
    for segment in split_path(path, separator):
        child = _child(current, segment)
        if child is None:
            child = {} if isinstance(current, (Mapping, Sequence)) else SimpleNamespace()
            assign(current, segment, child)
        elif _is_scalar(child):
            raise PathConflictError(
                f"Cannot write below {segment!r}: it holds {type(child).__name__} {child!r}"
            )
        current = child
    return current


def assign(container: Any, key: str, value: Any) -> None:
    """Store ``value`` under ``key`` as an item, a list element or an attribute.

    Raises:
        PathConflictError: If ``key`` is not a valid index of a list, or the
            container is an immutable sequence.
    """
    if isinstance(container, MutableMapping):
        container[key] = value
    elif isinstance(container, MutableSequence):
        index = _index(container, key)
        if index is None:
            raise PathConflictError(f"{key!r} is not an index of a list of {len(container)} items")
        container[index] = value
    elif isinstance(container, Sequence):
        raise PathConflictError(f"Cannot assign {key!r} in immutable {type(container).__name__}")
    else:
        setattr(container, key, value)


def has_own(container: Any, key: str) -> bool:
    """Check whether ``container`` directly holds ``key``, whatever its value."""
    if isinstance(container, Mapping):
        return key in container
    if container is None or _is_scalar(container):
        return False
    if isinstance(container, Sequence):
        return _index(container, key) is not None
    return key in getattr(container, "__dict__", {})
