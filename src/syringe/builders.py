"""High level entry points for constructing registries."""

from typing import Any, Mapping, Optional

from syringe.config import RegistrySettings
from syringe.registry import Registry

__all__ = ["create"]


def create(
    props: Optional[Mapping[str, Any]] = None,
    settings: Optional[RegistrySettings] = None,
) -> Registry:
    """Create a new :class:`Registry`.

    Args:
        props: Initial entries. A mutable mapping is adopted as the live
            entries tree; any other mapping is copied. Anything that is not a
            mapping is ignored and the registry starts empty.
        settings: Optional :class:`RegistrySettings`; defaults are used if None.

    Returns:
        The new registry.

    Example:
        >>> registry = create({"data": {"first": {"second": "done"}}})
        >>> registry.get("data.first.second")    # "done"
    """
    return Registry(props, settings)
