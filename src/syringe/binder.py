"""Creation of bound functions.

Binding associates a callable with an ordered list of dependency tokens and a
receiver. The result is a :class:`BoundFunction`: calling it resolves the
tokens against the registry (at call time, not bind time) and invokes the
original callable with the resolved values followed by the caller's
arguments.

Each call shape has its own entry point:

    >>> f = bind_anonymous(registry, ["data"], lambda data: "process is " + data)
    >>> bind_named(registry, "handlers.process", ["data"], process, ctx=handlers)
    >>> bind_from_config(registry, {"name": "f", "bindings": ["data"], "fn": process})
"""

import functools
import inspect
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Union

from syringe.domain import BindingConfig, BindingRecord, Kind
from syringe.errors import ConfigurationError
from syringe.paths import assign, split_path, write_path
from syringe.resolver import run

if TYPE_CHECKING:
    from syringe.registry import Registry

__all__ = ["BoundFunction", "bind_anonymous", "bind_named", "bind_from_config"]

logger = logging.getLogger(__name__)


class BoundFunction:
    """A callable whose leading arguments are injected from a registry."""

    def __init__(self, registry: "Registry", target: Callable):
        self._registry = registry
        self._record: Optional[BindingRecord] = None
        functools.update_wrapper(self, target, updated=())

    @property
    def record(self) -> BindingRecord:
        return self._record

    def __call__(self, *args, **kwargs) -> Any:
        return run(self._record, self._registry, args, kwargs)

    def call_with_context(self, context: Any, *args, **kwargs) -> Any:
        """Call with ``context`` as the receiver instead of the bound one."""
        return run(self._record, self._registry, args, kwargs, context=context)

    def __repr__(self) -> str:
        return (
            f"<BoundFunction {getattr(self, '__qualname__', '?')} "
            f"{list(self._record.dependency_paths)}>"
        )


def _make_binding(
    registry: "Registry",
    dependency_paths: Sequence[str],
    fn: Callable,
    ctx: Any,
    kind: Optional[Kind],
) -> BoundFunction:
    if not callable(fn):
        raise ConfigurationError(f"{fn!r} is not callable")
    if isinstance(dependency_paths, str) or not all(
        isinstance(token, str) for token in dependency_paths
    ):
        raise ConfigurationError(
            f"Dependency paths must be a sequence of strings, got {dependency_paths!r}"
        )

    kind = kind or Kind.infer(fn, ctx)
    if kind is Kind.FACTORY and not inspect.isclass(fn):
        raise ConfigurationError(f"{fn!r} is bound as a factory but is not a class")

    bound = BoundFunction(registry, fn)
    record = BindingRecord(
        fn,
        tuple(dependency_paths),
        registry.settings.root if ctx is None else ctx,
        kind,
        bound,
    )
    bound._record = record
    registry.bindings.append(record)
    logger.debug("Bound %r to %s as %s", fn, list(record.dependency_paths), kind.value)
    return bound


def _install(registry: "Registry", name: str, bound: BoundFunction, target: Any) -> None:
    separator = registry.separator()
    segments = split_path(name, separator)
    if not segments:
        raise ConfigurationError(f"Cannot install a binding under the empty name {name!r}")
    parent = write_path(separator.join(segments[:-1]), target, separator)
    assign(parent, segments[-1], bound)


def bind_anonymous(
    registry: "Registry",
    dependency_paths: Sequence[str],
    fn: Callable,
    ctx: Any = None,
    kind: Optional[Kind] = None,
) -> BoundFunction:
    """Bind ``fn`` and return the bound function.

    Args:
        registry: The registry dependencies are resolved from.
        dependency_paths: Tokens to resolve on every call.
        fn: The callable to bind.
        ctx: Receiver for the bound function; the root namespace if None.
        kind: Invocation kind; inferred from ``fn`` and ``ctx`` if None.

    Returns:
        The new :class:`BoundFunction`.

    Raises:
        ConfigurationError: If ``fn`` or ``dependency_paths`` are malformed.
    """
    return _make_binding(registry, dependency_paths, fn, ctx, kind)


def bind_named(
    registry: "Registry",
    name: str,
    dependency_paths: Sequence[str],
    fn: Callable,
    ctx: Any = None,
    kind: Optional[Kind] = None,
) -> "Registry":
    """Bind ``fn`` and install it at ``name`` on ``ctx`` (or the root namespace).

    Intermediate objects along ``name`` are created as needed.

    Returns:
        The registry, for chaining.
    """
    bound = _make_binding(registry, dependency_paths, fn, ctx, kind)
    _install(registry, name, bound, registry.settings.root if ctx is None else ctx)
    return registry


def bind_from_config(
    registry: "Registry", config: Union[BindingConfig, Mapping[str, Any]]
) -> Union[BoundFunction, "Registry"]:
    """Bind from a :class:`BindingConfig` or an equivalent mapping.

    Named configs are installed on ``config.target`` (or the root namespace)
    and return the registry; unnamed configs return the bound function.

    Raises:
        ConfigurationError: If the config is missing required options or has unknown ones.
    """
    if isinstance(config, Mapping):
        config = BindingConfig.from_mapping(config)
    elif not isinstance(config, BindingConfig):
        raise ConfigurationError(f"Cannot bind from {config!r}")

    bound = _make_binding(registry, config.bindings, config.fn, config.ctx, config.kind)
    if config.name is None:
        return bound
    target = registry.settings.root if config.target is None else config.target
    _install(registry, config.name, bound, target)
    return registry
