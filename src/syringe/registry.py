"""The path-addressed registry and its public operations."""

import logging
import uuid
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from syringe.binder import BoundFunction, bind_anonymous, bind_from_config, bind_named
from syringe.cabinet import BindingTable
from syringe.config import RegistrySettings, is_valid_separator
from syringe.domain import BindingConfig, Kind
from syringe.errors import (
    BindingNotFoundError,
    ConfigurationError,
    DuplicateKeyError,
    KeyNotFoundError,
    NotAnArrayError,
)
from syringe.events import EventBus
from syringe.fetcher import Resource, ResourceFetcher
from syringe.paths import assign, has_own, read_path, split_path, write_path

__all__ = ["Registry"]

logger = logging.getLogger(__name__)


class Registry:
    """A tree of named values addressed by delimited paths.

    Values are added, read, replaced and removed by path; callables can be
    bound so that their leading arguments are injected from the registry each
    time they are called. Every mutation (and every path read through
    :meth:`get`) is reported to the listeners registered with :meth:`listen`.

    Each instance owns its entries, separator, bindings and listeners.

    Attributes:
        id: Unique identifier of this registry.
        settings: The :class:`RegistrySettings` the registry was created with.
        bindings: The :class:`BindingTable` of every binding created so far.

    Example:
        >>> registry = Registry({"first": {"second": "done"}})
        >>> registry.add("func", lambda data, msg: msg + " - " + data, ["first.second"])
        >>> registry.exec("func", ["hello world"])     # "hello world - done"
    """

    def __init__(
        self,
        props: Optional[Mapping[str, Any]] = None,
        settings: Optional[RegistrySettings] = None,
    ):
        self.id = uuid.uuid4()
        self.settings = settings or RegistrySettings()
        if isinstance(props, MutableMapping):
            self._entries = props
        elif isinstance(props, Mapping):
            self._entries = dict(props)
        else:
            self._entries = {}
        self._separator = self.settings.separator
        self.bindings = BindingTable(self.settings.max_bindings)
        self._events = EventBus()

    def __repr__(self) -> str:
        return f"<Registry {self.id} keys={list(self._entries)}>"

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    # Paths

    def separator(self, new: Optional[str] = None) -> Union[str, "Registry", bool]:
        """Get or change the path delimiter.

        Args:
            new: One non-alphanumeric, non-whitespace character.

        Returns:
            The current separator when called without arguments; otherwise the
            registry if ``new`` was accepted, or False if it was rejected.
        """
        if new is None:
            return self._separator
        if not is_valid_separator(new):
            logger.debug("Rejected separator %r for registry %s", new, self.id)
            return False
        self._separator = new
        return self

    def _read(self, name: str) -> Any:
        return read_path(name, self._entries, self._separator)

    def _split(self, name: str) -> tuple[str, str]:
        segments = split_path(name, self._separator)
        if not segments:
            raise ConfigurationError(f"Empty path {name!r}")
        return self._separator.join(segments[:-1]), segments[-1]

    def _parent_of(self, parent_path: str) -> Any:
        return self._read(parent_path) if parent_path else self._entries

    def _store(self, name: str, value: Any) -> None:
        parent_path, last = self._split(name)
        assign(write_path(parent_path, self._entries, self._separator), last, value)

    def _fire(self, action: str, name: str, args: Sequence[Any]) -> None:
        self._events.fire(action, name, args, self._separator)

    # Entries

    def add(
        self,
        name: Union[str, Mapping[str, Any], Sequence[Mapping[str, Any]]],
        value: Any = None,
        dependency_paths: Optional[Sequence[str]] = None,
    ) -> "Registry":
        """Add a new value.

        Args:
            name: A path, a mapping of paths to values, or a list of such mappings.
            value: The value to store; ignored when ``name`` is not a path.
            dependency_paths: If given and ``value`` is callable, the value is
                bound to these dependencies before being stored.

        Returns:
            The registry, for chaining.

        Raises:
            DuplicateKeyError: If a value (anything but None) already exists at ``name``.
            PathConflictError: If a scalar blocks the path or ``name`` indexes outside a list.
        """
        if isinstance(name, Mapping):
            for key, item in name.items():
                self.add(key, item)
            return self
        if isinstance(name, (list, tuple)):
            for item in name:
                self.add(item)
            return self

        if self._read(name) is not None:
            raise DuplicateKeyError(name)
        if callable(value) and dependency_paths is not None:
            value = bind_anonymous(self, dependency_paths, value)

        self._store(name, value)
        logger.debug("Added %r to registry %s", name, self.id)
        self._fire("add", name, (value,))
        return self

    register = add

    def remove(self, name: Union[str, Iterable[str]]) -> "Registry":
        """Remove the value at ``name`` (or at each path of a list of paths).

        The parent mapping is replaced by a copy without the removed key.
        Removing an absent path changes nothing but is still reported to
        listeners.

        Returns:
            The registry, for chaining.
        """
        if isinstance(name, (list, tuple)):
            for item in name:
                self.remove(item)
            return self

        name = name.strip()
        segments = split_path(name, self._separator)
        if segments:
            parent_path = self._separator.join(segments[:-1])
            last = segments[-1]
            parent = self._parent_of(parent_path)
            if isinstance(parent, Mapping) and last in parent:
                remaining = {key: item for key, item in parent.items() if key != last}
                if parent_path:
                    self._store(parent_path, remaining)
                else:
                    self._entries = remaining
                logger.debug("Removed %r from registry %s", name, self.id)

        self._fire("remove", name, ())
        return self

    unregister = remove

    def get(self, name: Optional[str] = None) -> Any:
        """Read a value.

        Args:
            name: The path to read. If omitted, the live entries tree is returned.

        Returns:
            The value at ``name``, or False if there is none. A value that is
            itself False cannot be told apart from an absent one; use
            :meth:`contains` for that.
        """
        if name is None:
            return self._entries
        value = self._read(name)
        self._fire("get", name, ())
        return False if value is None else value

    def contains(self, name: str) -> bool:
        """Check whether a key exists at ``name``, even if its value is None or False."""
        segments = split_path(name, self._separator)
        if not segments:
            return False
        return has_own(self._parent_of(self._separator.join(segments[:-1])), segments[-1])

    def set(
        self,
        name: str,
        value: Any,
        dependency_paths: Optional[Sequence[str]] = None,
    ) -> "Registry":
        """Replace the value at an existing path.

        Args:
            name: The path to write.
            value: The new value.
            dependency_paths: If given and ``value`` is callable, the value is
                bound to these dependencies before being stored.

        Returns:
            The registry, for chaining.

        Raises:
            KeyNotFoundError: If nothing exists at ``name``. A key that was
                added with the value None counts as existing.
            PathConflictError: If ``name`` is an index outside a list.
        """
        parent_path, last = self._split(name)
        if self._read(name) is None and not has_own(self._parent_of(parent_path), last):
            raise KeyNotFoundError(name)
        if callable(value) and dependency_paths is not None:
            value = bind_anonymous(self, dependency_paths, value)

        self._store(name, value)
        logger.debug("Set %r in registry %s", name, self.id)
        self._fire("set", name, (value,))
        return self

    def listops(self, name: str, transform: Callable[[list], Any]) -> Any:
        """Apply ``transform`` to the list stored at ``name``.

        The transform receives the stored list itself and may mutate it in
        place.

        Returns:
            Whatever ``transform`` returns.

        Raises:
            NotAnArrayError: If the value at ``name`` is not a list.
        """
        target = self._read(name)
        if not isinstance(target, list):
            raise NotAnArrayError(f'Value at "{name}" is not a list: {target!r}')
        result = transform(target)
        self._fire("listops", name, (target, result))
        return result

    # Binding

    def bind(
        self,
        dependency_paths: Sequence[str],
        fn: Callable,
        ctx: Any = None,
        kind: Optional[Kind] = None,
    ) -> BoundFunction:
        """Bind ``fn`` to ``dependency_paths`` and return the bound function."""
        return bind_anonymous(self, dependency_paths, fn, ctx, kind)

    on = bind

    def bind_named(
        self,
        name: str,
        dependency_paths: Sequence[str],
        fn: Callable,
        ctx: Any = None,
        kind: Optional[Kind] = None,
    ) -> "Registry":
        """Bind ``fn`` and install it at ``name`` on ``ctx`` or the root namespace."""
        return bind_named(self, name, dependency_paths, fn, ctx, kind)

    def bind_config(
        self, config: Union[BindingConfig, Mapping[str, Any]]
    ) -> Union[BoundFunction, "Registry"]:
        """Bind from a :class:`BindingConfig` or a mapping of its fields."""
        return bind_from_config(self, config)

    def exec(self, name: str, args: Any = None, ctx: Any = None) -> Any:
        """Call the callable stored at ``name``.

        Args:
            name: Path of the callable.
            args: A list or tuple of arguments, or a single argument.
            ctx: Optional receiver. Bound functions are called with it in place
                of their own context; other callables receive it as their
                first argument.

        Returns:
            The call's result, or False if ``name`` does not hold a callable.
        """
        fn = self.get(name)
        if not callable(fn):
            return False
        if args is None:
            args = ()
        elif not isinstance(args, (list, tuple)):
            args = (args,)

        if ctx is None:
            return fn(*args)
        if isinstance(fn, BoundFunction):
            return fn.call_with_context(ctx, *args)
        return fn(ctx, *args)

    def wrap(self, bound: Callable, wrapper: Callable, ctx: Any = None) -> Callable:
        """Wrap a bound function in ``wrapper``.

        The returned function calls ``wrapper(inner, *args)``, or
        ``wrapper(ctx, inner, *args)`` when ``ctx`` is given. Calling ``inner``
        invokes the bound function with the arguments passed to ``inner``, or
        with the outer arguments if none are passed.

        Raises:
            BindingNotFoundError: If ``bound`` was not bound by this registry.
        """
        record = self.bindings.find_bound(bound)
        if record is None:
            raise BindingNotFoundError(f"{bound!r} is not bound by registry {self.id}")

        def wrapped(*args, **kwargs):
            def inner(*new_args, **new_kwargs):
                if new_args or new_kwargs:
                    return record.bound(*new_args, **new_kwargs)
                return record.bound(*args, **kwargs)

            if ctx is None:
                return wrapper(inner, *args, **kwargs)
            return wrapper(ctx, inner, *args, **kwargs)

        return wrapped

    def copy(
        self, dependency_paths: Sequence[str], bound: Callable, ctx: Any = None
    ) -> BoundFunction:
        """Bind the target of ``bound`` again, against different dependencies.

        The copy keeps the record's kind and context unless ``ctx`` is given;
        a plain function copied with a context becomes a method of it.

        Raises:
            BindingNotFoundError: If ``bound`` was not bound by this registry.
        """
        record = self.bindings.find_bound(bound)
        if record is None:
            raise BindingNotFoundError(f"{bound!r} is not bound by registry {self.id}")
        if ctx is None:
            return bind_anonymous(self, dependency_paths, record.target, record.context, record.kind)
        kind = Kind.METHOD if record.kind is Kind.FUNCTION else record.kind
        return bind_anonymous(self, dependency_paths, record.target, ctx, kind)

    # Events

    def listen(self, spec: str, callback: Callable[..., Any]) -> "Registry":
        """Subscribe to registry actions.

        Args:
            spec: ``action`` or ``action:path``, where action is one of ``add``,
                ``set``, ``get``, ``remove``, ``listops`` or ``all``.
            callback: Called with ``(action, path, *action_args)``.

        Returns:
            The registry, for chaining.
        """
        self._events.listen(spec, callback)
        return self

    # Construction and extension

    def create(self, props: Optional[Mapping[str, Any]] = None) -> "Registry":
        """Create an independent registry with the same settings."""
        return Registry(props, self.settings)

    def fetch(
        self,
        resources: Iterable[Union[Resource, Mapping[str, str]]],
        callback: Optional[Callable[["Registry"], Any]] = None,
        fetcher: Optional[ResourceFetcher] = None,
    ) -> list[Resource]:
        """Fetch JSON resources into the registry; see :class:`ResourceFetcher`."""
        return (fetcher or ResourceFetcher()).fetch(self, resources, callback)

    @classmethod
    def mixin(cls, methods: Mapping[str, Any]) -> type:
        """Add every callable in ``methods`` as a method of all registries."""
        for name, method in methods.items():
            if callable(method):
                logger.debug("Mixing %r into %s", name, cls.__name__)
                setattr(cls, name, method)
        return cls
