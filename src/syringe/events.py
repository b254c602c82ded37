"""Notification of registry actions.

Listeners subscribe with a spec of the form ``action`` or ``action:path``.
A path filter matches a fired path when it equals the full path, when it
equals the path's last segment, or, if the filter's last segment is ``*``,
when every other segment lines up:

    >>> bus.listen("set:first.second.third", callback)   # exact
    >>> bus.listen("set:third", callback)                # last segment
    >>> bus.listen("set:first.second.*", callback)       # any child of first.second
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Optional, Sequence

from syringe.domain import ACTIONS, Listener
from syringe.errors import ConfigurationError
from syringe.paths import split_path

__all__ = ["EventBus", "path_matches"]

logger = logging.getLogger(__name__)

_CATCH_ALL = "all"
_WILDCARD_SEGMENT = "*"


def path_matches(path_filter: Optional[str], path: str, separator: str) -> bool:
    if path_filter is None:
        return True
    filter_segments = split_path(path_filter, separator)
    path_segments = split_path(path, separator)
    if filter_segments and filter_segments[-1] == _WILDCARD_SEGMENT:
        return filter_segments[:-1] == path_segments[:-1]
    return path_filter == path or (
        bool(path_segments) and path_filter == path_segments[-1]
    )


class EventBus:
    """Per-registry listener table."""

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def listen(self, spec: str, callback: Callable[..., Any]) -> Listener:
        """Subscribe ``callback`` to the action (and optional path) named by ``spec``.

        The callback receives ``(action, path, *action_args)``.

        Raises:
            ConfigurationError: If the action is unknown or the callback is not callable.
        """
        action, _, path_filter = spec.partition(":")
        if action not in ACTIONS:
            raise ConfigurationError(
                f"Unknown action {action!r}; expected one of {sorted(ACTIONS)}"
            )
        if not callable(callback):
            raise ConfigurationError(f"Listener {callback!r} is not callable")

        listener = Listener(action, path_filter or None, callback)
        self._listeners[action].append(listener)
        return listener

    def fire(self, action: str, path: str, args: Sequence[Any], separator: str) -> int:
        """Notify matching listeners of ``action`` on ``path``.

        Returns:
            The number of listeners called.
        """
        candidates = list(self._listeners.get(action, ()))
        if action != _CATCH_ALL:
            candidates.extend(self._listeners.get(_CATCH_ALL, ()))

        called = 0
        for listener in candidates:
            if path_matches(listener.path_filter, path, separator):
                listener.callback(action, path, *args)
                called += 1
        if called:
            logger.debug("Fired %s on %r to %d listener(s)", action, path, called)
        return called

    def listeners(self, action: Optional[str] = None) -> list[Listener]:
        if action is None:
            return [listener for group in self._listeners.values() for listener in group]
        return list(self._listeners.get(action, ()))
