"""Loading JSON resources over HTTP into a registry.

Requests run concurrently on a thread pool; every decoded response is stored
in the registry from the calling thread, so registry operations stay single
threaded. The completion callback is invoked once, after every resource has
either been stored or has failed.
"""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

import requests

from syringe.errors import ConfigurationError, SyringeError

if TYPE_CHECKING:
    from syringe.registry import Registry

__all__ = ["Resource", "ResourceFetcher", "store"]

logger = logging.getLogger(__name__)

ARRAY_KEY = "json"
"""Sub-key under which array responses are stored when merging into a mapping."""


@dataclass(frozen=True)
class Resource:
    """A remote JSON document and the registry path it is stored at.

    Attributes:
        path: URL to ``GET``.
        bind: Registry path receiving the decoded body.
    """

    path: str
    bind: str

    @staticmethod
    def from_value(value: Union["Resource", Mapping[str, str]]) -> "Resource":
        if isinstance(value, Resource):
            return value
        if isinstance(value, Mapping) and {"path", "bind"} <= set(value):
            return Resource(value["path"], value["bind"])
        raise ConfigurationError(f"Expected a resource with 'path' and 'bind', got {value!r}")


class ResourceFetcher:
    """Fetch JSON resources with :mod:`requests` and store them in a registry.

    Args:
        session: Session used for every request; a new one is created if None.
        timeout: Per-request timeout in seconds.
        max_workers: Size of the request thread pool.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        max_workers: int = 4,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout
        self._max_workers = max_workers

    def fetch(
        self,
        registry: "Registry",
        resources: Iterable[Union[Resource, Mapping[str, str]]],
        callback: Optional[Callable[["Registry"], Any]] = None,
    ) -> list[Resource]:
        """Fetch every resource and store the results in ``registry``.

        Args:
            registry: Destination registry.
            resources: :class:`Resource` objects or mappings with ``path`` and ``bind``.
            callback: Called with the registry once all resources are accounted
                for, even if a listener error propagates out of the fetch.

        Returns:
            The resources that could not be loaded or stored. A resource that
            failed to load leaves its bind path untouched.
        """
        resources = [Resource.from_value(resource) for resource in resources]
        failed: list[Resource] = []

        try:
            if resources:
                self._fetch_all(registry, resources, failed)
        finally:
            if callback is not None:
                callback(registry)
        return failed

    def _fetch_all(
        self, registry: "Registry", resources: list[Resource], failed: list[Resource]
    ) -> None:
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {pool.submit(self._load, resource): resource for resource in resources}
            for future in as_completed(futures):
                resource = futures[future]
                try:
                    data = future.result()
                except (requests.RequestException, ValueError) as e:
                    logger.warning("Failed to load %s into %r: %s", resource.path, resource.bind, e)
                    failed.append(resource)
                    continue
                try:
                    store(registry, resource.bind, data)
                except SyringeError as e:
                    logger.warning("Failed to store %s at %r: %s", resource.path, resource.bind, e)
                    failed.append(resource)

    def _load(self, resource: Resource) -> Any:
        response = self._session.get(resource.path, timeout=self._timeout)
        response.raise_for_status()
        return response.json()


def store(registry: "Registry", bind: str, data: Any) -> None:
    """Store decoded ``data`` at ``bind``, merging into an existing mapping.

    When ``bind`` already holds a mapping, object responses are merged key by
    key and any other response is stored under the ``json`` sub-key. An
    existing non-mapping value is replaced, and an absent path is added.
    """
    if not registry.contains(bind):
        registry.add(bind, data)
        return
    existing = registry.get(bind)
    if not isinstance(existing, Mapping):
        registry.set(bind, data)
        return

    separator = registry.separator()
    items = data.items() if isinstance(data, Mapping) else [(ARRAY_KEY, data)]
    for key, value in items:
        path = f"{bind}{separator}{key}"
        if registry.contains(path):
            registry.set(path, value)
        else:
            registry.add(path, value)
