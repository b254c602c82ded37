"""The per-registry table of binding records.

Every binding a registry creates is recorded here, in creation order, so that
a bound function can later be looked up again to be wrapped, copied or
inspected. Lookups compare callables by identity.
"""

import logging
from collections import deque
from typing import Callable, Iterator, Optional

from syringe.domain import BindingRecord

__all__ = ["BindingTable"]

logger = logging.getLogger(__name__)


class BindingTable:
    """Ordered collection of :class:`BindingRecord` objects.

    Records accumulate for the lifetime of the table. When ``max_records`` is
    set, appending beyond the cap discards the oldest record.
    """

    def __init__(self, max_records: Optional[int] = None):
        self._records: deque[BindingRecord] = deque(maxlen=max_records)

    def append(self, record: BindingRecord) -> None:
        if self._records.maxlen is not None and len(self._records) == self._records.maxlen:
            logger.debug(
                "Binding table full (%d records); discarding oldest binding of %r",
                self._records.maxlen,
                self._records[0].target,
            )
        self._records.append(record)

    def find_bound(self, bound: Callable) -> Optional[BindingRecord]:
        """Return the record whose bound function is ``bound``, if any."""
        return next((r for r in self._records if r.bound is bound), None)

    def find_target(self, target: Callable) -> list[BindingRecord]:
        """Return every record created for the original callable ``target``."""
        return [r for r in self._records if r.target is target]

    def evict(self, bound: Callable) -> bool:
        """Forget the record for ``bound``.

        Returns:
            True if a record was removed.
        """
        record = self.find_bound(bound)
        if record is None:
            return False
        self._records = deque(
            (r for r in self._records if r is not record), maxlen=self._records.maxlen
        )
        return True

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BindingRecord]:
        return iter(list(self._records))

    def __contains__(self, bound: Callable) -> bool:
        return self.find_bound(bound) is not None
