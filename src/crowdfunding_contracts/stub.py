"""
Ledger Access Port

The capability a contract operation receives to read and write world state.
The SQL adapter implements it in production and tests use an in-memory fake.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Callable

from crowdfunding_contracts.keys import (
    MAX_UNICODE_RUNE_VALUE,
    create_composite_key,
    split_composite_key,
)


@dataclass(frozen=True)
class KV:
    """One result of a range scan or rich query"""

    key: str
    value: bytes


class StateQueryIterator:
    """
    Closeable iterator over scan/query results

    Usage:
        with stub.get_query_result({"docType": "contribution"}) as results:
            for kv in results:
                ...
    """

    def __init__(self, results: Iterable[KV], on_close: Callable[["StateQueryIterator"], None] | None = None):
        self._results: Iterator[KV] = iter(results)
        self._on_close = on_close
        self._peeked: KV | None = None
        self.closed = False

    def has_next(self) -> bool:
        if self.closed:
            return False
        if self._peeked is None:
            self._peeked = next(self._results, None)
        return self._peeked is not None

    def next(self) -> KV:
        if not self.has_next():
            raise StopIteration
        kv, self._peeked = self._peeked, None
        return kv

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._peeked = None
        if self._on_close is not None:
            self._on_close(self)

    def __iter__(self) -> "StateQueryIterator":
        return self

    def __next__(self) -> KV:
        return self.next()

    def __enter__(self) -> "StateQueryIterator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ChaincodeStub(ABC):
    """
    Ledger access for a single transaction

    Reads return committed state. Writes are buffered in a write set that
    becomes visible only when the host commits the transaction.
    """

    def __init__(self):
        self._open_iterators: set[int] = set()

    # ========================================================================
    # Key/value access
    # ========================================================================

    @abstractmethod
    def get_state(self, key: str) -> bytes | None:
        """Return the committed value for key, or None when absent"""

    @abstractmethod
    def put_state(self, key: str, value: bytes) -> None:
        """Stage a write of value under key"""

    # ========================================================================
    # Scans and queries
    # ========================================================================

    @abstractmethod
    def _scan_range(self, start_key: str, end_key: str) -> Iterable[KV]:
        """Yield committed entries with start_key <= key < end_key in key order"""

    @abstractmethod
    def _scan_query(self, selector: dict[str, Any]) -> Iterable[KV]:
        """Yield committed entries whose JSON fields equal every selector value"""

    def get_state_by_range(self, start_key: str, end_key: str) -> StateQueryIterator:
        return self._open(self._scan_range(start_key, end_key))

    def get_state_by_partial_composite_key(self, object_type: str, attributes: list[str]) -> StateQueryIterator:
        """Iterate all entries whose composite key starts with the given components"""
        prefix = create_composite_key(object_type, attributes)
        return self.get_state_by_range(prefix, prefix + MAX_UNICODE_RUNE_VALUE)

    def get_query_result(self, selector: dict[str, Any]) -> StateQueryIterator:
        """Iterate entries matching a field-equality selector, in engine order"""
        return self._open(self._scan_query(selector))

    # ========================================================================
    # Helpers
    # ========================================================================

    def create_composite_key(self, object_type: str, attributes: list[str]) -> str:
        return create_composite_key(object_type, attributes)

    def split_composite_key(self, composite_key: str) -> tuple[str, list[str]]:
        return split_composite_key(composite_key)

    @property
    def open_iterator_count(self) -> int:
        """Iterators handed out and not yet closed"""
        return len(self._open_iterators)

    def _open(self, results: Iterable[KV]) -> StateQueryIterator:
        iterator = StateQueryIterator(results, on_close=self._release)
        self._open_iterators.add(id(iterator))
        return iterator

    def _release(self, iterator: StateQueryIterator) -> None:
        self._open_iterators.discard(id(iterator))
