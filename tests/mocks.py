"""
Mock Ledger for Contract Testing

In-memory implementation of the ledger access port, plus a tiny host that
runs one contract invocation per transaction and commits on success.
"""

import itertools
from collections.abc import Iterator
from typing import Any

from crowdfunding_contracts.codec import decode_document
from crowdfunding_contracts.context import TransactionContext, new_context
from crowdfunding_contracts.errors import SerializationError, StorageError
from crowdfunding_contracts.stub import KV, ChaincodeStub


def selector_matches(value: bytes, selector: dict[str, Any]) -> bool:
    """Field-equality match of a stored JSON value against a selector"""
    try:
        document = decode_document(value)
    except SerializationError:
        return False
    return all(field in document and document[field] == expected for field, expected in selector.items())


class InMemoryStub(ChaincodeStub):
    """Stub over a dict of committed state with a buffered write set"""

    def __init__(self, state: dict[str, bytes], fail_on_scan: bool = False):
        super().__init__()
        self._committed = state
        self.write_set: dict[str, bytes] = {}
        self.fail_on_scan = fail_on_scan

    def get_state(self, key: str) -> bytes | None:
        return self._committed.get(key)

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise StorageError("key must not be empty")
        self.write_set[key] = value

    def _scan_range(self, start_key: str, end_key: str) -> Iterator[KV]:
        for key in sorted(self._committed):
            if start_key <= key < end_key:
                if self.fail_on_scan:
                    raise StorageError("scan failed")
                yield KV(key, self._committed[key])

    def _scan_query(self, selector: dict[str, Any]) -> Iterator[KV]:
        for key in sorted(self._committed):
            if selector_matches(self._committed[key], selector):
                yield KV(key, self._committed[key])

    def commit(self) -> None:
        self._committed.update(self.write_set)


class MockLedger:
    """Committed world state shared by successive mock transactions"""

    def __init__(self):
        self.state: dict[str, bytes] = {}
        self.stubs: list[InMemoryStub] = []
        self._tx_counter = itertools.count(1)

    def new_context(self, **stub_options: Any) -> TransactionContext:
        stub = InMemoryStub(self.state, **stub_options)
        self.stubs.append(stub)
        return new_context(stub, f"tx{next(self._tx_counter):04d}")

    def invoke(self, method, *args: Any, **stub_options: Any) -> Any:
        """
        Run a contract method as one transaction

        Writes are committed only when the method returns normally.
        """
        ctx = self.new_context(**stub_options)
        result = method(ctx, *args)
        ctx.stub.commit()
        return result

    @property
    def open_iterators(self) -> int:
        return sum(stub.open_iterator_count for stub in self.stubs)
