"""
SQL Chaincode Stub

Implements the ledger access port over a database session.

Reads go to committed state and record the version seen (read set).
Writes are buffered (write set) and only reach the session in commit(),
after the read set has been validated against current versions.
"""

from collections.abc import Iterator
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from crowdfunding_contracts.codec import decode_document
from crowdfunding_contracts.errors import MVCCReadConflictError, SerializationError, StorageError
from crowdfunding_contracts.stub import KV, ChaincodeStub
from crowdfunding_ledger.models import LedgerState
from crowdfunding_ledger.repositories.state import StateRepository


def _encode_key(key: str) -> bytes:
    return key.encode("utf-8")


def _to_kv(entry: LedgerState) -> KV:
    return KV(key=entry.key.decode("utf-8"), value=entry.value)


def _to_document(value: bytes) -> dict | None:
    try:
        return decode_document(value)
    except SerializationError:
        # opaque values are stored but not reachable by rich queries
        return None


class SqlChaincodeStub(ChaincodeStub):
    """Ledger access for one transaction backed by a SQL session"""

    def __init__(self, session: Session, namespace: str, tx_id: str):
        """
        Initialize stub

        Args:
            session: Open database session owned by the caller
            namespace: Chaincode namespace of the state rows
            tx_id: Transaction the writes belong to
        """
        super().__init__()
        self.tx_id = tx_id
        self._state = StateRepository(session, namespace)
        self._read_set: dict[str, int | None] = {}
        self._write_set: dict[str, bytes] = {}

    # ========================================================================
    # Key/value access
    # ========================================================================

    def get_state(self, key: str) -> bytes | None:
        try:
            entry = self._state.get_entry(_encode_key(key))
        except SQLAlchemyError as e:
            raise StorageError(f"failed to read key {key!r}: {e}") from e
        self._read_set.setdefault(key, entry.version if entry is not None else None)
        return entry.value if entry is not None else None

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise StorageError("key must not be empty")
        if not isinstance(value, bytes):
            raise StorageError(f"value for key {key!r} must be bytes")
        self._write_set[key] = value

    # ========================================================================
    # Scans and queries
    # ========================================================================

    def _scan_range(self, start_key: str, end_key: str) -> Iterator[KV]:
        try:
            for entry in self._state.scan_range(_encode_key(start_key), _encode_key(end_key)):
                yield _to_kv(entry)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to scan range: {e}") from e

    def _scan_query(self, selector: dict[str, Any]) -> Iterator[KV]:
        try:
            for entry in self._state.query(selector):
                yield _to_kv(entry)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to get query result: {e}") from e

    # ========================================================================
    # Commit
    # ========================================================================

    @property
    def write_set(self) -> dict[str, bytes]:
        return dict(self._write_set)

    def validate_read_set(self) -> None:
        """
        Check that nothing read by this transaction has changed since

        Rows that still exist are locked until the session ends, so a read-only
        key cannot change between validation and commit on backends with row locks.

        Raises:
            MVCCReadConflictError: If a key's version differs from the one read
        """
        for key, version in self._read_set.items():
            entry = self._state.get_entry(_encode_key(key), fresh=True, lock=True)
            current = entry.version if entry is not None else None
            if current != version:
                raise MVCCReadConflictError(key)

    def commit(self) -> int:
        """
        Validate the read set and stage every buffered write on the session

        Each write is flushed as a version-guarded UPDATE (or an INSERT for a
        new key), so a concurrent commit that slips in after validation is
        reported as a read conflict instead of being overwritten.
        The caller commits the session.

        Returns:
            Number of keys written

        Raises:
            MVCCReadConflictError: If a read or written key was changed concurrently
        """
        try:
            self.validate_read_set()
            for key, value in self._write_set.items():
                if key in self._read_set and self._read_set[key] is None:
                    # read as absent, so it must still be absent
                    self._state.insert(_encode_key(key), value, _to_document(value), self.tx_id)
                else:
                    self._state.upsert(_encode_key(key), value, _to_document(value), self.tx_id)
                try:
                    self._state.session.flush()
                except (StaleDataError, IntegrityError) as e:
                    raise MVCCReadConflictError(key) from e
        except SQLAlchemyError as e:
            raise StorageError(f"failed to commit transaction {self.tx_id}: {e}") from e
        return len(self._write_set)
