"""
State Repository

Reads and writes world-state rows of one chaincode namespace.
"""

from collections.abc import Iterator
from datetime import datetime, timezone
from typing import Any

from sqlmodel import Session, select

from crowdfunding_ledger.models import LedgerState
from crowdfunding_ledger.repositories.base import BaseRepository


class StateRepository(BaseRepository[LedgerState]):
    """Repository for world-state operations"""

    def __init__(self, session: Session, namespace: str):
        """Initialize state repository for a namespace"""
        super().__init__(LedgerState, session)
        self.namespace = namespace

    def get_entry(self, key: bytes, fresh: bool = False, lock: bool = False) -> LedgerState | None:
        """
        Get the state row for a key

        Args:
            key: UTF-8 encoded key
            fresh: Reload from the database even if the row is already in the session
            lock: Hold a row lock (SELECT ... FOR UPDATE) until the session ends

        Returns:
            LedgerState instance or None
        """
        statement = select(LedgerState).where(LedgerState.namespace == self.namespace, LedgerState.key == key)
        if fresh:
            statement = statement.execution_options(populate_existing=True)
        if lock:
            statement = statement.with_for_update()
        return self.session.exec(statement).first()

    def scan_range(self, start_key: bytes, end_key: bytes) -> Iterator[LedgerState]:
        """
        Iterate rows with start_key <= key < end_key in key order

        Args:
            start_key: Inclusive lower bound
            end_key: Exclusive upper bound

        Yields:
            LedgerState rows
        """
        statement = (
            select(LedgerState)
            .where(
                LedgerState.namespace == self.namespace,
                LedgerState.key >= start_key,
                LedgerState.key < end_key,
            )
            .order_by(LedgerState.key)
        )
        yield from self.session.exec(statement)

    def query(self, selector: dict[str, Any]) -> Iterator[LedgerState]:
        """
        Iterate rows whose JSON document matches every selector field

        Args:
            selector: Field name to expected value (str, bool or number)

        Yields:
            LedgerState rows ordered by key
        """
        statement = select(LedgerState).where(
            LedgerState.namespace == self.namespace,
            LedgerState.document.is_not(None),
        )
        for field, expected in selector.items():
            element = LedgerState.document[field]
            if isinstance(expected, bool):
                statement = statement.where(element.as_boolean() == expected)
            elif isinstance(expected, (int, float)):
                statement = statement.where(element.as_float() == float(expected))
            else:
                statement = statement.where(element.as_string() == str(expected))
        statement = statement.order_by(LedgerState.key)
        yield from self.session.exec(statement)

    def insert(self, key: bytes, value: bytes, document: dict | None, tx_id: str) -> LedgerState:
        """Stage a new key; the flush fails with IntegrityError if it already exists"""
        entry = LedgerState(
            namespace=self.namespace,
            key=key,
            value=value,
            document=document,
            updated_tx_id=tx_id,
        )
        self.session.add(entry)
        return entry

    def upsert(self, key: bytes, value: bytes, document: dict | None, tx_id: str) -> LedgerState:
        """
        Insert or overwrite a key

        The version is bumped by the mapper on flush, which fails with
        StaleDataError if the row changed since this session loaded it.

        Args:
            key: UTF-8 encoded key
            value: Stored bytes
            document: Parsed JSON value or None
            tx_id: Transaction applying the write

        Returns:
            The staged row
        """
        entry = self.get_entry(key)
        if entry is None:
            return self.insert(key, value, document, tx_id)
        entry.value = value
        entry.document = document
        entry.updated_tx_id = tx_id
        entry.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
        self.session.add(entry)
        return entry
