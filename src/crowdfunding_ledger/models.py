"""
Database Models for the Crowdfunding Ledger

World state (one row per key) and the transaction log.
"""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import JSON, Column, Integer, LargeBinary
from sqlmodel import Field, SQLModel


# Optimistic lock: every UPDATE is guarded by "WHERE version = <version loaded>"
_version_column = Column("version", Integer, nullable=False)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TransactionStatus(str, Enum):
    """
    Validation outcome of a submitted transaction

    - VALID: Committed, all writes applied
    - MVCC_READ_CONFLICT: A key it read changed before commit, nothing applied
    - ENDORSEMENT_FAILURE: The contract raised, nothing applied
    """

    VALID = "VALID"
    MVCC_READ_CONFLICT = "MVCC_READ_CONFLICT"
    ENDORSEMENT_FAILURE = "ENDORSEMENT_FAILURE"


class LedgerState(SQLModel, table=True):
    """
    World state entry

    Keys are stored as UTF-8 bytes so composite keys (which contain NUL)
    survive every backend and sort by code point. The version is managed by
    SQLAlchemy: a write to a row changed since it was loaded raises StaleDataError.
    """

    __tablename__ = "ledger_state"
    __mapper_args__ = {"version_id_col": _version_column}

    namespace: str = Field(primary_key=True, max_length=128)  # chaincode name
    key: bytes = Field(sa_column=Column("key", LargeBinary, primary_key=True))
    value: bytes = Field(sa_column=Column("value", LargeBinary, nullable=False))

    # Parsed JSON value for rich queries, None when the value is not a JSON object
    document: dict | None = Field(default=None, sa_column=Column("document", JSON(none_as_null=True), nullable=True))

    version: int = Field(default=1, sa_column=_version_column)
    updated_tx_id: str = Field(max_length=64)
    updated_at: datetime = Field(default_factory=_utcnow)


class LedgerTransaction(SQLModel, table=True):
    """Record of every submitted transaction and its outcome"""

    __tablename__ = "ledger_transactions"

    tx_id: str = Field(primary_key=True, max_length=64)
    channel: str = Field(max_length=128)
    chaincode: str = Field(max_length=128)
    function: str = Field(index=True, max_length=128)
    args: list = Field(default_factory=list, sa_column=Column("args", JSON, nullable=False))

    status: str = Field(index=True)  # TransactionStatus as string
    message: str | None = None
    write_count: int = 0

    created_at: datetime = Field(default_factory=_utcnow, index=True)
