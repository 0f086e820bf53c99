"""
Transaction Context

Per-invocation handle passed to every contract operation: ledger access,
transaction id and a logger bound to that transaction.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from crowdfunding_contracts.stub import ChaincodeStub


class TransactionLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the transaction id and exposes it as record.tx_id"""

    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).update(self.extra)
        return f"[{self.extra['tx_id']}] {msg}", kwargs


@dataclass
class TransactionContext:
    stub: ChaincodeStub
    tx_id: str
    logger: logging.LoggerAdapter
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def new_context(stub: ChaincodeStub, tx_id: str, logger: logging.Logger | None = None) -> TransactionContext:
    """
    Build a context for one invocation

    Args:
        stub: Ledger access for this transaction
        tx_id: Transaction identifier
        logger: Base logger (defaults to the contract logger)

    Returns:
        TransactionContext whose logger prefixes messages with the tx id
    """
    base = logger or logging.getLogger("crowdfunding_contract")
    adapter = TransactionLoggerAdapter(base, {"tx_id": tx_id})
    return TransactionContext(stub=stub, tx_id=tx_id, logger=adapter)
