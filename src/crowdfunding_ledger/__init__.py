"""SQL-backed ledger host for the crowdfunding contract"""

from crowdfunding_ledger.connection import LedgerManager, LedgerSettings, get_ledger_manager
from crowdfunding_ledger.gateway import Gateway, TransactionResult
from crowdfunding_ledger.stub import SqlChaincodeStub

__all__ = [
    "Gateway",
    "LedgerManager",
    "LedgerSettings",
    "SqlChaincodeStub",
    "TransactionResult",
    "get_ledger_manager",
]
