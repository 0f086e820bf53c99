"""Ledger repositories for data access layer"""

from .base import BaseRepository
from .state import StateRepository
from .transaction import TransactionRepository

__all__ = [
    "BaseRepository",
    "StateRepository",
    "TransactionRepository",
]
