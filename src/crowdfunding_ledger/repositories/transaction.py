"""
Transaction Repository

Manages the transaction log.
"""

from sqlalchemy import desc
from sqlmodel import Session, select

from crowdfunding_ledger.models import LedgerTransaction, TransactionStatus
from crowdfunding_ledger.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[LedgerTransaction]):
    """Repository for transaction log operations"""

    def __init__(self, session: Session):
        """Initialize transaction repository"""
        super().__init__(LedgerTransaction, session)

    def get_by_tx_id(self, tx_id: str) -> LedgerTransaction | None:
        """
        Get transaction by id

        Args:
            tx_id: Transaction id

        Returns:
            LedgerTransaction instance or None
        """
        return self.get(tx_id)

    def get_by_status(self, status: TransactionStatus, limit: int = 50) -> list[LedgerTransaction]:
        """
        Get transactions by status

        Args:
            status: Transaction status
            limit: Maximum number of transactions

        Returns:
            List of transactions (most recent first)
        """
        statement = (
            select(LedgerTransaction)
            .where(LedgerTransaction.status == status.value)
            .order_by(desc(LedgerTransaction.created_at))
            .limit(limit)
        )
        return list(self.session.exec(statement).all())

    def get_recent(self, limit: int = 50) -> list[LedgerTransaction]:
        """
        Get recent transactions

        Args:
            limit: Maximum number of transactions

        Returns:
            List of recent transactions
        """
        statement = select(LedgerTransaction).order_by(desc(LedgerTransaction.created_at)).limit(limit)
        return list(self.session.exec(statement).all())
