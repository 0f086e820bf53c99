"""
Ledger Gateway

Entry point for clients: runs one contract function per transaction.

- submit_transaction: executes against committed state, validates the read
  set, applies the write set atomically and logs the outcome
- evaluate_transaction: executes read-only, nothing is committed or logged
- get_transaction_by_id: looks up a logged transaction
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from crowdfunding_contracts.context import new_context
from crowdfunding_contracts.contract import CrowdfundingContract
from crowdfunding_contracts.errors import (
    ContractError,
    InvalidArgumentError,
    MVCCReadConflictError,
    StorageError,
    TransactionNotFoundError,
)
from crowdfunding_contracts.registry import FunctionKind, convert_args, get_function_info
from crowdfunding_ledger.connection import LedgerManager, get_ledger_manager
from crowdfunding_ledger.models import LedgerTransaction, TransactionStatus
from crowdfunding_ledger.repositories.transaction import TransactionRepository
from crowdfunding_ledger.stub import SqlChaincodeStub


logger = logging.getLogger(__name__)


@dataclass
class TransactionResult:
    """Outcome of a committed transaction"""

    tx_id: str
    status: TransactionStatus
    result: Any = None


def new_tx_id() -> str:
    return secrets.token_hex(32)


def to_payload(result: Any) -> Any:
    """Convert a contract return value to JSON-compatible data with ledger field names"""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True)
    if isinstance(result, list):
        return [to_payload(item) for item in result]
    return result


class Gateway:
    """Submits and evaluates crowdfunding contract transactions"""

    def __init__(self, manager: LedgerManager | None = None, contract: CrowdfundingContract | None = None):
        """
        Initialize gateway

        Args:
            manager: Ledger database manager (global manager if not provided)
            contract: Contract instance (new CrowdfundingContract if not provided)
        """
        self.manager = manager or get_ledger_manager()
        self.contract = contract or CrowdfundingContract()
        self.channel = self.manager.settings.channel_name
        self.chaincode = self.manager.settings.chaincode_name

    def submit_transaction(self, function: str, *args: Any) -> TransactionResult:
        """
        Execute a function and commit its writes

        Args:
            function: Contract function name, e.g. "Contribute"
            *args: Function arguments (strings are converted to declared types)

        Returns:
            TransactionResult with the transaction id and function result

        Raises:
            InvalidArgumentError: Unknown function, read-only function or bad arguments
            ContractError: Any failure raised by the contract or the ledger
        """
        info = get_function_info(function)
        if info["kind"] != FunctionKind.SUBMIT:
            raise InvalidArgumentError(f"Function {function} is read-only and cannot be submitted")
        typed_args = convert_args(info, list(args))

        tx_id = new_tx_id()
        try:
            with self.manager.get_session() as session:
                stub = SqlChaincodeStub(session, self.chaincode, tx_id)
                ctx = new_context(stub, tx_id)
                try:
                    result = getattr(self.contract, info["method"])(ctx, *typed_args)
                    write_count = stub.commit()
                except ContractError as e:
                    session.rollback()
                    status = (
                        TransactionStatus.MVCC_READ_CONFLICT
                        if isinstance(e, MVCCReadConflictError)
                        else TransactionStatus.ENDORSEMENT_FAILURE
                    )
                    self._record(session, tx_id, function, typed_args, status, e.message)
                    session.commit()
                    logger.error(f"Failed to submit transaction {tx_id} ({function}): {e.message}")
                    raise

                self._record(session, tx_id, function, typed_args, TransactionStatus.VALID, None, write_count)
        except SQLAlchemyError as e:
            logger.error(f"Failed to commit transaction {tx_id} ({function}): {e}")
            raise StorageError(f"failed to commit transaction {tx_id}: {e}") from e

        logger.info(f"Transaction {tx_id} ({function}) committed with {write_count} writes")
        return TransactionResult(tx_id=tx_id, status=TransactionStatus.VALID, result=result)

    def evaluate_transaction(self, function: str, *args: Any) -> Any:
        """
        Execute a function without committing anything

        Args:
            function: Contract function name, e.g. "GetContributionsByUser"
            *args: Function arguments

        Returns:
            The function result
        """
        info = get_function_info(function)
        typed_args = convert_args(info, list(args))

        tx_id = new_tx_id()
        with self.manager.get_session() as session:
            stub = SqlChaincodeStub(session, self.chaincode, tx_id)
            ctx = new_context(stub, tx_id)
            try:
                return getattr(self.contract, info["method"])(ctx, *typed_args)
            finally:
                session.rollback()

    def get_transaction_by_id(self, tx_id: str) -> LedgerTransaction:
        """
        Get a logged transaction

        Raises:
            TransactionNotFoundError: If no transaction has that id
        """
        with self.manager.get_session() as session:
            transaction = TransactionRepository(session).get_by_tx_id(tx_id)
        if transaction is None:
            raise TransactionNotFoundError(tx_id)
        return transaction

    def get_recent_transactions(
        self, limit: int = 50, status: TransactionStatus | None = None
    ) -> list[LedgerTransaction]:
        """Most recent logged transactions, optionally only those with a given status"""
        with self.manager.get_session() as session:
            repository = TransactionRepository(session)
            if status is not None:
                return repository.get_by_status(status, limit)
            return repository.get_recent(limit)

    def _record(
        self,
        session: Session,
        tx_id: str,
        function: str,
        args: list[Any],
        status: TransactionStatus,
        message: str | None,
        write_count: int = 0,
    ) -> None:
        TransactionRepository(session).create(
            LedgerTransaction(
                tx_id=tx_id,
                channel=self.channel,
                chaincode=self.chaincode,
                function=function,
                args=[str(arg) for arg in args],
                status=status.value,
                message=message,
                write_count=write_count,
            )
        )
