"""
Transaction Schemas

Pydantic models for generic contract invocation and the transaction log.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from crowdfunding_ledger.models import TransactionStatus


# ============================================================================
# Invoke / Query Schemas
# ============================================================================


class InvokeRequest(BaseModel):
    """Request to run a contract function by name"""

    fcn: str = Field(description="Contract function name, e.g. Contribute")
    args: list[str] = Field(default_factory=list, description="Positional arguments as strings")


class SubmitResponse(BaseModel):
    """Response for a committed transaction"""

    tx_id: str = Field(description="Ledger transaction id")
    status: TransactionStatus
    result: Any = Field(None, description="Function return value, if any")


class QueryResponse(BaseModel):
    """Response for an evaluated (read-only) function"""

    result: Any = Field(description="Function return value using ledger field names")


class ContractFunctionInfo(BaseModel):
    """Description of one callable contract function"""

    name: str
    kind: str
    params: list[str]
    description: str


class ContractFunctionListResponse(BaseModel):
    """Functions the contract exposes"""

    submit: list[ContractFunctionInfo]
    evaluate: list[ContractFunctionInfo]


# ============================================================================
# Transaction Log Schemas
# ============================================================================


class TransactionDetailResponse(BaseModel):
    """Logged transaction"""

    tx_id: str
    channel: str
    chaincode: str
    function: str
    args: list[str]
    status: TransactionStatus
    message: str | None = Field(None, description="Failure message if the transaction was rejected")
    write_count: int
    created_at: datetime


class TransactionHistoryResponse(BaseModel):
    """Most recent transactions, newest first"""

    transactions: list[TransactionDetailResponse]
    total: int


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Error response"""

    detail: str = Field(description="Error message")
