"""
Transaction Endpoints

FastAPI endpoints for invoking contract functions by name and for the
transaction log.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies.gateway import get_gateway
from api.schemas.transaction import (
    ContractFunctionInfo,
    ContractFunctionListResponse,
    ErrorResponse,
    InvokeRequest,
    QueryResponse,
    SubmitResponse,
    TransactionDetailResponse,
    TransactionHistoryResponse,
)
from api.utils.errors import to_http_exception
from crowdfunding_contracts.errors import ContractError
from crowdfunding_contracts.registry import ContractFunction, list_all_functions
from crowdfunding_ledger.gateway import Gateway, to_payload
from crowdfunding_ledger.models import LedgerTransaction, TransactionStatus


router = APIRouter()


def _function_info(info: ContractFunction) -> ContractFunctionInfo:
    return ContractFunctionInfo(
        name=info["name"],
        kind=info["kind"].value,
        params=[name for name, _ in info["params"]],
        description=info["description"],
    )


def _transaction_detail(transaction: LedgerTransaction) -> TransactionDetailResponse:
    return TransactionDetailResponse(**transaction.model_dump())


# ============================================================================
# Generic Invocation Endpoints
# ============================================================================


@router.post(
    "/invoke",
    response_model=SubmitResponse,
    summary="Submit transaction",
    description="Run a contract function by name and commit its writes.",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown function or invalid arguments"},
        404: {"model": ErrorResponse, "description": "Record not found"},
        409: {"model": ErrorResponse, "description": "Invalid project state"},
        500: {"model": ErrorResponse, "description": "Ledger failure or read conflict"},
    },
)
def invoke(request: InvokeRequest, gateway: Gateway = Depends(get_gateway)) -> SubmitResponse:
    """
    Submit a transaction (read/write).

    **Example:**
    ```json
    {"fcn": "Contribute", "args": ["p1", "alice", "60"]}
    ```
    """
    try:
        result = gateway.submit_transaction(request.fcn, *request.args)
    except ContractError as e:
        raise to_http_exception(e) from e
    return SubmitResponse(tx_id=result.tx_id, status=result.status, result=to_payload(result.result))


@router.post(
    "/query",
    response_model=QueryResponse,
    summary="Evaluate transaction",
    description="Run a contract function by name without committing anything.",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown function or invalid arguments"},
        404: {"model": ErrorResponse, "description": "Record not found"},
    },
)
def query(request: InvokeRequest, gateway: Gateway = Depends(get_gateway)) -> QueryResponse:
    try:
        result = gateway.evaluate_transaction(request.fcn, *request.args)
    except ContractError as e:
        raise to_http_exception(e) from e
    return QueryResponse(result=to_payload(result))


@router.get("/functions", response_model=ContractFunctionListResponse, summary="List contract functions")
def list_functions() -> ContractFunctionListResponse:
    functions = list_all_functions()
    return ContractFunctionListResponse(
        submit=[_function_info(info) for info in functions["submit"]],
        evaluate=[_function_info(info) for info in functions["evaluate"]],
    )


# ============================================================================
# Transaction Log Endpoints
# ============================================================================


@router.get("", response_model=TransactionHistoryResponse, summary="Recent transactions")
def get_recent_transactions(
    limit: int = Query(default=50, ge=1, le=500, description="Maximum number of transactions to return"),
    status: TransactionStatus | None = Query(default=None, description="Only transactions with this status"),
    gateway: Gateway = Depends(get_gateway),
) -> TransactionHistoryResponse:
    transactions = gateway.get_recent_transactions(limit, status)
    return TransactionHistoryResponse(
        transactions=[_transaction_detail(t) for t in transactions],
        total=len(transactions),
    )


@router.get(
    "/{tx_id}",
    response_model=TransactionDetailResponse,
    summary="Get transaction",
    responses={404: {"model": ErrorResponse, "description": "Transaction not found"}},
)
def get_transaction(tx_id: str, gateway: Gateway = Depends(get_gateway)) -> TransactionDetailResponse:
    try:
        transaction = gateway.get_transaction_by_id(tx_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return _transaction_detail(transaction)
