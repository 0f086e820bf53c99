"""
Contract error to HTTP status mapping
"""

from fastapi import HTTPException, status

from crowdfunding_contracts.errors import (
    ContractError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)


def to_http_exception(error: ContractError) -> HTTPException:
    """
    Build the HTTPException for a contract or ledger error

    Not found -> 404, invalid state -> 409, invalid argument -> 400,
    serialization and storage failures -> 500.
    """
    if isinstance(error, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, InvalidStateError):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(error, InvalidArgumentError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=status_code, detail=error.message)
