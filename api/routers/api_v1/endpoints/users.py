"""
User Endpoints

FastAPI endpoints for user registration and per-user contribution lookup.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from api.dependencies.gateway import get_gateway
from api.schemas.project import ContributionListResponse, ContributionResponse
from api.schemas.transaction import ErrorResponse, SubmitResponse
from api.schemas.user import RegisterUserRequest, UserResponse
from api.utils.errors import to_http_exception
from crowdfunding_contracts.errors import ContractError
from crowdfunding_ledger.gateway import Gateway


router = APIRouter()

UserId = Annotated[str, Path(min_length=1, description="User identifier")]


@router.post(
    "",
    response_model=SubmitResponse,
    summary="Register user",
    description="Register a user with a role. Registering an existing id replaces the user.",
    responses={400: {"model": ErrorResponse, "description": "Invalid user data"}},
)
def register_user(request: RegisterUserRequest, gateway: Gateway = Depends(get_gateway)) -> SubmitResponse:
    try:
        result = gateway.submit_transaction("RegisterUser", request.user_id, request.role)
        return SubmitResponse(tx_id=result.tx_id, status=result.status)
    except ContractError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
def read_user(user_id: UserId, gateway: Gateway = Depends(get_gateway)) -> UserResponse:
    try:
        user = gateway.evaluate_transaction("ReadUser", user_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return UserResponse(**user.model_dump())


@router.get(
    "/{user_id}/contributions",
    response_model=ContributionListResponse,
    summary="List contributions made by user",
)
def get_contributions_by_user(user_id: UserId, gateway: Gateway = Depends(get_gateway)) -> ContributionListResponse:
    """
    List every contribution of a user across all projects.

    The user does not need to be registered.
    """
    try:
        contributions = gateway.evaluate_transaction("GetContributionsByUser", user_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return ContributionListResponse(
        contributions=[ContributionResponse(**c.model_dump()) for c in contributions],
        total=len(contributions),
    )
