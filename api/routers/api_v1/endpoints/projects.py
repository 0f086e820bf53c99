"""
Project Endpoints

FastAPI endpoints for crowdfunding projects.
Provides project creation, contributions, reward tiers and reward distribution.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from api.dependencies.gateway import get_gateway
from api.schemas.project import (
    AddRewardRequest,
    ContributeRequest,
    ContributionListResponse,
    ContributionResponse,
    CreateProjectRequest,
    DistributeRewardsResponse,
    ProjectResponse,
    RewardAssignmentResponse,
    RewardResponse,
)
from api.schemas.transaction import ErrorResponse, SubmitResponse
from api.utils.errors import to_http_exception
from crowdfunding_contracts.errors import ContractError
from crowdfunding_ledger.gateway import Gateway


router = APIRouter()

ProjectId = Annotated[str, Path(min_length=1, description="Project identifier")]


# ============================================================================
# Project Endpoints
# ============================================================================


@router.post(
    "",
    response_model=SubmitResponse,
    summary="Create project",
    description=(
        "Create a project with a funding goal. An existing open project with the same id is replaced, "
        "keeping the amount already raised."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid project data"},
        409: {"model": ErrorResponse, "description": "Project is already closed"},
        500: {"model": ErrorResponse, "description": "Failed to write the ledger"},
    },
)
def create_project(request: CreateProjectRequest, gateway: Gateway = Depends(get_gateway)) -> SubmitResponse:
    try:
        result = gateway.submit_transaction(
            "CreateProject",
            request.project_id,
            request.title,
            request.description,
            request.short_description,
            request.goal_amount,
        )
        return SubmitResponse(tx_id=result.tx_id, status=result.status)
    except ContractError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project",
    responses={404: {"model": ErrorResponse, "description": "Project not found"}},
)
def read_project(project_id: ProjectId, gateway: Gateway = Depends(get_gateway)) -> ProjectResponse:
    try:
        project = gateway.evaluate_transaction("ReadProject", project_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return ProjectResponse(**project.model_dump())


# ============================================================================
# Contribution Endpoints
# ============================================================================


@router.post(
    "/{project_id}/contributions",
    response_model=SubmitResponse,
    summary="Contribute to project",
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
        409: {"model": ErrorResponse, "description": "Project is already closed"},
    },
)
def contribute(
    request: ContributeRequest,
    project_id: ProjectId,
    gateway: Gateway = Depends(get_gateway),
) -> SubmitResponse:
    """
    Contribute to an open project.

    Repeated contributions from the same contributor accumulate into a single
    contribution record.
    """
    try:
        result = gateway.submit_transaction("Contribute", project_id, request.contributor_id, request.amount)
        return SubmitResponse(tx_id=result.tx_id, status=result.status)
    except ContractError as e:
        raise to_http_exception(e) from e


@router.get(
    "/{project_id}/contributions",
    response_model=ContributionListResponse,
    summary="List contributions to project",
)
def get_contributions_for_campaign(
    project_id: ProjectId, gateway: Gateway = Depends(get_gateway)
) -> ContributionListResponse:
    try:
        contributions = gateway.evaluate_transaction("GetContributionsForCampaign", project_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return ContributionListResponse(
        contributions=[ContributionResponse(**c.model_dump()) for c in contributions],
        total=len(contributions),
    )


# ============================================================================
# Reward Endpoints
# ============================================================================


@router.post(
    "/{project_id}/rewards",
    response_model=SubmitResponse,
    summary="Add reward tier",
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
        409: {"model": ErrorResponse, "description": "Project is already closed"},
    },
)
def add_reward(
    request: AddRewardRequest,
    project_id: ProjectId,
    gateway: Gateway = Depends(get_gateway),
) -> SubmitResponse:
    try:
        result = gateway.submit_transaction(
            "AddReward", project_id, request.reward_level, request.reward_description, request.min_contribution
        )
        return SubmitResponse(tx_id=result.tx_id, status=result.status)
    except ContractError as e:
        raise to_http_exception(e) from e


@router.get("/{project_id}/rewards", response_model=list[RewardResponse], summary="List reward tiers")
def get_rewards_for_project(
    project_id: ProjectId, gateway: Gateway = Depends(get_gateway)
) -> list[RewardResponse]:
    try:
        rewards = gateway.evaluate_transaction("GetRewardsForProject", project_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return [RewardResponse(**reward.model_dump()) for reward in rewards]


@router.post(
    "/{project_id}/distribute",
    response_model=DistributeRewardsResponse,
    summary="Close project and distribute rewards",
    responses={
        404: {"model": ErrorResponse, "description": "Project not found"},
        409: {"model": ErrorResponse, "description": "Goal not reached or project already closed"},
    },
)
def distribute_rewards(
    project_id: ProjectId, gateway: Gateway = Depends(get_gateway)
) -> DistributeRewardsResponse:
    """
    Close a funded project.

    Fails while current_amount is below goal_amount and once the project is
    closed. Each contribution is granted the highest reward tier it meets.
    """
    try:
        result = gateway.submit_transaction("DistributeRewards", project_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return DistributeRewardsResponse(tx_id=result.tx_id, project_id=project_id, assignments_written=result.result)


@router.get(
    "/{project_id}/reward-assignments",
    response_model=list[RewardAssignmentResponse],
    summary="List granted rewards",
)
def get_reward_assignments(
    project_id: ProjectId, gateway: Gateway = Depends(get_gateway)
) -> list[RewardAssignmentResponse]:
    try:
        assignments = gateway.evaluate_transaction("GetRewardAssignments", project_id)
    except ContractError as e:
        raise to_http_exception(e) from e
    return [RewardAssignmentResponse(**assignment.model_dump()) for assignment in assignments]
