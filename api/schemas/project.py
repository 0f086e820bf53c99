"""
Project Schemas

Pydantic models for project, contribution and reward API requests and responses.
"""

from pydantic import BaseModel, Field


# ============================================================================
# Project Schemas
# ============================================================================


class CreateProjectRequest(BaseModel):
    """Request to create (or replace) a project"""

    project_id: str = Field(min_length=1, description="Unique project identifier")
    title: str = Field(description="Project title")
    description: str = Field(default="", description="Full description")
    short_description: str = Field(default="", description="One-line summary")
    goal_amount: float = Field(gt=0, description="Funding goal (must be > 0)")


class ProjectResponse(BaseModel):
    """Project as stored on the ledger"""

    project_id: str
    title: str
    description: str
    short_description: str
    goal_amount: float
    current_amount: float = Field(description="Sum of all contributions")
    is_closed: bool = Field(description="True once rewards were distributed")


# ============================================================================
# Contribution Schemas
# ============================================================================


class ContributeRequest(BaseModel):
    """Request to contribute to a project"""

    contributor_id: str = Field(min_length=1, description="Contributing user identifier")
    amount: float = Field(gt=0, description="Amount to contribute (must be > 0)")


class ContributionResponse(BaseModel):
    """Accumulated contribution of one contributor to one project"""

    project_id: str
    contributor_id: str
    amount: float


class ContributionListResponse(BaseModel):
    """List of contributions"""

    contributions: list[ContributionResponse]
    total: int


# ============================================================================
# Reward Schemas
# ============================================================================


class AddRewardRequest(BaseModel):
    """Request to define a reward tier"""

    reward_level: str = Field(min_length=1, description="Tier name, unique per project")
    reward_description: str = Field(default="", description="What backers at this tier receive")
    min_contribution: float = Field(ge=0, description="Minimum accumulated contribution for the tier")


class RewardResponse(BaseModel):
    """Reward tier of a project"""

    project_id: str
    reward_level: str
    reward_description: str
    min_contribution: float


class RewardAssignmentResponse(BaseModel):
    """Reward tier granted to a contributor when the project closed"""

    project_id: str
    contributor_id: str
    reward_level: str
    amount: float


class DistributeRewardsResponse(BaseModel):
    """Response for closing a project"""

    tx_id: str = Field(description="Ledger transaction id")
    project_id: str
    assignments_written: int = Field(description="Number of reward assignments written")
