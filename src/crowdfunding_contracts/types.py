"""
Ledger Entity Types

Pydantic models for the records kept in world state.
Field names are snake_case in Python and camelCase on the ledger.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LedgerRecord(BaseModel):
    """Base for every record persisted by the contract"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    # Discriminator written next to the fields so rich queries select one kind
    DOC_TYPE: ClassVar[str] = ""


class Project(LedgerRecord):
    """Crowdfunding campaign"""

    DOC_TYPE: ClassVar[str] = "project"

    project_id: str
    title: str
    description: str
    short_description: str
    goal_amount: float
    current_amount: float = 0.0
    is_closed: bool = False


class Contribution(LedgerRecord):
    """Total pledged by one contributor to one project"""

    DOC_TYPE: ClassVar[str] = "contribution"

    project_id: str
    contributor_id: str
    amount: float


class Reward(LedgerRecord):
    """Reward tier offered by a project"""

    DOC_TYPE: ClassVar[str] = "reward"

    project_id: str
    reward_level: str
    reward_description: str
    min_contribution: float


class RewardAssignment(LedgerRecord):
    """Reward tier granted to a contributor when the project closes"""

    DOC_TYPE: ClassVar[str] = "rewardAssignment"

    project_id: str
    contributor_id: str
    reward_level: str
    amount: float = Field(description="Contribution amount that qualified for the tier")


class User(LedgerRecord):
    """Registered platform user. The role is stored but never enforced."""

    DOC_TYPE: ClassVar[str] = "user"

    user_id: str
    role: str
