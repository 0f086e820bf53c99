"""
Crowdfunding Contract

State transitions over projects, contributions, users and reward tiers.
Each public method is one transaction: it reads through ctx.stub, validates,
and stages its writes. Any exception aborts the whole transaction.
"""

import math

from crowdfunding_contracts import codec
from crowdfunding_contracts.context import TransactionContext
from crowdfunding_contracts.errors import (
    GoalNotReachedError,
    InvalidArgumentError,
    ProjectClosedError,
    ProjectNotFoundError,
    UserNotFoundError,
)
from crowdfunding_contracts.keys import (
    CONTRIBUTION_OBJECT_TYPE,
    REWARD_ASSIGNMENT_OBJECT_TYPE,
    REWARD_OBJECT_TYPE,
    contribution_key,
    project_key,
    reward_assignment_key,
    reward_key,
    user_key,
)
from crowdfunding_contracts.types import (
    Contribution,
    LedgerRecord,
    Project,
    Reward,
    RewardAssignment,
    User,
)


def _require_id(value: str, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{name} must be a non-empty string")


def _require_amount(value: float, name: str, allow_zero: bool = False) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidArgumentError(f"{name} must be a finite number")
    if value < 0 or (value == 0 and not allow_zero):
        qualifier = "non-negative" if allow_zero else "positive"
        raise InvalidArgumentError(f"{name} must be {qualifier}, got {value}")


def select_reward_tier(tiers: list[Reward], amount: float) -> Reward | None:
    """
    Pick the highest tier a contribution qualifies for

    Tiers are ordered by (min_contribution, reward_level); the last one whose
    threshold does not exceed the amount wins.
    """
    eligible = [tier for tier in tiers if tier.min_contribution <= amount]
    if not eligible:
        return None
    return max(eligible, key=lambda tier: (tier.min_contribution, tier.reward_level))


class CrowdfundingContract:
    """Crowdfunding ledger contract"""

    name = "crowdfunding"

    # ========================================================================
    # Projects
    # ========================================================================

    def create_project(
        self,
        ctx: TransactionContext,
        project_id: str,
        title: str,
        description: str,
        short_description: str,
        goal_amount: float,
    ) -> None:
        """
        Create a new project for crowdfunding

        An existing open project with the same id is replaced, keeping the
        amount already raised so it still matches its contribution records.

        Raises:
            ProjectClosedError: If the existing project is already closed
        """
        _require_id(project_id, "projectId")
        _require_amount(goal_amount, "goalAmount")

        key = project_key(project_id)
        current_amount = 0.0
        existing = ctx.stub.get_state(key)
        if existing is not None:
            previous = codec.decode(Project, existing)
            if previous.is_closed:
                raise ProjectClosedError(project_id)
            current_amount = previous.current_amount
            ctx.logger.warning("Replacing existing project %s (raised so far: %s)", project_id, current_amount)

        project = Project(
            project_id=project_id,
            title=title,
            description=description,
            short_description=short_description,
            goal_amount=float(goal_amount),
            current_amount=current_amount,
        )
        self._put(ctx, key, project)
        ctx.logger.info("Created project %s with goal %s", project_id, project.goal_amount)

    def read_project(self, ctx: TransactionContext, project_id: str) -> Project:
        _require_id(project_id, "projectId")
        return self._get_project(ctx, project_id)

    # ========================================================================
    # Contributions
    # ========================================================================

    def contribute(self, ctx: TransactionContext, project_id: str, contributor_id: str, amount: float) -> None:
        """
        Add a contribution to a project

        Repeated contributions from the same contributor accumulate into a
        single record, so the project total always equals the sum of records.
        """
        _require_id(project_id, "projectId")
        _require_id(contributor_id, "contributorId")
        _require_amount(amount, "amount")

        project = self._get_project(ctx, project_id)
        if project.is_closed:
            raise ProjectClosedError(project_id)

        project.current_amount += amount

        key = contribution_key(project_id, contributor_id)
        existing = ctx.stub.get_state(key)
        if existing is not None:
            contribution = codec.decode(Contribution, existing)
            contribution.amount += amount
        else:
            contribution = Contribution(project_id=project_id, contributor_id=contributor_id, amount=float(amount))

        self._put(ctx, key, contribution)
        self._put(ctx, project_key(project_id), project)
        ctx.logger.info(
            "Contribution of %s from %s to %s (project total %s)",
            amount,
            contributor_id,
            project_id,
            project.current_amount,
        )

    def get_contributions_by_user(self, ctx: TransactionContext, user_id: str) -> list[Contribution]:
        """Return all contributions made by a user"""
        return self._query(ctx, Contribution, {"contributorId": user_id})

    def get_contributions_for_campaign(self, ctx: TransactionContext, campaign_id: str) -> list[Contribution]:
        """Return all contributions made to a campaign"""
        return self._query(ctx, Contribution, {"projectId": campaign_id})

    # ========================================================================
    # Rewards
    # ========================================================================

    def add_reward(
        self,
        ctx: TransactionContext,
        project_id: str,
        reward_level: str,
        reward_description: str,
        min_contribution: float,
    ) -> None:
        """Define (or redefine) a reward tier of an open project"""
        _require_id(project_id, "projectId")
        _require_id(reward_level, "rewardLevel")
        _require_amount(min_contribution, "minContribution", allow_zero=True)

        project = self._get_project(ctx, project_id)
        if project.is_closed:
            raise ProjectClosedError(project_id)

        reward = Reward(
            project_id=project_id,
            reward_level=reward_level,
            reward_description=reward_description,
            min_contribution=float(min_contribution),
        )
        self._put(ctx, reward_key(project_id, reward_level), reward)
        ctx.logger.info("Reward tier %s for %s requires %s", reward_level, project_id, reward.min_contribution)

    def get_rewards_for_project(self, ctx: TransactionContext, project_id: str) -> list[Reward]:
        _require_id(project_id, "projectId")
        return self._scan(ctx, Reward, REWARD_OBJECT_TYPE, [project_id])

    def get_reward_assignments(self, ctx: TransactionContext, project_id: str) -> list[RewardAssignment]:
        _require_id(project_id, "projectId")
        return self._scan(ctx, RewardAssignment, REWARD_ASSIGNMENT_OBJECT_TYPE, [project_id])

    def distribute_rewards(self, ctx: TransactionContext, project_id: str) -> int:
        """
        Close a funded project and assign reward tiers to its contributors

        Checks, in order: the project exists, the goal is reached, the project
        is still open.

        Returns:
            Number of reward assignments written
        """
        _require_id(project_id, "projectId")

        project = self._get_project(ctx, project_id)
        if project.current_amount < project.goal_amount:
            raise GoalNotReachedError(project_id)
        if project.is_closed:
            raise ProjectClosedError(project_id)

        project.is_closed = True
        self._put(ctx, project_key(project_id), project)

        tiers = self.get_rewards_for_project(ctx, project_id)

        assigned = 0
        with ctx.stub.get_state_by_partial_composite_key(CONTRIBUTION_OBJECT_TYPE, [project_id]) as results:
            for kv in results:
                contribution = codec.decode(Contribution, kv.value)
                tier = select_reward_tier(tiers, contribution.amount)
                if tier is None:
                    continue
                assignment = RewardAssignment(
                    project_id=project_id,
                    contributor_id=contribution.contributor_id,
                    reward_level=tier.reward_level,
                    amount=contribution.amount,
                )
                self._put(ctx, reward_assignment_key(project_id, contribution.contributor_id), assignment)
                assigned += 1

        ctx.logger.info("Closed project %s and assigned %d rewards", project_id, assigned)
        return assigned

    # ========================================================================
    # Users
    # ========================================================================

    def register_user(self, ctx: TransactionContext, user_id: str, role: str) -> None:
        """Register a user with a given role, replacing any previous registration"""
        _require_id(user_id, "userId")

        user = User(user_id=user_id, role=role)
        self._put(ctx, user_key(user_id), user)
        ctx.logger.info("Registered user %s as %s", user_id, role)

    def read_user(self, ctx: TransactionContext, user_id: str) -> User:
        _require_id(user_id, "userId")
        value = ctx.stub.get_state(user_key(user_id))
        if value is None:
            raise UserNotFoundError(user_id)
        return codec.decode(User, value)

    # ========================================================================
    # Helpers
    # ========================================================================

    def _get_project(self, ctx: TransactionContext, project_id: str) -> Project:
        value = ctx.stub.get_state(project_key(project_id))
        if value is None:
            raise ProjectNotFoundError(project_id)
        return codec.decode(Project, value)

    def _put(self, ctx: TransactionContext, key: str, record: LedgerRecord) -> None:
        ctx.stub.put_state(key, codec.encode(record))

    def _query(self, ctx: TransactionContext, record_type: type, fields: dict) -> list:
        selector = {codec.DOC_TYPE_FIELD: record_type.DOC_TYPE, **fields}
        with ctx.stub.get_query_result(selector) as results:
            return [codec.decode(record_type, kv.value) for kv in results]

    def _scan(self, ctx: TransactionContext, record_type: type, object_type: str, attributes: list[str]) -> list:
        with ctx.stub.get_state_by_partial_composite_key(object_type, attributes) as results:
            return [codec.decode(record_type, kv.value) for kv in results]
