"""
Contract Function Registry

Central registry of the functions the crowdfunding contract exposes to the
ledger. Clients call functions by name with string arguments; the registry
knows which method serves each name, whether it writes (submit) or only
reads (evaluate), and how to convert the arguments.
"""

import math
from enum import Enum
from typing import Any, TypedDict

from crowdfunding_contracts.errors import InvalidArgumentError


class FunctionKind(str, Enum):
    """How a function is invoked"""

    SUBMIT = "submit"
    EVALUATE = "evaluate"


class ContractFunction(TypedDict):
    """Contract function information"""
    name: str
    method: str
    kind: FunctionKind
    params: list[tuple[str, type]]
    description: str


# ============================================================================
# Submit Functions (write the ledger)
# ============================================================================

SUBMIT_FUNCTIONS: dict[str, ContractFunction] = {
    "CreateProject": {
        "name": "CreateProject",
        "method": "create_project",
        "kind": FunctionKind.SUBMIT,
        "params": [
            ("projectId", str),
            ("title", str),
            ("description", str),
            ("shortDescription", str),
            ("goalAmount", float),
        ],
        "description": "Create a crowdfunding project with a goal amount",
    },
    "Contribute": {
        "name": "Contribute",
        "method": "contribute",
        "kind": FunctionKind.SUBMIT,
        "params": [("projectId", str), ("contributorId", str), ("amount", float)],
        "description": "Add a contribution to a project",
    },
    "DistributeRewards": {
        "name": "DistributeRewards",
        "method": "distribute_rewards",
        "kind": FunctionKind.SUBMIT,
        "params": [("projectId", str)],
        "description": "Close a funded project and assign reward tiers",
    },
    "RegisterUser": {
        "name": "RegisterUser",
        "method": "register_user",
        "kind": FunctionKind.SUBMIT,
        "params": [("userId", str), ("role", str)],
        "description": "Register a user with a role",
    },
    "AddReward": {
        "name": "AddReward",
        "method": "add_reward",
        "kind": FunctionKind.SUBMIT,
        "params": [
            ("projectId", str),
            ("rewardLevel", str),
            ("rewardDescription", str),
            ("minContribution", float),
        ],
        "description": "Define a reward tier for a project",
    },
}


# ============================================================================
# Evaluate Functions (read only)
# ============================================================================

EVALUATE_FUNCTIONS: dict[str, ContractFunction] = {
    "GetContributionsByUser": {
        "name": "GetContributionsByUser",
        "method": "get_contributions_by_user",
        "kind": FunctionKind.EVALUATE,
        "params": [("userId", str)],
        "description": "List all contributions made by a user",
    },
    "GetContributionsForCampaign": {
        "name": "GetContributionsForCampaign",
        "method": "get_contributions_for_campaign",
        "kind": FunctionKind.EVALUATE,
        "params": [("campaignId", str)],
        "description": "List all contributions made to a campaign",
    },
    "ReadProject": {
        "name": "ReadProject",
        "method": "read_project",
        "kind": FunctionKind.EVALUATE,
        "params": [("projectId", str)],
        "description": "Read a project",
    },
    "ReadUser": {
        "name": "ReadUser",
        "method": "read_user",
        "kind": FunctionKind.EVALUATE,
        "params": [("userId", str)],
        "description": "Read a registered user",
    },
    "GetRewardsForProject": {
        "name": "GetRewardsForProject",
        "method": "get_rewards_for_project",
        "kind": FunctionKind.EVALUATE,
        "params": [("projectId", str)],
        "description": "List the reward tiers of a project",
    },
    "GetRewardAssignments": {
        "name": "GetRewardAssignments",
        "method": "get_reward_assignments",
        "kind": FunctionKind.EVALUATE,
        "params": [("projectId", str)],
        "description": "List the reward tiers granted when a project closed",
    },
}


# ============================================================================
# Registry Functions
# ============================================================================


def get_function_info(name: str) -> ContractFunction:
    """
    Get function information by name

    Raises:
        InvalidArgumentError: If the contract has no such function
    """
    info = SUBMIT_FUNCTIONS.get(name) or EVALUATE_FUNCTIONS.get(name)
    if info is None:
        raise InvalidArgumentError(f"Function {name} not found")
    return info


def list_all_functions() -> dict[str, list[ContractFunction]]:
    return {
        "submit": list(SUBMIT_FUNCTIONS.values()),
        "evaluate": list(EVALUATE_FUNCTIONS.values()),
    }


def _convert(value: Any, param: str, param_type: type) -> Any:
    if param_type is float:
        if isinstance(value, bool):
            raise InvalidArgumentError(f"{param} must be a number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"{param} must be a number, got {value!r}")
        if not math.isfinite(number):
            raise InvalidArgumentError(f"{param} must be a finite number, got {value!r}")
        return number
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{param} must be a string, got {value!r}")
    return value


def convert_args(info: ContractFunction, args: list[Any]) -> list[Any]:
    """
    Convert raw client arguments to the declared parameter types

    Args:
        info: Function being invoked
        args: Positional arguments (strings as sent by ledger clients)

    Returns:
        Typed positional arguments

    Raises:
        InvalidArgumentError: On wrong argument count or unconvertible value
    """
    params = info["params"]
    if len(args) != len(params):
        raise InvalidArgumentError(
            f"Incorrect number of arguments for {info['name']}: expected {len(params)}, got {len(args)}"
        )
    return [_convert(value, name, param_type) for value, (name, param_type) in zip(args, params)]
