"""Crowdfunding ledger contract: entities, key scheme, codec and operations"""

from crowdfunding_contracts.context import TransactionContext, new_context
from crowdfunding_contracts.contract import CrowdfundingContract
from crowdfunding_contracts.stub import KV, ChaincodeStub, StateQueryIterator
from crowdfunding_contracts.types import Contribution, Project, Reward, RewardAssignment, User

__all__ = [
    "ChaincodeStub",
    "Contribution",
    "CrowdfundingContract",
    "KV",
    "Project",
    "Reward",
    "RewardAssignment",
    "StateQueryIterator",
    "TransactionContext",
    "User",
    "new_context",
]
