"""
Tests for the contract function registry
"""

import pytest

from crowdfunding_contracts.contract import CrowdfundingContract
from crowdfunding_contracts.errors import InvalidArgumentError
from crowdfunding_contracts.registry import (
    EVALUATE_FUNCTIONS,
    SUBMIT_FUNCTIONS,
    FunctionKind,
    convert_args,
    get_function_info,
    list_all_functions,
)


class TestRegistry:
    """Test function lookup and argument conversion"""

    def test_every_function_maps_to_a_contract_method(self):
        """Test registered method names exist on the contract"""
        contract = CrowdfundingContract()
        for info in [*SUBMIT_FUNCTIONS.values(), *EVALUATE_FUNCTIONS.values()]:
            assert callable(getattr(contract, info["method"]))

    def test_function_kinds(self):
        """Test writes are submit functions and queries are evaluate functions"""
        assert get_function_info("Contribute")["kind"] == FunctionKind.SUBMIT
        assert get_function_info("GetContributionsForCampaign")["kind"] == FunctionKind.EVALUATE

        functions = list_all_functions()
        assert len(functions["submit"]) == 5
        assert len(functions["evaluate"]) == 6

    def test_unknown_function(self):
        with pytest.raises(InvalidArgumentError, match="Function Withdraw not found"):
            get_function_info("Withdraw")

    def test_convert_string_arguments(self):
        """Test string amounts become floats and ids stay strings"""
        info = get_function_info("CreateProject")

        args = convert_args(info, ["p1", "T", "D", "S", "100.5"])

        assert args == ["p1", "T", "D", "S", 100.5]

    def test_numbers_pass_through(self):
        assert convert_args(get_function_info("Contribute"), ["p1", "alice", 60]) == ["p1", "alice", 60.0]

    @pytest.mark.parametrize("amount", ["ten", "", "inf", True, None])
    def test_rejects_bad_numbers(self, amount):
        with pytest.raises(InvalidArgumentError, match="amount"):
            convert_args(get_function_info("Contribute"), ["p1", "alice", amount])

    def test_rejects_non_string_ids(self):
        with pytest.raises(InvalidArgumentError, match="projectId must be a string"):
            convert_args(get_function_info("ReadProject"), [42])

    def test_rejects_wrong_argument_count(self):
        with pytest.raises(InvalidArgumentError, match="expected 1, got 2"):
            convert_args(get_function_info("DistributeRewards"), ["p1", "extra"])
