"""
Transaction Endpoint Tests

Test suite for generic invocation, the transaction log, health and API keys.
"""

import pytest
from fastapi.testclient import TestClient

from api.tests.assertions import (
    assert_error_response,
    assert_successful_response,
    assert_valid_submit_response,
    assert_valid_tx_id,
)


@pytest.mark.api
class TestInvokeEndpoints:
    """Tests for POST /api/v1/transactions/invoke and /query"""

    def test_invoke_example_flow(self, client: TestClient):
        """Test the create, contribute, distribute flow with string arguments"""
        calls = [
            ("CreateProject", ["p1", "T", "D", "S", "100.0"]),
            ("Contribute", ["p1", "alice", "60"]),
            ("Contribute", ["p1", "bob", "50"]),
        ]
        for fcn, args in calls:
            response = client.post("/api/v1/transactions/invoke", json={"fcn": fcn, "args": args})
            assert_valid_submit_response(assert_successful_response(response))

        response = client.post("/api/v1/transactions/query", json={"fcn": "ReadProject", "args": ["p1"]})
        project = assert_successful_response(response)["result"]
        assert project["currentAmount"] == 110

        response = client.post("/api/v1/transactions/invoke", json={"fcn": "DistributeRewards", "args": ["p1"]})
        assert assert_successful_response(response)["result"] == 0

        response = client.post("/api/v1/transactions/invoke", json={"fcn": "DistributeRewards", "args": ["p1"]})
        assert_error_response(response, 409, "project is already closed")

    def test_query_returns_ledger_field_names(self, client: TestClient):
        client.post("/api/v1/transactions/invoke", json={"fcn": "CreateProject", "args": ["p1", "T", "D", "S", "10"]})
        client.post("/api/v1/transactions/invoke", json={"fcn": "Contribute", "args": ["p1", "alice", "4"]})

        response = client.post("/api/v1/transactions/query", json={"fcn": "GetContributionsByUser", "args": ["alice"]})

        assert assert_successful_response(response)["result"] == [
            {"projectId": "p1", "contributorId": "alice", "amount": 4.0}
        ]

    def test_unknown_function(self, client: TestClient):
        response = client.post("/api/v1/transactions/invoke", json={"fcn": "Refund", "args": []})
        assert_error_response(response, 400, "Function Refund not found")

    def test_invalid_arguments(self, client: TestClient):
        client.post("/api/v1/transactions/invoke", json={"fcn": "CreateProject", "args": ["p1", "T", "D", "S", "10"]})

        response = client.post("/api/v1/transactions/invoke", json={"fcn": "Contribute", "args": ["p1", "alice", "0"]})
        assert_error_response(response, 400, "amount")

        response = client.post("/api/v1/transactions/invoke", json={"fcn": "Contribute", "args": ["p1", "alice"]})
        assert_error_response(response, 400, "Incorrect number of arguments")

    def test_query_cannot_be_submitted(self, client: TestClient):
        response = client.post("/api/v1/transactions/invoke", json={"fcn": "ReadProject", "args": ["p1"]})
        assert_error_response(response, 400, "read-only")

    def test_list_functions(self, client: TestClient):
        data = assert_successful_response(client.get("/api/v1/transactions/functions"), ["submit", "evaluate"])

        assert {f["name"] for f in data["submit"]} == {
            "CreateProject",
            "Contribute",
            "DistributeRewards",
            "RegisterUser",
            "AddReward",
        }
        contribute = next(f for f in data["submit"] if f["name"] == "Contribute")
        assert contribute["params"] == ["projectId", "contributorId", "amount"]


@pytest.mark.api
class TestTransactionLogEndpoints:
    """Tests for GET /api/v1/transactions"""

    def test_get_committed_transaction(self, client: TestClient):
        response = client.post("/api/v1/users", json={"user_id": "alice", "role": "backer"})
        tx_id = response.json()["tx_id"]

        data = assert_successful_response(client.get(f"/api/v1/transactions/{tx_id}"))

        assert_valid_tx_id(data["tx_id"])
        assert data["function"] == "RegisterUser"
        assert data["args"] == ["alice", "backer"]
        assert data["status"] == "VALID"
        assert data["write_count"] == 1
        assert data["chaincode"] == "crowdfunding"

    def test_failed_transaction_is_logged(self, client: TestClient):
        client.post("/api/v1/projects/missing/contributions", json={"contributor_id": "alice", "amount": 1})

        data = assert_successful_response(client.get("/api/v1/transactions"), ["transactions", "total"])

        assert data["total"] == 1
        failed = data["transactions"][0]
        assert failed["status"] == "ENDORSEMENT_FAILURE"
        assert failed["message"] == "project does not exist: missing"
        assert failed["write_count"] == 0

    def test_get_missing_transaction(self, client: TestClient):
        assert_error_response(client.get(f"/api/v1/transactions/{'0' * 64}"), 404, "transaction does not exist")

    def test_history_filtered_by_status(self, client: TestClient):
        client.post("/api/v1/users", json={"user_id": "alice", "role": "backer"})
        client.post("/api/v1/projects/missing/contributions", json={"contributor_id": "alice", "amount": 1})

        valid = assert_successful_response(client.get("/api/v1/transactions", params={"status": "VALID"}))
        failed = assert_successful_response(
            client.get("/api/v1/transactions", params={"status": "ENDORSEMENT_FAILURE"})
        )

        assert [t["function"] for t in valid["transactions"]] == ["RegisterUser"]
        assert [t["function"] for t in failed["transactions"]] == ["Contribute"]
        assert client.get("/api/v1/transactions", params={"status": "PENDING"}).status_code == 422

    def test_history_limit_validation(self, client: TestClient):
        assert client.get("/api/v1/transactions", params={"limit": 0}).status_code == 422
        assert client.get("/api/v1/transactions", params={"limit": 1000}).status_code == 422


@pytest.mark.api
class TestHealthAndSecurity:
    """Tests for /health and the optional API key"""

    def test_health(self, client: TestClient):
        data = assert_successful_response(client.get("/health"), ["status", "database", "api_version"])

        assert data["status"] == "healthy"
        assert data["database"]["connected"] is True
        assert data["database"]["type"] == "sqlite"

    def test_missing_api_key(self, secured_client: TestClient):
        response = secured_client.get("/api/v1/users/nobody/contributions")
        assert_error_response(response, 401, "Invalid or missing API Key")

    def test_wrong_api_key(self, secured_client: TestClient):
        response = secured_client.get("/api/v1/users/nobody/contributions", headers={"X-API-Key": "wrong"})
        assert response.status_code == 401

    def test_valid_api_key(self, secured_client: TestClient, auth_headers):
        response = secured_client.get("/api/v1/users/nobody/contributions", headers=auth_headers)
        assert_successful_response(response)

    def test_health_needs_no_api_key(self, secured_client: TestClient):
        assert secured_client.get("/health").status_code == 200
