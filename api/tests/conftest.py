"""
Pytest configuration for API tests

Fixtures and configuration for FastAPI endpoint testing.
Every test runs against its own in-memory SQLite ledger.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import settings
from api.main import app
from crowdfunding_ledger.connection import LedgerManager, LedgerSettings, set_ledger_manager


@pytest.fixture
def ledger_manager():
    """In-memory ledger installed as the global manager"""
    manager = LedgerManager(LedgerSettings(database_url="sqlite://"))
    set_ledger_manager(manager)
    yield manager
    set_ledger_manager(None)
    manager.close()


@pytest.fixture
def client(ledger_manager, monkeypatch):
    """Create FastAPI test client with API key checks disabled"""
    monkeypatch.setattr(settings, "api_key", None)
    with TestClient(app) as test_client:
        yield test_client


# Auth fixtures
@pytest.fixture
def api_key():
    return "test_api_key"


@pytest.fixture
def secured_client(ledger_manager, monkeypatch, api_key):
    """Create FastAPI test client that requires an API key"""
    monkeypatch.setattr(settings, "api_key", api_key)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(api_key):
    """Get authentication headers"""
    return {"X-API-Key": api_key}


# Ledger fixtures
@pytest.fixture
def funded_project(client):
    """Project p1 with goal 100 and contributions alice 60, bob 50"""
    client.post(
        "/api/v1/projects",
        json={"project_id": "p1", "title": "T", "description": "D", "short_description": "S", "goal_amount": 100.0},
    )
    client.post("/api/v1/projects/p1/contributions", json={"contributor_id": "alice", "amount": 60})
    client.post("/api/v1/projects/p1/contributions", json={"contributor_id": "bob", "amount": 50})
    return "p1"
