"""
Pytest configuration for contract and ledger tests
"""

import pytest

from crowdfunding_contracts.contract import CrowdfundingContract
from crowdfunding_ledger.connection import LedgerManager, LedgerSettings
from crowdfunding_ledger.gateway import Gateway

from .mocks import MockLedger


@pytest.fixture
def contract():
    """Contract under test"""
    return CrowdfundingContract()


@pytest.fixture
def ledger():
    """Empty in-memory ledger"""
    return MockLedger()


@pytest.fixture
def ledger_manager(tmp_path):
    """Ledger manager over a fresh SQLite database file"""
    settings = LedgerSettings(database_url=f"sqlite:///{tmp_path / 'ledger.db'}")
    manager = LedgerManager(settings)
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture
def gateway(ledger_manager):
    """Gateway bound to the test database"""
    return Gateway(ledger_manager)
