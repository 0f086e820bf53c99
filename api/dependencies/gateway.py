"""
Gateway Dependency

FastAPI dependency for accessing the ledger gateway.
"""

from crowdfunding_ledger.connection import get_ledger_manager
from crowdfunding_ledger.gateway import Gateway


def get_gateway() -> Gateway:
    """
    Get a gateway bound to the global ledger manager.

    Returns:
        Gateway: Gateway submitting to the configured ledger database
    """
    return Gateway(get_ledger_manager())
