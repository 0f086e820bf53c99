"""
Ledger Database Connection Management

Handles database connections, session management, and engine configuration
for the world-state and transaction-log tables.
"""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


# Get the project root directory (two levels up from src/crowdfunding_ledger/)
PROJECT_ROOT = Path(__file__).parent.parent.parent


class LedgerSettings(BaseSettings):
    """Ledger configuration from environment variables (LEDGER_ prefix)"""

    database_url: str = "sqlite:///crowdfunding_ledger.db"
    echo_sql: bool = False

    # Connection pool settings (ignored for SQLite)
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 3600

    # Ledger addressing
    channel_name: str = "mychannel"
    chaincode_name: str = "crowdfunding"

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        env_prefix="LEDGER_",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (self.database_url in ("sqlite://", "sqlite:///") or ":memory:" in self.database_url)


class LedgerManager:
    """
    Database connection and session management for the ledger

    Tables are created from the SQLModel metadata by init_db().
    """

    def __init__(self, settings: LedgerSettings | None = None):
        """
        Initialize ledger manager

        Args:
            settings: Ledger settings (loads from environment if not provided)
        """
        self.settings = settings or LedgerSettings()
        self._engine: Engine | None = None

    def get_engine(self) -> Engine:
        """
        Get database engine

        Returns:
            SQLAlchemy engine
        """
        if self._engine is None:
            if self.settings.is_sqlite:
                kwargs = {"connect_args": {"check_same_thread": False}}
                if self.settings.is_in_memory:
                    # one shared connection, otherwise every session sees an empty database
                    kwargs["poolclass"] = StaticPool
            else:
                kwargs = {
                    "pool_size": self.settings.pool_size,
                    "max_overflow": self.settings.max_overflow,
                    "pool_timeout": self.settings.pool_timeout,
                    "pool_recycle": self.settings.pool_recycle,
                }
            self._engine = create_engine(self.settings.database_url, echo=self.settings.echo_sql, **kwargs)
        return self._engine

    def init_db(self) -> None:
        """Create ledger tables if they do not exist"""
        # registers the table models on the metadata
        from crowdfunding_ledger import models  # noqa: F401

        SQLModel.metadata.create_all(self.get_engine())

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session with automatic cleanup

        Usage:
            with ledger_manager.get_session() as session:
                # Use session here
                session.exec(query)

        Yields:
            Session instance
        """
        session = Session(self.get_engine(), expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close database connections"""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None


# ============================================================================
# Global ledger manager instance
# ============================================================================

_ledger_manager: LedgerManager | None = None


def get_ledger_manager() -> LedgerManager:
    """
    Get global ledger manager instance

    Returns:
        LedgerManager singleton
    """
    global _ledger_manager
    if _ledger_manager is None:
        _ledger_manager = LedgerManager()
    return _ledger_manager


def set_ledger_manager(manager: LedgerManager | None) -> None:
    """Replace the global manager (used by tests and the API lifespan)"""
    global _ledger_manager
    _ledger_manager = manager
