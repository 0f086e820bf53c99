"""
Base Repository

Provides common data access operations for all ledger repositories.
Repositories never commit: the gateway owns the transaction boundary.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository with common operations"""

    def __init__(self, model: type[ModelType], session: Session):
        """
        Initialize repository

        Args:
            model: SQLModel class
            session: Database session
        """
        self.model = model
        self.session = session

    def create(self, obj: ModelType) -> ModelType:
        """
        Stage a new record

        Args:
            obj: Model instance to create

        Returns:
            The same instance, flushed so database defaults are populated
        """
        self.session.add(obj)
        self.session.flush()
        return obj

    def get(self, id: Any) -> ModelType | None:
        """
        Get record by primary key

        Args:
            id: Primary key value (tuple for composite keys)

        Returns:
            Model instance or None
        """
        return self.session.get(self.model, id)

    def count(self) -> int:
        """
        Count total records

        Returns:
            Total count
        """
        statement = select(func.count()).select_from(self.model)
        return self.session.exec(statement).one()
