"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_api.domain.repositories.base import BaseRepository
from workout_api.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def create(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        self.commit()
        self.db.refresh(obj)
        return obj

    def commit(self) -> None:
        """Commit the current transaction, rolling back if the commit fails."""
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
