"""
backend/repositories/base.py

Shared plumbing for the entity repositories: every repository is bound to the
request's SQLAlchemy session and never commits on its own. Committing is the
job of `UnitOfWork.commit()`.
"""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from ..db import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Insert / update / delete-by-id / fetch-by-id for one mapped class."""

    model: Type[ModelT]

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.session.get(self.model, entity_id)

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new row; it is written on the next flush/commit."""
        self.session.add(entity)
        return entity

    def update(self, entity: ModelT) -> ModelT:
        """Mark an entity dirty. No-op when the session already tracks it."""
        if entity not in self.session:
            self.session.add(entity)
        return entity

    def delete(self, entity_id: int) -> bool:
        """Stage removal of the row with `entity_id`. False if there is none."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        return True
