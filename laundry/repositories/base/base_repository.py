"""
Base repository with the CRUD operations shared by the domain repositories.

Repositories never commit; the unit of work belongs to
:class:`laundry.services.base.transaction_manager.TransactionManager`.
"""

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from laundry.core.exceptions import DuplicateEntryError
from laundry.models.base import BaseModel

logger = logging.getLogger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository bound to one model and one session.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def create(self, entity: ModelType) -> ModelType:
        """
        Add and flush a new entity.

        Raises:
            DuplicateEntryError: If a uniqueness constraint rejects the row
        """
        self.db.add(entity)
        try:
            self.db.flush()
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.model.__name__} already exists",
                table=self.model.__tablename__,
            ) from e

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        query = select(self.model)
        for key, value in criteria.items():
            query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query.limit(1)).scalars().first()

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        """
        Count entities matching criteria.
        """
        query = select(func.count(self.model.id))
        for key, value in (criteria or {}).items():
            query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query).scalar_one()

    def exists(self, criteria: Dict[str, Any]) -> bool:
        return self.count(criteria) > 0

    def delete_where(self, *conditions) -> int:
        """Bulk delete matching rows and return the number removed."""
        result = self.db.execute(
            delete(self.model).where(*conditions).execution_options(synchronize_session=False)
        )
        if result.rowcount:
            logger.debug(f"Deleted {result.rowcount} {self.model.__name__} row(s)")
        return result.rowcount
