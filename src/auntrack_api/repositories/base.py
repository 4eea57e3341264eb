"""
Base repository shared by the user, category and event repositories.

Each write commits immediately and refreshes the instance so the router
returns exactly what is stored. ``IntegrityError`` is rolled back and
re-raised as is; the subclasses turn it into a ``DuplicateException``.
Any other database failure becomes a ``DatabaseException``.
"""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auntrack_api.models.base import Base
from auntrack_api.core.exceptions import NotFoundException, DatabaseException


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Lookup and write helpers for one mapped model.

    Example:
        class CategoryRepository(BaseRepository[Category]):
            def __init__(self, db: Session):
                super().__init__(Category, db)
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    @property
    def entity_name(self) -> str:
        """Name used in error messages ('CalendarEvent' reads as 'Event')."""
        return getattr(self.model, "__entity_name__", self.model.__name__)

    def get(self, id: int) -> Optional[ModelType]:
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to load {self.entity_name} {id}") from e

    def get_or_fail(self, id: int) -> ModelType:
        """
        Raises:
            NotFoundException: No row with this primary key ("<Entity> not found")
        """
        obj = self.get(id)
        if obj is None:
            raise NotFoundException(self.entity_name, id)
        return obj

    def list_ordered(self, *order_by: Any) -> List[ModelType]:
        """All rows sorted by the given column expressions, then by id."""
        try:
            return self.db.query(self.model).order_by(*order_by, self.model.id.asc()).all()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to list {self.entity_name} records") from e

    def _commit(self, obj: ModelType, action: str) -> ModelType:
        try:
            self.db.commit()
            self.db.refresh(obj)
            return obj
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to {action} {self.entity_name}") from e

    def create_from_dict(self, data: Dict[str, Any]) -> ModelType:
        """
        Insert a row built from ``data``.

        Raises:
            IntegrityError: Unique or foreign key violation (rolled back)
        """
        obj = self.model(**data)
        self.db.add(obj)
        return self._commit(obj, "create")

    def update_by_id(self, id: int, data: Dict[str, Any]) -> Optional[ModelType]:
        """Apply ``data`` to the row; None when the row does not exist. Unknown keys are skipped."""
        obj = self.get(id)
        if obj is None:
            return None

        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)
        return self._commit(obj, "update")

    def delete(self, obj: ModelType) -> None:
        try:
            self.db.delete(obj)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseException(f"Failed to delete {self.entity_name}") from e
