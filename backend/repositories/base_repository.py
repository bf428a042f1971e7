"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, List, Optional, Type
from sqlalchemy.orm import Session

from .specifications import Specification

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Repositories only flush; committing is left to the service that owns
    the unit of work.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """
        Add a new record and flush so generated ids are available.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_by_id(self, id: int) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return self.db.get(self.model, id)

    def exists(self, id: int) -> bool:
        """
        Check if a record exists by ID.

        Args:
            id: Primary key value

        Returns:
            True if exists, False otherwise
        """
        return self.db.query(self.model.id).filter(self.model.id == id).first() is not None

    def find(self, spec: Specification[T]) -> List[T]:
        """
        Find records matching a Specification, ordered by id.

        Args:
            spec: Specification to match records against

        Returns:
            List of matching model instances
        """
        return self.db.query(self.model).filter(
            spec.to_sql_filter()
        ).order_by(self.model.id).all()
