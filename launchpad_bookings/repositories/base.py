"""
Base repository class providing common database operations.
"""
from abc import ABC
from typing import Generic, TypeVar, List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar('ModelType')


class BaseRepository(Generic[ModelType], ABC):
    """Base repository class with common CRUD operations."""

    def __init__(self, model: type[ModelType], session: Session):
        """Initialize repository with model class and database session."""
        self.model = model
        self.session = session

    def get(self, id: Any) -> Optional[ModelType]:
        """Get a single record by primary key."""
        try:
            return self.session.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting {self.model.__name__} with id {id}: {e}")
            raise

    def get_multi(
        self,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None
    ) -> List[ModelType]:
        """Get multiple records with equality filters and pagination; None values are ignored."""
        try:
            query = self.session.query(self.model)

            for field_name, value in (filters or {}).items():
                if value is not None and hasattr(self.model, field_name):
                    query = query.filter(getattr(self.model, field_name) == value)

            if order_by and hasattr(self.model, order_by):
                query = query.order_by(getattr(self.model, order_by))

            return query.offset(skip).limit(limit).all()
        except SQLAlchemyError as e:
            logger.error(f"Error getting multiple {self.model.__name__} records: {e}")
            raise

    def create(self, obj_in: Any) -> ModelType:
        """Create a new record from a pydantic model or a dict."""
        try:
            if hasattr(obj_in, 'model_dump'):
                obj_data = obj_in.model_dump()
            else:
                obj_data = obj_in

            db_obj = self.model(**obj_data)
            self.session.add(db_obj)
            self.session.flush()
            self.session.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            logger.error(f"Integrity error creating {self.model.__name__}: {e}")
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model.__name__}: {e}")
            self.session.rollback()
            raise

    def delete(self, id: Any) -> bool:
        """Delete a record by primary key. Returns False if it did not exist."""
        try:
            db_obj = self.get(id)
            if db_obj:
                self.session.delete(db_obj)
                self.session.flush()
                return True
            return False
        except SQLAlchemyError as e:
            logger.error(f"Error deleting {self.model.__name__} with id {id}: {e}")
            self.session.rollback()
            raise
