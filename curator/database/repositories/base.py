"""Base repository implementation for database operations.

This module provides a generic repository pattern implementation with common
database operations that can be inherited by specific repositories.

Features:
- Generic lookups by primary key
- Type-safe queries
- Consistent error logging
"""

from typing import Any, Generic, Optional, Type, TypeVar
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from curator.models.database.base import Base
from curator.core.logging import get_logger

# Type variable for models
ModelType = TypeVar("ModelType", bound=Base)
logger = get_logger(__name__)

class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations."""

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class
            session: AsyncSession instance
        """
        self.model = model
        self.session = session

    async def get(self, id: Any) -> Optional[ModelType]:
        """Get record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance if found, None otherwise
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Get failed for {self.model.__name__}", error=e)
            raise

