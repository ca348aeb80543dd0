"""
Base Repository.

Base class for all repositories with ownership-scoped CRUD operations.

Every query filters on the owning user. A row that exists but belongs to
someone else is reported exactly like a missing row.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from planner.backend.core.exceptions import NotFoundError
from planner.backend.core.logging import get_logger
from planner.backend.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


def date_range_conditions(
    column: InstrumentedAttribute,
    start: datetime | None = None,
    end: datetime | None = None,
) -> list[ColumnElement[bool]]:
    """Inclusive bounds on a date column. Either bound may be omitted."""
    conditions = []
    if start is not None:
        conditions.append(column >= start)
    if end is not None:
        conditions.append(column <= end)
    return conditions


class BaseRepository(Generic[ModelType]):
    """
    Base repository with ownership-scoped CRUD operations.

    Subclasses should set the model class and a display name:

        class FolderRepository(BaseRepository[Folder]):
            model = Folder
            resource_name = "Folder"
    """

    model: type[ModelType]
    resource_name: str = "Resource"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_owned(self, user_id: str, id: str) -> ModelType:
        """
        Get a single record by ID if it belongs to the user.

        Raises:
            NotFoundError: If the record is missing or owned by another user
        """
        instance = await self.get_owned_or_none(user_id, id)

        if instance is None:
            raise NotFoundError(f"{self.resource_name} not found")

        return instance

    async def get_owned_or_none(self, user_id: str, id: str) -> ModelType | None:
        """Get a single owned record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(
                self.model.id == str(id),
                self.model.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_owned(
        self,
        user_id: str,
        *conditions: ColumnElement[bool],
        order_by: Any = None,
    ) -> list[ModelType]:
        """
        Get every record owned by the user that matches all conditions.

        Ordered by creation time unless another ordering is given.
        """
        result = await self.session.execute(
            select(self.model)
            .where(self.model.user_id == user_id, *conditions)
            .order_by(order_by if order_by is not None else self.model.created_at)
        )
        return list(result.scalars().all())

    async def count_owned(self, user_id: str, *conditions: ColumnElement[bool]) -> int:
        """Count records owned by the user."""
        result = await self.session.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.user_id == user_id, *conditions)
        )
        return result.scalar_one()

    async def create(self, user_id: str, **kwargs: Any) -> ModelType:
        """Create a new record owned by the user."""
        instance = self.model(user_id=user_id, **kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, instance: ModelType, **kwargs: Any) -> ModelType:
        """Apply the given fields to an already-loaded record."""
        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """Delete an already-loaded record. Cascades are left to the database."""
        await self.session.delete(instance)
        await self.session.flush()
