"""
Base Service.

Base classes for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from planner.backend.services.base import OwnedResourceService

    class FolderService(OwnedResourceService[Folder]):
        repository_class = FolderRepository
        required_fields = ("name", "type", "color", "icon")

        async def list_folders(self, user_id: str, type: str | None = None) -> list[Folder]:
            return await self.repo.list_for_user(user_id, type=type)
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from planner.backend.core.logging import get_logger
from planner.backend.models.base import Base
from planner.backend.repositories.base import BaseRepository

logger = get_logger(__name__)

T = TypeVar("T")
ModelType = TypeVar("ModelType", bound=Base)


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Common validation patterns

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists")
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Args:
            fields: Dictionary of field names to values
            field_names: List of required field names

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )


class OwnedResourceService(BaseService, Generic[ModelType]):
    """
    CRUD for a resource owned by a single user.

    Every method takes the caller's user id first. Reads and writes only
    ever touch rows owned by that user; a foreign row raises NotFoundError
    exactly like a missing one.

    Subclasses configure:
    - repository_class: the resource's repository
    - required_fields: fields that may never be null or blank
    - optional_text_fields: fields where "" is stored as null
    - create_defaults: values used when a create payload omits a field

    and may override _prepare_create / _prepare_update to add checks.
    """

    repository_class: type[BaseRepository]
    required_fields: tuple[str, ...] = ()
    optional_text_fields: tuple[str, ...] = ()
    create_defaults: dict[str, Any] = {}

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = self.repository_class(session)

    @property
    def resource_name(self) -> str:
        return self.repo.resource_name

    async def get(self, user_id: str, id: str) -> ModelType:
        """
        Get one of the user's records.

        Raises:
            NotFoundError: If the record is missing or owned by another user
        """
        return await self.repo.get_owned(user_id, id)

    async def create(self, user_id: str, data: BaseModel) -> ModelType:
        """
        Create a record owned by the user, applying defaults for omitted fields.

        Raises:
            ValidationError: If a required field is blank
        """
        values = self._normalize(data.model_dump())
        for field, default in self.create_defaults.items():
            if values.get(field) is None:
                values[field] = default

        self._validate_required(values, list(self.required_fields))
        values = await self._prepare_create(user_id, values)

        self._log_operation(f"Creating {self.resource_name.lower()}", user_id=user_id)
        instance = await self._execute_db_operation(
            f"create_{self.repo.model.__tablename__}",
            self.repo.create(user_id, **values),
        )
        self._log_debug(f"{self.resource_name} created", id=instance.id)
        return instance

    async def update(self, user_id: str, id: str, data: BaseModel) -> ModelType:
        """
        Apply a partial update. Only fields present in the payload change.

        Raises:
            NotFoundError: If the record is missing or owned by another user
            ValidationError: If a required field is set to null or blank
        """
        instance = await self.repo.get_owned(user_id, id)

        values = self._normalize(data.model_dump(exclude_unset=True))
        if not values:
            return instance

        self._validate_required(
            values,
            [name for name in self.required_fields if name in values],
        )
        values = await self._prepare_update(user_id, instance, values)

        self._log_operation(
            f"Updating {self.resource_name.lower()}",
            id=id,
            fields=list(values.keys()),
        )
        return await self._execute_db_operation(
            f"update_{self.repo.model.__tablename__}",
            self.repo.update(instance, **values),
        )

    async def delete(self, user_id: str, id: str) -> None:
        """
        Delete one of the user's records. Dependent rows cascade in the database.

        Raises:
            NotFoundError: If the record is missing or owned by another user
        """
        instance = await self.repo.get_owned(user_id, id)

        self._log_operation(f"Deleting {self.resource_name.lower()}", id=id)
        await self._execute_db_operation(
            f"delete_{self.repo.model.__tablename__}",
            self.repo.delete(instance),
        )

    async def count(self, user_id: str) -> int:
        """Number of records the user owns."""
        return await self.repo.count_owned(user_id)

    async def _prepare_create(self, user_id: str, values: dict[str, Any]) -> dict[str, Any]:
        return values

    async def _prepare_update(
        self,
        user_id: str,
        instance: ModelType,
        values: dict[str, Any],
    ) -> dict[str, Any]:
        return values

    def _normalize(self, values: dict[str, Any]) -> dict[str, Any]:
        for name in self.optional_text_fields:
            if name in values and values[name] == "":
                values[name] = None
        return values
