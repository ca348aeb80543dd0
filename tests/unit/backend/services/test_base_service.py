"""
Unit Tests for Base Services.

Covers the error wrapping and validation shared by every service, and
the owned-resource CRUD flow using FolderService as the concrete case.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from planner.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from planner.backend.schemas.folder import FolderCreate, FolderUpdate
from planner.backend.services.base import BaseService
from planner.backend.services.folder import FolderService


class TestExecuteDbOperation:
    @pytest.fixture
    def service(self, mock_db_session):
        return BaseService(mock_db_session)

    async def test_returns_result(self, service):
        async def op():
            return "ok"

        assert await service._execute_db_operation("op", op()) == "ok"

    async def test_unique_violation_becomes_conflict(self, service):
        async def op():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: diet_plans.user_id"))

        with pytest.raises(ConflictError):
            await service._execute_db_operation("create", op())

    async def test_other_integrity_error_becomes_database_error(self, service):
        async def op():
            raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        with pytest.raises(DatabaseError):
            await service._execute_db_operation("create", op())

    async def test_sqlalchemy_error_becomes_database_error(self, service):
        async def op():
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(DatabaseError, match="Database operation failed: list"):
            await service._execute_db_operation("list", op())


class TestValidateRequired:
    @pytest.fixture
    def service(self, mock_db_session):
        return BaseService(mock_db_session)

    def test_passes_when_present(self, service):
        service._validate_required({"title": "Hi", "done": False}, ["title", "done"])

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_rejects_missing_or_blank(self, service, value):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({"title": value}, ["title"])

        assert exc_info.value.details == {"missing_fields": ["title"]}


class TestOwnedResourceCreate:
    @pytest.fixture
    def service(self, mock_db_session):
        return FolderService(mock_db_session)

    async def test_applies_defaults(self, service):
        folder = MagicMock(id="f1")
        with patch.object(service.repo, "create", AsyncMock(return_value=folder)) as mock_create:
            result = await service.create("u1", FolderCreate(name="Recipes", type="notes"))

        assert result is folder
        mock_create.assert_awaited_once_with(
            "u1", name="Recipes", type="notes", color="blue", icon="folder"
        )

    async def test_empty_optional_text_falls_back_to_default(self, service):
        with patch.object(service.repo, "create", AsyncMock(return_value=MagicMock(id="f1"))) as mock_create:
            await service.create("u1", FolderCreate(name="Gym", type="diet", color="", icon="dumbbell"))

        assert mock_create.await_args.kwargs["color"] == "blue"
        assert mock_create.await_args.kwargs["icon"] == "dumbbell"

    async def test_blank_name_rejected_before_insert(self, service):
        with patch.object(service.repo, "create", AsyncMock()) as mock_create:
            with pytest.raises(ValidationError):
                await service.create("u1", FolderCreate(name="  ", type="notes"))

        mock_create.assert_not_awaited()


class TestOwnedResourceUpdate:
    @pytest.fixture
    def service(self, mock_db_session):
        return FolderService(mock_db_session)

    async def test_only_supplied_fields_change(self, service):
        folder = MagicMock(id="f1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=folder)), \
             patch.object(service.repo, "update", AsyncMock(return_value=folder)) as mock_update:
            await service.update("u1", "f1", FolderUpdate(color="red"))

        mock_update.assert_awaited_once_with(folder, color="red")

    async def test_empty_payload_is_noop(self, service):
        folder = MagicMock(id="f1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=folder)), \
             patch.object(service.repo, "update", AsyncMock()) as mock_update:
            result = await service.update("u1", "f1", FolderUpdate())

        assert result is folder
        mock_update.assert_not_awaited()

    async def test_explicit_null_required_field_rejected(self, service):
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=MagicMock())):
            with pytest.raises(ValidationError):
                await service.update("u1", "f1", FolderUpdate(name=None))

    async def test_foreign_record_is_not_found(self, service):
        with patch.object(
            service.repo, "get_owned", AsyncMock(side_effect=NotFoundError("Folder not found"))
        ):
            with pytest.raises(NotFoundError):
                await service.update("u2", "f1", FolderUpdate(name="Mine now"))


class TestOwnedResourceDelete:
    async def test_deletes_owned_record(self, mock_db_session):
        service = FolderService(mock_db_session)
        folder = MagicMock(id="f1")
        with patch.object(service.repo, "get_owned", AsyncMock(return_value=folder)), \
             patch.object(service.repo, "delete", AsyncMock()) as mock_delete:
            await service.delete("u1", "f1")

        mock_delete.assert_awaited_once_with(folder)
