"""
Integration Tests for Database Fixtures and Repositories.

These tests verify that the database fixtures work correctly and that the
schema behaves the same on SQLite as on PostgreSQL: ownership scoping,
cascading deletes and the one-active-plan index.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.exceptions import NotFoundError
from planner.backend.models import DietPlan, Folder, Note
from planner.backend.repositories.folder import FolderRepository
from planner.backend.repositories.note import NoteRepository


class TestDatabaseSession:
    """Tests for db_session fixture."""

    async def test_can_create_record(self, db_session: AsyncSession):
        folder = await FolderRepository(db_session).create("u1", name="Work", type="notes")

        assert folder.id is not None
        assert len(folder.id) == 36
        assert folder.color == "blue"

    async def test_second_test_has_clean_database(self, db_session: AsyncSession):
        result = await db_session.execute(select(Folder))
        assert result.scalars().all() == []


class TestOwnership:
    """Repositories never return another user's rows."""

    async def test_foreign_row_is_not_found(self, db_session: AsyncSession):
        repo = FolderRepository(db_session)
        folder = await repo.create("u1", name="Work", type="notes")

        with pytest.raises(NotFoundError):
            await repo.get_owned("u2", folder.id)

        assert await repo.get_owned_or_none("u2", folder.id) is None
        assert await repo.count_owned("u1") == 1
        assert await repo.count_owned("u2") == 0


class TestCascades:
    async def test_folder_delete_removes_notes(self, db_session: AsyncSession):
        folders = FolderRepository(db_session)
        notes = NoteRepository(db_session)
        folder = await folders.create("u1", name="Work", type="notes")
        note = await notes.create("u1", title="Filed", folder_id=folder.id)

        await folders.delete(folder)
        db_session.expunge(note)

        assert await notes.get_owned_or_none("u1", note.id) is None

    async def test_missing_folder_rejected(self, db_session: AsyncSession):
        db_session.add(Note(user_id="u1", title="Orphan", folder_id="no-such-folder"))

        with pytest.raises(IntegrityError):
            await db_session.flush()


class TestActivePlanIndex:
    async def test_second_active_plan_rejected(self, db_session: AsyncSession):
        db_session.add(DietPlan(user_id="u1", name="Cut", goal="lose weight", is_active=True))
        await db_session.flush()
        db_session.add(DietPlan(user_id="u1", name="Bulk", goal="gain muscle", is_active=True))

        with pytest.raises(IntegrityError):
            await db_session.flush()

    async def test_inactive_plans_unrestricted(self, db_session: AsyncSession):
        db_session.add_all(
            [
                DietPlan(user_id="u1", name="Old", goal="maintain", is_active=False),
                DietPlan(user_id="u1", name="Older", goal="maintain", is_active=False),
                DietPlan(user_id="u2", name="Theirs", goal="maintain", is_active=True),
                DietPlan(user_id="u1", name="Current", goal="maintain", is_active=True),
            ]
        )
        await db_session.flush()

        result = await db_session.execute(select(DietPlan).where(DietPlan.is_active.is_(True)))
        assert len(result.scalars().all()) == 2
