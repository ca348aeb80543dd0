"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = FolderService(mock_db_session)
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def mock_db_result() -> MagicMock:
    """
    Mock database query result.

    Usage:
        def test_query(mock_db_session, mock_db_result):
            mock_db_result.scalar_one_or_none.return_value = folder
            mock_db_session.execute.return_value = mock_db_result
    """
    result = MagicMock()
    result.scalar_one_or_none = MagicMock(return_value=None)
    result.scalar_one = MagicMock(return_value=0)
    result.scalars = MagicMock()
    result.scalars.return_value.all = MagicMock(return_value=[])
    result.scalars.return_value.first = MagicMock(return_value=None)
    return result


# =============================================================================
# Storage Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_storage() -> MagicMock:
    """
    Mock blob storage.

    upload echoes the key back; signed_url returns a predictable URL.
    """
    storage = MagicMock()
    storage.upload = AsyncMock(side_effect=lambda key, data: key)
    storage.signed_url = AsyncMock(side_effect=lambda key, expires_in=None: f"https://blobs.test/{key}?sig=x")
    storage.delete = AsyncMock(return_value=None)
    return storage


# =============================================================================
# Client Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_client() -> MagicMock:
    """PlannerClient stand-in whose every call is an AsyncMock."""
    client = MagicMock()
    for name in (
        "list_folders",
        "create_folder",
        "list_notes",
        "create_note",
        "delete_note",
        "list_media",
        "upload_media",
        "delete_media",
        "list_appointments",
        "create_appointment",
        "delete_appointment",
        "list_diet_entries",
        "create_diet_entry",
        "delete_diet_entry",
        "list_diet_plans",
        "get_active_diet_plan",
        "calendar_month",
    ):
        setattr(client, name, AsyncMock())
    return client
