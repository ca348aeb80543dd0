"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and real blob storage.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from planner.backend.core.database import get_db_session
from planner.backend.storage import LocalBlobStorage, get_blob_storage


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def app(
    db_session_factory: async_sessionmaker[AsyncSession],
    blob_storage: LocalBlobStorage,
) -> FastAPI:
    """
    Application wired to the test database and temp-dir blob storage.

    Each request gets its own session that commits on success and rolls
    back on error, the same as in production.
    """
    from planner.backend.main import create_app

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with db_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client for the wired application.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_ok(response: Any, expected_status: int = 200) -> Any:
        """
        Assert the request succeeded and return the JSON body.

        Raises:
            AssertionError: If the status code differs
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        return response.json()

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert the response is an error envelope.

        Returns:
            The error detail object
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Expected error envelope: {data}"
        assert data.get("error") is not None

        if expected_code:
            assert data["error"]["code"] == expected_code, (
                f"Expected error code {expected_code}, got {data['error']['code']}"
            )
        return data["error"]

    @staticmethod
    def assert_validation_error(response: Any, field: str | None = None) -> None:
        """Assert a 422 request validation error, optionally naming a field."""
        assert response.status_code == 422, f"Expected 422, got {response.status_code}"
        data = response.json()
        assert data["error"]["code"] == "VAL_REQUEST_INVALID"

        if field:
            fields = [
                err["field"]
                for err in data["error"]["details"]["validation_errors"]
            ]
            assert any(field in f for f in fields), (
                f"Expected error for field '{field}', got errors for: {fields}"
            )


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()
