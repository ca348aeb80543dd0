"""
Unit Tests for Health Check Endpoints.

The readiness check is exercised with a mocked session so the outcome
of the database probe is fully controlled.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from planner.backend.api.health import check_database, health_check, readiness_check


def _timeouts(database=30):
    config = MagicMock()
    config.application.timeouts.database = database
    return config


class TestCheckDatabase:
    async def test_healthy(self, mock_db_session):
        result = await check_database(mock_db_session)

        assert result["status"] == "healthy"
        assert isinstance(result["latency_ms"], int)
        mock_db_session.execute.assert_awaited_once()

    async def test_unhealthy_on_error(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError("connection refused")

        result = await check_database(mock_db_session)

        assert result["status"] == "unhealthy"
        assert "connection refused" in result["error"]


class TestLiveness:
    async def test_always_healthy(self):
        assert await health_check() == {"status": "healthy"}


class TestReadiness:
    async def test_ready(self, mock_db_session):
        with patch("planner.backend.core.config.get_app_config", return_value=_timeouts()):
            result = await readiness_check(mock_db_session)

        assert result["status"] == "healthy"
        assert result["checks"]["database"]["status"] == "healthy"
        assert result["timestamp"].endswith("Z")

    async def test_unreachable_database_is_503(self, mock_db_session):
        mock_db_session.execute.side_effect = OSError("no route to host")

        with patch("planner.backend.core.config.get_app_config", return_value=_timeouts()):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check(mock_db_session)

        assert exc_info.value.status_code == 503
        assert exc_info.value.detail["checks"]["database"]["status"] == "unhealthy"

    async def test_slow_database_times_out(self, mock_db_session):
        async def hang(*args, **kwargs):
            await asyncio.sleep(5)

        mock_db_session.execute = AsyncMock(side_effect=hang)

        with patch("planner.backend.core.config.get_app_config", return_value=_timeouts(database=0.05)):
            with pytest.raises(HTTPException) as exc_info:
                await readiness_check(mock_db_session)

        assert "timed out" in exc_info.value.detail["checks"]["database"]["error"]
