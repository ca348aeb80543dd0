"""
Unit Tests for the Planner HTTP Client.

Requests go through httpx.MockTransport so headers, paths and error
decoding are checked without a server.
"""

import json

import httpx
import pytest

from planner.client.api import ApiError, PlannerClient


def _client(handler, token="tok-123"):
    return PlannerClient(
        base_url="http://planner.test",
        token=token,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestHeaders:
    async def test_sends_bearer_and_frontend(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json=[])

        async with _client(handler) as client:
            await client.list_notes()

        assert seen["authorization"] == "Bearer tok-123"
        assert seen["x-frontend-id"] == "mobile"

    async def test_no_token_no_authorization(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, json={"status": "healthy"})

        async with _client(handler, token=None) as client:
            await client.health()

        assert "authorization" not in seen


class TestRequests:
    async def test_drops_unset_query_params(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            return httpx.Response(200, json=[])

        async with _client(handler) as client:
            await client.list_diet_entries(start_date="2024-03-15", end_date="2024-03-15")

        assert seen["url"] == "http://planner.test/api/diet?startDate=2024-03-15&endDate=2024-03-15"

    async def test_create_note_omits_unset_fields(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "n1", **seen["body"]})

        async with _client(handler) as client:
            note = await client.create_note("Groceries", folder_id="f1")

        assert seen["body"] == {"title": "Groceries", "folderId": "f1"}
        assert note["id"] == "n1"

    async def test_delete_returns_none_on_204(self):
        def handler(request):
            assert request.method == "DELETE"
            assert request.url.path == "/api/media/m1"
            return httpx.Response(204)

        async with _client(handler) as client:
            assert await client.delete_media("m1") is None

    async def test_upload_is_multipart(self):
        seen = {}

        def handler(request):
            seen["content_type"] = request.headers["content-type"]
            seen["body"] = request.content
            return httpx.Response(201, json={"id": "m1"})

        async with _client(handler) as client:
            await client.upload_media("n1", "cat.png", b"meow", "image/png")

        assert seen["content_type"].startswith("multipart/form-data")
        assert b'name="file"; filename="cat.png"' in seen["body"]


class TestErrors:
    async def test_decodes_error_envelope(self):
        def handler(request):
            return httpx.Response(
                413,
                json={
                    "success": False,
                    "data": None,
                    "error": {"code": "MEDIA_TOO_LARGE", "message": "File too large"},
                },
            )

        async with _client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.upload_media("n1", "big.mov", b"x", "video/quicktime")

        assert exc_info.value.status_code == 413
        assert exc_info.value.code == "MEDIA_TOO_LARGE"
        assert exc_info.value.message == "File too large"

    async def test_plain_detail_body(self):
        def handler(request):
            return httpx.Response(503, json={"detail": {"status": "unhealthy"}})

        async with _client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.health()

        assert exc_info.value.code == "HTTP_ERROR"
        assert "unhealthy" in exc_info.value.message

    async def test_non_json_body(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        async with _client(handler) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.list_folders()

        assert exc_info.value.status_code == 502

    async def test_missing_active_plan_is_none(self):
        def handler(request):
            return httpx.Response(
                404,
                json={"success": False, "error": {"code": "RES_NOT_FOUND", "message": "No active diet plan"}},
            )

        async with _client(handler) as client:
            assert await client.get_active_diet_plan() is None

    async def test_other_active_plan_errors_propagate(self):
        def handler(request):
            return httpx.Response(401, json={"success": False, "error": {"code": "AUTH_UNAUTHORIZED", "message": "x"}})

        async with _client(handler) as client:
            with pytest.raises(ApiError):
                await client.get_active_diet_plan()

    async def test_transport_errors_propagate(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.list_notes()


class TestConfigDefaults:
    def test_reads_backend_url_from_config(self):
        client = PlannerClient(token="t")
        assert client.base_url == "http://127.0.0.1:8000"
        assert client.timeout == 30.0
