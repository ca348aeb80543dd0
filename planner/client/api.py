"""
HTTP Client for the Planner API.

Async client used by the app's screens. Every request carries the
session token and the X-Frontend-ID: mobile header for log routing.
Non-2xx responses raise ApiError with the server's error code.
"""

from typing import Any

import httpx

from planner.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

FRONTEND_ID = "mobile"


def _get_client_config() -> tuple[str, float]:
    """Load backend URL and timeout from application.yaml."""
    from planner.backend.core.config import get_app_config

    client_config = get_app_config().application.client
    return client_config.backend_url, client_config.timeout


class ApiError(Exception):
    """A request the backend answered with an error status."""

    def __init__(self, status_code: int, code: str, message: str) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(f"{status_code} {code}: {message}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        """Build from the error envelope, tolerating non-JSON bodies."""
        code = "HTTP_ERROR"
        message = response.reason_phrase or "Request failed"
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                code = error.get("code", code)
                message = error.get("message", message)
            elif "detail" in body:
                message = str(body["detail"])

        return cls(response.status_code, code, message)


class PlannerClient:
    """
    HTTP client for the planner backend.

    Usage:
        client = PlannerClient(token=session_token)
        notes = await client.list_notes()
        await client.close()

    For tests, pass an httpx transport (e.g. ASGITransport) to talk to an
    in-process app.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if base_url is None or timeout is None:
            config_base_url, config_timeout = _get_client_config()
            base_url = base_url or config_base_url
            timeout = timeout if timeout is not None else config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "PlannerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"X-Frontend-ID": FRONTEND_ID}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make an HTTP request to the backend.

        Returns:
            Decoded JSON body, or None for 204 responses

        Raises:
            ApiError: If the backend answers with a non-2xx status
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()
        params = kwargs.pop("params", None)
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}

        log_with_source(logger, FRONTEND_ID, "debug", "API request", method=method, path=path)

        try:
            response = await client.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                FRONTEND_ID,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            FRONTEND_ID,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        if response.is_error:
            raise ApiError.from_response(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # -- health ---------------------------------------------------------------

    async def health(self) -> dict[str, Any]:
        return await self.request("GET", "/health")

    # -- folders --------------------------------------------------------------

    async def list_folders(self, type: str | None = None) -> list[dict[str, Any]]:
        return await self.request("GET", "/api/folders", params={"type": type})

    async def create_folder(
        self,
        name: str,
        type: str,
        color: str | None = None,
        icon: str | None = None,
    ) -> dict[str, Any]:
        body = {"name": name, "type": type, "color": color, "icon": icon}
        return await self.request("POST", "/api/folders", json=_compact(body))

    async def update_folder(self, folder_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/api/folders/{folder_id}", json=changes)

    async def delete_folder(self, folder_id: str) -> None:
        await self.request("DELETE", f"/api/folders/{folder_id}")

    # -- notes ----------------------------------------------------------------

    async def list_notes(self, folder_id: str | None = None) -> list[dict[str, Any]]:
        return await self.request("GET", "/api/notes", params={"folderId": folder_id})

    async def get_note(self, note_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/api/notes/{note_id}")

    async def create_note(
        self,
        title: str,
        content: str | None = None,
        folder_id: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        body = {"title": title, "content": content, "folderId": folder_id, "tags": tags}
        return await self.request("POST", "/api/notes", json=_compact(body))

    async def update_note(self, note_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/api/notes/{note_id}", json=changes)

    async def delete_note(self, note_id: str) -> None:
        await self.request("DELETE", f"/api/notes/{note_id}")

    # -- media ----------------------------------------------------------------

    async def upload_media(
        self,
        note_id: str,
        filename: str,
        data: bytes,
        content_type: str,
    ) -> dict[str, Any]:
        files = {"file": (filename, data, content_type)}
        return await self.request("POST", f"/api/notes/{note_id}/media", files=files)

    async def list_media(self, note_id: str) -> list[dict[str, Any]]:
        return await self.request("GET", f"/api/notes/{note_id}/media")

    async def delete_media(self, media_id: str) -> None:
        await self.request("DELETE", f"/api/media/{media_id}")

    # -- appointments ---------------------------------------------------------

    async def list_appointments(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {"startDate": start_date, "endDate": end_date}
        return await self.request("GET", "/api/appointments", params=params)

    async def create_appointment(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/api/appointments", json=payload)

    async def update_appointment(self, appointment_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/api/appointments/{appointment_id}", json=changes)

    async def delete_appointment(self, appointment_id: str) -> None:
        await self.request("DELETE", f"/api/appointments/{appointment_id}")

    # -- diet -----------------------------------------------------------------

    async def list_diet_entries(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        folder_id: str | None = None,
    ) -> list[dict[str, Any]]:
        params = {"startDate": start_date, "endDate": end_date, "folderId": folder_id}
        return await self.request("GET", "/api/diet", params=params)

    async def create_diet_entry(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/api/diet", json=payload)

    async def update_diet_entry(self, entry_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/api/diet/{entry_id}", json=changes)

    async def delete_diet_entry(self, entry_id: str) -> None:
        await self.request("DELETE", f"/api/diet/{entry_id}")

    # -- diet plans -----------------------------------------------------------

    async def list_diet_plans(self) -> list[dict[str, Any]]:
        return await self.request("GET", "/api/diet-plans")

    async def get_active_diet_plan(self) -> dict[str, Any] | None:
        """The active plan, or None when the user has none."""
        try:
            return await self.request("GET", "/api/diet-plans/active")
        except ApiError as e:
            if e.is_not_found:
                return None
            raise

    async def create_diet_plan(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/api/diet-plans", json=payload)

    async def update_diet_plan(self, plan_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/api/diet-plans/{plan_id}", json=changes)

    async def delete_diet_plan(self, plan_id: str) -> None:
        await self.request("DELETE", f"/api/diet-plans/{plan_id}")

    # -- calendar -------------------------------------------------------------

    async def calendar_events(self, start_date: str, end_date: str) -> dict[str, Any]:
        params = {"startDate": start_date, "endDate": end_date}
        return await self.request("GET", "/api/calendar/events", params=params)

    async def calendar_day(self, date: str) -> dict[str, Any]:
        return await self.request("GET", f"/api/calendar/day/{date}")

    async def calendar_month(self, year_month: str) -> dict[str, Any]:
        return await self.request("GET", f"/api/calendar/month/{year_month}")


def _compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop keys the caller left unset so server defaults apply."""
    return {k: v for k, v in body.items() if v is not None}


# Failures a screen turns into a user-visible notice
REQUEST_ERRORS = (ApiError, httpx.HTTPError)
