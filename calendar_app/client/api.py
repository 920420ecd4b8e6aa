from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from calendar_app.config import settings
from calendar_app.domain.schemas.event import EventOut

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


class EventsApiClient:
    """Thin synchronous client for the ``/api/events`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        try:
            response = self.http.request(method, self._url(path), json=json)
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiError(str(exc)) from exc
        if response.is_error:
            message = _error_message(response)
            logger.error("%s %s returned %s: %s", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise ApiError("Malformed response from server", status_code=response.status_code) from exc

    def _parse_event(self, data: Any) -> EventOut:
        try:
            return EventOut.model_validate(data)
        except PydanticValidationError as exc:
            logger.error("Unexpected event payload: %s", exc)
            raise ApiError("Malformed event in server response") from exc

    def fetch_events(self) -> list[EventOut]:
        data = self._request("GET", "/events")
        if not isinstance(data, list):
            raise ApiError("Malformed event list in server response")
        return [self._parse_event(item) for item in data]

    def get_event(self, event_id: str) -> EventOut:
        return self._parse_event(self._request("GET", f"/events/{event_id}"))

    def create_event(self, payload: dict[str, Any]) -> EventOut:
        return self._parse_event(self._request("POST", "/events", json=payload))

    def update_event(self, event_id: str, payload: dict[str, Any]) -> EventOut:
        return self._parse_event(self._request("PUT", f"/events/{event_id}", json=payload))

    def delete_event(self, event_id: str) -> dict[str, str]:
        data = self._request("DELETE", f"/events/{event_id}")
        if not isinstance(data, dict):
            raise ApiError("Malformed response from server")
        return {"message": data.get("message", "")}

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "EventsApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
