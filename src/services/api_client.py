"""Async JSON HTTP clients for the marketplace REST API."""

from typing import Any, Optional

import httpx

from src.models.note import (
    CreateCommentRequest,
    CreateNoteRequest,
    NotePriority,
    NoteType,
    PropertyComment,
    PropertyNote,
    UpdateNoteRequest,
)
from src.utils.config import AppConfig, get_api_url
from src.utils.errors import FlowGrowError, InvalidRequestError, NotFoundError
from src.utils.logging import get_correlation_id, get_structured_logger
from src.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)


class JsonApiClient:
    """Thin JSON-over-HTTP client.

    No retries: 4xx and 5xx responses surface as ``error_class`` with the
    upstream status, transport failures as 502.
    """

    error_class: type[FlowGrowError] = FlowGrowError
    service_name = "api"

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else AppConfig.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[LoggingConfig.LOG_CORRELATION_ID_HEADER] = correlation_id
        return headers

    def _error_for_status(self, status_code: int, message: str) -> FlowGrowError:
        return self.error_class(f"{self.service_name} request failed: {message}", status_code=status_code)

    def _error_from_response(self, response: httpx.Response) -> FlowGrowError:
        try:
            body = response.json()
            message = body.get("error") if isinstance(body, dict) else None
        except ValueError:
            message = response.text
        message = message or response.reason_phrase
        return self._error_for_status(response.status_code, message)

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.request(method, url, params=params, json=json, headers=self._headers())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"{self.service_name} request rejected",
                method=method,
                path=path,
                status_code=e.response.status_code,
            )
            raise self._error_from_response(e.response)
        except httpx.HTTPError as e:
            logger.error(f"{self.service_name} unreachable", method=method, path=path, error=str(e))
            raise self.error_class(f"{self.service_name} unreachable: {e}", status_code=502)

        if not response.content:
            return None
        return response.json()


class NotesApiError(FlowGrowError):
    """Notes API call failed."""
    code = "NOTES_API_ERROR"


class NotesApiClient(JsonApiClient):
    """Client for the /notes and /comments routes."""

    error_class = NotesApiError
    service_name = "Notes API"

    def __init__(self, base_url: Optional[str] = None, **kwargs: Any):
        super().__init__(base_url or get_api_url(), **kwargs)

    def _error_for_status(self, status_code: int, message: str) -> FlowGrowError:
        if status_code == 404:
            return NotFoundError(message)
        if status_code == 400:
            return InvalidRequestError(message)
        return super()._error_for_status(status_code, message)

    async def get_notes(
        self,
        property_id: Optional[str] = None,
        user_id: Optional[str] = None,
        type: Optional[NoteType] = None,
        priority: Optional[NotePriority] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> dict[str, Any]:
        data = await self.request("GET", "/notes", params={
            "propertyId": property_id,
            "userId": user_id,
            "type": type.value if type else None,
            "priority": priority.value if priority else None,
            "search": search,
            "page": page,
            "limit": limit,
        })
        data["notes"] = [PropertyNote.model_validate(note) for note in data.get("notes", [])]
        return data

    async def create_note(self, request: CreateNoteRequest) -> PropertyNote:
        data = await self.request("POST", "/notes", json=request.model_dump(mode="json", exclude_none=True))
        return PropertyNote.model_validate(data)

    async def update_note(self, note_id: str, request: UpdateNoteRequest) -> PropertyNote:
        data = await self.request(
            "PUT", f"/notes/{note_id}", json=request.model_dump(mode="json", exclude_unset=True)
        )
        return PropertyNote.model_validate(data)

    async def delete_note(self, note_id: str) -> None:
        await self.request("DELETE", f"/notes/{note_id}")

    async def get_comments(self, property_id: str, user_id: Optional[str] = None) -> list[PropertyComment]:
        data = await self.request("GET", "/comments", params={"propertyId": property_id, "userId": user_id})
        return [PropertyComment.model_validate(comment) for comment in data.get("comments", [])]

    async def create_comment(self, request: CreateCommentRequest) -> PropertyComment:
        data = await self.request("POST", "/comments", json=request.model_dump(mode="json", exclude_none=True))
        return PropertyComment.model_validate(data)
