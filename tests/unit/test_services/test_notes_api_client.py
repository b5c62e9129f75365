"""Tests for the notes REST client."""

import json

import httpx
import pytest

from src.models.note import CreateNoteRequest, NoteType, UpdateNoteRequest
from src.services.api_client import NotesApiClient, NotesApiError
from src.utils.errors import InvalidRequestError, NotFoundError

BASE_URL = "https://api.test/api"

NOTE = {
    "id": "note-1",
    "property_id": "property-1",
    "user_id": "user-1",
    "title": "First viewing notes",
    "content": "Great location",
    "type": "viewing",
    "created_at": "2024-01-15T00:00:00+00:00",
    "updated_at": "2024-01-15T00:00:00+00:00",
}


def _client(handler) -> NotesApiClient:
    return NotesApiClient(BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_notes_sends_camel_case_params_and_drops_empty():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"notes": [NOTE], "total": 1, "page": 1, "limit": 10})

    data = await _client(handler).get_notes(property_id="property-1", type=NoteType.VIEWING)

    assert seen["url"].path == "/api/notes"
    assert seen["url"].params["propertyId"] == "property-1"
    assert seen["url"].params["type"] == "viewing"
    assert "userId" not in seen["url"].params
    assert data["total"] == 1
    assert data["notes"][0].id == "note-1"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_note_posts_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json=NOTE)

    note = await _client(handler).create_note(
        CreateNoteRequest(property_id="property-1", title="First viewing notes", content="Great location")
    )

    assert seen["method"] == "POST"
    assert seen["body"]["property_id"] == "property-1"
    assert "rating" not in seen["body"]
    assert note.title == "First viewing notes"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_note_sends_only_set_fields():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={**NOTE, "title": "Renamed"})

    note = await _client(handler).update_note("note-1", UpdateNoteRequest(title="Renamed"))

    assert seen["path"] == "/api/notes/note-1"
    assert seen["body"] == {"title": "Renamed"}
    assert note.title == "Renamed"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_note_with_empty_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    assert await _client(handler).delete_note("note-1") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_correlation_id_is_forwarded(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["correlation"] = request.headers.get("X-Correlation-ID")
        return httpx.Response(200, json={"comments": []})

    monkeypatch.setattr("src.services.api_client.get_correlation_id", lambda: "req_abc")

    assert await _client(handler).get_comments("property-1") == []
    assert seen["correlation"] == "req_abc"


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("status,error_class", [
    (404, NotFoundError),
    (400, InvalidRequestError),
    (500, NotesApiError),
])
async def test_error_statuses_map_to_errors(status, error_class):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"error": "Note not found"})

    with pytest.raises(error_class) as exc_info:
        await _client(handler).delete_note("missing")

    assert exc_info.value.status_code == status
    assert "Note not found" in exc_info.value.message


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_json_error_body_uses_text():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream down")

    with pytest.raises(NotesApiError, match="upstream down"):
        await _client(handler).get_comments("property-1")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_transport_failure_is_bad_gateway():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotesApiError) as exc_info:
        await _client(handler).get_comments("property-1")

    assert exc_info.value.status_code == 502
    assert "unreachable" in exc_info.value.message
