"""End-to-end flow through the notes, comments and analytics handlers."""

import pytest

from api.comments.index import handler as comments_handler
from api.comments.item import handler as comment_handler
from api.notes.analytics import handler as analytics_handler
from api.notes.index import handler as notes_handler
from api.saved_searches.index import handler as saved_searches_handler
from tests.utils.assertions import assert_valid_response
from tests.utils.helpers import create_vercel_request, response_json

PROPERTY_ID = "property-77"


@pytest.mark.integration
def test_property_discussion_flow():
    """A user saves a search, takes notes, and discusses a property."""
    saved = saved_searches_handler(create_vercel_request("POST", "/api/saved-searches", body={
        "name": "Sunset two-beds", "criteria": {"neighborhood": "Sunset", "bedrooms": 2},
    }))
    assert_valid_response(saved, 201)

    for title, content, note_type in (
        ("Walkthrough", "Bright rooms and a tiny yard", "viewing"),
        ("Budget", "Offer ceiling is list plus five percent", "financial"),
    ):
        created = notes_handler(create_vercel_request("POST", "/api/notes", body={
            "property_id": PROPERTY_ID, "title": title, "content": content, "type": note_type, "tags": ["sunset"],
        }))
        assert_valid_response(created, 201)

    root = response_json(comments_handler(create_vercel_request("POST", "/api/comments", body={
        "property_id": PROPERTY_ID, "content": "Is street parking easy here?",
    })))
    reply = response_json(comments_handler(create_vercel_request("POST", "/api/comments", body={
        "property_id": PROPERTY_ID, "content": "Mostly, except on weekends.", "parent_id": root["id"],
    })))

    for comment_id in (root["id"], reply["id"]):
        approved = comment_handler(create_vercel_request(
            "PATCH", f"/api/comments/{comment_id}", body={"action": "approve"}, query={"id": comment_id},
        ))
        assert_valid_response(approved)
    comment_handler(create_vercel_request(
        "PATCH", f"/api/comments/{reply['id']}", body={"action": "like"}, query={"id": reply["id"]},
    ))

    thread = response_json(comments_handler(create_vercel_request(
        "GET", "/api/comments", query={"propertyId": PROPERTY_ID},
    )))
    assert [c["id"] for c in thread["comments"]] == [root["id"]]
    assert thread["comments"][0]["replies"][0]["likes"] == 1

    analytics = response_json(analytics_handler(create_vercel_request(
        "GET", "/api/notes/analytics", query={"propertyId": PROPERTY_ID},
    )))
    assert analytics["notes"]["total_notes"] == 2
    assert analytics["notes"]["notes_by_type"]["viewing"] == 1
    assert analytics["notes"]["most_used_tags"][0] == {"tag": "sunset", "count": 2}
    assert analytics["comments"]["approved_comments"] == 2
    assert analytics["comments"]["pending_comments"] == 0
    assert analytics["comments"]["engagement_metrics"]["total_likes"] == 1
    assert analytics["notes"]["recent_activity"][-1]["notes_created"] == 2
    assert analytics["notes"]["recent_activity"][-1]["comments_created"] == 2
