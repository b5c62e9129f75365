"""Test helper functions."""

import json
from typing import Any, Dict, Optional


def create_vercel_request(
    method: str = "GET",
    path: str = "/api/health",
    body: Any = None,
    headers: Dict[str, str] = None,
    query: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create a Vercel request object for testing."""
    if headers is None:
        headers = {
            "content-type": "application/json"
        }

    if body is None:
        encoded = ""
    elif isinstance(body, (dict, list)):
        encoded = json.dumps(body)
    else:
        encoded = body

    return {
        "method": method,
        "path": path,
        "headers": headers,
        "body": encoded,
        "query": query or {},
    }


def response_json(response: Dict[str, Any]) -> Any:
    """Decode the JSON body of a Vercel function response."""
    return json.loads(response["body"])
