"""Request and response helpers shared by the Vercel function handlers."""

import asyncio
import json
import math
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from src.utils.errors import FlowGrowError, InvalidRequestError
from src.utils.logging import StructuredLogger, correlation_context
from src.utils.logging_config import LoggingConfig


JSON_HEADERS = {"Content-Type": "application/json"}

Route = tuple[Callable[[dict], dict], str]


def json_response(status_code: int, payload: Any, headers: Optional[dict] = None) -> dict:
    """Build a Vercel response dict with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": {**JSON_HEADERS, **(headers or {})},
        "body": json.dumps(payload, default=str),
    }


def error_response(status_code: int, message: str, **fields: Any) -> dict:
    return json_response(status_code, {"error": message, **fields})


def get_method(request: dict) -> str:
    return (request.get("method") or "GET").upper()


def get_header(request: dict, name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    headers = request.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_query(request: dict) -> dict:
    """Flatten query params; repeated keys keep their first value."""
    query = request.get("query") or {}
    flat = {}
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        flat[key] = value
    return flat


def query_param(request: dict, *names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty query param among the given aliases."""
    query = get_query(request)
    for name in names:
        value = query.get(name)
        if value not in (None, ""):
            return value
    return default


def int_param(request: dict, *names: str, default: Optional[int]) -> Optional[int]:
    value = query_param(request, *names)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"Invalid value for {names[0]}: {value}")


def float_param(request: dict, *names: str) -> Optional[float]:
    value = query_param(request, *names)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidRequestError(f"Invalid value for {names[0]}: {value}")


def bool_param(request: dict, *names: str) -> Optional[bool]:
    value = query_param(request, *names)
    if value is None:
        return None
    return str(value).lower() in ("true", "1", "yes")


def list_param(request: dict, *names: str) -> Optional[list[str]]:
    """Comma separated list param."""
    value = query_param(request, *names)
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_json_body(request: dict) -> dict:
    """Decode the request body into a JSON object."""
    body = request.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, dict):
        return body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        raise InvalidRequestError("Invalid JSON body")
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def dump(value: Any) -> Any:
    """Serialize models (or lists of models) for a JSON response."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [dump(item) for item in value]
    return value


def paginate(items: list, page: int, limit: int) -> tuple[list, dict]:
    """Slice a list for page-based pagination (pages start at 1)."""
    page = max(page, 1)
    limit = max(limit, 1)
    total = len(items)
    start = (page - 1) * limit
    meta = {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if total else 0,
    }
    return items[start:start + limit], meta


def run_async(coro):
    """Run a coroutine to completion from a synchronous handler."""
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = None

    if loop is None or loop.is_closed():
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

    return loop.run_until_complete(coro)


def validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def error_to_response(error: Exception, failure_message: str, logger: StructuredLogger) -> dict:
    """Map an exception raised by a route to its HTTP response."""
    if isinstance(error, ValidationError):
        return error_response(400, "Invalid request", details=validation_messages(error))

    if isinstance(error, InvalidRequestError):
        return error_response(400, error.message, details=error.errors)

    if isinstance(error, FlowGrowError) and error.status_code < 500:
        return error_response(error.status_code, error.message)

    status_code = error.status_code if isinstance(error, FlowGrowError) else 500
    logger.error(failure_message, exc_info=True, error=str(error), error_type=type(error).__name__)
    return error_response(status_code, failure_message)


def handle_request(request: dict, routes: dict[str, Route], logger: StructuredLogger) -> dict:
    """Dispatch a request by HTTP method inside a correlation context."""
    LoggingConfig.setup_logging()
    method = get_method(request)
    header = LoggingConfig.LOG_CORRELATION_ID_HEADER

    with correlation_context(get_header(request, header)) as correlation_id:
        route = routes.get(method)
        if route is None:
            response = error_response(405, f"Method {method} not allowed")
        else:
            func, failure_message = route
            logger.debug("Handling request", method=method, path=request.get("path"))
            try:
                response = func(request)
            except Exception as e:
                response = error_to_response(e, failure_message, logger)

        response["headers"][header] = correlation_id
        return response
