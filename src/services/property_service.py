"""Property listings service backed by the Supabase properties table."""

import math
import re
from typing import Optional

from src.models.property import (
    Pagination,
    Property,
    PropertyCreate,
    PropertyPage,
    PropertyQuery,
    PropertyUpdate,
)
from src.services.supabase_client import delete_row, fetch_row, insert_row, search_rows, update_row
from src.utils.errors import InvalidRequestError, NotFoundError
from src.utils.ids import new_id, utc_now
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

PROPERTIES_TABLE = "properties"
SEARCH_COLUMNS = ("name", "description", "address")

# Commas and parentheses delimit PostgREST or-filters.
_FILTER_SYNTAX = re.compile(r"[,()]")


def clean_search(search: Optional[str]) -> Optional[str]:
    if not search:
        return None
    cleaned = _FILTER_SYNTAX.sub(" ", search).strip()
    return cleaned or None


def _not_found() -> NotFoundError:
    return NotFoundError("Property not found", code="PROPERTY_NOT_FOUND")


class PropertyService:
    """Listing CRUD and paged search."""

    async def list_properties(self, query: PropertyQuery) -> PropertyPage:
        filters = {"is_listed": query.is_listed} if query.is_listed is not None else None
        rows, total = await search_rows(
            PROPERTIES_TABLE,
            filters=filters,
            search=clean_search(query.search),
            search_columns=SEARCH_COLUMNS,
            order_by=query.sort_by.value,
            descending=query.sort_order == "desc",
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )
        return PropertyPage(
            properties=[Property.model_validate(row) for row in rows],
            pagination=Pagination(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=math.ceil(total / query.limit),
            ),
        )

    async def get_property(self, property_id: str) -> Property:
        row = await fetch_row(PROPERTIES_TABLE, "id", property_id)
        if row is None:
            raise _not_found()
        return Property.model_validate(row)

    async def create_property(self, data: PropertyCreate) -> Property:
        """New properties start unlisted."""
        if not data.has_required_fields():
            raise InvalidRequestError("Missing required fields")

        now = utc_now().isoformat()
        record = {
            **data.model_dump(),
            "id": new_id(),
            "is_listed": False,
            "created_at": now,
            "updated_at": now,
        }
        row = await insert_row(PROPERTIES_TABLE, record)
        logger.info("Property created", property_id=row.get("id"), owner=data.owner)
        return Property.model_validate(row)

    async def update_property(self, property_id: str, updates: PropertyUpdate) -> Property:
        changes = updates.model_dump(exclude_unset=True)
        changes["updated_at"] = utc_now().isoformat()

        row = await update_row(PROPERTIES_TABLE, "id", property_id, changes)
        if row is None:
            raise _not_found()

        logger.info("Property updated", property_id=property_id, fields=sorted(changes))
        return Property.model_validate(row)

    async def delete_property(self, property_id: str) -> None:
        if not await delete_row(PROPERTIES_TABLE, "id", property_id):
            raise _not_found()
        logger.info("Property deleted", property_id=property_id)
