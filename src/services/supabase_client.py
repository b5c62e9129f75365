"""Supabase client wrapper with async context manager support and table helpers."""

from typing import Any, Optional

from supabase import create_client, Client
from supabase.client import ClientOptions

from src.utils.config import get_supabase_settings
from src.utils.errors import SupabaseError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url, key = get_supabase_settings()

        # Serverless functions never hold a user session
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", url=url)

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                error_type=exc_type.__name__,
            )
        return False


def first_row(result: Any) -> Optional[dict]:
    """Return the first row of a query result, if any."""
    return result.data[0] if result.data and len(result.data) > 0 else None


async def fetch_rows(
    table: str,
    filters: Optional[dict[str, Any]] = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> list[dict]:
    """Select rows matching equality filters."""
    async with SupabaseClient() as client:
        try:
            query = client.table(table).select("*")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit:
                query = query.limit(limit)
            result = query.execute()
            return result.data if result.data else []
        except Exception as e:
            raise SupabaseError(f"Failed to fetch {table}: {e}")


async def fetch_row(table: str, column: str, value: Any) -> Optional[dict]:
    """Select a single row by column value."""
    async with SupabaseClient() as client:
        try:
            result = client.table(table).select("*").eq(column, value).limit(1).execute()
            return first_row(result)
        except Exception as e:
            raise SupabaseError(f"Failed to fetch {table} row: {e}")


async def insert_row(table: str, data: dict) -> dict:
    """Insert a row and return it as stored."""
    async with SupabaseClient() as client:
        try:
            result = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to insert into {table}: {e}")

        row = first_row(result)
        if row is None:
            raise SupabaseError(f"Failed to insert into {table}: no row returned")
        return row


async def update_row(table: str, column: str, value: Any, updates: dict) -> Optional[dict]:
    """Update rows matching column value; returns the first updated row or None."""
    async with SupabaseClient() as client:
        try:
            result = client.table(table).update(updates).eq(column, value).execute()
            return first_row(result)
        except Exception as e:
            raise SupabaseError(f"Failed to update {table}: {e}")


async def search_rows(
    table: str,
    filters: Optional[dict[str, Any]] = None,
    search: Optional[str] = None,
    search_columns: tuple[str, ...] = (),
    order_by: Optional[str] = None,
    descending: bool = False,
    offset: int = 0,
    limit: Optional[int] = None,
) -> tuple[list[dict], int]:
    """Select a page of rows, optionally matching ``search`` in any of the
    given columns (case-insensitive). Returns the page and the total count
    of matching rows."""
    async with SupabaseClient() as client:
        try:
            query = client.table(table).select("*", count="exact")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if search and search_columns:
                query = query.or_(",".join(f"{column}.ilike.%{search}%" for column in search_columns))
            if order_by:
                query = query.order(order_by, desc=descending)
            if limit:
                query = query.range(offset, offset + limit - 1)
            result = query.execute()
            rows = result.data if result.data else []
            return rows, result.count if result.count is not None else len(rows)
        except Exception as e:
            raise SupabaseError(f"Failed to search {table}: {e}")


async def delete_row(table: str, column: str, value: Any) -> bool:
    """Delete rows matching column value; True when something was removed."""
    async with SupabaseClient() as client:
        try:
            result = client.table(table).delete().eq(column, value).execute()
            return bool(result.data)
        except Exception as e:
            raise SupabaseError(f"Failed to delete from {table}: {e}")
