"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock, patch

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-key")
os.environ.setdefault("API_URL", "https://api.test/api")
os.environ.setdefault("GOVERNANCE_API_URL", "https://governance.test")
os.environ.setdefault("MOCK_USER_ID", "user1")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from src.services.notes_service import reset_notes_service  # noqa: E402
from src.services.saved_searches import get_saved_search_store  # noqa: E402


@pytest.fixture(autouse=True)
def reset_in_memory_stores():
    """Every test starts from the seeded notes and an empty saved search store."""
    get_saved_search_store().clear()
    reset_notes_service()
    yield
    get_saved_search_store().clear()
    reset_notes_service()


@pytest.fixture
def supabase_query():
    """Chainable Supabase query; set ``execute.return_value`` per test."""
    query = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "or_", "order", "limit", "range"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    return query


@pytest.fixture
def mock_supabase(supabase_query):
    """Patch the Supabase context manager used by the table helpers."""
    client = MagicMock()
    client.table.return_value = supabase_query

    with patch("src.services.supabase_client.SupabaseClient") as mock_client_class:
        mock_client_class.return_value.__aenter__.return_value = client
        mock_client_class.return_value.__aexit__.return_value = False
        yield client

