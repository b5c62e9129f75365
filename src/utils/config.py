"""Environment-driven application settings."""

import os
from typing import Optional

from src.utils.errors import ConfigurationError


class AppConfig:
    """Static application settings."""

    SERVICE_NAME = "flowgrow-api"
    MOCK_USER_ID = os.environ.get("MOCK_USER_ID", "user1")
    CURRENT_USER_ID = "current-user"
    HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))
    DEFAULT_API_URL = "http://localhost:3000/api"


class PropertyManagementConfig:
    """Defaults applied to managed properties."""

    RENT_DUE_DAY = int(os.environ.get("RENT_DUE_DAY", "1"))
    LATE_FEE_PERCENTAGE = float(os.environ.get("LATE_FEE_PERCENTAGE", "0.05"))
    MAINTENANCE_FUND_PERCENTAGE = float(os.environ.get("MAINTENANCE_FUND_PERCENTAGE", "0.1"))
    MAX_TENANTS = int(os.environ.get("MAX_TENANTS", "4"))
    LEASE_DURATION_DAYS = int(os.environ.get("LEASE_DURATION_DAYS", "365"))


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def get_supabase_settings() -> tuple[str, str]:
    """Return the Supabase URL and key, preferring the public client names."""
    url = _first_env("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL")
    key = _first_env(
        "NEXT_PUBLIC_SUPABASE_ANON_KEY",
        "SUPABASE_ANON_KEY",
        "SUPABASE_SERVICE_ROLE_KEY",
    )

    if not url or not key:
        raise ConfigurationError(
            "NEXT_PUBLIC_SUPABASE_URL and NEXT_PUBLIC_SUPABASE_ANON_KEY must be set"
        )
    return url, key


def get_api_url() -> str:
    """Base URL of the marketplace REST API."""
    url = _first_env("NEXT_PUBLIC_API_URL", "API_URL") or AppConfig.DEFAULT_API_URL
    return url.rstrip("/")


def get_governance_api_url() -> str:
    """Base URL of the external governance gateway."""
    url = os.environ.get("GOVERNANCE_API_URL") or f"{get_api_url()}/governance"
    return url.rstrip("/")
