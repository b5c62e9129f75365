"""Error handling utilities."""

from typing import Optional


class FlowGrowError(Exception):
    """Base exception for the FlowGrow marketplace API."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(FlowGrowError):
    """Required environment configuration is missing."""
    code = "CONFIGURATION_ERROR"


class SupabaseError(FlowGrowError):
    """Supabase operation error."""
    code = "SUPABASE_ERROR"


class NotFoundError(FlowGrowError):
    """Requested entity does not exist."""
    code = "NOT_FOUND"
    status_code = 404


class InvalidRequestError(FlowGrowError):
    """Request payload failed validation."""
    code = "INVALID_REQUEST"
    status_code = 400

    def __init__(self, message: str, errors: Optional[list[str]] = None, code: Optional[str] = None):
        super().__init__(message, code=code)
        self.errors = errors or [message]


class GovernanceError(FlowGrowError):
    """Governance gateway call failed or was rejected."""
    code = "GOVERNANCE_ERROR"
    status_code = 502
