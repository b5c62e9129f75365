"""Saved search models."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class SavedSearch(BaseModel):
    """A listing search a user chose to keep."""
    id: str = Field(..., description="Saved search ID (ULID)")
    name: str = Field(..., description="Display name")
    criteria: dict[str, Any] = Field(..., description="Listing filter criteria")
    notifications: bool = Field(default=True, description="Notify on new matches")
    created_at: datetime
    updated_at: Optional[datetime] = None


class SavedSearchCreate(BaseModel):
    name: Optional[str] = None
    criteria: Optional[dict[str, Any]] = None
    notifications: bool = True


class SavedSearchUpdate(BaseModel):
    name: Optional[str] = None
    criteria: Optional[dict[str, Any]] = None
    notifications: Optional[bool] = None
