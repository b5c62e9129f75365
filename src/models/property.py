"""Property listing models (Supabase table: properties)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.utils.ids import UtcDatetime


class PropertySortField(str, Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    NAME = "name"
    PRICE = "price"
    SQUARE_FOOTAGE = "square_footage"


class Property(BaseModel):
    """A tokenized property as stored in the listings table."""
    id: str = Field(..., description="Property ID (text)")
    name: str
    description: str
    address: str
    square_footage: float = Field(..., description="Interior area in square feet")
    price: float = Field(..., description="Asking price")
    owner: str = Field(..., description="Owner wallet address or user id")
    token_id: Optional[str] = None
    contract_address: Optional[str] = None
    image_url: Optional[str] = None
    is_listed: bool = False
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class PropertyCreate(BaseModel):
    """Listing form; the front end posts camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    square_footage: Optional[float] = None
    price: Optional[float] = None
    owner: Optional[str] = None
    token_id: Optional[str] = None
    contract_address: Optional[str] = None
    image_url: Optional[str] = None

    def has_required_fields(self) -> bool:
        return all((self.name, self.description, self.address, self.square_footage, self.price, self.owner))


class PropertyUpdate(BaseModel):
    """Editable listing details. Price and listing status are not editable here."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    square_footage: Optional[float] = None
    owner: Optional[str] = None
    token_id: Optional[str] = None
    contract_address: Optional[str] = None
    image_url: Optional[str] = None


class PropertyQuery(BaseModel):
    search: Optional[str] = None
    is_listed: Optional[bool] = None
    sort_by: PropertySortField = PropertySortField.CREATED_AT
    sort_order: str = Field(default="desc", pattern="^(asc|desc)$")
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PropertyPage(BaseModel):
    properties: list[Property]
    pagination: Pagination
