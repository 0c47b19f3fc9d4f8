"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints. Attributes are
snake_case in Python and camelCase on the wire (``distanceFromUniv``,
``contactInfo``...); both spellings are accepted on input.
"""
from typing import Optional, List, Literal
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _strip(value):
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value):
    value = _strip(value)
    if value == "":
        return None
    return value


class ListingBase(CamelModel):
    """Listing fields shared by requests and responses."""
    distance_from_univ: float = Field(..., ge=0, description="Distance from the university in miles")
    rent: float = Field(..., ge=0, description="Monthly rent (USD)")
    description: Optional[str] = None
    number_of_rooms: float = Field(..., ge=0)
    number_of_bathrooms: float = Field(..., ge=0)
    square_foot: float = Field(..., ge=0)
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @field_validator("description", mode="before")
    @classmethod
    def trim_description(cls, value):
        return _strip(value)


class ListingCreate(ListingBase):
    """Request body for creating or replacing a listing."""


class ListingRead(ListingBase):
    """Listing as returned inside a lister."""


class ListingOverviewItem(ListingBase):
    """Listing in the marketplace overview, addressed by owner and index."""
    lister_username: str
    index: int


class ContactInfo(CamelModel):
    """Contact block of a lister."""
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None
    preferred_contact: Literal["email", "phone"] = "email"

    @field_validator("email", mode="before")
    @classmethod
    def trim_email(cls, value):
        return _strip(value)

    @field_validator("phone", mode="before")
    @classmethod
    def trim_phone(cls, value):
        return _blank_to_none(value)


class ListerBase(CamelModel):
    """Lister profile fields."""
    name: str = Field(..., min_length=1)
    profile: Optional[str] = None
    default_pic: Optional[str] = None
    contact_info: ContactInfo

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value):
        return _strip(value)


class ListerCreate(ListerBase):
    """Registration request."""
    username: str = Field(..., min_length=1, max_length=100)
    password: Optional[str] = Field(None, min_length=1)
    listings: List[ListingCreate] = Field(default_factory=list)

    @field_validator("username", mode="before")
    @classmethod
    def trim_username(cls, value):
        return _strip(value)


class ListerUpdate(CamelModel):
    """Profile update request; omitted fields are left unchanged."""
    name: Optional[str] = Field(None, min_length=1)
    profile: Optional[str] = None
    default_pic: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def trim_name(cls, value):
        return _strip(value)


class ListerRead(ListerBase):
    """Lister as returned by the API. Never carries the password."""
    username: str
    listings: List[ListingRead] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ListerSummary(CamelModel):
    """Lister row for list views."""
    username: str
    name: str
    default_pic: Optional[str] = None
    listing_count: int = 0


class MessageResponse(BaseModel):
    """Plain message body, also the shape of every error response."""
    message: str


class HealthCheck(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "0.1.0"
    database: str = "connected"
    timestamp: datetime
