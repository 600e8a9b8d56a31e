"""
Pydantic models for data validation and serialization.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class LaunchPad(BaseModel):
    """Launch pad as returned by the SpaceX API."""
    id: str = Field(..., description="Upstream launch pad identifier", min_length=1)
    name: Optional[str] = Field(None, description="Short pad name")
    full_name: Optional[str] = Field(None, description="Full pad name")
    locality: Optional[str] = Field(None, description="Locality of the pad")
    region: Optional[str] = Field(None, description="Region of the pad")
    status: Optional[str] = Field(None, description="Operational status reported upstream")

    class Config:
        """Pydantic configuration."""
        frozen = True


class Launch(BaseModel):
    """A single scheduled or completed launch."""
    name: str = Field(..., description="Mission name")
    date_utc: datetime = Field(..., description="Launch time in UTC")
    launchpad: str = Field(..., description="Identifier of the pad the launch uses")
    success: bool = Field(False, description="Whether the launch succeeded")

    @field_validator('success', mode='before')
    @classmethod
    def default_missing_success(cls, v):
        """Upcoming launches carry a null success flag."""
        return False if v is None else v

    class Config:
        """Pydantic configuration."""
        frozen = True


class DateRange(BaseModel):
    """Mongo-style date range used by the launches query endpoint."""
    gte: str = Field(..., alias="$gte")
    lt: str = Field(..., alias="$lt")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True


class LaunchQuery(BaseModel):
    """Launchpad and date filter for the /launches/query endpoint."""
    launchpad: str
    date_utc: DateRange


class LaunchQueryOptions(BaseModel):
    """Options for the /launches/query endpoint."""
    limit: int = Field(5, ge=1)


class LaunchQueryRequest(BaseModel):
    """Request body for the /launches/query endpoint."""
    query: LaunchQuery
    options: LaunchQueryOptions = Field(default_factory=LaunchQueryOptions)


class LaunchQueryResponse(BaseModel):
    """Paginated response of the /launches/query endpoint; only docs are used."""
    docs: List[Launch] = Field(default_factory=list)


class Gender(str, Enum):
    """Accepted gender values for a booking."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class BookingCreate(BaseModel):
    """Request body for creating a booking."""
    first_name: str = Field(..., description="First name", min_length=1, max_length=255)
    last_name: str = Field(..., description="Last name", min_length=1, max_length=255)
    gender: Gender = Field(..., description="Gender: male, female or other")
    birthday: date = Field(..., description="Birthday, YYYY-MM-DD")
    launch_pad_id: str = Field(..., description="SpaceX launch pad identifier", min_length=1, max_length=255)
    destination_id: str = Field(..., description="Destination identifier", min_length=1, max_length=255)
    launch_date: date = Field(..., description="Requested launch date, YYYY-MM-DD")

    @field_validator('first_name', 'last_name', 'launch_pad_id', 'destination_id')
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        """Reject values that are only whitespace."""
        v = v.strip()
        if not v:
            raise ValueError('Value cannot be blank')
        return v

    @field_validator('birthday', 'launch_date', mode='before')
    @classmethod
    def validate_date_format(cls, v):
        """Dates must be sent as YYYY-MM-DD strings."""
        if isinstance(v, str):
            try:
                return date.fromisoformat(v)
            except ValueError:
                raise ValueError('Invalid date, accepted format: YYYY-MM-DD')
        return v

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class BookingFilters(BaseModel):
    """Optional filters for listing bookings."""
    launch_date: Optional[date] = None
    launch_pad_id: Optional[str] = None
    destination_id: Optional[str] = None


class BookingResponse(BaseModel):
    """A persisted booking."""
    id: str = Field(..., description="Booking identifier")
    first_name: str
    last_name: str
    gender: str
    birthday: date
    launch_pad_id: str
    destination_id: str
    launch_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic configuration."""
        from_attributes = True


class CreateBookingResponse(BaseModel):
    """Response for a created booking."""
    booking: BookingResponse


class ListBookingsResponse(BaseModel):
    """Response for a booking listing."""
    bookings: List[BookingResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
