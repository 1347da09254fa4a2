# laundry_service/schemas.py

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # JSON uses camelCase, Python attributes stay snake_case
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Customer accounts ---
class CustomerSignup(CamelModel):
    name: str = Field(..., min_length=1, description="Display name of the customer.")
    phone: str = Field(
        ...,
        min_length=6,
        max_length=20,
        description="Phone number; whitespace and hyphens are ignored.",
    )
    password: str = Field(..., min_length=4, description="Customer's password.")


class CustomerLogin(CamelModel):
    phone: str = Field(..., min_length=6, description="Registered phone number.")
    password: str = Field(..., min_length=4, description="Customer's password.")


class CustomerIdentity(CamelModel):
    """The public view of an account, also stored in the session."""

    id: str
    name: str
    phone: str


# --- Catalog ---
class ServiceResponse(CamelModel):
    id: str
    title: str
    description: str
    price_inr: int


class BeforeAfterItemResponse(CamelModel):
    id: str
    title: str
    before_image_url: str
    after_image_url: str


# --- Bookings ---
class BookingCreate(CamelModel):
    booking_date: str = Field(..., min_length=1, description="Pickup date, e.g. 2024-05-01.")
    booking_time: str = Field(..., min_length=1, description="Pickup time, e.g. 10:00.")
    address: str = Field(..., min_length=8, description="Pickup address.")
    landmark: Optional[str] = Field(None, description="Nearby landmark, optional.")
    city: str = Field(..., min_length=2, description="City of the pickup address.")


class BookingCreated(CamelModel):
    id: str


class BookingResponse(CamelModel):
    id: str
    customer_id: str
    booking_date: str
    booking_time: str
    address: str
    landmark: Optional[str] = None
    city: str
    status: Literal["pending", "confirmed", "completed", "cancelled"]
    created_at: Optional[datetime] = None


# --- Error bodies ---
class ValidationErrorResponse(BaseModel):
    message: str
    field: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
