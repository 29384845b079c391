"""Booking Schemas - booking creation with provider services, and booking views."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bizdesk.core.domain_types import RateType, ServiceType


class SubServiceInput(BaseModel):
    id: str
    label: str
    price: float = Field(0.0, ge=0)


class BookingServiceInput(BaseModel):
    """A provider booked on the trip. unit_price defaults to the provider's rate."""
    service_id: UUID
    service_type: ServiceType
    quantity: int = 1
    days: int = 1
    rate_type: RateType = RateType.DAILY
    unit_price: float | None = None
    sub_services: list[SubServiceInput] = Field(default_factory=list)


class BookingCreate(BaseModel):
    booking_reference: str | None = Field(None, max_length=30)
    school_id: UUID | None = None
    destination_id: UUID | None = None
    customer_name: str = Field(min_length=1, max_length=200)
    customer_phone: str | None = Field(None, max_length=30)
    trip_date: date | None = None
    number_of_students: int = 0
    number_of_crew: int = 0
    notes: str | None = None
    created_by: str | None = Field(None, max_length=64)
    services: list[BookingServiceInput] = Field(default_factory=list)


class BookingActionRequest(BaseModel):
    """Body of confirm/cancel: who performed the action."""
    performed_by: str | None = Field(None, max_length=64)


class BookingServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    service_type: str
    service_id: UUID
    quantity: int
    days: int
    booked_price: float
    rate_type: str
    sub_services: list = Field(default_factory=list)


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_reference: str
    school_id: UUID | None = None
    destination_id: UUID | None = None
    customer_name: str
    customer_phone: str | None = None
    trip_date: date | None = None
    number_of_students: int
    number_of_crew: int
    total_amount: float
    status: str
    payment_status: str
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime
    services: list[BookingServiceResponse] = Field(default_factory=list)
