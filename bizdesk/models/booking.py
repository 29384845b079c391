"""Booking ORM - a school trip with its booked provider services.

Invariants:
    - booking_reference is unique
    - total_amount is the priced total at creation (destination base + services)
    - status: pending -> confirmed -> completed, or -> cancelled
    - Booking lines (BookingService) are deleted with their booking
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Float, Date, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    booking_reference: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True,
    )
    school_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("schools.id"), nullable=True,
    )
    destination_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("destinations.id"), nullable=True,
    )
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    trip_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    number_of_students: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    number_of_crew: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    payment_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    services: Mapped[list["BookingService"]] = relationship(
        "BookingService", back_populates="booking",
        cascade="all, delete-orphan", lazy="selectin",
    )


class BookingService(Base):
    """One provider service booked on a trip; priced per unit, per day."""
    __tablename__ = "booking_services"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    booking_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False,
    )
    service_type: Mapped[str] = mapped_column(String(40), nullable=False)
    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("service_providers.id"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    booked_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rate_type: Mapped[str] = mapped_column(String(20), nullable=False, default="daily")
    sub_services: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="services")
