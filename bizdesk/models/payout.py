"""Payout ORM - amounts owed to providers (type=booking) and money sent (type=payment).

Invariants:
    - One booking-type payout per booking line (booking_service_id)
    - A payment-type payout references its booking record via booking_record_id;
      at most one payment exists per booking record
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Float, Date, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class Payout(Base):
    __tablename__ = "payouts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    type: Mapped[str] = mapped_column(String(10), nullable=False)
    service_type: Mapped[str] = mapped_column(String(40), nullable=False)
    service_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    service_provider_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    payment_method: Mapped[str | None] = mapped_column(String(30), nullable=True)
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    booking_service_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    booking_record_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(64), nullable=True)

    account_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    account_holder_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    transaction_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    check_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    check_bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
