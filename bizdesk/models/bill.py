"""Bill ORM - general bills, tax invoices and receipts for deals and bookings.

Invariants:
    - bill_type is a canonical BillType value; bill_direction is positive|negative
    - tax_invoice bills are always negative
    - A bill belongs to a deal, a booking, or neither; never both
    - payments are deleted with their bill

Design Decisions:
    - Legacy single-payment columns (cash_amount, visa_amount, ...) kept nullable:
      bills from before multi-payment receipts still render and count
    - parent_bill_id links a receipt to the tax invoice it settles
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Float, Date, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class Bill(Base):
    __tablename__ = "bills"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    bill_number: Mapped[str] = mapped_column(String(30), nullable=False, unique=True)
    bill_type: Mapped[str] = mapped_column(String(30), nullable=False)
    bill_direction: Mapped[str] = mapped_column(
        String(10), nullable=False, default="positive",
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    deal_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("deals.id", ondelete="SET NULL"), nullable=True,
    )
    booking_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bookings.id", ondelete="SET NULL"), nullable=True,
    )
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True,
    )
    parent_bill_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bills.id", ondelete="SET NULL"), nullable=True,
    )
    customer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    bill_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    car_details: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # General bills
    bill_amount: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Tax invoices
    subtotal: Mapped[float | None] = mapped_column(Float, nullable=True)
    tax_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    tax_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_with_tax: Mapped[float | None] = mapped_column(Float, nullable=True)
    commission: Mapped[float | None] = mapped_column(Float, nullable=True)

    # Legacy single-payment columns
    cash_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    visa_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    transfer_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    check_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    bank_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_branch: Mapped[str | None] = mapped_column(String(100), nullable=True)

    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    payments: Mapped[list["BillPayment"]] = relationship(
        "BillPayment", back_populates="bill",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="BillPayment.created_at",
    )


class BillPayment(Base):
    """One payment method applied to a bill. Method-specific columns are nullable."""
    __tablename__ = "bill_payments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    bill_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False,
    )
    payment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    visa_installments: Mapped[int | None] = mapped_column(Integer, nullable=True)
    visa_card_type: Mapped[str | None] = mapped_column(String(30), nullable=True)
    visa_last_four: Mapped[str | None] = mapped_column(String(4), nullable=True)
    approval_number: Mapped[str | None] = mapped_column(String(50), nullable=True)

    bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    bank_branch: Mapped[str | None] = mapped_column(String(100), nullable=True)
    transfer_account_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    transfer_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    transfer_holder_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    check_bank_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    check_branch: Mapped[str | None] = mapped_column(String(100), nullable=True)
    check_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    check_holder_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    bill: Mapped["Bill"] = relationship("Bill", back_populates="payments")
