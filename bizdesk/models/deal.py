"""Deal ORM - a car sale, exchange or intermediary deal with one customer.

Invariants:
    - selling_price is what the customer agreed to pay; it is debited on creation
    - Exchange deals carry the evaluation of the customer's own car in
      customer_car_eval_value
    - Intermediary deals may have no customer_id; seller_id / buyer_id identify the parties

Design Decisions:
    - Explicit foreign_keys on each customer relationship: three FKs target customers
"""

import uuid
from typing import Optional
from datetime import datetime, timezone

from sqlalchemy import String, Text, Float, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class Deal(Base):
    __tablename__ = "deals"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    deal_type: Mapped[str] = mapped_column(String(40), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=True,
    )
    seller_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=True,
    )
    buyer_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=True,
    )
    car_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("cars.id"), nullable=True,
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    selling_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    loss_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    customer_car_eval_value: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    customer: Mapped[Optional["Customer"]] = relationship(
        "Customer", foreign_keys=[customer_id], lazy="selectin",
    )
    car: Mapped[Optional["Car"]] = relationship("Car", lazy="selectin")
