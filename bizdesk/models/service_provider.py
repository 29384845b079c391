"""ServiceProvider ORM - guides, paramedics, security, entertainment, travel and education providers.

Invariants:
    - service_type is a ServiceType value; one table holds every provider category
    - user_id links the provider to its login account (revenue views are per user)
    - Rates are per unit; fixed-rate services use price or pricing_data.default_price
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    service_type: Mapped[str] = mapped_column(String(40), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    hourly_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    daily_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    regional_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    overnight_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    pricing_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
