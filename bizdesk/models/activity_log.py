"""ActivityLog ORM - audit trail of deal, car, customer and provider actions.

Design Decisions:
    - JSON snapshots of the deal/car at log time: the log stays readable after
      the rows it describes change or disappear
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from bizdesk.db.base import Base


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    deal: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    car: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
