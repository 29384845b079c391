"""Activity Service - writes audit entries alongside the action they describe.

Invariants:
    - log_activity never raises: a failed audit entry must not fail the action
    - The entry joins the caller's transaction (no commit here)
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.activity_log import build_activity_entry
from bizdesk.core.domain_types import ActivityType
from bizdesk.models import ActivityLog

logger = logging.getLogger(__name__)


async def log_activity(
    db: AsyncSession,
    activity_type: ActivityType,
    deal: dict | None = None,
    car: dict | None = None,
    customer: dict | None = None,
    provider_details: dict | None = None,
) -> ActivityLog | None:
    try:
        entry = build_activity_entry(activity_type, deal, car, customer, provider_details)
        if entry is None:
            logger.debug(f"Skipping {activity_type.value} activity log")
            return None
        log = ActivityLog(**entry)
        db.add(log)
        return log
    except (ValueError, SQLAlchemyError) as e:
        logger.warning(f"Failed to log {activity_type} activity: {e}")
        return None
