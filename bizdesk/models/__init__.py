"""ORM Models - SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - UUID primary keys and timezone-aware created_at on every table

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from bizdesk.models.customer import Customer, CustomerTransaction  # noqa: F401
from bizdesk.models.car import Car  # noqa: F401
from bizdesk.models.deal import Deal  # noqa: F401
from bizdesk.models.bill import Bill, BillPayment  # noqa: F401
from bizdesk.models.school import School, Destination  # noqa: F401
from bizdesk.models.booking import Booking, BookingService  # noqa: F401
from bizdesk.models.service_provider import ServiceProvider  # noqa: F401
from bizdesk.models.payout import Payout  # noqa: F401
from bizdesk.models.activity_log import ActivityLog  # noqa: F401
from bizdesk.models.company_settings import CompanySettings  # noqa: F401
