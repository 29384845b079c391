"""ORM -> plain dict conversion for the pure core.

Invariants:
    - Output matches the API response shape (model_dump(mode="json")):
      UUIDs and dates are strings, enums are their values
"""

from bizdesk.models import Bill, Booking, Deal, Payout
from bizdesk.schemas.bill import BillResponse
from bizdesk.schemas.booking import BookingResponse
from bizdesk.schemas.deal import DealResponse
from bizdesk.schemas.payout import PayoutResponse


def bill_dict(bill: Bill) -> dict:
    return BillResponse.model_validate(bill).model_dump(mode="json")


def deal_dict(deal: Deal) -> dict:
    return DealResponse.model_validate(deal).model_dump(mode="json")


def booking_dict(booking: Booking) -> dict:
    return BookingResponse.model_validate(booking).model_dump(mode="json")


def payout_dict(payout: Payout) -> dict:
    return PayoutResponse.model_validate(payout).model_dump(mode="json")
