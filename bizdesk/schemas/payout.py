"""Payout Schemas - paying a provider's booking record, and payout views."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from bizdesk.core.domain_types import PaymentType


class PayoutPaymentRequest(BaseModel):
    payment_method: PaymentType
    payment_date: date
    account_number: str | None = None
    account_holder_name: str | None = None
    bank_name: str | None = None
    transaction_number: str | None = None
    reference_number: str | None = None
    check_number: str | None = None
    check_bank_name: str | None = None
    notes: str | None = None
    created_by: str | None = Field(None, max_length=64)


class PayoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    service_type: str
    service_id: UUID
    user_id: str | None = None
    service_provider_name: str | None = None
    amount: float
    status: str
    payment_method: str | None = None
    payment_date: date | None = None
    booking_service_id: UUID | None = None
    booking_record_id: UUID | None = None
    description: str | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime
