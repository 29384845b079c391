"""Bill Schemas - bill creation with multiple payments, and bill views.

Invariants:
    - A bill references a deal or a booking, never both
    - bill_type is accepted in any legacy spelling; the service normalizes it
    - Payment amounts and types are checked by the billing rules, so a bad
      payment reports its exact field path (payments.N.amount)
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from bizdesk.core.billing import signed_bill_amount
from bizdesk.core.domain_types import BillDirection, BillStatus


class PaymentInput(BaseModel):
    payment_type: str
    amount: float
    payment_date: date | None = None
    notes: str | None = None

    visa_installments: int | None = Field(None, ge=1)
    visa_card_type: str | None = None
    visa_last_four: str | None = None
    approval_number: str | None = None

    bank_name: str | None = None
    bank_branch: str | None = None
    transfer_account_number: str | None = None
    transfer_number: str | None = None
    transfer_holder_name: str | None = None

    check_bank_name: str | None = None
    check_branch: str | None = None
    check_number: str | None = None
    check_holder_name: str | None = None


class BillCreate(BaseModel):
    bill_type: str = Field(min_length=1, max_length=30)
    bill_direction: BillDirection | None = None
    deal_id: UUID | None = None
    booking_id: UUID | None = None
    customer_id: UUID | None = None
    parent_bill_id: UUID | None = None
    customer_name: str | None = Field(None, max_length=200)
    customer_phone: str | None = Field(None, max_length=30)
    bill_description: str | None = None
    car_details: str | None = Field(None, max_length=200)
    bill_amount: float | None = None
    subtotal: float | None = None
    commission: float | None = None
    tax_rate: float | None = Field(None, ge=0, le=100)
    due_date: date | None = None
    payments: list[PaymentInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_single_owner(self) -> "BillCreate":
        if self.deal_id and self.booking_id:
            raise ValueError("a bill belongs to a deal or a booking, not both")
        return self


class BillStatusUpdate(BaseModel):
    status: BillStatus


class BillPaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    payment_type: str
    amount: float
    payment_date: date | None = None
    notes: str | None = None
    visa_installments: int | None = None
    visa_card_type: str | None = None
    visa_last_four: str | None = None
    approval_number: str | None = None
    bank_name: str | None = None
    bank_branch: str | None = None
    transfer_account_number: str | None = None
    transfer_number: str | None = None
    transfer_holder_name: str | None = None
    check_bank_name: str | None = None
    check_branch: str | None = None
    check_number: str | None = None
    check_holder_name: str | None = None
    created_at: datetime


class BillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    bill_number: str
    bill_type: str
    bill_direction: str
    status: str
    deal_id: UUID | None = None
    booking_id: UUID | None = None
    customer_id: UUID | None = None
    parent_bill_id: UUID | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    bill_description: str | None = None
    car_details: str | None = None
    bill_amount: float | None = None
    subtotal: float | None = None
    tax_rate: float | None = None
    tax_amount: float | None = None
    total_with_tax: float | None = None
    commission: float | None = None
    cash_amount: float | None = None
    visa_amount: float | None = None
    transfer_amount: float | None = None
    check_amount: float | None = None
    bank_amount: float | None = None
    bank_name: str | None = None
    bank_branch: str | None = None
    due_date: date | None = None
    created_at: datetime
    payments: list[BillPaymentResponse] = Field(default_factory=list)

    @computed_field
    @property
    def signed_amount(self) -> float:
        """Ledger value of the bill; charges such as tax invoices are negative."""
        fields = {name: getattr(self, name) for name in type(self).model_fields}
        fields["payments"] = [payment.model_dump() for payment in self.payments]
        return signed_bill_amount(fields)
