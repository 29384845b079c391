"""Deal Schemas - deal creation and the deal view with its car and customer.

Invariants:
    - Every deal type except intermediary needs customer_id
    - Intermediary deals need at least one of customer_id, seller_id, buyer_id
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bizdesk.core.domain_types import DealType
from bizdesk.schemas.customer import CustomerResponse


class DealCreate(BaseModel):
    deal_type: DealType
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    customer_id: UUID | None = None
    seller_id: UUID | None = None
    buyer_id: UUID | None = None
    car_id: UUID | None = None
    amount: float = Field(0.0, ge=0)
    selling_price: float = Field(0.0, ge=0)
    loss_amount: float = Field(0.0, ge=0)
    customer_car_eval_value: float = Field(0.0, ge=0)

    @model_validator(mode="after")
    def check_parties(self) -> "DealCreate":
        if self.deal_type == DealType.INTERMEDIARY:
            if not (self.customer_id or self.seller_id or self.buyer_id):
                raise ValueError("intermediary deals need a customer, seller or buyer")
        elif self.customer_id is None:
            raise ValueError(f"{self.deal_type.value} deals need customer_id")
        return self


class CarResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    make: str
    model: str
    year: int | None = None
    license_plate: str | None = None
    buy_price: float
    sale_price: float
    provider_name: str | None = None
    provider_phone: str | None = None
    provider_address: str | None = None


class DealResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    deal_type: str
    title: str
    description: str | None = None
    status: str
    customer_id: UUID | None = None
    seller_id: UUID | None = None
    buyer_id: UUID | None = None
    car_id: UUID | None = None
    amount: float
    selling_price: float
    loss_amount: float
    customer_car_eval_value: float
    created_at: datetime
    customer: CustomerResponse | None = None
    car: CarResponse | None = None


class DealDetailResponse(DealResponse):
    """A deal with what its customer still owes on it; negative means overpaid."""
    outstanding: float
