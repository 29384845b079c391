"""Pricing Schemas - standalone price quotes for a prospective booking."""

from uuid import UUID

from pydantic import BaseModel, Field

from bizdesk.core.domain_types import RateType, ServiceType
from bizdesk.schemas.booking import SubServiceInput


class DestinationPricingInput(BaseModel):
    student: float = Field(0.0, ge=0)
    crew: float = Field(0.0, ge=0)


class QuoteServiceInput(BaseModel):
    id: str
    name: str
    type: ServiceType
    quantity: int
    days: int
    unit_price: float
    rate_type: RateType = RateType.DAILY
    sub_services: list[SubServiceInput] = Field(default_factory=list)


class PriceQuoteRequest(BaseModel):
    """Either inline destination_pricing or a destination_id to load it from."""
    destination_pricing: DestinationPricingInput | None = None
    destination_id: UUID | None = None
    number_of_students: int = 0
    number_of_crew: int = 0
    services: list[QuoteServiceInput] = Field(default_factory=list)
