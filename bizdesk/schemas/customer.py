"""Customer Schemas - request and response models for customers and their ledger."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    id_number: str | None = Field(None, max_length=30)
    phone: str | None = Field(None, max_length=30)
    email: str | None = Field(None, max_length=200)
    balance: float = 0.0

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    id_number: str | None = None
    phone: str | None = None
    email: str | None = None
    balance: float
    created_at: datetime


class CustomerTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    type: str
    amount: float
    balance_before: float
    balance_after: float
    reference_id: str | None = None
    description: str
    created_at: datetime
