from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional, Annotated
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID

InvoiceStatus = Literal["pending", "paid"]

# Dollars as submitted by the form; sub-cent input is rounded when stored.
Money = Annotated[Decimal, Field(gt=0, max_digits=18, allow_inf_nan=False)]

CENTS = Decimal("100")


def to_cents(amount: Decimal) -> int:
    """Dollar amount to integer cents, half-up."""
    return int((Decimal(amount) * CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(amount: int) -> Decimal:
    return (Decimal(amount) / CENTS).quantize(Decimal("0.01"))


def parse_invoice_id(value: str) -> Optional[str]:
    """Canonical form of an invoice id, or None if it cannot be a row id (ids are UUIDs)."""
    try:
        return str(UUID(value))
    except (ValueError, TypeError, AttributeError):
        return None


class InvoiceForm(BaseModel):
    """Validated create/update input. `id` and `date` are never read from the form."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: str = Field(..., alias="customerId", min_length=1)
    amount: Money
    status: InvoiceStatus

    # an amount that rounds to 0 cents would store a zero invoice
    @field_validator("amount")
    @classmethod
    def _at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_cents(value) < 1:
            raise ValueError("amount rounds to zero cents")
        return value

class InvoiceDetail(BaseModel):
    id: str
    customer_id: str
    amount: Decimal  # dollars
    status: InvoiceStatus
    date: date

class InvoiceListItem(BaseModel):
    id: str
    customer_id: str
    customer_name: Optional[str] = None
    amount: Decimal  # dollars
    status: InvoiceStatus
    date: date

class Customer(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
