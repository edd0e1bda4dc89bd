"""
Pydantic schemas for API input/output.

These classes define how data is serialized/deserialized between the API
and clients. Field names are snake_case in Python and camelCase on the wire
(`firstName`, `isPrimary`, `totalOrders`, ...); both spellings are accepted
on input.

Input schemas:
- AddressIn: body of POST/PUT address routes (also `primaryAddress` on create).
- CustomerCreate / CustomerUpdate / CustomerPatch: create, full and partial update.
- OrderIn: body of POST/PUT order routes.

Output schemas:
- CustomerOut, AddressOut, OrderOut, CustomerSummaryOut: projections of the entities.
- CustomerStatsOut, CustomerTypeStatsOut: dashboard aggregate.
- HealthOut, CustomerDeletedOut: small status payloads.
"""

import re
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

EMAIL_MAX_LENGTH = 100
PHONE_MAX_LENGTH = 20
MIN_ORDER_AMOUNT = Decimal("0.01")
MAX_ORDER_AMOUNT = Decimal("999999.99")

# digits plus the usual separators: "(555) 123-4567", "+1 555.123.4567"
PHONE_PATTERN = re.compile(r"^\+?[0-9().\-\s]*[0-9][0-9().\-\s]*$")


def _check_email_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value and not PHONE_PATTERN.match(value):
        raise ValueError("phone is not a valid phone number")
    return value


class CamelModel(BaseModel):
    """Base for every schema: camelCase aliases, ORM attribute loading."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class AddressIn(CamelModel):
    """Address payload for POST/PUT /api/customers/{id}/addresses."""
    address_type: str = Field("Home", min_length=1, max_length=50)
    street: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field("USA", max_length=50)
    is_primary: bool = False


class CustomerCreate(CamelModel):
    """Input schema for POST /api/customers."""
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field("", max_length=PHONE_MAX_LENGTH)
    customer_type: Optional[str] = Field("Individual", max_length=50)
    notes: Optional[str] = Field(None, max_length=500)
    primary_address: Optional[AddressIn] = None

    @field_validator("email")
    @classmethod
    def email_not_too_long(cls, value):
        return _check_email_length(value)

    @field_validator("phone")
    @classmethod
    def phone_shape(cls, value):
        return _check_phone(value)


class CustomerUpdate(CamelModel):
    """
    Input schema for PUT /api/customers/{id}.

    A full replace: omitted optional fields fall back to their defaults,
    they do not keep the stored value.
    """
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field("", max_length=PHONE_MAX_LENGTH)
    is_active: bool = True
    customer_type: Optional[str] = Field("Individual", max_length=50)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("email")
    @classmethod
    def email_not_too_long(cls, value):
        return _check_email_length(value)

    @field_validator("phone")
    @classmethod
    def phone_shape(cls, value):
        return _check_phone(value)


class CustomerPatch(CamelModel):
    """Input schema for PATCH /api/customers/{id}; every field is optional."""
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=PHONE_MAX_LENGTH)
    is_active: Optional[bool] = None
    customer_type: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, max_length=500)

    @field_validator("first_name", "last_name", "email", "phone", "customer_type", "notes", mode="before")
    @classmethod
    def empty_string_means_absent(cls, value):
        # "" is treated the same as a missing field
        if isinstance(value, str) and value == "":
            return None
        return value

    @field_validator("email")
    @classmethod
    def email_not_too_long(cls, value):
        return _check_email_length(value)

    @field_validator("phone")
    @classmethod
    def phone_shape(cls, value):
        return _check_phone(value)


class OrderIn(CamelModel):
    """Input schema for POST/PUT /api/orders. `customerIds` is ignored on PUT."""
    order_number: str = Field(..., min_length=1, max_length=50)
    total_amount: Decimal = Field(..., ge=MIN_ORDER_AMOUNT, le=MAX_ORDER_AMOUNT, decimal_places=2)
    status: Optional[str] = Field("Pending", max_length=20)
    description: Optional[str] = Field(None, max_length=500)
    customer_ids: List[int] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class AddressOut(CamelModel):
    """Flattened address: street, city, state and zip composed into one line."""
    address_id: int
    address_type: str
    full_address: str
    is_primary: bool


class CustomerOut(CamelModel):
    """Public customer view used by every customer read and write route."""
    customer_id: int
    full_name: str
    email: str
    phone: str
    created_date: datetime
    last_updated: Optional[datetime] = None
    is_active: bool
    customer_type: str
    notes: Optional[str] = None
    addresses: List[AddressOut] = Field(default_factory=list)
    total_orders: int = 0
    total_spent: float = 0


class CustomerSummaryOut(CamelModel):
    """A customer as seen from one of its orders."""
    customer_id: int
    full_name: str
    email: str
    role: str


class OrderOut(CamelModel):
    order_id: int
    order_number: str
    order_date: datetime
    total_amount: float
    status: str
    description: Optional[str] = None
    customers: List[CustomerSummaryOut] = Field(default_factory=list)


class CustomerTypeStatsOut(CamelModel):
    customer_type: str
    count: int
    total_revenue: float = 0


class CustomerStatsOut(CamelModel):
    """Dashboard numbers returned by GET /api/customers/stats."""
    total_customers: int
    active_customers: int
    inactive_customers: int
    total_orders: int
    total_revenue: float
    customer_type_breakdown: List[CustomerTypeStatsOut] = Field(default_factory=list)


class CustomerDeletedOut(CamelModel):
    message: str
    customer_id: int
    timestamp: datetime


class HealthOut(CamelModel):
    """Liveness payload of GET /api/health."""
    status: str
    database: str
    customers: int
    orders: int
    timestamp: datetime
