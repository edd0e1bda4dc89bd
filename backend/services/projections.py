# backend/services/projections.py
"""
Read-model projections.

Pure functions turning ORM entities (or raw aggregate numbers) into the
response schemas. No I/O: everything they need must already be loaded.

Default-resolution rules live here and nowhere else:
- a customer with a NULL type is shown as "Individual"
- in the type breakdown, a NULL type is bucketed as "Unknown"
- totalSpent and per-type revenue are not computed yet and are always 0
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ..models import Address, Customer, CustomerOrder, Order
from ..schemas import (
    AddressOut,
    CustomerOut,
    CustomerStatsOut,
    CustomerSummaryOut,
    CustomerTypeStatsOut,
    OrderOut,
)

DEFAULT_CUSTOMER_TYPE: str = "Individual"
UNKNOWN_CUSTOMER_TYPE: str = "Unknown"


def full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


def full_address(street: str, city: str, state: str, zip_code: str) -> str:
    """'123 Main St, Anytown, CA 12345'"""
    return f"{street}, {city}, {state} {zip_code}"


def resolve_customer_type(customer_type: Optional[str]) -> str:
    return DEFAULT_CUSTOMER_TYPE if customer_type is None else customer_type


def to_address_out(address: Address) -> AddressOut:
    return AddressOut(
        address_id=address.id,
        address_type=address.address_type,
        full_address=full_address(address.street, address.city, address.state, address.zip_code),
        is_primary=address.is_primary,
    )


def to_customer_out(customer: Customer) -> CustomerOut:
    """
    Flatten a customer for the API.

    `totalOrders` is the number of CustomerOrder rows of the customer, in any role.
    """
    return CustomerOut(
        customer_id=customer.id,
        full_name=full_name(customer.first_name, customer.last_name),
        email=customer.email,
        phone=customer.phone or "",
        created_date=customer.created_date,
        last_updated=customer.last_updated,
        is_active=customer.is_active,
        customer_type=resolve_customer_type(customer.customer_type),
        notes=customer.notes,
        addresses=[to_address_out(a) for a in customer.addresses],
        total_orders=len(customer.customer_orders),
        total_spent=0,
    )


def to_customer_summary(link: CustomerOrder) -> CustomerSummaryOut:
    customer = link.customer
    return CustomerSummaryOut(
        customer_id=link.customer_id,
        full_name=full_name(customer.first_name, customer.last_name),
        email=customer.email,
        role=link.role,
    )


def to_order_out(order: Order) -> OrderOut:
    return OrderOut(
        order_id=order.id,
        order_number=order.order_number,
        order_date=order.order_date,
        total_amount=float(order.total_amount),
        status=order.status,
        description=order.description,
        customers=[to_customer_summary(link) for link in order.customer_orders],
    )


def build_type_breakdown(rows: Iterable[Tuple[Optional[str], int]]) -> List[CustomerTypeStatsOut]:
    """
    Turn (customer_type, count) rows into breakdown buckets.

    A NULL type goes to "Unknown"; an empty string is kept as its own
    bucket. Rows that collapse into the same bucket are summed.
    """
    buckets: dict = {}
    for customer_type, count in rows:
        key = UNKNOWN_CUSTOMER_TYPE if customer_type is None else customer_type
        buckets[key] = buckets.get(key, 0) + count
    return [
        CustomerTypeStatsOut(customer_type=key, count=count, total_revenue=0)
        for key, count in buckets.items()
    ]


def build_stats(
    total_customers: int,
    active_customers: int,
    total_orders: int,
    total_revenue: Decimal,
    type_rows: Iterable[Tuple[Optional[str], int]],
) -> CustomerStatsOut:
    """Dashboard aggregate; inactive is derived so active + inactive == total."""
    return CustomerStatsOut(
        total_customers=total_customers,
        active_customers=active_customers,
        inactive_customers=total_customers - active_customers,
        total_orders=total_orders,
        total_revenue=float(total_revenue),
        customer_type_breakdown=build_type_breakdown(type_rows),
    )
