"""
backend/services/customer_service.py

Business rules for customers, on top of the repositories of a `UnitOfWork`:

- email addresses are unique across all customers, active or not
- new customers start active, stamped with `created_date`
- every mutation stamps `last_updated`
- "delete" is a soft delete (the active flag goes off, the row stays)

Read paths return `None` for a missing customer, the soft delete returns
`False`; rule violations raise errors from `services.errors`.
"""

from datetime import datetime
from typing import List, Optional

from ..logging_config import get_logger
from ..models import Address, Customer
from ..repositories.unit_of_work import UnitOfWork
from ..schemas import CustomerCreate, CustomerOut, CustomerPatch, CustomerStatsOut, CustomerUpdate
from .errors import DuplicateEmailError, NotFoundError, ValidationError
from .projections import build_stats, to_customer_out

logger = get_logger(__name__)


# ── READ ──────────────────────────────────────────────────

def list_active_customers(uow: UnitOfWork) -> List[CustomerOut]:
    """All active customers with their addresses and order counts."""
    return [to_customer_out(c) for c in uow.customers.get_all(is_active=True)]


def list_inactive_customers(uow: UnitOfWork) -> List[CustomerOut]:
    """Soft-deleted customers."""
    return [to_customer_out(c) for c in uow.customers.get_all(is_active=False)]


def get_customer(uow: UnitOfWork, customer_id: int) -> Optional[CustomerOut]:
    customer = uow.customers.get_by_id_with_related(customer_id)
    return to_customer_out(customer) if customer else None


def search_customers(uow: UnitOfWork, query: Optional[str]) -> List[CustomerOut]:
    """
    Active customers whose first name, last name or email contains `query`.

    Raises:
        ValidationError: if `query` is missing or empty.
    """
    if not query:
        raise ValidationError("Search query is required", field="query")
    return [to_customer_out(c) for c in uow.customers.search(query)]


def filter_customers_by_type(uow: UnitOfWork, customer_type: str) -> List[CustomerOut]:
    return [to_customer_out(c) for c in uow.customers.filter_by_type(customer_type)]


def get_statistics(uow: UnitOfWork) -> CustomerStatsOut:
    stats = uow.statistics
    return build_stats(
        total_customers=stats.count_customers(),
        active_customers=stats.count_customers(is_active=True),
        total_orders=stats.count_orders(),
        total_revenue=stats.total_revenue(),
        type_rows=stats.active_customers_by_type(),
    )


# ── WRITE ─────────────────────────────────────────────────

def create_customer(uow: UnitOfWork, payload: CustomerCreate) -> CustomerOut:
    """
    Create an active customer, optionally with its primary address.

    The customer and the address are inserted in one transaction.

    Raises:
        DuplicateEmailError: if any customer already has this email.
    """
    if uow.customers.email_exists(payload.email):
        logger.warning(f"Rejected customer create: duplicate email {payload.email}")
        raise DuplicateEmailError(payload.email)

    customer = Customer(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        phone=payload.phone,
        customer_type=payload.customer_type,
        notes=payload.notes,
        created_date=datetime.utcnow(),
        is_active=True,
    )

    if payload.primary_address is not None:
        addr = payload.primary_address
        # only address of a brand-new customer, so nothing to un-flag
        customer.addresses.append(
            Address(
                address_type=addr.address_type,
                street=addr.street,
                city=addr.city,
                state=addr.state,
                zip_code=addr.zip_code,
                country=addr.country,
                is_primary=True,
            )
        )

    uow.customers.add(customer)
    uow.commit()
    logger.info(f"Created customer #{customer.id} ({customer.email})")
    return to_customer_out(uow.customers.get_by_id_with_related(customer.id))


def update_customer(uow: UnitOfWork, customer_id: int, payload: CustomerUpdate) -> CustomerOut:
    """
    Full replace of the customer's editable fields.

    Raises:
        NotFoundError: if the customer does not exist.
        DuplicateEmailError: if another customer owns the new email.
    """
    customer = uow.customers.get_by_id_with_related(customer_id)
    if customer is None:
        raise NotFoundError("Customer")

    if uow.customers.email_exists(payload.email, exclude_customer_id=customer_id):
        logger.warning(f"Rejected update of customer #{customer_id}: duplicate email {payload.email}")
        raise DuplicateEmailError(payload.email)

    customer.first_name = payload.first_name
    customer.last_name = payload.last_name
    customer.email = payload.email
    customer.phone = payload.phone
    customer.is_active = payload.is_active
    customer.customer_type = payload.customer_type
    customer.notes = payload.notes
    customer.last_updated = datetime.utcnow()

    uow.customers.update(customer)
    uow.commit()
    logger.info(f"Updated customer #{customer_id}")
    return to_customer_out(uow.customers.get_by_id_with_related(customer_id))


def patch_customer(uow: UnitOfWork, customer_id: int, payload: CustomerPatch) -> CustomerOut:
    """
    Partial update: only supplied, non-empty fields are written.

    `isActive` is applied whenever it is present (False included).
    `last_updated` moves forward even when nothing else changes.

    Raises:
        NotFoundError: if the customer does not exist.
        DuplicateEmailError: if the new email belongs to another customer.
    """
    customer = uow.customers.get_by_id_with_related(customer_id)
    if customer is None:
        raise NotFoundError("Customer")

    if payload.email and payload.email != customer.email:
        if uow.customers.email_exists(payload.email, exclude_customer_id=customer_id):
            logger.warning(f"Rejected patch of customer #{customer_id}: duplicate email {payload.email}")
            raise DuplicateEmailError(payload.email)

    for field in ("first_name", "last_name", "email", "phone", "customer_type", "notes"):
        value = getattr(payload, field)
        if value:
            setattr(customer, field, value)
    if payload.is_active is not None:
        customer.is_active = payload.is_active

    customer.last_updated = datetime.utcnow()

    uow.customers.update(customer)
    uow.commit()
    logger.info(f"Patched customer #{customer_id}")
    return to_customer_out(uow.customers.get_by_id_with_related(customer_id))


def delete_customer(uow: UnitOfWork, customer_id: int) -> bool:
    """
    Soft delete. Returns False if the customer does not exist.

    Deleting an already inactive customer succeeds again.
    """
    if not uow.customers.delete(customer_id):
        return False
    uow.commit()
    logger.info(f"Deactivated customer #{customer_id}")
    return True
