"""
backend/services/address_service.py

Customer addresses. The one real rule is primary-address exclusivity: adding
a primary address un-flags the customer's other addresses in the same
transaction as the insert.
"""

from typing import List, Optional

from ..logging_config import get_logger
from ..models import Address
from ..repositories.unit_of_work import UnitOfWork
from ..schemas import AddressIn, AddressOut
from .errors import NotFoundError
from .projections import to_address_out

logger = get_logger(__name__)


def customer_exists(uow: UnitOfWork, customer_id: int) -> bool:
    return uow.customers.get_by_id(customer_id) is not None


def list_addresses(uow: UnitOfWork, customer_id: int) -> List[AddressOut]:
    """Addresses of a customer; an unknown customer simply has none."""
    return [to_address_out(a) for a in uow.addresses.get_by_customer_id(customer_id)]


def get_address(uow: UnitOfWork, customer_id: int, address_id: int) -> Optional[AddressOut]:
    """The address, or None if it is missing or belongs to another customer."""
    address = uow.addresses.get_by_id(address_id)
    if address is None or address.customer_id != customer_id:
        return None
    return to_address_out(address)


def create_address(uow: UnitOfWork, customer_id: int, payload: AddressIn) -> AddressOut:
    """
    Add an address to a customer.

    Raises:
        NotFoundError: if the customer does not exist.
    """
    if not customer_exists(uow, customer_id):
        raise NotFoundError("Customer")

    if payload.is_primary:
        uow.addresses.set_primary(customer_id, None)

    address = Address(
        customer_id=customer_id,
        address_type=payload.address_type,
        street=payload.street,
        city=payload.city,
        state=payload.state,
        zip_code=payload.zip_code,
        country=payload.country,
        is_primary=payload.is_primary,
    )
    uow.addresses.add(address)
    uow.commit()
    logger.info(f"Added address #{address.id} to customer #{customer_id} (primary={address.is_primary})")
    return to_address_out(address)


def update_address(uow: UnitOfWork, address_id: int, payload: AddressIn) -> AddressOut:
    """
    Overwrite every field of an address. Other addresses are left alone.

    Raises:
        NotFoundError: if the address does not exist.
    """
    address = uow.addresses.get_by_id(address_id)
    if address is None:
        raise NotFoundError("Address")

    address.address_type = payload.address_type
    address.street = payload.street
    address.city = payload.city
    address.state = payload.state
    address.zip_code = payload.zip_code
    address.country = payload.country
    address.is_primary = payload.is_primary

    uow.addresses.update(address)
    uow.commit()
    logger.info(f"Updated address #{address_id}")
    return to_address_out(address)


def delete_address(uow: UnitOfWork, address_id: int) -> bool:
    """Remove an address. Returns False if it does not exist."""
    if not uow.addresses.delete(address_id):
        return False
    uow.commit()
    logger.info(f"Deleted address #{address_id}")
    return True


def set_primary_address(uow: UnitOfWork, customer_id: int, address_id: int) -> List[AddressOut]:
    """
    Make `address_id` the customer's only primary address.

    If the address does not belong to the customer, every flag is cleared and
    the customer is left without a primary address.
    """
    uow.addresses.set_primary(customer_id, address_id)
    uow.commit()
    logger.info(f"Set address #{address_id} as primary for customer #{customer_id}")
    return list_addresses(uow, customer_id)
