"""
backend/repositories/address_repo.py

Data access for the `addresses` table.
"""

from typing import List, Optional

from sqlalchemy import select

from ..models import Address
from .base import BaseRepository


class AddressRepository(BaseRepository[Address]):
    """Repository for the addresses table."""

    model = Address

    def get_by_customer_id(self, customer_id: int) -> List[Address]:
        stmt = select(Address).where(Address.customer_id == customer_id).order_by(Address.id)
        return list(self.session.scalars(stmt))

    def set_primary(self, customer_id: int, address_id: Optional[int]) -> None:
        """
        Make `address_id` the only primary address of the customer.

        Every address of the customer gets `is_primary = (id == address_id)`,
        so passing None (or an id the customer doesn't own) clears them all.
        """
        for address in self.get_by_customer_id(customer_id):
            address.is_primary = address.id == address_id
