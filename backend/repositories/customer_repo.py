"""
backend/repositories/customer_repo.py

Data access for the `customers` table. List queries eager-load addresses and
order links so the projection layer never triggers lazy loads.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from ..models import Customer
from .base import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    """Repository for the customers table."""

    model = Customer

    # ── READ ──────────────────────────────────────────────

    def _with_related(self):
        return select(Customer).options(
            selectinload(Customer.addresses),
            selectinload(Customer.customer_orders),
        )

    def get_all(self, is_active: Optional[bool] = None) -> List[Customer]:
        """
        Fetch customers ordered by id, optionally only active or inactive ones.

        Args:
            is_active: True/False to filter on the active flag, None for all.
        """
        stmt = self._with_related()
        if is_active is not None:
            stmt = stmt.where(Customer.is_active.is_(is_active))
        return list(self.session.scalars(stmt.order_by(Customer.id)))

    def get_by_id_with_related(self, customer_id: int) -> Optional[Customer]:
        """Fetch one customer (active or not) with addresses and order links."""
        stmt = self._with_related().where(Customer.id == customer_id)
        return self.session.scalars(stmt).first()

    def get_by_email(self, email: str) -> Optional[Customer]:
        return self.session.scalars(select(Customer).where(Customer.email == email)).first()

    def email_exists(self, email: str, exclude_customer_id: Optional[int] = None) -> bool:
        """
        True if any customer, active or not, already uses `email`.

        Args:
            email: Address to look for (exact match).
            exclude_customer_id: Ignore this customer (the one being updated).
        """
        existing = self.get_by_email(email)
        return existing is not None and existing.id != exclude_customer_id

    def search(self, query: str) -> List[Customer]:
        """Active customers whose first name, last name or email contains `query`."""
        stmt = (
            self._with_related()
            .where(Customer.is_active.is_(True))
            .where(
                or_(
                    Customer.first_name.contains(query, autoescape=True),
                    Customer.last_name.contains(query, autoescape=True),
                    Customer.email.contains(query, autoescape=True),
                )
            )
            .order_by(Customer.id)
        )
        return list(self.session.scalars(stmt))

    def filter_by_type(self, customer_type: str) -> List[Customer]:
        """Active customers whose type equals `customer_type` exactly."""
        stmt = (
            self._with_related()
            .where(Customer.is_active.is_(True))
            .where(Customer.customer_type == customer_type)
            .order_by(Customer.id)
        )
        return list(self.session.scalars(stmt))

    # ── DELETE ────────────────────────────────────────────

    def delete(self, customer_id: int) -> bool:
        """
        Soft delete: flip `is_active` off and stamp `last_updated`.

        Customers are never removed, so their addresses and order links stay.
        """
        customer = self.get_by_id(customer_id)
        if customer is None:
            return False
        customer.is_active = False
        customer.last_updated = datetime.utcnow()
        return True
