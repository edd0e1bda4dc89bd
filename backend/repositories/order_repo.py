"""
repositories/order_repo.py
--------------------------
Data access for orders and their customer links.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..models import CustomerOrder, Order
from .base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """Repository for the orders and customer_orders tables."""

    model = Order

    # ── READ ──────────────────────────────────────────────

    def _with_customers(self):
        return select(Order).options(
            selectinload(Order.customer_orders).selectinload(CustomerOrder.customer)
        )

    def get_all(self) -> List[Order]:
        """All orders with their linked customers, ordered by id."""
        return list(self.session.scalars(self._with_customers().order_by(Order.id)))

    def get_by_id_with_customers(self, order_id: int) -> Optional[Order]:
        stmt = self._with_customers().where(Order.id == order_id)
        return self.session.scalars(stmt).first()

    def get_by_customer_id(self, customer_id: int) -> List[Order]:
        """Orders linked to `customer_id` in any role."""
        stmt = (
            self._with_customers()
            .where(Order.customer_orders.any(CustomerOrder.customer_id == customer_id))
            .order_by(Order.id)
        )
        return list(self.session.scalars(stmt))

    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        return self.session.scalars(select(Order).where(Order.order_number == order_number)).first()

    def order_number_exists(self, order_number: str, exclude_order_id: Optional[int] = None) -> bool:
        """True if an order other than `exclude_order_id` already has this number."""
        existing = self.get_by_order_number(order_number)
        return existing is not None and existing.id != exclude_order_id

    # ── CREATE ────────────────────────────────────────────

    def add_customer_order(self, customer_order: CustomerOrder) -> CustomerOrder:
        """Stage a customer/order link row."""
        self.session.add(customer_order)
        return customer_order
