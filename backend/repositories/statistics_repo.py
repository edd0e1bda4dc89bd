"""
repositories/statistics_repo.py
-------------------------------
Aggregate queries behind the dashboard. Returns plain numbers; shaping them
into the response is the projection layer's job.
"""

from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Customer, Order


class StatisticsRepository:
    """Read-only counters over customers and orders."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def count_customers(self, is_active: Optional[bool] = None) -> int:
        stmt = select(func.count()).select_from(Customer)
        if is_active is not None:
            stmt = stmt.where(Customer.is_active.is_(is_active))
        return self.session.execute(stmt).scalar() or 0

    def count_orders(self) -> int:
        return self.session.execute(select(func.count()).select_from(Order)).scalar() or 0

    def total_revenue(self) -> Decimal:
        """Sum of every order amount, whatever its status."""
        total = self.session.execute(
            select(func.coalesce(func.sum(Order.total_amount), 0))
        ).scalar()
        return Decimal(str(total or 0))

    def active_customers_by_type(self) -> List[Tuple[Optional[str], int]]:
        """(customer_type, count) for active customers; the type may be None."""
        stmt = (
            select(Customer.customer_type, func.count())
            .where(Customer.is_active.is_(True))
            .group_by(Customer.customer_type)
            .order_by(Customer.customer_type)
        )
        return [(customer_type, count) for customer_type, count in self.session.execute(stmt)]
