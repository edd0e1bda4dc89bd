"""
backend/repositories/unit_of_work.py

The unit of work is the explicit transaction handle of one request: it owns
the SQLAlchemy session, exposes one repository per entity family and is the
only place that commits.
"""

from sqlalchemy.orm import Session

from ..logging_config import get_logger
from .address_repo import AddressRepository
from .customer_repo import CustomerRepository
from .order_repo import OrderRepository
from .statistics_repo import StatisticsRepository

logger = get_logger(__name__)


class UnitOfWork:
    """Repositories sharing one session, plus `flush()`, `commit()` and `rollback()`."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.customers = CustomerRepository(session)
        self.addresses = AddressRepository(session)
        self.orders = OrderRepository(session)
        self.statistics = StatisticsRepository(session)

    def commit(self) -> None:
        """
        Flush every pending insert/update/delete as one transaction.

        On failure the transaction is rolled back and the error re-raised.
        """
        try:
            self.session.commit()
        except Exception as e:
            self.rollback()
            logger.error(f"Commit failed, transaction rolled back: {e}")
            raise

    def flush(self) -> None:
        """Send pending statements without committing (assigns primary keys)."""
        try:
            self.session.flush()
        except Exception as e:
            self.rollback()
            logger.error(f"Flush failed, transaction rolled back: {e}")
            raise

    def rollback(self) -> None:
        """Discard everything staged since the last commit."""
        self.session.rollback()
