"""
backend/seed_data.py

Sample data loaded at startup (when SEED_ON_STARTUP is on) and by `db/seed.py`.

The data set is small and fixed so the admin UI has something to show:
three customers of different types, two primary addresses and two orders.
Nothing is inserted if the customers table already has rows.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from .logging_config import get_logger
from .models import Address, Customer, CustomerOrder, Order
from .repositories.unit_of_work import UnitOfWork

logger = get_logger(__name__)

SAMPLE_CUSTOMERS = [
    {"first_name": "John", "last_name": "Doe", "email": "john.doe@email.com",
     "phone": "(555) 123-4567", "customer_type": "Individual"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jane.smith@email.com",
     "phone": "(555) 987-6543", "customer_type": "Premium"},
    {"first_name": "Acme", "last_name": "Corporation", "email": "contact@acme.com",
     "phone": "(555) 555-0123", "customer_type": "Business"},
]

# index into SAMPLE_CUSTOMERS -> address
SAMPLE_ADDRESSES = [
    (0, {"address_type": "Home", "street": "123 Main St", "city": "Anytown",
         "state": "CA", "zip_code": "12345", "is_primary": True}),
    (1, {"address_type": "Work", "street": "456 Business Ave", "city": "Commerce City",
         "state": "NY", "zip_code": "67890", "is_primary": True}),
]

# index into SAMPLE_CUSTOMERS -> order
SAMPLE_ORDERS = [
    (0, {"order_number": "ORD-001", "total_amount": Decimal("299.99"),
         "status": "Completed", "description": "First sample order"}),
    (1, {"order_number": "ORD-002", "total_amount": Decimal("149.50"),
         "status": "Pending", "description": "Second sample order"}),
]


def seed_sample_data(session: Session) -> bool:
    """
    Insert the sample data set unless customers already exist.

    Returns:
        True if rows were inserted, False if seeding was skipped.
    """
    uow = UnitOfWork(session)
    existing = uow.statistics.count_customers()
    if existing > 0:
        logger.info(f"Database already has {existing} customers; skipping seeding.")
        return False

    logger.info("Seeding database with sample data...")
    now = datetime.utcnow()

    customers = [Customer(created_date=now, is_active=True, **data) for data in SAMPLE_CUSTOMERS]
    for customer in customers:
        uow.customers.add(customer)

    for idx, data in SAMPLE_ADDRESSES:
        customers[idx].addresses.append(Address(**data))

    for idx, data in SAMPLE_ORDERS:
        order = uow.orders.add(Order(order_date=now, **data))
        order.customer_orders.append(
            CustomerOrder(customer=customers[idx], role="Primary", assigned_date=now)
        )

    uow.commit()
    logger.info(
        f"Seeded {len(customers)} customers, {len(SAMPLE_ADDRESSES)} addresses, {len(SAMPLE_ORDERS)} orders."
    )
    return True
