# db/seed.py
"""
Populate the development DB.

- Always starts from the fixed sample data set (John Doe, Jane Smith, Acme
  Corporation and their two orders), which is skipped when customers exist.
- `--fake N` adds N extra random customers (Faker) with an address or two and
  a few orders each, so the dashboard has something to aggregate.
- `--reset` drops and recreates every table first.
"""

import argparse
import random
from datetime import datetime
from decimal import Decimal
from pathlib import Path

# --- Add the project root to sys.path so the script runs from a checkout ---
import sys
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from backend.db import Base, engine, SessionLocal
from backend.models import Address, Customer, CustomerOrder, Order
from backend.seed_data import seed_sample_data

try:
    from faker import Faker
except ImportError:
    raise SystemExit("Install Faker: pip install faker")

fake = Faker("en_US")

CUSTOMER_TYPES = ["Individual", "Business", "Premium"]
ADDRESS_TYPES = ["Home", "Work", "Billing", "Shipping"]
ORDER_STATUSES = ["Pending", "Processing", "Completed", "Cancelled"]


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed the customer database with sample data.")
    p.add_argument("--fake", type=int, default=0, help="extra random customers to add")
    p.add_argument("--reset", action="store_true")
    p.add_argument("--seed", type=int, default=None)
    return p.parse_args()


def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def ensure_tables() -> None:
    Base.metadata.create_all(bind=engine)


def new_address(primary: bool) -> Address:
    return Address(
        address_type=random.choice(ADDRESS_TYPES),
        street=fake.street_address()[:200],
        city=fake.city()[:100],
        state=fake.state_abbr(),
        zip_code=fake.postcode(),
        country="USA",
        is_primary=primary,
    )


def new_customer(index: int) -> Customer:
    ctype = random.choices(CUSTOMER_TYPES, weights=[0.6, 0.25, 0.15], k=1)[0]
    first, last = fake.first_name(), fake.last_name()
    customer = Customer(
        first_name=first,
        last_name=last,
        # index suffix keeps the unique constraint happy across runs
        email=f"{first}.{last}.{index}@{fake.free_email_domain()}".lower(),
        phone=fake.numerify("(###) ###-####"),
        customer_type=ctype,
        notes=fake.sentence() if random.random() < 0.3 else None,
        created_date=fake.date_time_between(start_date="-1y", end_date="now"),
        is_active=random.random() < 0.9,
    )
    for n in range(random.randint(1, 2)):
        customer.addresses.append(new_address(primary=(n == 0)))
    return customer


def seed_fake_customers(session, count: int) -> None:
    start = session.query(Customer).count()
    customers = [new_customer(start + i) for i in range(count)]
    session.add_all(customers)
    session.flush()

    order_seq = session.query(Order).count()
    for c in customers:
        for _ in range(random.randint(0, 3)):
            order_seq += 1
            order = Order(
                order_number=f"ORD-{order_seq:05d}",
                total_amount=Decimal(str(round(random.uniform(10, 2500), 2))),
                status=random.choice(ORDER_STATUSES),
                description=fake.catch_phrase(),
                order_date=datetime.utcnow(),
            )
            order.customer_orders.append(CustomerOrder(customer=c, role="Primary"))
            session.add(order)
    session.commit()


def main() -> None:
    args = parse_args()
    if args.seed is not None:
        random.seed(args.seed); Faker.seed(args.seed)

    if args.reset:
        print("⚠️  Dropping & recreating tables ..."); reset_db()
    else:
        ensure_tables()

    session = SessionLocal()
    try:
        seed_sample_data(session)

        if args.fake > 0:
            print(f"Creating {args.fake} random customers...")
            seed_fake_customers(session, args.fake)

        # Summary
        print("\n✅ Seed complete")
        print(f"Customers:       {session.query(Customer).count()}")
        print(f"Addresses:       {session.query(Address).count()}")
        print(f"Orders:          {session.query(Order).count()}")
        print(f"Order links:     {session.query(CustomerOrder).count()}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
