"""
test_seed.py
------------
The startup sample data set: inserted once into an empty store, skipped afterwards.
"""

import pytest

from backend.models import Address, Customer, CustomerOrder, Order
from backend.seed_data import SAMPLE_CUSTOMERS, seed_sample_data


def test_seed_inserts_sample_data_into_empty_store(db_session):
    assert seed_sample_data(db_session) is True

    assert db_session.query(Customer).count() == len(SAMPLE_CUSTOMERS)
    assert db_session.query(Address).count() == 2
    assert db_session.query(Order).count() == 2
    assert db_session.query(CustomerOrder).count() == 2

    john = db_session.query(Customer).filter_by(email="john.doe@email.com").one()
    assert john.is_active is True
    assert [a.is_primary for a in john.addresses] == [True]
    assert [link.order.order_number for link in john.customer_orders] == ["ORD-001"]


def test_seed_is_skipped_when_customers_exist(db_session):
    db_session.add(Customer(first_name="Only", last_name="One", email="only.one@email.com"))
    db_session.commit()

    assert seed_sample_data(db_session) is False
    assert db_session.query(Customer).count() == 1
    assert db_session.query(Order).count() == 0


def test_seeded_data_is_served_by_the_api(client, db_session):
    seed_sample_data(db_session)

    names = [c["fullName"] for c in client.get("/api/customers").json()]
    assert names == ["John Doe", "Jane Smith", "Acme Corporation"]

    stats = client.get("/api/customers/stats").json()
    assert stats["totalOrders"] == 2
    assert stats["totalRevenue"] == pytest.approx(449.49)
