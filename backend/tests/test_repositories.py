"""
test_repositories.py
--------------------
Repository lookups by natural key and the unit of work's transaction control,
exercised directly against the test session.
"""

from datetime import datetime
from decimal import Decimal

from backend.models import Customer, Order


def _customer(email="repo@email.com"):
    return Customer(first_name="Repo", last_name="Row", email=email, created_date=datetime.utcnow())


def _order(number="N-1"):
    return Order(order_number=number, total_amount=Decimal("9.99"), order_date=datetime.utcnow())


def test_get_by_email_and_email_exists(uow):
    """
    The email lookup is exact; excluding the owner's own id (the update case)
    makes its email count as free.
    """
    customer = uow.customers.add(_customer())
    uow.commit()

    assert uow.customers.get_by_email("repo@email.com").id == customer.id
    assert uow.customers.get_by_email("other@email.com") is None
    assert uow.customers.email_exists("repo@email.com") is True
    assert uow.customers.email_exists("repo@email.com", exclude_customer_id=customer.id) is False
    assert uow.customers.email_exists("repo@email.com", exclude_customer_id=customer.id + 1) is True


def test_get_by_order_number_and_order_number_exists(uow):
    order = uow.orders.add(_order("N-42"))
    uow.commit()

    assert uow.orders.get_by_order_number("N-42").id == order.id
    assert uow.orders.get_by_order_number("N-43") is None
    assert uow.orders.order_number_exists("N-42") is True
    assert uow.orders.order_number_exists("N-42", exclude_order_id=order.id) is False


def test_rollback_discards_staged_rows(uow, db_session):
    uow.customers.add(_customer("kept@email.com"))
    uow.commit()

    uow.customers.add(_customer("dropped@email.com"))
    uow.orders.add(_order())
    uow.flush()
    uow.rollback()

    assert [c.email for c in db_session.query(Customer).all()] == ["kept@email.com"]
    assert db_session.query(Order).count() == 0


def test_rollback_restores_modified_attributes(uow):
    customer = uow.customers.add(_customer())
    uow.commit()

    customer.first_name = "Changed"
    uow.rollback()

    assert uow.customers.get_by_id(customer.id).first_name == "Repo"


def test_customer_delete_is_soft(uow):
    customer = uow.customers.add(_customer())
    uow.commit()

    assert uow.customers.delete(customer.id) is True
    uow.commit()

    row = uow.customers.get_by_id(customer.id)
    assert row is not None
    assert row.is_active is False
    assert row.last_updated is not None
    assert uow.customers.delete(customer.id + 100) is False
