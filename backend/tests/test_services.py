"""
test_services.py
----------------
Service-layer tests: call the service functions directly with a UnitOfWork
over the test session, without going through HTTP.

These cover the error contract the routes rely on (which exception, which
field) and that a rejected write leaves the store untouched.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from backend.models import Customer, Order
from backend.schemas import AddressIn, CustomerCreate, CustomerPatch, CustomerUpdate, OrderIn
from backend.services import address_service, customer_service, order_service
from backend.services.errors import (
    DuplicateEmailError,
    DuplicateOrderNumberError,
    NotFoundError,
    ValidationError,
)


def _new_customer(uow, email="svc@email.com", **extra):
    return customer_service.create_customer(
        uow, CustomerCreate(first_name="Svc", last_name="Tester", email=email, **extra)
    )


def _address(street="1 Main St", primary=False):
    return AddressIn(street=street, city="Anytown", state="CA", zip_code="12345", is_primary=primary)


# ── customers ─────────────────────────────────────────────

def test_create_customer_stamps_created_date_and_active(uow, db_session):
    out = _new_customer(uow)
    row = db_session.get(Customer, out.customer_id)
    assert row.is_active is True
    assert row.created_date is not None
    assert row.last_updated is None


def test_duplicate_email_raises_and_inserts_nothing(uow, db_session):
    _new_customer(uow)

    with pytest.raises(DuplicateEmailError) as exc_info:
        _new_customer(uow)

    assert exc_info.value.field == "email"
    assert exc_info.value.error == "Email already exists"
    assert db_session.query(Customer).count() == 1


def test_get_customer_missing_returns_none(uow):
    assert customer_service.get_customer(uow, 12345) is None


def test_update_missing_customer_raises_not_found(uow):
    payload = CustomerUpdate(first_name="A", last_name="B", email="a.b@email.com")
    with pytest.raises(NotFoundError) as exc_info:
        customer_service.update_customer(uow, 12345, payload)
    assert str(exc_info.value) == "Customer not found"


def test_patch_without_fields_stamps_last_updated(uow):
    created = _new_customer(uow, notes="n")
    patched = customer_service.patch_customer(uow, created.customer_id, CustomerPatch())
    assert patched.last_updated is not None
    assert patched.notes == "n"
    assert patched.full_name == created.full_name


def test_delete_customer_is_soft_and_reports_missing(uow, db_session):
    created = _new_customer(uow)

    assert customer_service.delete_customer(uow, created.customer_id) is True
    assert customer_service.delete_customer(uow, created.customer_id) is True
    assert customer_service.delete_customer(uow, 12345) is False

    assert db_session.query(Customer).count() == 1
    assert customer_service.list_active_customers(uow) == []
    assert [c.customer_id for c in customer_service.list_inactive_customers(uow)] == [created.customer_id]


@pytest.mark.parametrize("query", [None, ""])
def test_search_without_query_raises(uow, query):
    with pytest.raises(ValidationError) as exc_info:
        customer_service.search_customers(uow, query)
    assert exc_info.value.field == "query"


def test_statistics_match_store(uow):
    _new_customer(uow, email="one@email.com", customer_type="Business")
    gone = _new_customer(uow, email="two@email.com")
    customer_service.delete_customer(uow, gone.customer_id)
    order_service.create_order(uow, OrderIn(order_number="ST-1", total_amount="19.99"))

    stats = customer_service.get_statistics(uow)

    assert (stats.total_customers, stats.active_customers, stats.inactive_customers) == (2, 1, 1)
    assert stats.total_orders == 1
    assert stats.total_revenue == 19.99
    assert [(b.customer_type, b.count) for b in stats.customer_type_breakdown] == [("Business", 1)]


# ── addresses ─────────────────────────────────────────────

def test_create_address_for_missing_customer_raises(uow):
    with pytest.raises(NotFoundError) as exc_info:
        address_service.create_address(uow, 12345, _address())
    assert exc_info.value.entity == "Customer"


def test_at_most_one_primary_after_many_primary_inserts(uow):
    cid = _new_customer(uow).customer_id
    for i in range(4):
        address_service.create_address(uow, cid, _address(f"{i} Main St", primary=True))

    flags = [a.is_primary for a in address_service.list_addresses(uow, cid)]
    assert flags == [False, False, False, True]


def test_update_missing_address_raises(uow):
    with pytest.raises(NotFoundError):
        address_service.update_address(uow, 12345, _address())


def test_delete_missing_address_returns_false(uow):
    assert address_service.delete_address(uow, 12345) is False


# ── orders ────────────────────────────────────────────────

def test_duplicate_order_number_raises(uow):
    order_service.create_order(uow, OrderIn(order_number="DUP-1", total_amount=1))
    with pytest.raises(DuplicateOrderNumberError) as exc_info:
        order_service.create_order(uow, OrderIn(order_number="DUP-1", total_amount=2))
    assert exc_info.value.field == "orderNumber"


def test_unknown_customer_id_raises_integrity_error_and_rolls_back(uow, db_session):
    with pytest.raises(IntegrityError):
        order_service.create_order(
            uow, OrderIn(order_number="FK-1", total_amount=1, customer_ids=[12345])
        )
    assert db_session.query(Order).count() == 0


def test_orders_for_customer(uow):
    cid = _new_customer(uow).customer_id
    order_service.create_order(uow, OrderIn(order_number="C-1", total_amount=1, customer_ids=[cid]))
    order_service.create_order(uow, OrderIn(order_number="C-2", total_amount=2))

    assert [o.order_number for o in order_service.list_orders_for_customer(uow, cid)] == ["C-1"]
    assert order_service.get_order(uow, 12345) is None
    assert order_service.delete_order(uow, 12345) is False
