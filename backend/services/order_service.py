"""
backend/services/order_service.py

Orders and their customer links. Order numbers are unique; an order is
created together with its CustomerOrder rows in a single transaction, so a
bad customer id leaves nothing behind.
"""

from datetime import datetime
from typing import List, Optional

from ..logging_config import get_logger
from ..models import CustomerOrder, Order
from ..repositories.unit_of_work import UnitOfWork
from ..schemas import OrderIn, OrderOut
from .errors import DuplicateOrderNumberError, NotFoundError
from .projections import to_order_out

logger = get_logger(__name__)

DEFAULT_ORDER_STATUS = "Pending"
DEFAULT_ORDER_ROLE = "Primary"


def list_orders(uow: UnitOfWork) -> List[OrderOut]:
    return [to_order_out(o) for o in uow.orders.get_all()]


def get_order(uow: UnitOfWork, order_id: int) -> Optional[OrderOut]:
    order = uow.orders.get_by_id_with_customers(order_id)
    return to_order_out(order) if order else None


def list_orders_for_customer(uow: UnitOfWork, customer_id: int) -> List[OrderOut]:
    return [to_order_out(o) for o in uow.orders.get_by_customer_id(customer_id)]


def create_order(uow: UnitOfWork, payload: OrderIn) -> OrderOut:
    """
    Create an order and link it to `payload.customer_ids` with role "Primary".

    Customer ids are not looked up first: an unknown id fails the commit on
    the foreign key and the order is rolled back with it.

    Raises:
        DuplicateOrderNumberError: if the order number is taken.
        sqlalchemy.exc.IntegrityError: on a foreign key or unique violation.
    """
    if uow.orders.order_number_exists(payload.order_number):
        logger.warning(f"Rejected order create: duplicate number {payload.order_number}")
        raise DuplicateOrderNumberError(payload.order_number)

    now = datetime.utcnow()
    order = Order(
        order_number=payload.order_number,
        total_amount=payload.total_amount,
        status=payload.status or DEFAULT_ORDER_STATUS,
        description=payload.description,
        order_date=now,
    )
    uow.orders.add(order)
    uow.flush()

    # dict.fromkeys keeps the first occurrence of each id, in order
    for customer_id in dict.fromkeys(payload.customer_ids):
        uow.orders.add_customer_order(
            CustomerOrder(
                customer_id=customer_id,
                order_id=order.id,
                role=DEFAULT_ORDER_ROLE,
                assigned_date=now,
            )
        )

    uow.commit()
    logger.info(f"Created order #{order.id} ({order.order_number}) for customers {list(payload.customer_ids)}")
    return to_order_out(uow.orders.get_by_id_with_customers(order.id))


def update_order(uow: UnitOfWork, order_id: int, payload: OrderIn) -> OrderOut:
    """
    Overwrite number, amount, status and description. Links are untouched.

    Raises:
        NotFoundError: if the order does not exist.
        DuplicateOrderNumberError: if another order has the new number.
    """
    order = uow.orders.get_by_id_with_customers(order_id)
    if order is None:
        raise NotFoundError("Order")

    if uow.orders.order_number_exists(payload.order_number, exclude_order_id=order_id):
        logger.warning(f"Rejected update of order #{order_id}: duplicate number {payload.order_number}")
        raise DuplicateOrderNumberError(payload.order_number)

    order.order_number = payload.order_number
    order.total_amount = payload.total_amount
    order.status = payload.status or DEFAULT_ORDER_STATUS
    order.description = payload.description

    uow.orders.update(order)
    uow.commit()
    logger.info(f"Updated order #{order_id}")
    return to_order_out(uow.orders.get_by_id_with_customers(order_id))


def delete_order(uow: UnitOfWork, order_id: int) -> bool:
    """Delete an order and, by cascade, its customer links. False if missing."""
    if not uow.orders.delete(order_id):
        return False
    uow.commit()
    logger.info(f"Deleted order #{order_id}")
    return True
