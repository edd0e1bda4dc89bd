"""Order routes under /api/orders."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..repositories.unit_of_work import UnitOfWork
from ..schemas import OrderIn, OrderOut
from ..services import order_service
from .deps import get_uow

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("", response_model=List[OrderOut])
def list_orders(uow: UnitOfWork = Depends(get_uow)) -> List[OrderOut]:
    """All orders with their associated customers (id, name, email, role)."""
    return order_service.list_orders(uow)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(payload: OrderIn, response: Response, uow: UnitOfWork = Depends(get_uow)) -> OrderOut:
    """
    Create an order linked to `customerIds` (role "Primary").

    400 on a duplicate order number or an unknown customer id.
    """
    order = order_service.create_order(uow, payload)
    response.headers["Location"] = f"/api/orders/{order.order_id}"
    return order


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int, uow: UnitOfWork = Depends(get_uow)) -> OrderOut:
    order = order_service.get_order(uow, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/{order_id}", response_model=OrderOut)
def update_order(order_id: int, payload: OrderIn, uow: UnitOfWork = Depends(get_uow)) -> OrderOut:
    return order_service.update_order(uow, order_id, payload)


@router.delete("/{order_id}")
def delete_order(order_id: int, uow: UnitOfWork = Depends(get_uow)) -> dict:
    if not order_service.delete_order(uow, order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"message": "Order deleted successfully", "orderId": order_id}
