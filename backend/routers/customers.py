"""
Customer routes under /api/customers.

Static paths (/inactive, /search, /stats, /filter/...) are declared before
/{customer_id} so they are not captured by the id route.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..repositories.unit_of_work import UnitOfWork
from ..schemas import (
    CustomerCreate,
    CustomerDeletedOut,
    CustomerOut,
    CustomerPatch,
    CustomerStatsOut,
    CustomerUpdate,
    OrderOut,
)
from ..services import customer_service, order_service
from .deps import get_uow

router = APIRouter(prefix="/api/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerOut])
def list_customers(uow: UnitOfWork = Depends(get_uow)) -> List[CustomerOut]:
    """All active customers with their addresses and order counts."""
    return customer_service.list_active_customers(uow)


@router.get("/inactive", response_model=List[CustomerOut])
def list_inactive_customers(uow: UnitOfWork = Depends(get_uow)) -> List[CustomerOut]:
    """Soft-deleted customers."""
    return customer_service.list_inactive_customers(uow)


@router.get("/search", response_model=List[CustomerOut])
def search_customers(
    query: Optional[str] = Query(None, description="Substring of first name, last name or email"),
    uow: UnitOfWork = Depends(get_uow),
) -> List[CustomerOut]:
    """
    Search active customers by partial first name, last name or email.

    A missing or empty `query` is a 400, not an empty list.
    """
    return customer_service.search_customers(uow, query)


@router.get("/filter/{customer_type}", response_model=List[CustomerOut])
def filter_customers(customer_type: str, uow: UnitOfWork = Depends(get_uow)) -> List[CustomerOut]:
    """Active customers of exactly this type (Individual, Business, Premium, ...)."""
    return customer_service.filter_customers_by_type(uow, customer_type)


@router.get("/stats", response_model=CustomerStatsOut)
def customer_statistics(uow: UnitOfWork = Depends(get_uow)) -> CustomerStatsOut:
    """Dashboard numbers: customer counts, order count, revenue, type breakdown."""
    return customer_service.get_statistics(uow)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, uow: UnitOfWork = Depends(get_uow)) -> CustomerOut:
    customer = customer_service.get_customer(uow, customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.get("/{customer_id}/orders", response_model=List[OrderOut])
def list_customer_orders(customer_id: int, uow: UnitOfWork = Depends(get_uow)) -> List[OrderOut]:
    """Orders the customer takes part in; empty for unknown customers."""
    return order_service.list_orders_for_customer(uow, customer_id)


@router.post("", response_model=CustomerOut, status_code=201)
def create_customer(
    payload: CustomerCreate, response: Response, uow: UnitOfWork = Depends(get_uow)
) -> CustomerOut:
    """
    Create a customer, optionally with a primary address.

    Returns 201 with a Location header; 400 if the email is already used.
    """
    customer = customer_service.create_customer(uow, payload)
    response.headers["Location"] = f"/api/customers/{customer.customer_id}"
    return customer


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: int, payload: CustomerUpdate, uow: UnitOfWork = Depends(get_uow)
) -> CustomerOut:
    """Full update; omitted optional fields are reset to their defaults."""
    return customer_service.update_customer(uow, customer_id, payload)


@router.patch("/{customer_id}", response_model=CustomerOut)
def patch_customer(
    customer_id: int, payload: CustomerPatch, uow: UnitOfWork = Depends(get_uow)
) -> CustomerOut:
    """Partial update; only supplied, non-empty fields change."""
    return customer_service.patch_customer(uow, customer_id, payload)


@router.delete("/{customer_id}", response_model=CustomerDeletedOut)
def delete_customer(customer_id: int, uow: UnitOfWork = Depends(get_uow)) -> CustomerDeletedOut:
    """Soft delete: the customer is marked inactive, nothing is removed."""
    if not customer_service.delete_customer(uow, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
    return CustomerDeletedOut(
        message="Customer successfully deactivated (soft deleted)",
        customer_id=customer_id,
        timestamp=datetime.utcnow(),
    )
