"""Address routes under /api/customers/{customer_id}/addresses."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from ..repositories.unit_of_work import UnitOfWork
from ..schemas import AddressIn, AddressOut
from ..services import address_service
from .deps import get_uow

router = APIRouter(prefix="/api/customers/{customer_id}/addresses", tags=["Addresses"])


def _require_customer(uow: UnitOfWork, customer_id: int) -> None:
    if not address_service.customer_exists(uow, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")


def _require_address(uow: UnitOfWork, customer_id: int, address_id: int) -> AddressOut:
    address = address_service.get_address(uow, customer_id, address_id)
    if address is None:
        raise HTTPException(status_code=404, detail="Address not found")
    return address


@router.get("", response_model=List[AddressOut])
def list_addresses(customer_id: int, uow: UnitOfWork = Depends(get_uow)) -> List[AddressOut]:
    _require_customer(uow, customer_id)
    return address_service.list_addresses(uow, customer_id)


@router.post("", response_model=AddressOut, status_code=201)
def add_address(
    customer_id: int, payload: AddressIn, response: Response, uow: UnitOfWork = Depends(get_uow)
) -> AddressOut:
    """
    Add an address. A primary address takes the flag away from the
    customer's other addresses.
    """
    address = address_service.create_address(uow, customer_id, payload)
    response.headers["Location"] = f"/api/customers/{customer_id}/addresses/{address.address_id}"
    return address


@router.get("/{address_id}", response_model=AddressOut)
def get_address(customer_id: int, address_id: int, uow: UnitOfWork = Depends(get_uow)) -> AddressOut:
    return _require_address(uow, customer_id, address_id)


@router.put("/{address_id}", response_model=AddressOut)
def update_address(
    customer_id: int, address_id: int, payload: AddressIn, uow: UnitOfWork = Depends(get_uow)
) -> AddressOut:
    _require_address(uow, customer_id, address_id)
    return address_service.update_address(uow, address_id, payload)


@router.delete("/{address_id}", status_code=204)
def delete_address(customer_id: int, address_id: int, uow: UnitOfWork = Depends(get_uow)) -> Response:
    _require_address(uow, customer_id, address_id)
    address_service.delete_address(uow, address_id)
    return Response(status_code=204)


@router.put("/{address_id}/primary", response_model=List[AddressOut])
def set_primary_address(
    customer_id: int, address_id: int, uow: UnitOfWork = Depends(get_uow)
) -> List[AddressOut]:
    """
    Make this address the customer's only primary address and return all of
    the customer's addresses. An address id of another customer leaves the
    customer with no primary address.
    """
    _require_customer(uow, customer_id)
    return address_service.set_primary_address(uow, customer_id, address_id)
