"""
Application-level errors raised by the service layer.

The FastAPI app turns them into HTTP responses (see `backend/main.py`):
- NotFoundError    -> 404 {"detail": "Customer not found"}
- ValidationError  -> 400 {"error", "message", "field"}
"""

from typing import Optional


class ServiceError(Exception):
    """Base class for errors a caller can act on."""


class NotFoundError(ServiceError):
    """A referenced entity id does not exist."""

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class ValidationError(ServiceError):
    """Input rejected by a business rule; `field` names the offending input."""

    error = "Validation failed"

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)


class DuplicateEmailError(ValidationError):
    error = "Email already exists"

    def __init__(self, email: str):
        super().__init__(f"A customer with email '{email}' already exists.", field="email")


class DuplicateOrderNumberError(ValidationError):
    error = "Order number already exists"

    def __init__(self, order_number: str):
        super().__init__(
            f"An order with number '{order_number}' already exists.", field="orderNumber"
        )
