"""
SQLAlchemy ORM models for the Customer Management API.

Tables:
- Customer: person or company we sell to; never hard-deleted through the API
- Address: postal addresses owned by one customer
- Order: a sale with a unique order number and amount
- CustomerOrder: many-to-many link between customers and orders, with a role

Foreign keys cascade on delete at the database level, and the relationships
mirror that with `passive_deletes=True` so SQLAlchemy lets the store do it.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from .db import Base


class Customer(Base):
    """Customer with contact details, a type and a soft-delete flag."""
    __tablename__ = "customers"
    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    phone = Column(String(20), nullable=False, default="")
    created_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    last_updated = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    customer_type = Column(String(50), nullable=True, default="Individual")  # Individual | Business | Premium
    notes = Column(String(500), nullable=True)

    addresses = relationship(
        "Address",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Address.id",
    )
    customer_orders = relationship(
        "CustomerOrder",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Address(Base):
    """Postal address; at most one per customer should be primary."""
    __tablename__ = "addresses"
    id = Column(Integer, primary_key=True)
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), index=True, nullable=False
    )
    address_type = Column(String(50), nullable=False, default="Home")  # Home | Work | Billing | Shipping
    street = Column(String(200), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(50), nullable=False)
    zip_code = Column(String(20), nullable=False)
    country = Column(String(50), nullable=False, default="USA")
    is_primary = Column(Boolean, nullable=False, default=False)

    customer = relationship("Customer", back_populates="addresses")


class Order(Base):
    """Order with a unique number; linked to customers through CustomerOrder."""
    __tablename__ = "orders"
    id = Column(Integer, primary_key=True)
    order_number = Column(String(50), nullable=False, unique=True, index=True)
    order_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    total_amount = Column(Numeric(18, 2), nullable=False)
    status = Column(String(20), nullable=False, default="Pending")  # Pending | Processing | Completed | Cancelled
    description = Column(String(500), nullable=True)

    customer_orders = relationship(
        "CustomerOrder",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CustomerOrder(Base):
    """Association row: which customer takes part in which order, and how."""
    __tablename__ = "customer_orders"
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True
    )
    order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    assigned_date = Column(DateTime, nullable=False, default=datetime.utcnow)
    role = Column(String(50), nullable=False, default="Primary")  # Primary | Secondary | Billing Contact

    customer = relationship("Customer", back_populates="customer_orders")
    order = relationship("Order", back_populates="customer_orders")
