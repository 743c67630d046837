"""
SQLAlchemy Models for the Lifecycle Marketing API.

This package is organized by domain:
- base.py: Base class and mixins
- shop.py: Connected storefronts
- customer.py: Customers and purchase totals
- order.py: Orders
- event.py: Customer event stream and the EventType enum

All models are re-exported from this module.
"""

# Base
from lifecycle_api.models.base import Base, UUIDMixin, TimestampMixin

# Core domain models
from lifecycle_api.models.shop import Shop
from lifecycle_api.models.customer import Customer
from lifecycle_api.models.order import Order
from lifecycle_api.models.event import Event, EventType


__all__ = [
    # Base
    "Base",
    "UUIDMixin",
    "TimestampMixin",

    # Core domain
    "Shop",
    "Customer",
    "Order",
    "Event",
    "EventType",
]
