"""
Event model - customer behavior stream (views, carts, purchases, emails).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, ForeignKey, Index, JSON
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lifecycle_api.models.base import Base, UUIDMixin, TimestampMixin


class EventType(str, Enum):
    PRODUCT_VIEW = "PRODUCT_VIEW"
    ADD_TO_CART = "ADD_TO_CART"
    CHECKOUT_STARTED = "CHECKOUT_STARTED"
    PURCHASE = "PURCHASE"
    EMAIL_SENT = "EMAIL_SENT"


class Event(Base, UUIDMixin, TimestampMixin):
    """A single customer event. Read-only input to the lifecycle engine."""
    __tablename__ = "events"

    shop_id: Mapped[str] = mapped_column(ForeignKey("shops.id", ondelete="CASCADE"), nullable=False)
    customer_id: Mapped[Optional[str]] = mapped_column(ForeignKey("customers.id", ondelete="CASCADE"))

    type: Mapped[EventType] = mapped_column(SAEnum(EventType, name="event_type"), nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    data: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON)  # template keys, product handles, etc.

    # Relationships
    shop: Mapped["Shop"] = relationship("Shop", back_populates="events")
    customer: Mapped[Optional["Customer"]] = relationship("Customer", back_populates="events")

    __table_args__ = (
        Index("idx_event_customer_occurred", "customer_id", "occurred_at"),
    )
