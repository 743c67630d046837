"""
Customer model - purchase totals consumed by the lifecycle engine.
"""

from datetime import datetime
from typing import Optional, List

from sqlalchemy import String, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lifecycle_api.models.base import Base, UUIDMixin, TimestampMixin


class Customer(Base, UUIDMixin, TimestampMixin):
    """
    Represents a shop customer.
    Stage and missions are never stored here; they are recomputed per request.
    """
    __tablename__ = "customers"

    shop_id: Mapped[str] = mapped_column(ForeignKey("shops.id", ondelete="CASCADE"), nullable=False)

    # Contact Info
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(255))
    last_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Purchase Behavior (money in minor units)
    orders_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_spent_cents: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    first_order_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    last_order_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Relationships
    shop: Mapped["Shop"] = relationship("Shop", back_populates="customers")
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="customer")
    events: Mapped[List["Event"]] = relationship("Event", back_populates="customer")

    __table_args__ = (
        Index("idx_customer_shop_email", "shop_id", "email"),
        Index("idx_customer_last_order", "last_order_at"),
    )
