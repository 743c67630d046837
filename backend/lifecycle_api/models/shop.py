"""
Shop model - represents a connected storefront.
"""

from typing import List

from sqlalchemy import String, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lifecycle_api.models.base import Base, UUIDMixin, TimestampMixin


class Shop(Base, UUIDMixin, TimestampMixin):
    """A Shopify store whose customers we run lifecycle marketing for."""
    __tablename__ = "shops"

    shop_domain: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    # Relationships
    customers: Mapped[List["Customer"]] = relationship("Customer", back_populates="shop", cascade="all, delete-orphan")
    orders: Mapped[List["Order"]] = relationship("Order", back_populates="shop", cascade="all, delete-orphan")
    events: Mapped[List["Event"]] = relationship("Event", back_populates="shop", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_shop_domain", "shop_domain"),
    )
