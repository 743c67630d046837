"""
Seed demo data: one shop, one customer, one order and four lifecycle events
spanning view -> cart -> purchase -> post-purchase email.

Usage: python -m lifecycle_api.scripts.seed
"""

import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifecycle_api.config import get_settings
from lifecycle_api.database import Database
from lifecycle_api.models import Shop, Customer, Order, Event, EventType

logger = logging.getLogger(__name__)

DEMO_SHOP_DOMAIN = "demo-store.myshopify.com"


async def seed_demo_data(session: AsyncSession, email: str, now: datetime) -> Customer:
    # 1. Create or reuse demo shop
    existing = await session.execute(select(Shop).where(Shop.shop_domain == DEMO_SHOP_DOMAIN))
    shop = existing.scalar_one_or_none()
    if not shop:
        logger.info(f"Seeding shop {DEMO_SHOP_DOMAIN}...")
        shop = Shop(shop_domain=DEMO_SHOP_DOMAIN)
        session.add(shop)
        await session.flush()

    # 2. Demo customer
    customer = Customer(
        shop_id=shop.id,
        email=email,
        first_name="Demo",
        last_name="Customer",
        orders_count=1,
        total_spent_cents=4999,
        first_order_at=now,
        last_order_at=now,
    )
    session.add(customer)
    await session.flush()

    # 3. Demo order
    order = Order(
        shop_id=shop.id,
        customer_id=customer.id,
        order_number="1001",
        currency="USD",
        total_price_cents=4999,
        processed_at=now,
    )
    session.add(order)

    # 4. Demo lifecycle events
    session.add_all([
        Event(
            shop_id=shop.id,
            customer_id=customer.id,
            type=EventType.PRODUCT_VIEW,
            occurred_at=now - timedelta(days=1),
            data={"productHandle": "demo-product", "source": "seed"},
        ),
        Event(
            shop_id=shop.id,
            customer_id=customer.id,
            type=EventType.ADD_TO_CART,
            occurred_at=now - timedelta(minutes=45),
            data={"productHandle": "demo-product", "qty": 1, "source": "seed"},
        ),
        Event(
            shop_id=shop.id,
            customer_id=customer.id,
            type=EventType.PURCHASE,
            occurred_at=now - timedelta(minutes=5),
            data={
                "orderNumber": order.order_number,
                "totalPriceCents": order.total_price_cents,
                "source": "seed",
            },
        ),
        Event(
            shop_id=shop.id,
            customer_id=customer.id,
            type=EventType.EMAIL_SENT,
            occurred_at=now,
            data={
                "templateKey": "post_purchase_1",
                "subject": "Thanks for your order!",
                "source": "seed",
            },
        ),
    ])

    await session.commit()
    return customer


async def main() -> int:
    settings = get_settings()
    database = Database.from_settings(settings)
    try:
        await database.create_tables()
        async with database.session() as session:
            customer = await seed_demo_data(session, settings.DEMO_CUSTOMER_EMAIL, datetime.now(timezone.utc))
        logger.info(f"Seed complete (Shop, Customer {customer.id}, Order, Events created)")
        return 0
    except Exception:
        logger.exception("Seed failed")
        return 1
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main()))
