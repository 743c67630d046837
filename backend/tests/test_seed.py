# backend/tests/test_seed.py
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from lifecycle_api.models import Shop, Customer, Order, Event, EventType
from lifecycle_api.scripts.seed import DEMO_SHOP_DOMAIN, seed_demo_data
from lifecycle_api.services.lifecycle_engine import (
    LifecycleStage,
    NextEmailKey,
    compute_lifecycle_decision,
)

NOW = datetime(2026, 2, 10, 8, 0, tzinfo=timezone.utc)


def mock_session(existing_shop=None):
    result = MagicMock()
    result.scalar_one_or_none.return_value = existing_shop

    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    return session


def added(session, model):
    objs = [call.args[0] for call in session.add.call_args_list]
    for call in session.add_all.call_args_list:
        objs.extend(call.args[0])
    return [o for o in objs if isinstance(o, model)]


@pytest.mark.asyncio
async def test_seed_creates_shop_customer_order_and_events():
    session = mock_session()

    customer = await seed_demo_data(session, "demo@example.com", NOW)

    shops = added(session, Shop)
    assert len(shops) == 1
    assert shops[0].shop_domain == DEMO_SHOP_DOMAIN

    assert customer.email == "demo@example.com"
    assert customer.orders_count == 1
    assert customer.total_spent_cents == 4999
    assert customer.last_order_at == NOW

    orders = added(session, Order)
    assert len(orders) == 1
    assert orders[0].order_number == "1001"
    assert orders[0].currency == "USD"

    events = added(session, Event)
    assert [e.type for e in events] == [
        EventType.PRODUCT_VIEW,
        EventType.ADD_TO_CART,
        EventType.PURCHASE,
        EventType.EMAIL_SENT,
    ]
    assert [NOW - e.occurred_at for e in events] == [
        timedelta(days=1),
        timedelta(minutes=45),
        timedelta(minutes=5),
        timedelta(0),
    ]
    assert events[3].data["templateKey"] == "post_purchase_1"
    session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_seed_reuses_existing_shop():
    shop = Shop(id="shop-1", shop_domain=DEMO_SHOP_DOMAIN)
    session = mock_session(existing_shop=shop)

    customer = await seed_demo_data(session, "demo@example.com", NOW)

    assert added(session, Shop) == []
    assert customer.shop_id == "shop-1"
    assert all(e.shop_id == "shop-1" for e in added(session, Event))


@pytest.mark.asyncio
async def test_seeded_customer_gets_nurture_email():
    session = mock_session()

    customer = await seed_demo_data(session, "demo@example.com", NOW)
    decision = compute_lifecycle_decision(customer, added(session, Event), now=NOW)

    assert decision.stage == LifecycleStage.FIRST_TIME_BUYER
    assert decision.missions == []
    assert decision.next_email_key == NextEmailKey.STAGE_NURTURE_1
