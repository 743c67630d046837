"""
Lifecycle Service
=================
Loads a customer and their event stream, then runs the lifecycle engine.

Exactly two sequential reads per evaluation: the customer, then its events.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifecycle_api.models import Customer, Event
from lifecycle_api.services.lifecycle_engine import (
    DEFAULT_RULES,
    LifecycleDecision,
    LifecycleRules,
    compute_lifecycle_decision,
)

logger = logging.getLogger(__name__)


@dataclass
class CustomerEvaluation:
    customer: Customer
    events: List[Event]
    decision: LifecycleDecision


class LifecycleService:
    def __init__(self, session: AsyncSession, rules: LifecycleRules = DEFAULT_RULES):
        self.session = session
        self.rules = rules

    async def find_customer_by_email(self, email: str) -> Optional[Customer]:
        """Most recently created customer with this email."""
        stmt = (
            select(Customer)
            .where(Customer.email == email)
            .order_by(Customer.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        result = await self.session.execute(
            select(Customer).where(Customer.id == customer_id)
        )
        return result.scalar_one_or_none()

    async def list_events(self, customer_id: str) -> List[Event]:
        stmt = (
            select(Event)
            .where(Event.customer_id == customer_id)
            .order_by(Event.occurred_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def decide(self, customer: Customer, events: List[Event], now: Optional[datetime] = None) -> LifecycleDecision:
        decision = compute_lifecycle_decision(customer, events, now=now, rules=self.rules)
        logger.info(
            f"Lifecycle decision for customer {customer.id}: stage={decision.stage.value} "
            f"missions={[m.value for m in decision.missions]} next={decision.next_email_key.value}"
        )
        return decision

    async def evaluate_customer(self, customer: Customer, now: Optional[datetime] = None) -> CustomerEvaluation:
        events = await self.list_events(customer.id)
        return CustomerEvaluation(customer=customer, events=events, decision=self.decide(customer, events, now))

    async def evaluate_by_email(self, email: str, now: Optional[datetime] = None) -> Optional[CustomerEvaluation]:
        customer = await self.find_customer_by_email(email)
        if not customer:
            logger.warning(f"No customer found for {email}")
            return None
        return await self.evaluate_customer(customer, now)

    async def evaluate_by_id(self, customer_id: str, now: Optional[datetime] = None) -> Optional[CustomerEvaluation]:
        customer = await self.get_customer(customer_id)
        if not customer:
            logger.warning(f"Customer {customer_id} not found")
            return None
        return await self.evaluate_customer(customer, now)
