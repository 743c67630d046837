"""
Lifecycle API Router.

Evaluates the lifecycle engine for stored customers (demo or by id) and for
ad-hoc payloads that never touch the database.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from lifecycle_api.config import Settings, get_settings
from lifecycle_api.models import EventType
from lifecycle_api.routers.dependencies import get_lifecycle_rules, get_lifecycle_service
from lifecycle_api.services.lifecycle_engine import (
    CustomerSnapshot,
    EventRecord,
    LifecycleRules,
    LifecycleStage,
    Mission,
    NextEmailKey,
    compute_lifecycle_decision,
)
from lifecycle_api.services.lifecycle_service import CustomerEvaluation, LifecycleService

logger = logging.getLogger(__name__)

router = APIRouter()


class CamelModel(BaseModel):
    """Serializes with camelCase keys; accepts either casing on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class CustomerSummary(CamelModel):
    id: str
    email: str
    orders_count: int
    total_spent_cents: int
    last_order_at: Optional[datetime] = None


class EventSummary(CamelModel):
    type: EventType
    occurred_at: datetime


class DecisionResponse(CamelModel):
    stage: LifecycleStage
    missions: List[Mission]
    next_email_key: NextEmailKey
    reason: List[str]


class CustomerDecisionResponse(CamelModel):
    ok: bool = True
    customer: CustomerSummary
    events: List[EventSummary]
    decision: DecisionResponse


class CustomerInput(CamelModel):
    orders_count: int = Field(ge=0)
    total_spent_cents: int = Field(default=0, ge=0)
    last_order_at: Optional[datetime] = None


class EventInput(CamelModel):
    type: EventType
    occurred_at: datetime


class EvaluateRequest(CamelModel):
    customer: CustomerInput
    events: List[EventInput] = []
    now: Optional[datetime] = None


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"ok": False, "error": message})


def _to_response(evaluation: CustomerEvaluation) -> CustomerDecisionResponse:
    return CustomerDecisionResponse(
        customer=CustomerSummary.model_validate(evaluation.customer),
        events=[EventSummary.model_validate(e) for e in evaluation.events],
        decision=DecisionResponse.model_validate(evaluation.decision),
    )


@router.get("/test", response_model=CustomerDecisionResponse)
async def evaluate_demo_customer(
    service: LifecycleService = Depends(get_lifecycle_service),
    settings: Settings = Depends(get_settings),
):
    """Run the engine for the seeded demo customer."""
    evaluation = await service.evaluate_by_email(settings.DEMO_CUSTOMER_EMAIL)
    if not evaluation:
        return _not_found("No demo customer found. Run seed.")
    return _to_response(evaluation)


@router.get("/customers/{customer_id}", response_model=CustomerDecisionResponse)
async def evaluate_customer(
    customer_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    """Run the engine for any stored customer."""
    evaluation = await service.evaluate_by_id(customer_id)
    if not evaluation:
        return _not_found("Customer not found")
    return _to_response(evaluation)


@router.post("/evaluate", response_model=DecisionResponse)
async def evaluate_payload(
    payload: EvaluateRequest,
    rules: LifecycleRules = Depends(get_lifecycle_rules),
):
    """Evaluate a raw customer/events payload without touching storage."""
    customer = CustomerSnapshot(
        orders_count=payload.customer.orders_count,
        total_spent_cents=payload.customer.total_spent_cents,
        last_order_at=payload.customer.last_order_at,
    )
    events = [EventRecord(type=e.type, occurred_at=e.occurred_at) for e in payload.events]

    decision = compute_lifecycle_decision(customer, events, now=payload.now, rules=rules)
    logger.info(f"Ad-hoc lifecycle decision: stage={decision.stage.value} next={decision.next_email_key.value}")
    return DecisionResponse.model_validate(decision)
