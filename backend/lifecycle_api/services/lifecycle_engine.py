"""
Lifecycle Engine
================

Maps a customer's order totals and event stream to:
- a Stage (stable lifetime-value tier)
- Missions (situational campaign overlays, e.g. abandoned cart)
- the next email to send, with a flat audit trail of reasons.

This is a pure decision service - no I/O, no side effects, no hidden state.
Callers pass ``now`` once so a single evaluation sees one fixed clock.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Protocol

from lifecycle_api.models.event import EventType

if TYPE_CHECKING:
    from lifecycle_api.config import Settings


class LifecycleStage(str, Enum):
    WINDOW_SHOPPER = "WINDOW_SHOPPER"
    FIRST_TIME_BUYER = "FIRST_TIME_BUYER"
    REPEAT_BUYER = "REPEAT_BUYER"
    VIP = "VIP"


class Mission(str, Enum):
    CART_RECOVERY = "CART_RECOVERY"
    WINBACK = "WINBACK"


class NextEmailKey(str, Enum):
    CART_RECOVERY_1 = "cart_recovery_1"
    WINBACK_1 = "winback_1"
    STAGE_NURTURE_1 = "stage_nurture_1"


# Higher sorts first
MISSION_PRIORITY = {
    Mission.CART_RECOVERY: 2,
    Mission.WINBACK: 1,
}

CART_EVENT_TYPES = (EventType.ADD_TO_CART, EventType.CHECKOUT_STARTED)


class CustomerLike(Protocol):
    orders_count: int
    total_spent_cents: int
    last_order_at: Optional[datetime]


class EventLike(Protocol):
    type: EventType
    occurred_at: datetime


@dataclass(frozen=True)
class CustomerSnapshot:
    """Detached customer input; ORM ``Customer`` rows work just as well."""
    orders_count: int
    total_spent_cents: int = 0
    last_order_at: Optional[datetime] = None


@dataclass(frozen=True)
class EventRecord:
    type: EventType
    occurred_at: datetime


@dataclass(frozen=True)
class LifecycleRules:
    """Thresholds driving stage and mission rules."""
    vip_min_orders: int = 5
    vip_min_spend_cents: int = 50_000  # $500
    repeat_min_orders: int = 2
    cart_lookback_hours: int = 24
    winback_inactive_days: int = 75

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LifecycleRules":
        return cls(
            vip_min_orders=settings.LIFECYCLE_VIP_MIN_ORDERS,
            vip_min_spend_cents=settings.LIFECYCLE_VIP_MIN_SPEND_CENTS,
            repeat_min_orders=settings.LIFECYCLE_REPEAT_MIN_ORDERS,
            cart_lookback_hours=settings.LIFECYCLE_CART_LOOKBACK_HOURS,
            winback_inactive_days=settings.LIFECYCLE_WINBACK_INACTIVE_DAYS,
        )


DEFAULT_RULES = LifecycleRules()


@dataclass
class MissionResult:
    missions: List[Mission] = field(default_factory=list)
    reason: List[str] = field(default_factory=list)


@dataclass
class EmailDecision:
    next_email_key: NextEmailKey
    reason: str


@dataclass
class LifecycleDecision:
    """Result of one evaluation. Never persisted."""
    stage: LifecycleStage
    missions: List[Mission]
    next_email_key: NextEmailKey
    reason: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "missions": [m.value for m in self.missions],
            "nextEmailKey": self.next_email_key.value,
            "reason": list(self.reason),
        }


# -----------------------------
# Stage = stable identity
# -----------------------------
def compute_stage(customer: CustomerLike, rules: LifecycleRules = DEFAULT_RULES) -> LifecycleStage:
    if customer.orders_count >= rules.vip_min_orders or customer.total_spent_cents >= rules.vip_min_spend_cents:
        return LifecycleStage.VIP
    if customer.orders_count >= rules.repeat_min_orders:
        return LifecycleStage.REPEAT_BUYER
    if customer.orders_count >= 1:
        return LifecycleStage.FIRST_TIME_BUYER
    return LifecycleStage.WINDOW_SHOPPER


# -----------------------------
# Missions = situational overlays
# -----------------------------
def compute_missions(
    customer: CustomerLike,
    events: Iterable[EventLike],
    now: Optional[datetime] = None,
    rules: LifecycleRules = DEFAULT_RULES,
) -> MissionResult:
    """
    Evaluate WINBACK and CART_RECOVERY for one customer.

    WINBACK fires when a buyer's last order is at least ``winback_inactive_days``
    whole days old. CART_RECOVERY fires when the most recent cart/checkout event
    inside the lookback window has no PURCHASE strictly after it.
    """
    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    events = list(events)
    result = MissionResult()

    # WINBACK: bought before, inactive for N days
    if customer.orders_count >= 1 and customer.last_order_at:
        days_since = _diff_days(now, _as_utc(customer.last_order_at))
        if days_since >= rules.winback_inactive_days:
            result.missions.append(Mission.WINBACK)
            result.reason.append(
                f"WINBACK: lastOrderAt was {days_since}d ago (>= {rules.winback_inactive_days}d)."
            )

    # CART_RECOVERY: cart/checkout in lookback window and no purchase AFTER that event
    lookback = now - timedelta(hours=rules.cart_lookback_hours)
    candidates = [
        e for e in events
        if _as_utc(e.occurred_at) >= lookback and e.type in CART_EVENT_TYPES
    ]

    if candidates:
        # Same-instant ties resolve to the earliest in input order; not a contract
        recent = max(candidates, key=lambda e: _as_utc(e.occurred_at))
        recent_at = _as_utc(recent.occurred_at)
        purchase_after = any(
            e.type == EventType.PURCHASE and _as_utc(e.occurred_at) > recent_at
            for e in events
        )

        if not purchase_after:
            result.missions.append(Mission.CART_RECOVERY)
            result.reason.append(
                f"CART_RECOVERY: {_tag(recent.type)} at {_iso(recent_at)} with no PURCHASE after."
            )

    # Keep reasons aligned with their missions after sorting by priority
    paired = sorted(
        zip(result.missions, result.reason),
        key=lambda pair: MISSION_PRIORITY[pair[0]],
        reverse=True,
    )
    result.missions = [m for m, _ in paired]
    result.reason = [r for _, r in paired]
    return result


# -----------------------------
# Next Best Email (simple V1)
# -----------------------------
def decide_next_email(stage: LifecycleStage, missions: List[Mission]) -> EmailDecision:
    if Mission.CART_RECOVERY in missions:
        return EmailDecision(
            NextEmailKey.CART_RECOVERY_1,
            "CART_RECOVERY mission active → send cart_recovery_1.",
        )
    if Mission.WINBACK in missions:
        return EmailDecision(
            NextEmailKey.WINBACK_1,
            "WINBACK mission active → send winback_1.",
        )
    return EmailDecision(
        NextEmailKey.STAGE_NURTURE_1,
        f"No missions active → send stage_nurture_1 for stage {_tag(stage)}.",
    )


# -----------------------------
# Full decision
# -----------------------------
def compute_lifecycle_decision(
    customer: CustomerLike,
    events: Iterable[EventLike],
    now: Optional[datetime] = None,
    rules: LifecycleRules = DEFAULT_RULES,
) -> LifecycleDecision:
    stage = compute_stage(customer, rules)
    mission_result = compute_missions(customer, events, now=now, rules=rules)
    email = decide_next_email(stage, mission_result.missions)

    return LifecycleDecision(
        stage=stage,
        missions=mission_result.missions,
        next_email_key=email.next_email_key,
        reason=[f"STAGE: {_tag(stage)}.", *mission_result.reason, f"NEXT: {email.reason}"],
    )


# -----------------------------
# Helpers
# -----------------------------
def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _diff_days(a: datetime, b: datetime) -> int:
    return (a - b) // timedelta(days=1)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _tag(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)
