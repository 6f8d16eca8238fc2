"""Domain models for orders, payments, webhook events and enrollments."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional

DEMO_PROVIDER = "DEMO"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    CANCELED = "CANCELED"


class PaymentStatus(str, Enum):
    INITIATED = "INITIATED"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class CheckoutOutcome(str, Enum):
    """What the (simulated) provider decided for a checkout attempt."""

    APPROVED = "APPROVED"
    DECLINED = "DECLINED"


@dataclass
class Order:
    """Purchase intent. Amount is frozen at creation; status settles once via webhook."""

    id: str
    school_id: str
    course_id: str
    buyer_email: str
    amount: Decimal
    currency: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    paid_at: Optional[datetime] = None


@dataclass
class Payment:
    """One row per checkout attempt; mirrors the order's eventual outcome."""

    id: str
    school_id: str
    order_id: str
    provider: str
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class WebhookResult:
    """Result snapshot returned by webhook processing and replayed verbatim."""

    ok: bool
    provider: str
    event_id: str
    school_id: str
    order_id: str
    payment_id: str
    order_status: OrderStatus


@dataclass(frozen=True)
class WebhookEvent:
    """Recorded delivery, keyed by the provider event id. Never mutated once stored."""

    event_id: str
    provider: str
    school_id: str
    order_id: str
    payment_id: str
    received_at: datetime
    payload: Dict[str, Any]
    signature: str
    result_snapshot: WebhookResult


@dataclass(frozen=True)
class Enrollment:
    """Access grant, unique per (school_id, buyer_email, course_id). Never revoked."""

    id: str
    school_id: str
    buyer_email: str
    course_id: str
    order_id: str
    created_at: datetime


@dataclass(frozen=True)
class CheckoutSession:
    """Mock checkout URL plus the signed webhook the caller must deliver back."""

    checkout_url: str
    payload: Dict[str, Any]
    signature: str
