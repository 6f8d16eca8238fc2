"""Pydantic schemas for orders, checkout, access checks and webhooks."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from schoolhub.domain.models import OrderStatus
from schoolhub.domain.schemas.school import ORMModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class OrderCreateRequest(BaseModel):
    course_id: Optional[str] = None
    buyer_email: Optional[str] = None


class CheckoutRequest(BaseModel):
    outcome: Optional[str] = Field("APPROVED", description="Simulated provider decision: APPROVED or DECLINED")


class WebhookRequest(BaseModel):
    """Delivery envelope. The payload is kept untyped: its shape is checked by the processor."""

    payload: Any = None
    signature: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class OrderResponse(ORMModel):
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


class CheckoutResponse(ORMModel):
    checkout_url: str
    payload: Dict[str, Any]
    signature: str


class AccessResponse(BaseModel):
    school_id: str
    buyer_email: str
    course_id: str
    can_access: bool


class WebhookResponse(ORMModel):
    ok: bool
    provider: str
    event_id: str
    school_id: str
    order_id: str
    payment_id: str
    order_status: OrderStatus
