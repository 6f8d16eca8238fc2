"""Order & Payment ledger: purchase intents and DEMO checkout sessions."""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, List, Union
from urllib.parse import urlencode

from schoolhub.application.guards import require_active_school, require_school
from schoolhub.application.repositories import (
    CourseRepository,
    GatewayRepository,
    OrderRepository,
    PaymentRepository,
    SchoolRepository,
)
from schoolhub.core.identifiers import generate_id
from schoolhub.domain.exceptions import (
    DomainValidationError,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
)
from schoolhub.domain.models import (
    DEMO_PROVIDER,
    CheckoutOutcome,
    CheckoutSession,
    Order,
    OrderStatus,
    Payment,
    PaymentStatus,
)
from schoolhub.domain.pricing import effective_price
from schoolhub.domain.validators import normalize_email, validate_buyer_email
from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.security.signing import sign_payload
from schoolhub.security.tenant_context import TenantContext


def iso_timestamp(at: datetime) -> str:
    """UTC instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return at.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OrderService:
    """
    Creates orders at the price effective *now* (frozen into the order) and opens
    DEMO checkout sessions whose signed webhook the caller later delivers back.
    """

    def __init__(
        self,
        schools: SchoolRepository,
        courses: CourseRepository,
        orders: OrderRepository,
        payments: PaymentRepository,
        gateways: GatewayRepository,
        audit: AuditLogger,
        checkout_base_url: str,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._schools = schools
        self._courses = courses
        self._orders = orders
        self._payments = payments
        self._gateways = gateways
        self._audit = audit
        self._checkout_base_url = checkout_base_url.rstrip("/")
        self._clock = clock
        self._logger = logger

    async def create_order(self, school_id: str, course_id: str, buyer_email: str) -> Order:
        await require_active_school(self._schools, school_id)
        course = await self._courses.get(course_id)
        if course is None:
            raise NotFoundError(ErrorCode.COURSE_NOT_FOUND, f"Course not found: {course_id}")
        TenantContext.validate_access(course.school_id, school_id, ErrorCode.COURSE_ACCESS_DENIED)
        if not course.is_published:
            raise InvalidStateError(ErrorCode.COURSE_NOT_FOR_SALE, f"Course is not published: {course_id}")
        email = validate_buyer_email(buyer_email)

        now = self._clock()
        order = Order(
            id=generate_id("ord"),
            school_id=school_id,
            course_id=course_id,
            buyer_email=email,
            amount=effective_price(course.pricing, now),
            currency=course.pricing.currency,
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        await self._orders.save(order)
        await self._audit.log(
            school_id,
            "ORDER_CREATED",
            {"order_id": order.id, "course_id": course_id, "buyer_email": email},
        )
        self._logger.info(
            "order_created",
            extra={"school_id": school_id, "order_id": order.id, "amount": str(order.amount)},
        )
        return order

    async def get_order(self, school_id: str, order_id: str) -> Order:
        order = await self._orders.get(order_id)
        if order is None:
            raise NotFoundError(ErrorCode.ORDER_NOT_FOUND, f"Order not found: {order_id}")
        TenantContext.validate_access(order.school_id, school_id, ErrorCode.ORDER_ACCESS_DENIED)
        return order

    async def start_checkout(
        self,
        school_id: str,
        order_id: str,
        outcome: Union[CheckoutOutcome, str],
    ) -> CheckoutSession:
        """
        Open a DEMO payment for a PENDING order. `outcome` simulates the provider's
        decision and is carried inside the signed webhook payload.
        """
        await require_active_school(self._schools, school_id)
        order = await self.get_order(school_id, order_id)
        if order.status != OrderStatus.PENDING:
            raise InvalidStateError(ErrorCode.ORDER_NOT_PENDING, f"Order {order_id} is {order.status.value}")

        gateway = await self._gateways.get(school_id)
        if gateway is None or gateway.provider != DEMO_PROVIDER:
            raise NotFoundError(ErrorCode.GATEWAY_NOT_CONFIGURED, f"No DEMO gateway for school: {school_id}")

        raw = outcome.value if isinstance(outcome, Enum) else str(outcome or "").strip().upper()
        if raw not in CheckoutOutcome.__members__:
            raise DomainValidationError(ErrorCode.CHECKOUT_OUTCOME_INVALID, f"Invalid outcome: {outcome!r}")

        now = self._clock()
        payment = Payment(
            id=generate_id("pay"),
            school_id=school_id,
            order_id=order_id,
            provider=DEMO_PROVIDER,
            status=PaymentStatus.INITIATED,
            created_at=now,
            updated_at=now,
        )
        await self._payments.save(payment)

        event_id = generate_id("whk")
        payload = {
            "provider": DEMO_PROVIDER,
            "eventId": event_id,
            "schoolId": school_id,
            "orderId": order_id,
            "paymentId": payment.id,
            "result": raw,
            "ts": iso_timestamp(now),
        }
        signature = sign_payload(gateway.webhook_secret, payload)
        checkout_url = f"{self._checkout_base_url}/checkout?{urlencode({'orderId': order_id, 'result': raw})}"

        await self._audit.log(
            school_id,
            "CHECKOUT_STARTED",
            {"order_id": order_id, "outcome": raw, "payment_id": payment.id, "event_id": event_id},
        )
        self._logger.info(
            "checkout_started",
            extra={"school_id": school_id, "order_id": order_id, "payment_id": payment.id, "event_id": event_id},
        )
        return CheckoutSession(checkout_url=checkout_url, payload=payload, signature=signature)

    async def list_orders_by_buyer(self, school_id: str, buyer_email: str) -> List[Order]:
        """Buyer's orders within a school in creation order."""
        await require_school(self._schools, school_id)
        return await self._orders.list_by_buyer(school_id, normalize_email(buyer_email))
