"""Webhook processor: the only authority that settles orders and payments.

Contract for a delivery {provider, payload, signature}:
  1. provider must be DEMO
  2. payload.eventId is the idempotency key; a recorded event returns its stored
     snapshot untouched, with no re-validation and no re-application
  3. payload fields and result are validated
  4. signature is recomputed with the school's current secret and must match exactly
  5. order and payment must exist, belong to the school and to each other
  6. effects are applied once (PAID + SUCCEEDED + enrollment, or FAILED + FAILED)
  7. the event is recorded with a frozen result snapshot
  8. an audit entry is emitted
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from schoolhub.application.enrollment_service import EnrollmentService
from schoolhub.application.repositories import (
    GatewayRepository,
    OrderRepository,
    PaymentRepository,
    WebhookEventRepository,
)
from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
    WebhookRejectedError,
)
from schoolhub.domain.models import (
    DEMO_PROVIDER,
    CheckoutOutcome,
    Order,
    OrderStatus,
    Payment,
    PaymentStatus,
    WebhookEvent,
    WebhookResult,
)
from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.scalability.keyed_lock import KeyedLock
from schoolhub.security.signing import canonical_json, verify_signature
from schoolhub.security.tenant_context import TenantContext

SUPPORTED_PROVIDERS = frozenset({DEMO_PROVIDER})


def _field(payload: Mapping[str, Any], key: str) -> str:
    return str(payload.get(key) or "").strip()


class WebhookService:
    """
    Idempotent webhook processing. Deliveries for one event id are serialized by a
    keyed lock, and the settle section by a lock on the order id, so concurrent
    retransmissions can never both pass the replay check.
    """

    def __init__(
        self,
        gateways: GatewayRepository,
        orders: OrderRepository,
        payments: PaymentRepository,
        events: WebhookEventRepository,
        enrollments: EnrollmentService,
        audit: AuditLogger,
        locks: KeyedLock,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._gateways = gateways
        self._orders = orders
        self._payments = payments
        self._events = events
        self._enrollments = enrollments
        self._audit = audit
        self._locks = locks
        self._clock = clock
        self._logger = logger

    async def receive_webhook(
        self,
        provider: Optional[str],
        payload: Mapping[str, Any],
        signature: Optional[str],
    ) -> WebhookResult:
        if not isinstance(payload, Mapping):
            raise WebhookRejectedError(ErrorCode.WEBHOOK_PAYLOAD_INVALID, "Webhook payload must be an object")

        # Step 1: Provider
        prov = str(provider or payload.get("provider") or "").strip().upper()
        if prov not in SUPPORTED_PROVIDERS:
            raise WebhookRejectedError(ErrorCode.WEBHOOK_PROVIDER_UNSUPPORTED, f"Unsupported provider: {prov!r}")

        event_id = _field(payload, "eventId")
        if not event_id:
            raise WebhookRejectedError(ErrorCode.WEBHOOK_EVENT_ID_REQUIRED, "eventId is required")

        async with self._locks.hold(f"webhook:{event_id}"):
            # Step 2: Idempotent replay
            existing = await self._events.get(event_id)
            if existing is not None:
                self._logger.info(
                    "webhook_replay",
                    extra={"event_id": event_id, "school_id": existing.school_id},
                )
                return existing.result_snapshot

            return await self._process(prov, event_id, payload, str(signature or "").strip())

    async def _process(
        self,
        provider: str,
        event_id: str,
        payload: Mapping[str, Any],
        signature: str,
    ) -> WebhookResult:
        # Step 3: Payload shape
        school_id = _field(payload, "schoolId")
        order_id = _field(payload, "orderId")
        payment_id = _field(payload, "paymentId")
        result = _field(payload, "result").upper()
        if not school_id or not order_id or not payment_id:
            raise WebhookRejectedError(
                ErrorCode.WEBHOOK_PAYLOAD_INVALID, "schoolId, orderId and paymentId are required"
            )
        if result not in CheckoutOutcome.__members__:
            raise WebhookRejectedError(ErrorCode.WEBHOOK_RESULT_INVALID, f"Invalid result: {result!r}")

        # Step 4: Signature with the school's current secret
        gateway = await self._gateways.get(school_id)
        if gateway is None:
            raise NotFoundError(ErrorCode.GATEWAY_NOT_CONFIGURED, f"No gateway for school: {school_id}")
        if not verify_signature(gateway.webhook_secret, payload, signature):
            self._logger.warning(
                "webhook_signature_invalid",
                extra={"event_id": event_id, "school_id": school_id},
            )
            raise WebhookRejectedError(ErrorCode.WEBHOOK_SIGNATURE_INVALID, "Webhook signature mismatch")

        async with self._locks.hold(f"order:{order_id}"):
            # Step 5: Ownership and linkage
            order = await self._load_order(school_id, order_id)
            payment = await self._load_payment(school_id, order_id, payment_id)
            if order.status != OrderStatus.PENDING:
                raise InvalidStateError(ErrorCode.ORDER_NOT_PENDING, f"Order {order_id} is {order.status.value}")

            # Step 6: Apply exactly once
            now = self._clock()
            approved = result == CheckoutOutcome.APPROVED.value
            order.status = OrderStatus.PAID if approved else OrderStatus.FAILED
            order.updated_at = now
            if approved:
                order.paid_at = now
            payment.status = PaymentStatus.SUCCEEDED if approved else PaymentStatus.FAILED
            payment.updated_at = now
            await self._orders.save(order)
            await self._payments.save(payment)

            if approved:
                await self._enrollments.ensure_enrollment(
                    school_id=school_id,
                    buyer_email=order.buyer_email,
                    course_id=order.course_id,
                    order_id=order.id,
                )

            # Step 7: Record the event before returning
            snapshot = WebhookResult(
                ok=True,
                provider=provider,
                event_id=event_id,
                school_id=school_id,
                order_id=order_id,
                payment_id=payment_id,
                order_status=order.status,
            )
            await self._events.add(
                WebhookEvent(
                    event_id=event_id,
                    provider=provider,
                    school_id=school_id,
                    order_id=order_id,
                    payment_id=payment_id,
                    received_at=now,
                    payload=json.loads(canonical_json(payload)),
                    signature=signature,
                    result_snapshot=snapshot,
                )
            )

        # Step 8: Audit
        outcome_action = "PAYMENT_SUCCEEDED" if approved else "PAYMENT_FAILED"
        await self._audit.log(
            school_id, outcome_action, {"order_id": order_id, "payment_id": payment_id, "event_id": event_id}
        )
        await self._audit.log(
            school_id, "WEBHOOK_RECEIVED", {"event_id": event_id, "order_id": order_id, "result": result}
        )
        self._logger.info(
            "webhook_applied",
            extra={
                "event_id": event_id,
                "school_id": school_id,
                "order_id": order_id,
                "order_status": order.status.value,
            },
        )
        return snapshot

    async def _load_order(self, school_id: str, order_id: str) -> Order:
        order = await self._orders.get(order_id)
        if order is None:
            raise NotFoundError(ErrorCode.ORDER_NOT_FOUND, f"Order not found: {order_id}")
        TenantContext.validate_access(order.school_id, school_id, ErrorCode.ORDER_ACCESS_DENIED)
        return order

    async def _load_payment(self, school_id: str, order_id: str, payment_id: str) -> Payment:
        payment = await self._payments.get(payment_id)
        if payment is None:
            raise NotFoundError(ErrorCode.PAYMENT_NOT_FOUND, f"Payment not found: {payment_id}")
        TenantContext.validate_access(payment.school_id, school_id, ErrorCode.PAYMENT_ACCESS_DENIED)
        if payment.order_id != order_id:
            raise AccessDeniedError(
                ErrorCode.PAYMENT_ORDER_MISMATCH,
                f"Payment {payment_id} does not belong to order {order_id}",
            )
        return payment
