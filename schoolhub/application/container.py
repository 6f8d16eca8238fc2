"""Wires repositories, services and shared collaborators over one in-memory store."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from schoolhub.application.course_service import CourseService
from schoolhub.application.enrollment_service import EnrollmentService
from schoolhub.application.order_service import OrderService
from schoolhub.application.school_service import SchoolService
from schoolhub.application.storefront_service import StorefrontService
from schoolhub.application.tenant_directory import TenantDirectory
from schoolhub.application.webhook_service import WebhookService
from schoolhub.config.settings import AppSettings, get_settings
from schoolhub.core.identifiers import utcnow
from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.infrastructure.memory import (
    InMemoryAuditRepository,
    InMemoryCourseRepository,
    InMemoryDomainRepository,
    InMemoryEnrollmentRepository,
    InMemoryGatewayRepository,
    InMemoryOrderRepository,
    InMemoryPaymentRepository,
    InMemorySchoolRepository,
    InMemoryStore,
    InMemoryWebhookEventRepository,
)
from schoolhub.scalability.keyed_lock import KeyedLock
from schoolhub.workflows.interface import CourseGenerator
from schoolhub.workflows.mock_generator import DeterministicCourseGenerator


@dataclass
class ServiceContainer:
    store: InMemoryStore
    settings: AppSettings
    audit: AuditLogger
    directory: TenantDirectory
    schools: SchoolService
    courses: CourseService
    storefront: StorefrontService
    orders: OrderService
    enrollments: EnrollmentService
    webhooks: WebhookService


def build_container(
    store: Optional[InMemoryStore] = None,
    settings: Optional[AppSettings] = None,
    generator: Optional[CourseGenerator] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ServiceContainer:
    """Build every service over `store` (a fresh one when omitted)."""
    store = store if store is not None else InMemoryStore()
    settings = settings or get_settings()
    generator = generator or DeterministicCourseGenerator()
    clock = clock or utcnow

    school_repo = InMemorySchoolRepository(store)
    gateway_repo = InMemoryGatewayRepository(store)
    domain_repo = InMemoryDomainRepository(store)
    course_repo = InMemoryCourseRepository(store)
    order_repo = InMemoryOrderRepository(store)
    payment_repo = InMemoryPaymentRepository(store)
    event_repo = InMemoryWebhookEventRepository(store)
    enrollment_repo = InMemoryEnrollmentRepository(store)

    audit = AuditLogger(InMemoryAuditRepository(store), clock=clock)
    directory = TenantDirectory(
        schools=school_repo,
        domains=domain_repo,
        audit=audit,
        base_domain=settings.base_domain,
        clock=clock,
        logger=logging.getLogger("schoolhub.tenant_directory"),
    )
    enrollments = EnrollmentService(
        enrollments=enrollment_repo,
        audit=audit,
        clock=clock,
        logger=logging.getLogger("schoolhub.enrollment"),
    )
    return ServiceContainer(
        store=store,
        settings=settings,
        audit=audit,
        directory=directory,
        schools=SchoolService(
            schools=school_repo,
            gateways=gateway_repo,
            courses=course_repo,
            orders=order_repo,
            directory=directory,
            audit=audit,
            clock=clock,
            logger=logging.getLogger("schoolhub.schools"),
        ),
        courses=CourseService(
            schools=school_repo,
            courses=course_repo,
            generator=generator,
            audit=audit,
            default_currency=settings.default_currency,
            clock=clock,
            logger=logging.getLogger("schoolhub.courses"),
        ),
        storefront=StorefrontService(directory=directory, courses=course_repo, clock=clock),
        orders=OrderService(
            schools=school_repo,
            courses=course_repo,
            orders=order_repo,
            payments=payment_repo,
            gateways=gateway_repo,
            audit=audit,
            checkout_base_url=settings.demo_checkout_base_url,
            clock=clock,
            logger=logging.getLogger("schoolhub.orders"),
        ),
        enrollments=enrollments,
        webhooks=WebhookService(
            gateways=gateway_repo,
            orders=order_repo,
            payments=payment_repo,
            events=event_repo,
            enrollments=enrollments,
            audit=audit,
            locks=KeyedLock(),
            clock=clock,
            logger=logging.getLogger("schoolhub.webhooks"),
        ),
    )
