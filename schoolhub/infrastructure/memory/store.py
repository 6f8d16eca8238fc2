"""Process-memory tables and unique indexes. One store per process, or per test."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from schoolhub.domain.models import (
    Course,
    DomainConfig,
    Enrollment,
    GatewayConfig,
    Order,
    Payment,
    School,
    WebhookEvent,
)
from schoolhub.governance.audit_models import AuditEvent


@dataclass
class InMemoryStore:
    """
    Every table is a dict keyed by primary id; index dicts enforce the unique keys:
    custom hostname -> domain config id, subdomain host -> school id,
    (school, buyer, course) -> enrollment id. Per-school id lists keep creation order.
    """

    schools: Dict[str, School] = field(default_factory=dict)
    gateways: Dict[str, GatewayConfig] = field(default_factory=dict)
    domains: Dict[str, DomainConfig] = field(default_factory=dict)
    courses: Dict[str, Course] = field(default_factory=dict)
    orders: Dict[str, Order] = field(default_factory=dict)
    payments: Dict[str, Payment] = field(default_factory=dict)
    webhook_events: Dict[str, WebhookEvent] = field(default_factory=dict)
    enrollments: Dict[str, Enrollment] = field(default_factory=dict)
    audit: List[AuditEvent] = field(default_factory=list)

    custom_domain_index: Dict[str, str] = field(default_factory=dict)
    subdomain_index: Dict[str, str] = field(default_factory=dict)
    courses_by_school: Dict[str, List[str]] = field(default_factory=dict)
    orders_by_school: Dict[str, List[str]] = field(default_factory=dict)
    orders_by_buyer: Dict[Tuple[str, str], List[str]] = field(default_factory=dict)
    enrollment_index: Dict[Tuple[str, str, str], str] = field(default_factory=dict)
