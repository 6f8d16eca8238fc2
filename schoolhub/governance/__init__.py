"""Governance: append-only audit trail. No FastAPI."""

from schoolhub.governance.audit_logger import AuditLogger
from schoolhub.governance.audit_models import AuditEvent

__all__ = [
    "AuditEvent",
    "AuditLogger",
]
