"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import List, Protocol

from schoolhub.governance.audit_models import AuditEvent


class AuditRepository(Protocol):
    """Protocol for appending and reading immutable audit events."""

    async def save(self, event: AuditEvent) -> None:
        """Append an immutable audit event. Must not allow mutation."""
        ...

    async def list_by_school(self, school_id: str) -> List[AuditEvent]:
        """All events for a school, in any order."""
        ...
