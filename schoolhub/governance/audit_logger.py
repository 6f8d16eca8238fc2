"""Append-only audit trail for tenant activity. No FastAPI."""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from schoolhub.core.context import correlation_id_ctx
from schoolhub.core.identifiers import generate_id, utcnow
from schoolhub.governance.audit_models import AuditEvent
from schoolhub.governance.audit_repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Writes immutable audit events via repository and mirrors each one to the log.
    Must NOT allow mutation. Ordering is applied on read, not on write.
    """

    def __init__(self, repository: AuditRepository, clock: Callable[[], datetime] = utcnow) -> None:
        self._repository = repository
        self._clock = clock

    async def log(
        self,
        school_id: Optional[str],
        action: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> AuditEvent:
        """Append an audit event stamped with the clock time and the current correlation id."""
        event = AuditEvent(
            id=generate_id("aud"),
            school_id=school_id,
            action=action,
            payload=dict(payload) if payload else None,
            correlation_id=correlation_id_ctx.get(),
            created_at=self._clock(),
        )
        await self._repository.save(event)
        logger.info("audit_event", extra=event.to_dict())
        return event

    async def list_by_school(self, school_id: str) -> List[AuditEvent]:
        """Events for a school sorted by timestamp."""
        events = await self._repository.list_by_school(school_id)
        return sorted(events, key=lambda e: e.created_at)
