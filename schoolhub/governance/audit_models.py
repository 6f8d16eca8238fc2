"""Immutable audit event model. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuditEvent:
    """
    Immutable audit entry: which school, what action, when (UTC), with what payload.
    school_id is None for platform-level events.
    """

    id: str
    school_id: Optional[str]
    action: str
    payload: Optional[Dict[str, Any]]
    correlation_id: Optional[str]
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging."""
        return {
            "id": self.id,
            "school_id": self.school_id,
            "action": self.action,
            "payload": self.payload,
            "correlation_id": self.correlation_id,
            "created_at": self.created_at.isoformat(),
        }
