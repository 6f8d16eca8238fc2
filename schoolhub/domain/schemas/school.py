"""Pydantic schemas for school, domain, gateway and audit endpoints.

Request fields are deliberately lenient: presence and format are checked by the
domain validators so that every failure carries its ErrorCode.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from schoolhub.domain.models import DomainType, SchoolStatus


class ORMModel(BaseModel):
    """Base for responses built from domain dataclasses."""

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class SchoolCreateRequest(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None


class SchoolStatusRequest(BaseModel):
    status: Optional[str] = None


class DomainRequest(BaseModel):
    domain: Optional[str] = None


class DomainVerifyRequest(BaseModel):
    domain: Optional[str] = None
    token: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class SchoolResponse(ORMModel):
    id: str
    name: str
    slug: str
    status: SchoolStatus
    created_at: datetime
    updated_at: datetime


class SchoolStatsResponse(ORMModel):
    school_id: str
    courses_count: int
    orders_count: int


class DomainResponse(ORMModel):
    id: str
    school_id: str
    type: DomainType
    domain: str
    verified: bool
    verification_token: Optional[str] = None
    created_at: datetime
    verified_at: Optional[datetime] = None


class GatewayResponse(ORMModel):
    school_id: str
    provider: str
    mode: str
    webhook_secret: str
    updated_at: datetime


class AuditEventResponse(ORMModel):
    id: str
    school_id: Optional[str] = None
    action: str
    payload: Optional[Dict[str, Any]] = None
    correlation_id: Optional[str] = None
    created_at: datetime
