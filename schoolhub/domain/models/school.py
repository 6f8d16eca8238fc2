"""Domain models for tenants: schools, their hostnames and their payment gateway."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class SchoolStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class DomainType(str, Enum):
    SUBDOMAIN = "subdomain"
    CUSTOM = "custom"


@dataclass
class School:
    """A tenant. Created once, never deleted; only status and name change."""

    id: str
    name: str
    slug: str
    status: SchoolStatus
    created_at: datetime
    updated_at: datetime

    @property
    def is_active(self) -> bool:
        return self.status == SchoolStatus.ACTIVE


@dataclass
class DomainConfig:
    """
    Binding of a hostname to a school.
    Subdomains are born verified; custom domains need a token match first.
    """

    id: str
    school_id: str
    type: DomainType
    domain: str
    verified: bool
    verification_token: Optional[str]
    created_at: datetime
    verified_at: Optional[datetime] = None


@dataclass
class GatewayConfig:
    """Per-school payment gateway settings. Only the DEMO provider exists."""

    school_id: str
    provider: str
    mode: str
    webhook_secret: str
    updated_at: datetime
