"""Tenant Directory: hostnames (platform subdomain or verified custom domain) -> school."""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from schoolhub.application.guards import require_active_school, require_school
from schoolhub.application.repositories import DomainRepository, SchoolRepository
from schoolhub.core.identifiers import generate_id, random_token
from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
)
from schoolhub.domain.models import DomainConfig, DomainType, School
from schoolhub.domain.validators import is_valid_domain_like, normalize_domain, normalize_host
from schoolhub.governance.audit_logger import AuditLogger

VERIFICATION_TOKEN_BYTES = 12


class TenantDirectory:
    """
    Keeps one active mapping per host. Custom domains resolve only once verified,
    and take priority over platform subdomains.
    """

    def __init__(
        self,
        schools: SchoolRepository,
        domains: DomainRepository,
        audit: AuditLogger,
        base_domain: str,
        clock: Callable[[], datetime],
        logger: logging.Logger,
    ) -> None:
        self._schools = schools
        self._domains = domains
        self._audit = audit
        self._base_domain = normalize_host(base_domain)
        self._clock = clock
        self._logger = logger

    def subdomain_host(self, slug: str) -> str:
        return normalize_host(f"{slug}.{self._base_domain}")

    async def register_subdomain(self, school: School) -> DomainConfig:
        """Bind {slug}.{base_domain} to the school. Idempotent for the same school."""
        host = self.subdomain_host(school.slug)
        owner = await self._domains.subdomain_owner(host)
        if owner is not None and owner != school.id:
            raise ConflictError(ErrorCode.SUBDOMAIN_COLLISION, f"Subdomain already bound: {host}")

        existing = await self._domains.find(school.id, DomainType.SUBDOMAIN)
        if existing is not None:
            await self._domains.bind_subdomain(host, school.id)
            return existing

        now = self._clock()
        config = DomainConfig(
            id=generate_id("dom"),
            school_id=school.id,
            type=DomainType.SUBDOMAIN,
            domain=host,
            verified=True,
            verification_token=None,
            created_at=now,
            verified_at=now,
        )
        await self._domains.bind_subdomain(host, school.id)
        await self._domains.save(config)
        await self._audit.log(school.id, "DOMAIN_SUBDOMAIN_CREATED", {"domain": host})
        return config

    async def request_custom_domain(self, school_id: str, domain: str) -> DomainConfig:
        """
        Request (or re-request) a custom domain. A re-request by the same school
        resets verification and rotates the token in place.
        """
        await require_active_school(self._schools, school_id)

        d = normalize_domain(domain)
        if not is_valid_domain_like(d):
            raise DomainValidationError(ErrorCode.CUSTOM_DOMAIN_INVALID, f"Invalid domain: {domain!r}")
        if d == self._base_domain or d.endswith(f".{self._base_domain}"):
            raise DomainValidationError(
                ErrorCode.CUSTOM_DOMAIN_NOT_ALLOWED,
                f"Domains under {self._base_domain} are reserved for the platform",
            )

        taken = await self._domains.get_custom(d)
        if taken is not None and taken.school_id != school_id:
            raise ConflictError(ErrorCode.CUSTOM_DOMAIN_ALREADY_IN_USE, f"Domain already in use: {d}")

        token = random_token(VERIFICATION_TOKEN_BYTES)
        existing = await self._domains.find(school_id, DomainType.CUSTOM, d)
        if existing is not None:
            existing.verified = False
            existing.verification_token = token
            existing.verified_at = None
            await self._domains.save(existing)
            await self._audit.log(school_id, "DOMAIN_CUSTOM_REREQUESTED", {"domain": d})
            return existing

        config = DomainConfig(
            id=generate_id("dom"),
            school_id=school_id,
            type=DomainType.CUSTOM,
            domain=d,
            verified=False,
            verification_token=token,
            created_at=self._clock(),
        )
        await self._domains.save(config)
        await self._audit.log(school_id, "DOMAIN_CUSTOM_REQUESTED", {"domain": d})
        self._logger.info("custom_domain_requested", extra={"school_id": school_id, "domain": d})
        return config

    async def verify_custom_domain(self, school_id: str, domain: str, token: Optional[str]) -> DomainConfig:
        """Mark a requested domain verified on an exact, case-sensitive token match."""
        await require_active_school(self._schools, school_id)

        d = normalize_domain(domain)
        config = await self._domains.get_custom(d)
        if config is None:
            raise NotFoundError(ErrorCode.CUSTOM_DOMAIN_NOT_REQUESTED, f"Domain was never requested: {d}")
        if config.type != DomainType.CUSTOM:
            raise InvalidStateError(ErrorCode.CUSTOM_DOMAIN_INVALID_STATE, f"Not a custom domain: {d}")
        if config.school_id != school_id:
            raise AccessDeniedError(
                ErrorCode.CUSTOM_DOMAIN_OWNERSHIP_MISMATCH, f"Domain belongs to another school: {d}"
            )
        provided = str(token or "").strip()
        if not config.verification_token or not provided:
            raise DomainValidationError(ErrorCode.CUSTOM_DOMAIN_MISSING_TOKEN, f"Verification token missing for: {d}")
        if provided != config.verification_token:
            raise DomainValidationError(ErrorCode.CUSTOM_DOMAIN_TOKEN_INVALID, "Verification token mismatch")

        config.verified = True
        config.verified_at = self._clock()
        await self._domains.save(config)
        await self._audit.log(school_id, "DOMAIN_CUSTOM_VERIFIED", {"domain": d})
        return config

    async def resolve_host(self, host: Optional[str]) -> Optional[School]:
        """School serving `host`, or None. Unverified custom domains never resolve."""
        h = normalize_host(host)
        if not h:
            return None

        custom = await self._domains.get_custom(h)
        if custom is not None and custom.type == DomainType.CUSTOM and custom.verified:
            return await self._schools.get(custom.school_id)

        school_id = await self._domains.subdomain_owner(h)
        if school_id is not None:
            return await self._schools.get(school_id)
        return None

    async def list_domains(self, school_id: str) -> List[DomainConfig]:
        await require_school(self._schools, school_id)
        domains = await self._domains.list_by_school(school_id)
        return sorted(domains, key=lambda d: d.created_at)
