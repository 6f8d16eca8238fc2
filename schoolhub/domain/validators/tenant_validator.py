"""Validators and normalizers for schools, hostnames and buyer emails. Pure functions."""

import re
from typing import Any, Tuple

from schoolhub.domain.exceptions import DomainValidationError, ErrorCode

SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
MIN_DOMAIN_LENGTH = 4


def validate_school_fields(name: Any, slug: Any) -> Tuple[str, str]:
    """Return (name, slug) stripped and normalized. Raises DomainValidationError if invalid."""
    n = str(name or "").strip()
    s = str(slug or "").strip().lower()
    if not n:
        raise DomainValidationError(ErrorCode.SCHOOL_NAME_REQUIRED, "School name is required")
    if not s:
        raise DomainValidationError(ErrorCode.SCHOOL_SLUG_REQUIRED, "School slug is required")
    if not SLUG_PATTERN.match(s):
        raise DomainValidationError(
            ErrorCode.SCHOOL_SLUG_INVALID, f"Slug must match [a-z0-9-]+, got {s!r}"
        )
    return n, s


def normalize_host(host: Any) -> str:
    """Host header value to a bare lower-case hostname (no port, no trailing dot)."""
    h = str(host or "").strip().lower()
    h = h.split(":")[0]
    return h.rstrip(".")


def normalize_domain(domain: Any) -> str:
    """User-typed domain to a bare hostname: strip scheme, path, port and trailing dot."""
    d = str(domain or "").strip().lower()
    d = re.sub(r"^https?://", "", d)
    d = d.split("/")[0]
    d = d.split(":")[0]
    return d.rstrip(".")


def is_valid_domain_like(domain: str) -> bool:
    if not domain or " " in domain or "." not in domain:
        return False
    return len(domain) >= MIN_DOMAIN_LENGTH


def normalize_email(email: Any) -> str:
    return str(email or "").strip().lower()


def validate_buyer_email(email: Any) -> str:
    """Lower-cased email; must contain '@'. Raises DomainValidationError otherwise."""
    normalized = normalize_email(email)
    if "@" not in normalized:
        raise DomainValidationError(ErrorCode.BUYER_EMAIL_INVALID, "Buyer email is invalid")
    return normalized
