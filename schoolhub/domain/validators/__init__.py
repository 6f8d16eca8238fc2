"""Domain validators. Pure validation functions."""

from schoolhub.domain.validators.course_validator import (
    validate_ai_inputs,
    validate_structure,
    validate_title,
)
from schoolhub.domain.validators.tenant_validator import (
    is_valid_domain_like,
    normalize_domain,
    normalize_email,
    normalize_host,
    validate_buyer_email,
    validate_school_fields,
)

__all__ = [
    "is_valid_domain_like",
    "normalize_domain",
    "normalize_email",
    "normalize_host",
    "validate_ai_inputs",
    "validate_buyer_email",
    "validate_school_fields",
    "validate_structure",
    "validate_title",
]
