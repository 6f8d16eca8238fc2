"""Domain layer: models, pricing, validators, exceptions. Pure business logic only."""

from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainError,
    DomainValidationError,
    ErrorCode,
    InvalidStateError,
    NotFoundError,
    WebhookRejectedError,
)
from schoolhub.domain.pricing import effective_price, normalize_pricing

__all__ = [
    "AccessDeniedError",
    "ConflictError",
    "DomainError",
    "DomainValidationError",
    "ErrorCode",
    "InvalidStateError",
    "NotFoundError",
    "WebhookRejectedError",
    "effective_price",
    "normalize_pricing",
]
