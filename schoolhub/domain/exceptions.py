"""Domain-specific exceptions. Pure domain layer, no infrastructure.

Every failure carries an ErrorCode so callers can branch on the cause.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Closed set of failure tags surfaced by the platform core."""

    # Schools
    SCHOOL_NAME_REQUIRED = "SCHOOL_NAME_REQUIRED"
    SCHOOL_SLUG_REQUIRED = "SCHOOL_SLUG_REQUIRED"
    SCHOOL_SLUG_INVALID = "SCHOOL_SLUG_INVALID"
    SCHOOL_SLUG_ALREADY_EXISTS = "SCHOOL_SLUG_ALREADY_EXISTS"
    SCHOOL_NOT_FOUND = "SCHOOL_NOT_FOUND"
    SCHOOL_SUSPENDED = "SCHOOL_SUSPENDED"
    SCHOOL_STATUS_INVALID = "SCHOOL_STATUS_INVALID"

    # Domains
    SUBDOMAIN_COLLISION = "SUBDOMAIN_COLLISION"
    CUSTOM_DOMAIN_INVALID = "CUSTOM_DOMAIN_INVALID"
    CUSTOM_DOMAIN_NOT_ALLOWED = "CUSTOM_DOMAIN_NOT_ALLOWED"
    CUSTOM_DOMAIN_ALREADY_IN_USE = "CUSTOM_DOMAIN_ALREADY_IN_USE"
    CUSTOM_DOMAIN_NOT_REQUESTED = "CUSTOM_DOMAIN_NOT_REQUESTED"
    CUSTOM_DOMAIN_INVALID_STATE = "CUSTOM_DOMAIN_INVALID_STATE"
    CUSTOM_DOMAIN_OWNERSHIP_MISMATCH = "CUSTOM_DOMAIN_OWNERSHIP_MISMATCH"
    CUSTOM_DOMAIN_MISSING_TOKEN = "CUSTOM_DOMAIN_MISSING_TOKEN"
    CUSTOM_DOMAIN_TOKEN_INVALID = "CUSTOM_DOMAIN_TOKEN_INVALID"

    # Gateway
    GATEWAY_NOT_CONFIGURED = "GATEWAY_NOT_CONFIGURED"

    # Pricing
    COURSE_PRICE_INVALID = "COURSE_PRICE_INVALID"
    COURSE_CURRENCY_INVALID = "COURSE_CURRENCY_INVALID"
    PROMO_TYPE_INVALID = "PROMO_TYPE_INVALID"
    PROMO_VALUE_INVALID = "PROMO_VALUE_INVALID"
    PROMO_UNTIL_REQUIRED = "PROMO_UNTIL_REQUIRED"
    PROMO_UNTIL_INVALID = "PROMO_UNTIL_INVALID"
    PROMO_PERCENT_INVALID = "PROMO_PERCENT_INVALID"
    PROMO_FIXED_INVALID = "PROMO_FIXED_INVALID"

    # Courses
    COURSE_TITLE_REQUIRED = "COURSE_TITLE_REQUIRED"
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    COURSE_ACCESS_DENIED = "COURSE_ACCESS_DENIED"
    COURSE_NOT_AI = "COURSE_NOT_AI"
    COURSE_NOT_IMPORT = "COURSE_NOT_IMPORT"
    COURSE_INVALID_STATE = "COURSE_INVALID_STATE"
    COURSE_STRUCTURE_NOT_EDITABLE = "COURSE_STRUCTURE_NOT_EDITABLE"
    COURSE_STRUCTURE_INVALID = "COURSE_STRUCTURE_INVALID"
    COURSE_STRUCTURE_MODULE_TITLE_REQUIRED = "COURSE_STRUCTURE_MODULE_TITLE_REQUIRED"
    COURSE_STRUCTURE_LESSONS_REQUIRED = "COURSE_STRUCTURE_LESSONS_REQUIRED"
    COURSE_STRUCTURE_LESSON_TITLE_REQUIRED = "COURSE_STRUCTURE_LESSON_TITLE_REQUIRED"
    COURSE_IMPORT_URL_REQUIRED = "COURSE_IMPORT_URL_REQUIRED"
    COURSE_STRUCTURE_MISSING = "COURSE_STRUCTURE_MISSING"
    COURSE_NOT_READY_TO_PUBLISH = "COURSE_NOT_READY_TO_PUBLISH"
    AI_INPUT_THEME_REQUIRED = "AI_INPUT_THEME_REQUIRED"
    AI_INPUT_AUDIENCE_REQUIRED = "AI_INPUT_AUDIENCE_REQUIRED"
    AI_INPUT_LEVEL_REQUIRED = "AI_INPUT_LEVEL_REQUIRED"
    AI_INPUT_HOURS_INVALID = "AI_INPUT_HOURS_INVALID"
    AI_INPUT_LANGUAGE_REQUIRED = "AI_INPUT_LANGUAGE_REQUIRED"

    # Orders / checkout
    COURSE_NOT_FOR_SALE = "COURSE_NOT_FOR_SALE"
    BUYER_EMAIL_INVALID = "BUYER_EMAIL_INVALID"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDER_ACCESS_DENIED = "ORDER_ACCESS_DENIED"
    ORDER_NOT_PENDING = "ORDER_NOT_PENDING"
    CHECKOUT_OUTCOME_INVALID = "CHECKOUT_OUTCOME_INVALID"

    # Webhooks / payments
    WEBHOOK_PROVIDER_UNSUPPORTED = "WEBHOOK_PROVIDER_UNSUPPORTED"
    WEBHOOK_EVENT_ID_REQUIRED = "WEBHOOK_EVENT_ID_REQUIRED"
    WEBHOOK_PAYLOAD_INVALID = "WEBHOOK_PAYLOAD_INVALID"
    WEBHOOK_RESULT_INVALID = "WEBHOOK_RESULT_INVALID"
    WEBHOOK_SIGNATURE_INVALID = "WEBHOOK_SIGNATURE_INVALID"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"
    PAYMENT_ACCESS_DENIED = "PAYMENT_ACCESS_DENIED"
    PAYMENT_ORDER_MISMATCH = "PAYMENT_ORDER_MISMATCH"


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message or code.value
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """Raised when input fails domain validation rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AccessDeniedError(DomainError):
    """Raised when an entity belongs to another school, or the school is suspended."""


class ConflictError(DomainError):
    """Raised when a uniqueness rule would be violated (slug, host, domain)."""


class InvalidStateError(DomainError):
    """Raised when a lifecycle transition is not allowed from the current state."""


class WebhookRejectedError(DomainError):
    """Raised when an incoming webhook cannot be accepted (provider, payload, signature)."""
