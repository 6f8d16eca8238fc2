"""Pricing rules: normalization of base price and promo, effective price at a point in time."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Union

from schoolhub.domain.exceptions import DomainValidationError, ErrorCode
from schoolhub.domain.models.course import Pricing, Promo, PromoType

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a finite Decimal, or None if the value is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def parse_instant(value: Union[str, datetime]) -> datetime:
    """ISO-8601 string or datetime to an aware UTC datetime. Naive values are read as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def normalize_promo(promo: Mapping[str, Any], base_price: Decimal) -> Promo:
    """Validate a promo against the base price. A promo may never zero out the price."""
    given = promo.get("type")
    raw_type = given.value if isinstance(given, Enum) else str(given or "").strip().upper()
    if raw_type not in PromoType.__members__:
        raise DomainValidationError(ErrorCode.PROMO_TYPE_INVALID, f"Unknown promo type: {raw_type!r}")
    promo_type = PromoType(raw_type)

    value = _to_decimal(promo.get("value"))
    if value is not None:
        value = round2(value)
    if value is None or value <= 0:
        raise DomainValidationError(ErrorCode.PROMO_VALUE_INVALID, "Promo value must be a positive number")

    raw_until = promo.get("until") or promo.get("until_iso") or promo.get("untilIso")
    if not raw_until or (isinstance(raw_until, str) and not raw_until.strip()):
        raise DomainValidationError(ErrorCode.PROMO_UNTIL_REQUIRED, "Promo end date is required")
    try:
        until = parse_instant(raw_until)
    except ValueError as e:
        raise DomainValidationError(ErrorCode.PROMO_UNTIL_INVALID, f"Promo end date is not ISO-8601: {raw_until!r}") from e

    # Bounds apply to the stored (rounded) value and to the price it produces.
    if promo_type == PromoType.PERCENT and (value >= HUNDRED or discounted_price(base_price, promo_type, value) <= 0):
        raise DomainValidationError(ErrorCode.PROMO_PERCENT_INVALID, "Percent promo must be below 100")
    if promo_type == PromoType.FIXED and (value >= base_price or discounted_price(base_price, promo_type, value) <= 0):
        raise DomainValidationError(ErrorCode.PROMO_FIXED_INVALID, "Fixed promo must be below the base price")

    return Promo(type=promo_type, value=value, until=until)


def normalize_pricing(
    price: Any,
    currency: Optional[str],
    promo: Optional[Mapping[str, Any]] = None,
) -> Pricing:
    """Build a validated Pricing from raw caller input."""
    parsed = _to_decimal(price)
    if parsed is None or parsed <= 0:
        raise DomainValidationError(ErrorCode.COURSE_PRICE_INVALID, f"Invalid price: {price!r}")
    base = round2(parsed)

    cur = str(currency or "").strip().upper()
    if len(cur) != 3:
        raise DomainValidationError(ErrorCode.COURSE_CURRENCY_INVALID, f"Invalid currency: {currency!r}")

    return Pricing(
        price=base,
        currency=cur,
        promo=normalize_promo(promo, base) if promo else None,
    )


def effective_price(pricing: Pricing, now: Optional[datetime] = None) -> Decimal:
    """
    Base price, unless a promo is still valid at `now` (inclusive of its end instant).
    An expired promo silently falls back to the base price.
    """
    promo = pricing.promo
    if promo is None:
        return pricing.price
    now = now or datetime.now(timezone.utc)
    if now > promo.until:
        return pricing.price
    return discounted_price(pricing.price, promo.type, promo.value)


def discounted_price(base_price: Decimal, promo_type: PromoType, value: Decimal) -> Decimal:
    """Price after applying a promo of `promo_type` and `value`, rounded to cents."""
    if promo_type == PromoType.PERCENT:
        return round2(base_price * (1 - value / HUNDRED))
    return round2(base_price - value)
