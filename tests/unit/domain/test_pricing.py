"""Pricing tests: effective price with promos, expiry fallback, normalization errors."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from schoolhub.domain.exceptions import DomainValidationError, ErrorCode
from schoolhub.domain.models import Pricing, Promo, PromoType
from schoolhub.domain.pricing import effective_price, normalize_pricing, parse_instant

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
UNTIL = NOW + timedelta(days=7)


def _promo(type_="PERCENT", value="20", until="2026-03-08T12:00:00Z"):
    return {"type": type_, "value": value, "until": until}


def test_no_promo_returns_base_price():
    pricing = normalize_pricing("199.90", "brl")
    assert pricing.currency == "BRL"
    assert effective_price(pricing, NOW) == Decimal("199.90")


def test_percent_promo_applies_while_valid():
    pricing = normalize_pricing("199.90", "BRL", _promo())
    assert effective_price(pricing, NOW) == Decimal("159.92")


def test_promo_end_instant_is_inclusive():
    pricing = normalize_pricing("199.90", "BRL", _promo())
    assert effective_price(pricing, UNTIL) == Decimal("159.92")
    assert effective_price(pricing, UNTIL + timedelta(milliseconds=1)) == Decimal("199.90")


def test_expired_promo_falls_back_to_base_price():
    pricing = normalize_pricing("199.90", "BRL", _promo())
    assert effective_price(pricing, NOW + timedelta(days=30)) == Decimal("199.90")


def test_fixed_promo_subtracts_value():
    pricing = normalize_pricing("100", "USD", _promo(type_="FIXED", value="30.5"))
    assert pricing.price == Decimal("100.00")
    assert effective_price(pricing, NOW) == Decimal("69.50")


def test_percent_rounds_half_up_to_cents():
    pricing = Pricing(
        price=Decimal("10.05"),
        currency="BRL",
        promo=Promo(type=PromoType.PERCENT, value=Decimal("50"), until=UNTIL),
    )
    # 10.05 * 0.5 = 5.025 -> 5.03
    assert effective_price(pricing, NOW) == Decimal("5.03")


def test_promo_type_accepts_enum_member():
    pricing = normalize_pricing("50", "BRL", _promo(type_=PromoType.FIXED, value="10"))
    assert pricing.promo.type == PromoType.FIXED


def test_promo_until_accepts_alternate_key_and_offsets():
    pricing = normalize_pricing("50", "BRL", {"type": "percent", "value": 10, "untilIso": "2026-03-08T09:00:00-03:00"})
    assert pricing.promo.until == UNTIL


@pytest.mark.parametrize(
    "price,currency,promo,code",
    [
        ("0", "BRL", None, ErrorCode.COURSE_PRICE_INVALID),
        ("-5", "BRL", None, ErrorCode.COURSE_PRICE_INVALID),
        ("abc", "BRL", None, ErrorCode.COURSE_PRICE_INVALID),
        (True, "BRL", None, ErrorCode.COURSE_PRICE_INVALID),
        ("10", "BR", None, ErrorCode.COURSE_CURRENCY_INVALID),
        ("10", "", None, ErrorCode.COURSE_CURRENCY_INVALID),
        ("10", "BRL", {"type": "BOGO", "value": 1, "until": "2026-03-08"}, ErrorCode.PROMO_TYPE_INVALID),
        ("10", "BRL", {"type": "PERCENT", "value": 0, "until": "2026-03-08"}, ErrorCode.PROMO_VALUE_INVALID),
        ("10", "BRL", {"type": "PERCENT", "value": "x", "until": "2026-03-08"}, ErrorCode.PROMO_VALUE_INVALID),
        ("10", "BRL", {"type": "PERCENT", "value": 10}, ErrorCode.PROMO_UNTIL_REQUIRED),
        ("10", "BRL", {"type": "PERCENT", "value": 10, "until": "soon"}, ErrorCode.PROMO_UNTIL_INVALID),
        ("10", "BRL", {"type": "PERCENT", "value": 100, "until": "2026-03-08"}, ErrorCode.PROMO_PERCENT_INVALID),
        ("10", "BRL", {"type": "FIXED", "value": 10, "until": "2026-03-08"}, ErrorCode.PROMO_FIXED_INVALID),
        ("10.00", "BRL", _promo("PERCENT", "99.999"), ErrorCode.PROMO_PERCENT_INVALID),
        ("10.00", "BRL", _promo("FIXED", "9.999"), ErrorCode.PROMO_FIXED_INVALID),
        ("0.01", "BRL", _promo("PERCENT", "99.99"), ErrorCode.PROMO_PERCENT_INVALID),
        ("10", "BRL", _promo("PERCENT", "0.004"), ErrorCode.PROMO_VALUE_INVALID),
    ],
)
def test_normalize_pricing_rejects_invalid_input(price, currency, promo, code):
    with pytest.raises(DomainValidationError) as exc_info:
        normalize_pricing(price, currency, promo)
    assert exc_info.value.code == code


def test_parse_instant_reads_naive_as_utc():
    assert parse_instant("2026-03-01T12:00:00") == NOW
    assert parse_instant(datetime(2026, 3, 1, 12, 0)) == NOW


def test_promo_value_is_stored_rounded_and_keeps_price_positive():
    pricing = normalize_pricing("100.00", "BRL", _promo("PERCENT", "99.994"))
    assert pricing.promo.value == Decimal("99.99")
    assert effective_price(pricing, NOW) == Decimal("0.01")

    pricing = normalize_pricing("10.00", "BRL", _promo("FIXED", "9.989"))
    assert pricing.promo.value == Decimal("9.99")
    assert effective_price(pricing, NOW) == Decimal("0.01")
