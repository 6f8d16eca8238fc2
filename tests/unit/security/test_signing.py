"""Webhook signing tests: canonical JSON, HMAC-SHA256, exact-match verification."""

import hashlib
import hmac

from schoolhub.security.signing import canonical_json, sign_payload, verify_signature

PAYLOAD = {"provider": "DEMO", "eventId": "whk_1", "schoolId": "sch_1", "result": "APPROVED"}


def test_canonical_json_sorts_keys_recursively_without_whitespace():
    assert canonical_json({"b": 1, "a": {"d": [1, 2], "c": None}}) == '{"a":{"c":null,"d":[1,2]},"b":1}'


def test_canonical_json_keeps_non_ascii():
    assert canonical_json({"nome": "João"}) == '{"nome":"João"}'


def test_signature_is_hex_hmac_sha256_of_canonical_form():
    expected = hmac.new(b"secret", canonical_json(PAYLOAD).encode("utf-8"), hashlib.sha256).hexdigest()
    assert sign_payload("secret", PAYLOAD) == expected


def test_signature_ignores_key_order():
    reordered = dict(reversed(list(PAYLOAD.items())))
    assert sign_payload("secret", reordered) == sign_payload("secret", PAYLOAD)


def test_verify_accepts_valid_signature():
    assert verify_signature("secret", PAYLOAD, sign_payload("secret", PAYLOAD))


def test_verify_rejects_tampered_payload_wrong_secret_and_empty_signature():
    signature = sign_payload("secret", PAYLOAD)
    assert not verify_signature("secret", {**PAYLOAD, "result": "DECLINED"}, signature)
    assert not verify_signature("other", PAYLOAD, signature)
    assert not verify_signature("secret", PAYLOAD, "")
    assert not verify_signature("secret", PAYLOAD, None)


def test_verify_is_case_sensitive_and_tolerates_non_ascii_input():
    signature = sign_payload("secret", PAYLOAD)
    assert not verify_signature("secret", PAYLOAD, signature.upper())
    assert not verify_signature("secret", PAYLOAD, "assinatura-inválida")
