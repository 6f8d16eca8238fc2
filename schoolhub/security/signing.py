"""HMAC-SHA256 webhook signatures over a canonical JSON serialization. No global state."""

import hashlib
import hmac
import json
from typing import Any


def canonical_json(payload: Any) -> str:
    """
    Deterministic serialization: keys sorted ascending at every level, no whitespace,
    non-ASCII kept as-is. Signatures are computed over exactly this string.
    """
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def sign_payload(secret: str, payload: Any) -> str:
    """Hex HMAC-SHA256 of the canonical payload keyed by the school's webhook secret."""
    return hmac.new(
        str(secret).encode("utf-8"),
        canonical_json(payload).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(secret: str, payload: Any, signature: str) -> bool:
    """Exact match of the provided signature against the recomputed one."""
    expected = sign_payload(secret, payload)
    provided = str(signature or "").strip()
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))
