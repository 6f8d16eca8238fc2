"""Identifier, token and timestamp helpers shared by every layer."""

import secrets
from datetime import datetime, timezone


def generate_id(prefix: str) -> str:
    """Prefixed random id, e.g. ``ord_3f9a0c1d2e4b5a69``."""
    return f"{prefix}_{secrets.token_hex(8)}"


def random_token(nbytes: int = 12) -> str:
    """Hex token used for domain verification and webhook secrets."""
    return secrets.token_hex(nbytes)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
