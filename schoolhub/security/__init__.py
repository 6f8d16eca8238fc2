"""Security: webhook signing, tenant isolation. No FastAPI."""

from schoolhub.security.signing import canonical_json, sign_payload, verify_signature
from schoolhub.security.tenant_context import TenantContext

__all__ = [
    "TenantContext",
    "canonical_json",
    "sign_payload",
    "verify_signature",
]
