"""Strict tenant isolation. No cross-school access. No FastAPI."""

from schoolhub.domain.exceptions import AccessDeniedError, ErrorCode


class TenantContext:
    """Validate that the school owning a resource matches the school acting on it."""

    @staticmethod
    def validate_access(resource_school: str, request_school: str, code: ErrorCode) -> None:
        """
        If mismatch, raise AccessDeniedError tagged with `code`.
        No cross-school access allowed.
        """
        if not resource_school or not request_school or resource_school != request_school:
            raise AccessDeniedError(
                code,
                f"Tenant isolation: resource school '{resource_school}' "
                f"does not match request school '{request_school}'",
            )
