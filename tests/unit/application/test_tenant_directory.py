"""Tenant Directory: subdomains, custom domain request/verify, host resolution."""

import pytest

from schoolhub.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    DomainValidationError,
    ErrorCode,
    NotFoundError,
)
from schoolhub.domain.models import DomainType


async def test_school_gets_verified_platform_subdomain(container, school):
    domains = await container.directory.list_domains(school.id)
    assert len(domains) == 1
    assert domains[0].type == DomainType.SUBDOMAIN
    assert domains[0].domain == "alpha.platform.local"
    assert domains[0].verified is True


async def test_resolve_subdomain_normalizes_host(container, school):
    for host in ("alpha.platform.local", "ALPHA.platform.local:8080", "alpha.platform.local."):
        resolved = await container.directory.resolve_host(host)
        assert resolved is not None and resolved.id == school.id
    assert await container.directory.resolve_host("nobody.platform.local") is None
    assert await container.directory.resolve_host("") is None


async def test_register_subdomain_is_idempotent_for_same_school(container, school):
    first = (await container.directory.list_domains(school.id))[0]
    again = await container.directory.register_subdomain(school)
    assert again.id == first.id
    assert len(await container.directory.list_domains(school.id)) == 1


async def test_subdomain_collision_with_another_school(container, school, other_school):
    clash = type(other_school)(**{**vars(other_school), "slug": "alpha"})
    with pytest.raises(ConflictError) as exc_info:
        await container.directory.register_subdomain(clash)
    assert exc_info.value.code == ErrorCode.SUBDOMAIN_COLLISION


async def test_unverified_custom_domain_does_not_resolve(container, school):
    config = await container.directory.request_custom_domain(school.id, "https://Cursos.Example.com/")
    assert config.domain == "cursos.example.com"
    assert config.verified is False
    assert len(config.verification_token) == 24
    assert await container.directory.resolve_host("cursos.example.com") is None


async def test_verified_custom_domain_resolves(container, school):
    config = await container.directory.request_custom_domain(school.id, "cursos.example.com")
    verified = await container.directory.verify_custom_domain(
        school.id, "cursos.example.com", f"  {config.verification_token} "
    )
    assert verified.verified is True
    assert verified.verified_at is not None
    resolved = await container.directory.resolve_host("cursos.example.com:443")
    assert resolved.id == school.id


async def test_verified_custom_domain_takes_precedence(container, school, other_school, store):
    # A custom domain equal to another school's subdomain host is rejected, so
    # precedence is exercised by binding the subdomain index directly.
    config = await container.directory.request_custom_domain(school.id, "shared.example.com")
    await container.directory.verify_custom_domain(school.id, "shared.example.com", config.verification_token)
    store.subdomain_index["shared.example.com"] = other_school.id
    resolved = await container.directory.resolve_host("shared.example.com")
    assert resolved.id == school.id


@pytest.mark.parametrize(
    "domain,code",
    [
        ("", ErrorCode.CUSTOM_DOMAIN_INVALID),
        ("localhost", ErrorCode.CUSTOM_DOMAIN_INVALID),
        ("my site.com", ErrorCode.CUSTOM_DOMAIN_INVALID),
        ("platform.local", ErrorCode.CUSTOM_DOMAIN_NOT_ALLOWED),
        ("shop.platform.local", ErrorCode.CUSTOM_DOMAIN_NOT_ALLOWED),
    ],
)
async def test_request_custom_domain_rejects_bad_domains(container, school, domain, code):
    with pytest.raises(DomainValidationError) as exc_info:
        await container.directory.request_custom_domain(school.id, domain)
    assert exc_info.value.code == code


async def test_custom_domain_owned_by_other_school(container, school, other_school):
    await container.directory.request_custom_domain(school.id, "cursos.example.com")
    with pytest.raises(ConflictError) as exc_info:
        await container.directory.request_custom_domain(other_school.id, "cursos.example.com")
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_ALREADY_IN_USE


async def test_rerequest_resets_verification_in_place(container, school):
    first = await container.directory.request_custom_domain(school.id, "cursos.example.com")
    await container.directory.verify_custom_domain(school.id, "cursos.example.com", first.verification_token)

    again = await container.directory.request_custom_domain(school.id, "cursos.example.com")
    assert again.id == first.id
    assert again.verified is False
    assert again.verified_at is None
    assert again.verification_token != first.verification_token
    assert await container.directory.resolve_host("cursos.example.com") is None

    with pytest.raises(DomainValidationError) as exc_info:
        await container.directory.verify_custom_domain(school.id, "cursos.example.com", first.verification_token)
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_TOKEN_INVALID


async def test_verify_errors(container, school, other_school):
    with pytest.raises(NotFoundError) as exc_info:
        await container.directory.verify_custom_domain(school.id, "never.example.com", "tok")
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_NOT_REQUESTED

    config = await container.directory.request_custom_domain(school.id, "cursos.example.com")
    with pytest.raises(AccessDeniedError) as exc_info:
        await container.directory.verify_custom_domain(other_school.id, "cursos.example.com", config.verification_token)
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_OWNERSHIP_MISMATCH

    with pytest.raises(DomainValidationError) as exc_info:
        await container.directory.verify_custom_domain(school.id, "cursos.example.com", "   ")
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_MISSING_TOKEN

    with pytest.raises(DomainValidationError) as exc_info:
        await container.directory.verify_custom_domain(
            school.id, "cursos.example.com", config.verification_token.upper()
        )
    assert exc_info.value.code == ErrorCode.CUSTOM_DOMAIN_TOKEN_INVALID


async def test_suspended_school_cannot_request_domains(container, school):
    await container.schools.set_school_status(school.id, "SUSPENDED")
    with pytest.raises(AccessDeniedError) as exc_info:
        await container.directory.request_custom_domain(school.id, "cursos.example.com")
    assert exc_info.value.code == ErrorCode.SCHOOL_SUSPENDED


async def test_domain_actions_are_audited(container, school):
    config = await container.directory.request_custom_domain(school.id, "cursos.example.com")
    await container.directory.verify_custom_domain(school.id, "cursos.example.com", config.verification_token)
    actions = [e.action for e in await container.schools.list_audit(school.id)]
    assert "DOMAIN_SUBDOMAIN_CREATED" in actions
    assert "DOMAIN_CUSTOM_REQUESTED" in actions
    assert "DOMAIN_CUSTOM_VERIFIED" in actions
