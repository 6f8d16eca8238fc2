"""Schools API router: registry, domains, gateway secret and audit trail."""

from typing import Annotated, List

from fastapi import APIRouter, Depends

from schoolhub.api.dependencies import get_container
from schoolhub.application.container import ServiceContainer
from schoolhub.domain.schemas import (
    AuditEventResponse,
    DomainRequest,
    DomainResponse,
    DomainVerifyRequest,
    GatewayResponse,
    SchoolCreateRequest,
    SchoolResponse,
    SchoolStatsResponse,
    SchoolStatusRequest,
)

router = APIRouter()

Container = Annotated[ServiceContainer, Depends(get_container)]


@router.post("", response_model=SchoolResponse, status_code=201)
async def create_school(body: SchoolCreateRequest, container: Container):
    """Create a school with its platform subdomain and DEMO gateway."""
    school = await container.schools.create_school(body.name, body.slug)
    return SchoolResponse.model_validate(school)


@router.get("", response_model=List[SchoolResponse])
async def list_schools(container: Container):
    return [SchoolResponse.model_validate(s) for s in await container.schools.list_schools()]


@router.get("/{school_id}", response_model=SchoolResponse)
async def get_school(school_id: str, container: Container):
    return SchoolResponse.model_validate(await container.schools.get_school(school_id))


@router.patch("/{school_id}/status", response_model=SchoolResponse)
async def set_school_status(school_id: str, body: SchoolStatusRequest, container: Container):
    """Suspend (SUSPENDED) or reactivate (ACTIVE) a school."""
    school = await container.schools.set_school_status(school_id, body.status)
    return SchoolResponse.model_validate(school)


@router.get("/{school_id}/stats", response_model=SchoolStatsResponse)
async def school_stats(school_id: str, container: Container):
    return SchoolStatsResponse.model_validate(await container.schools.school_stats(school_id))


@router.get("/{school_id}/domains", response_model=List[DomainResponse])
async def list_domains(school_id: str, container: Container):
    return [DomainResponse.model_validate(d) for d in await container.directory.list_domains(school_id)]


@router.post("/{school_id}/domains", response_model=DomainResponse, status_code=201)
async def request_custom_domain(school_id: str, body: DomainRequest, container: Container):
    """Request a custom domain; the response carries the verification token."""
    config = await container.directory.request_custom_domain(school_id, body.domain)
    return DomainResponse.model_validate(config)


@router.post("/{school_id}/domains/verify", response_model=DomainResponse)
async def verify_custom_domain(school_id: str, body: DomainVerifyRequest, container: Container):
    config = await container.directory.verify_custom_domain(school_id, body.domain, body.token)
    return DomainResponse.model_validate(config)


@router.get("/{school_id}/gateway", response_model=GatewayResponse)
async def get_gateway(school_id: str, container: Container):
    return GatewayResponse.model_validate(await container.schools.get_gateway_config(school_id))


@router.post("/{school_id}/gateway/rotate-secret", response_model=GatewayResponse)
async def rotate_webhook_secret(school_id: str, container: Container):
    return GatewayResponse.model_validate(await container.schools.rotate_webhook_secret(school_id))


@router.get("/{school_id}/audit", response_model=List[AuditEventResponse])
async def list_audit(school_id: str, container: Container):
    """Audit trail of the school, oldest first."""
    return [AuditEventResponse.model_validate(e) for e in await container.schools.list_audit(school_id)]
