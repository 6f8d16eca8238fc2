"""Webhooks API router: POST /webhooks/{provider} with {payload, signature}."""

from typing import Annotated

from fastapi import APIRouter, Depends

from schoolhub.api.dependencies import get_container
from schoolhub.application.container import ServiceContainer
from schoolhub.domain.schemas import WebhookRequest, WebhookResponse

router = APIRouter()


@router.post("/{provider}", response_model=WebhookResponse)
async def receive_webhook(
    provider: str,
    body: WebhookRequest,
    container: Annotated[ServiceContainer, Depends(get_container)],
):
    """Verify and apply a provider delivery. Retransmissions return the first result."""
    result = await container.webhooks.receive_webhook(provider, body.payload, body.signature)
    return WebhookResponse.model_validate(result)
