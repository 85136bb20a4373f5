"""Health check endpoint for monitoring service status."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from chat_hub.core.hub import ChatHub
from chat_hub.dependencies import get_hub
from chat_hub.schemas.health import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint",
    tags=["health"],
)
async def health_check(
    hub: Annotated[ChatHub, Depends(get_hub)],
) -> HealthResponse:
    """
    Report service status and the number of connections in the registry.

    Returns:
        HealthResponse: Health status of the hub.
    """
    return HealthResponse(
        status="healthy", active_connections=hub.active_connections
    )
