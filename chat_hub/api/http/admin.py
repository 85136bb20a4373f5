"""Administrative operations on live chat connections."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from fastapi.responses import PlainTextResponse

from chat_hub.auth import require_admin_token
from chat_hub.constants import ADMIN_DISCONNECT_RESPONSE
from chat_hub.core.hub import ChatHub
from chat_hub.dependencies import get_hub
from chat_hub.types import Identity
from chat_hub.utils.metrics import MetricsCollector

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin_token)],
)


@router.get(
    "/disconnect/{identity}",
    response_class=PlainTextResponse,
    summary="Stop broadcasting to a connection",
)
async def disconnect_user(
    identity: Annotated[int, Path(ge=0)],
    hub: Annotated[ChatHub, Depends(get_hub)],
) -> str:
    """
    Remove a connection identity from broadcast targeting.

    The response body is the same whether or not the identity was connected.

    Args:
        identity: Identity assigned to the connection when it was opened.
        hub: The application's chat hub.

    Returns:
        str: Fixed acknowledgement text.
    """
    removed = await hub.disconnect(Identity(identity))
    MetricsCollector.record_admin_disconnect(removed)
    return ADMIN_DISCONNECT_RESPONSE
