"""Chat WebSocket route: one hub session per accepted connection."""

from fastapi import APIRouter
from starlette.endpoints import WebSocketEndpoint
from starlette.websockets import WebSocket

from chat_hub.api.ws.stream import StarletteDuplexStream
from chat_hub.constants import WS_CHAT_PATH
from chat_hub.core.hub import ChatHub
from chat_hub.logging import clear_log_context
from chat_hub.utils.metrics import MetricsCollector

router = APIRouter()


@router.websocket_route(WS_CHAT_PATH)
class Chat(WebSocketEndpoint):
    """
    WebSocket endpoint of the chat broadcast hub.

    Every accepted connection gets an identity and a session from the hub
    stored on ``app.state.hub``. The session owns the socket from then on:
    its inbound loop broadcasts the client's messages, its outbound loop
    writes everybody's messages back.
    """

    encoding = None

    async def dispatch(self) -> None:
        """
        Accepts the upgrade and runs the session until it is closed.

        The default ``WebSocketEndpoint`` receive loop is replaced because
        reading and writing happen concurrently in the session's own tasks.
        """
        websocket = WebSocket(self.scope, receive=self.receive, send=self.send)
        await websocket.accept()

        hub: ChatHub = websocket.app.state.hub
        session = await hub.connect(StarletteDuplexStream(websocket))
        MetricsCollector.record_ws_connection_accepted()

        try:
            await session.run()
        finally:
            MetricsCollector.record_ws_disconnection()
            clear_log_context()
