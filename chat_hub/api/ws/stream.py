"""Starlette WebSocket adapter for the hub's transport protocol."""

import asyncio

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from chat_hub.constants import WS_CLOSE_TIMEOUT_SECONDS
from chat_hub.exceptions import TransportReadError, TransportWriteError
from chat_hub.logging import logger
from chat_hub.types import Payload


class StarletteDuplexStream:
    """
    Adapts an accepted Starlette ``WebSocket`` to the ``DuplexStream`` protocol.

    Text frames map to ``str`` and binary frames to ``bytes``. ASGI and
    network errors are translated into the hub's transport exceptions.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    async def receive(self) -> Payload | None:
        """
        Waits for the next data frame.

        Returns:
            The frame payload, or None once the client disconnected.

        Raises:
            TransportReadError: If the socket is in a state that cannot be read.
        """
        try:
            message = await self.websocket.receive()
        except WebSocketDisconnect:
            return None
        except (RuntimeError, OSError) as e:
            raise TransportReadError(str(e)) from e

        if message["type"] == "websocket.disconnect":
            return None

        if message.get("text") is not None:
            return message["text"]
        return message.get("bytes") or b""

    async def send(self, payload: Payload) -> None:
        """
        Writes one frame, text or binary depending on the payload type.

        Raises:
            TransportWriteError: If the client is gone or the socket is closed.
        """
        try:
            if isinstance(payload, str):
                await self.websocket.send_text(payload)
            else:
                await self.websocket.send_bytes(payload)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise TransportWriteError(
                f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            ) from e

    async def close(self) -> None:
        """Sends a close frame unless either side already closed."""
        if (
            self.websocket.application_state == WebSocketState.DISCONNECTED
            or self.websocket.client_state == WebSocketState.DISCONNECTED
        ):
            return

        try:
            await asyncio.wait_for(
                self.websocket.close(), timeout=WS_CLOSE_TIMEOUT_SECONDS
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Websocket close not acknowledged within "
                f"{WS_CLOSE_TIMEOUT_SECONDS}s"
            )
        except (RuntimeError, OSError) as e:
            logger.debug(f"Websocket already closed while closing: {e}")
