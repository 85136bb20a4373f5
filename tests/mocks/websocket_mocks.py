"""
Mock factory functions for WebSocket testing.

Provides mocks for Starlette WebSockets and connection registries.
"""

from unittest.mock import AsyncMock, MagicMock


def create_mock_websocket(receive_messages: list[dict] | None = None):
    """
    Creates a mock Starlette WebSocket in the connected state.

    Args:
        receive_messages: ASGI messages returned by successive receive() calls

    Returns:
        MagicMock: Mocked WebSocket instance
    """
    from starlette.websockets import WebSocket, WebSocketState

    ws_mock = MagicMock(spec=WebSocket)

    # Send operations
    ws_mock.send_text = AsyncMock()
    ws_mock.send_bytes = AsyncMock()

    # Receive operations
    ws_mock.receive = AsyncMock(side_effect=receive_messages or [])

    # Connection lifecycle
    ws_mock.accept = AsyncMock()
    ws_mock.close = AsyncMock()

    # State
    ws_mock.client_state = WebSocketState.CONNECTED
    ws_mock.application_state = WebSocketState.CONNECTED

    return ws_mock


def create_mock_registry(endpoints: dict | None = None):
    """
    Creates a mock ConnectionRegistry backed by a plain dict.

    ``for_each`` really iterates the given endpoints so broadcast behaviour
    can be observed; all methods are mocks so calls can be asserted.

    Args:
        endpoints: Mapping of identity to endpoint visited by for_each

    Returns:
        MagicMock: Mocked ConnectionRegistry instance
    """
    from chat_hub.core.registry import ConnectionRegistry

    endpoints = endpoints if endpoints is not None else {}
    registry_mock = MagicMock(spec=ConnectionRegistry)

    async def for_each(fn):
        for identity, endpoint in list(endpoints.items()):
            fn(identity, endpoint)
        return len(endpoints)

    async def remove(identity):
        return endpoints.pop(identity, None)

    registry_mock.register = AsyncMock()
    registry_mock.remove = AsyncMock(side_effect=remove)
    registry_mock.for_each = AsyncMock(side_effect=for_each)
    registry_mock.__len__.side_effect = lambda: len(endpoints)

    return registry_mock
