"""FastAPI dependencies for the application."""

from fastapi import Request

from chat_hub.core.hub import ChatHub


def get_hub(request: Request) -> ChatHub:
    """
    Return the hub owned by the running application.

    Args:
        request: The incoming HTTP request.

    Returns:
        ChatHub: The hub stored on ``app.state.hub``.
    """
    return request.app.state.hub
