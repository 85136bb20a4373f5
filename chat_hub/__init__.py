# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from chat_hub.constants import DEFAULT_ADMIN_BEARER_TOKEN
from chat_hub.core.hub import ChatHub
from chat_hub.logging import logger
from chat_hub.middlewares.correlation_id import CorrelationIDMiddleware
from chat_hub.middlewares.prometheus import PrometheusMiddleware
from chat_hub.routing import collect_subrouters
from chat_hub.settings import app_settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    On shutdown every registered delivery endpoint is closed, so each session
    ends its outbound loop and closes its WebSocket before the server exits.
    """
    logger.info("Application startup initiated")

    if (
        app_settings.ENVIRONMENT == "production"
        and app_settings.ADMIN_BEARER_TOKEN.get_secret_value()
        == DEFAULT_ADMIN_BEARER_TOKEN
    ):
        logger.warning(
            "ADMIN_BEARER_TOKEN uses the built-in default, "
            "set a secret before exposing the admin endpoint"
        )

    yield

    logger.info("Application shutdown initiated")
    hub: ChatHub = app.state.hub
    closed = await hub.close_all()
    logger.info(f"Closed {closed} delivery endpoints")
    logger.info("Application shutdown complete")


def application(hub: ChatHub | None = None) -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    This function:
    - Creates the chat hub from settings (or uses the one passed in) and
      stores it on ``app.state.hub``
    - Includes the routers collected by ``collect_subrouters()``: the
      ``/ws`` chat endpoint, ``/admin/disconnect/{identity}``, ``/health``
      and ``/metrics``
    - Adds the following middleware:
        - `CorrelationIDMiddleware`: request correlation IDs for logging
        - `PrometheusMiddleware`: HTTP request metrics

    Args:
        hub: Optional pre-built hub, mainly for tests.

    Returns:
        FastAPI: The configured application.
    """
    app = FastAPI(
        title="Chat broadcast hub",
        description="Real-time WebSocket message broadcast hub",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.hub = hub if hub is not None else ChatHub.from_settings(app_settings)

    app.include_router(collect_subrouters())

    # Middlewares (execute in REVERSE order of registration)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
