"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for hubs, fake transports and the
FastAPI test client.
"""

import os

import pytest

# Set environment variables for testing before importing chat_hub modules
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FILE_PATH", os.devnull)


@pytest.fixture
def registry():
    """
    Provides an empty connection registry.

    Returns:
        ConnectionRegistry: Fresh registry instance
    """
    from chat_hub.core.registry import ConnectionRegistry

    return ConnectionRegistry()


@pytest.fixture
def hub():
    """
    Provides a hub with reference (unbounded, weak disconnect) behaviour.

    Returns:
        ChatHub: Fresh hub whose first identity is 1
    """
    from chat_hub.core.hub import ChatHub

    return ChatHub()


@pytest.fixture
def app(hub):
    """
    Create the FastAPI application around the hub fixture.

    Args:
        hub: Fixture providing the chat hub.

    Returns:
        FastAPI: FastAPI application instance.
    """
    from chat_hub import application

    return application(hub=hub)


@pytest.fixture
def client(app):
    """
    Create a test client for the FastAPI application.

    The client is entered as a context manager so the lifespan handler runs.

    Args:
        app: FastAPI application fixture.

    Yields:
        TestClient: FastAPI test client instance.
    """
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers():
    """
    Provides HTTP headers carrying the configured admin bearer token.

    Returns:
        dict: Headers dictionary with Authorization header
    """
    from chat_hub.settings import app_settings

    token = app_settings.ADMIN_BEARER_TOKEN.get_secret_value()
    return {"Authorization": f"Bearer {token}"}
