"""Tests for the admin disconnect endpoint."""

from unittest.mock import AsyncMock, patch

import pytest
from pydantic import SecretStr

from chat_hub.settings import app_settings
from tests.mocks.stream_mocks import FakeDuplexStream


@pytest.fixture
def disconnect_mock(hub):
    """
    Replace the hub's disconnect with a mock for the duration of a test.

    Args:
        hub: Fixture providing the chat hub.

    Yields:
        AsyncMock: The mocked ``ChatHub.disconnect``.
    """
    with patch.object(
        hub, "disconnect", new=AsyncMock(return_value=True)
    ) as mock:
        yield mock


def test_disconnect_requires_token(client, disconnect_mock):
    """
    Test a request without credentials is rejected before reaching the hub.

    Args:
        client: FastAPI test client fixture.
        disconnect_mock: Mocked hub disconnect.
    """
    response = client.get("/admin/disconnect/1")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    disconnect_mock.assert_not_called()


@pytest.mark.parametrize(
    "authorization",
    ["Bearer wrong", "Bearer ", "Basic QmVhcg==", "Bear"],
)
def test_disconnect_rejects_bad_credentials(
    client, disconnect_mock, authorization
):
    """
    Test wrong tokens and other schemes are rejected.

    Args:
        client: FastAPI test client fixture.
        disconnect_mock: Mocked hub disconnect.
        authorization: Authorization header value.
    """
    response = client.get(
        "/admin/disconnect/1", headers={"Authorization": authorization}
    )

    assert response.status_code == 401
    disconnect_mock.assert_not_called()


def test_disconnect_with_valid_token(client, admin_headers, disconnect_mock):
    """
    Test an authorized request disconnects the identity and returns Done.

    Args:
        client: FastAPI test client fixture.
        admin_headers: Headers carrying the admin token.
        disconnect_mock: Mocked hub disconnect.
    """
    response = client.get("/admin/disconnect/7", headers=admin_headers)

    assert response.status_code == 200
    assert response.text == "Done"
    assert response.headers["content-type"].startswith("text/plain")
    disconnect_mock.assert_awaited_once_with(7)


def test_disconnect_uses_configured_token(client, disconnect_mock):
    """
    Test the token is read from settings.

    Args:
        client: FastAPI test client fixture.
        disconnect_mock: Mocked hub disconnect.
    """
    with patch.object(app_settings, "ADMIN_BEARER_TOKEN", SecretStr("s3cret")):
        ok = client.get(
            "/admin/disconnect/1", headers={"Authorization": "Bearer s3cret"}
        )
        rejected = client.get(
            "/admin/disconnect/1", headers={"Authorization": "Bearer Bear"}
        )

    assert ok.status_code == 200
    assert rejected.status_code == 401
    disconnect_mock.assert_awaited_once_with(1)


@pytest.mark.parametrize("identity", ["0", "42", "1"])
def test_disconnect_unknown_identity_is_done(client, admin_headers, identity):
    """
    Test unknown identities, including 0, still answer Done.

    Args:
        client: FastAPI test client fixture.
        admin_headers: Headers carrying the admin token.
        identity: Identity path segment.
    """
    response = client.get(f"/admin/disconnect/{identity}", headers=admin_headers)

    assert response.status_code == 200
    assert response.text == "Done"


@pytest.mark.parametrize("identity", ["-1", "abc", "1.5"])
def test_disconnect_invalid_identity(
    client, admin_headers, disconnect_mock, identity
):
    """
    Test identities that are not non-negative integers are rejected.

    Args:
        client: FastAPI test client fixture.
        admin_headers: Headers carrying the admin token.
        disconnect_mock: Mocked hub disconnect.
        identity: Identity path segment.
    """
    response = client.get(f"/admin/disconnect/{identity}", headers=admin_headers)

    assert response.status_code == 422
    disconnect_mock.assert_not_called()


@pytest.mark.asyncio
async def test_disconnect_removes_registered_identity(hub, app, admin_headers):
    """
    Test the endpoint removes a registered identity from the hub.

    Args:
        hub: Fixture providing the chat hub.
        app: FastAPI application fixture.
        admin_headers: Headers carrying the admin token.
    """
    from httpx import ASGITransport, AsyncClient

    session = await hub.connect(FakeDuplexStream())

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as async_client:
        first = await async_client.get(
            f"/admin/disconnect/{session.identity}", headers=admin_headers
        )
        second = await async_client.get(
            f"/admin/disconnect/{session.identity}", headers=admin_headers
        )

    assert first.text == second.text == "Done"
    assert session.identity not in hub.registry
    assert hub.active_connections == 0
