"""
Tests for the chat hub: connect, disconnect and broadcast entry points.
"""

import asyncio

import pytest

from chat_hub.core.hub import ChatHub
from chat_hub.core.identity import IdentityAllocator
from chat_hub.core.session import SessionState
from chat_hub.settings import Settings
from chat_hub.types import Identity
from tests.mocks.stream_mocks import FakeDuplexStream, wait_until


class TestHubConnect:
    """Tests for ChatHub.connect."""

    @pytest.mark.asyncio
    async def test_identities_start_at_one(self, hub):
        """Test the first two connections receive identities 1 and 2."""
        first = await hub.connect(FakeDuplexStream())
        second = await hub.connect(FakeDuplexStream())

        assert (first.identity, second.identity) == (1, 2)
        assert hub.active_connections == 2

    @pytest.mark.asyncio
    async def test_injected_allocator_is_used(self):
        """Test the hub allocates identities from the allocator it is given."""
        hub = ChatHub(allocator=IdentityAllocator(start=100))

        session = await hub.connect(FakeDuplexStream())

        assert session.identity == 100

    @pytest.mark.asyncio
    async def test_queue_settings_reach_endpoint(self):
        """Test queue bounds are applied to every new endpoint."""
        hub = ChatHub(queue_max_size=5, overflow_policy="disconnect")

        session = await hub.connect(FakeDuplexStream())

        assert session.endpoint.max_size == 5
        assert session.endpoint.overflow_policy == "disconnect"

    def test_from_settings(self):
        """Test the hub is configured from application settings."""
        settings = Settings(
            WS_QUEUE_MAX_SIZE=10,
            WS_QUEUE_OVERFLOW_POLICY="disconnect",
            ADMIN_DISCONNECT_CLOSES_SESSION=True,
        )

        hub = ChatHub.from_settings(settings)

        assert hub.queue_max_size == 10
        assert hub.overflow_policy == "disconnect"
        assert hub.disconnect_closes_session is True
        assert hub.active_connections == 0


class TestHubDisconnect:
    """Tests for ChatHub.disconnect."""

    @pytest.mark.asyncio
    async def test_disconnect_unknown_identity(self, hub):
        """Test disconnecting an identity that never existed is a no-op."""
        assert await hub.disconnect(Identity(42)) is False
        assert await hub.disconnect(Identity(0)) is False

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self, hub):
        """Test a second disconnect of the same identity changes nothing."""
        a = await hub.connect(FakeDuplexStream())
        b = await hub.connect(FakeDuplexStream())

        assert await hub.disconnect(a.identity) is True
        assert await hub.disconnect(a.identity) is False

        assert list(hub.registry.identities()) == [b.identity]

    @pytest.mark.asyncio
    async def test_example_scenario(self, hub):
        """Test the weak disconnect: A stays connected but receives nothing."""
        a, b = FakeDuplexStream(), FakeDuplexStream()
        session_a = await hub.connect(a)
        session_b = await hub.connect(b)
        tasks = [
            asyncio.create_task(session_a.run()),
            asyncio.create_task(session_b.run()),
        ]

        a.feed('{"name":"alice","message":"hi"}')
        await wait_until(lambda: len(a.sent) == 1 and len(b.sent) == 1)
        assert a.sent == b.sent == ['{"name":"alice","uid":1,"message":"hi"}']

        await hub.disconnect(Identity(1))

        b.feed('{"name":"bob","message":"yo"}')
        await wait_until(lambda: len(b.sent) == 2)
        assert b.sent[1] == '{"name":"bob","uid":2,"message":"yo"}'
        assert len(a.sent) == 1

        # A's transport is untouched and it can still send
        assert session_a.state is SessionState.ACTIVE
        assert not a.closed
        a.feed('{"name":"alice","message":"still here"}')
        await wait_until(lambda: len(b.sent) == 3)
        assert b.sent[2] == '{"name":"alice","uid":1,"message":"still here"}'
        assert len(a.sent) == 1

        a.hang_up()
        b.hang_up()
        await asyncio.gather(*tasks)
        assert session_a.state is SessionState.CLOSED
        assert hub.active_connections == 0

    @pytest.mark.asyncio
    async def test_strict_disconnect_closes_session(self):
        """Test the session is torn down when disconnect closes sessions."""
        hub = ChatHub(disconnect_closes_session=True)
        stream = FakeDuplexStream()
        session = await hub.connect(stream)
        task = asyncio.create_task(session.run())

        assert await hub.disconnect(session.identity) is True
        await asyncio.wait_for(task, timeout=1)

        assert session.state is SessionState.CLOSED
        assert stream.closed


class TestHubBroadcast:
    """Tests for hub-level broadcast and shutdown."""

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_session(self, hub):
        """Test a hub broadcast is queued on every registered endpoint."""
        sessions = [await hub.connect(FakeDuplexStream()) for _ in range(3)]

        count = await hub.broadcast('{"name":"n","uid":1,"message":"m"}')

        assert count == 3
        for session in sessions:
            assert session.endpoint.pending == 1

    @pytest.mark.asyncio
    async def test_close_all_ends_every_session(self, hub):
        """Test close_all closes every endpoint and sessions shut down."""
        streams = [FakeDuplexStream() for _ in range(3)]
        sessions = [await hub.connect(stream) for stream in streams]
        tasks = [asyncio.create_task(s.run()) for s in sessions]

        assert await hub.close_all() == 3
        await asyncio.wait_for(asyncio.gather(*tasks), timeout=1)

        assert all(s.state is SessionState.CLOSED for s in sessions)
        assert all(stream.closed for stream in streams)
        assert hub.active_connections == 0
