"""Connection registry and broadcast engine of the chat hub."""

from chat_hub.core.broadcast import Broadcaster
from chat_hub.core.endpoint import DeliveryEndpoint
from chat_hub.core.enrichment import enrich
from chat_hub.core.hub import ChatHub
from chat_hub.core.identity import IdentityAllocator
from chat_hub.core.registry import ConnectionRegistry
from chat_hub.core.session import ConnectionSession, SessionState

__all__ = [
    "Broadcaster",
    "ChatHub",
    "ConnectionRegistry",
    "ConnectionSession",
    "DeliveryEndpoint",
    "IdentityAllocator",
    "SessionState",
    "enrich",
]
