"""
Prometheus metrics for the chat WebSocket hub.

This module defines metrics for tracking connections, message rates,
dropped deliveries and broadcast fan-out duration.
"""

from chat_hub.utils.metrics._helpers import (
    _get_or_create_counter,
    _get_or_create_gauge,
    _get_or_create_histogram,
)

# WebSocket Connection Metrics
ws_connections_active = _get_or_create_gauge(
    "ws_connections_active", "Number of active WebSocket chat sessions"
)

ws_connections_total = _get_or_create_counter(
    "ws_connections_total",
    "Total WebSocket chat connections",
    ["status"],  # accepted, closed
)

ws_messages_received_total = _get_or_create_counter(
    "ws_messages_received_total", "Total WebSocket frames received"
)

ws_messages_sent_total = _get_or_create_counter(
    "ws_messages_sent_total", "Total WebSocket frames written to clients"
)

ws_messages_dropped_total = _get_or_create_counter(
    "ws_messages_dropped_total",
    "Messages that were not delivered",
    ["reason"],  # parse_error, queue_overflow, endpoint_closed
)

ws_broadcast_duration_seconds = _get_or_create_histogram(
    "ws_broadcast_duration_seconds",
    "Time spent fanning one message out to all registered endpoints",
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
)

ws_admin_disconnects_total = _get_or_create_counter(
    "ws_admin_disconnects_total",
    "Admin disconnect requests",
    ["result"],  # removed, not_found
)


def get_active_websocket_connections() -> int:
    """
    Get the current number of active chat sessions.

    Returns:
        int: Number of active WebSocket connections.
    """
    try:
        return int(ws_connections_active._value.get())
    except (AttributeError, ValueError):
        return 0


__all__ = [
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
    "ws_messages_dropped_total",
    "ws_broadcast_duration_seconds",
    "ws_admin_disconnects_total",
    "get_active_websocket_connections",
]
