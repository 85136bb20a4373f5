"""
Prometheus metrics definitions and utilities.

All metrics are re-exported here:

    from chat_hub.utils.metrics import ws_connections_active

Core code records through the MetricsCollector facade:

    from chat_hub.utils.metrics import MetricsCollector
    MetricsCollector.record_ws_message_received()
"""

from chat_hub.utils.metrics.collector import MetricsCollector
from chat_hub.utils.metrics.http import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)
from chat_hub.utils.metrics.websocket import (
    get_active_websocket_connections,
    ws_admin_disconnects_total,
    ws_broadcast_duration_seconds,
    ws_connections_active,
    ws_connections_total,
    ws_messages_dropped_total,
    ws_messages_received_total,
    ws_messages_sent_total,
)

__all__ = [
    "MetricsCollector",
    "http_request_duration_seconds",
    "http_requests_in_progress",
    "http_requests_total",
    "get_active_websocket_connections",
    "ws_admin_disconnects_total",
    "ws_broadcast_duration_seconds",
    "ws_connections_active",
    "ws_connections_total",
    "ws_messages_dropped_total",
    "ws_messages_received_total",
    "ws_messages_sent_total",
]
