"""
Facade for centralized metrics emission.

Provides high-level methods for recording metrics without exposing
Prometheus implementation details to the hub core.
"""


class MetricsCollector:
    """
    Centralized facade for hub Prometheus metrics.

    All methods are static for easy use without instantiation.
    """

    @staticmethod
    def record_ws_connection_accepted() -> None:
        """Record a session entering the active state."""
        from chat_hub.utils.metrics import (
            ws_connections_active,
            ws_connections_total,
        )

        ws_connections_total.labels(status="accepted").inc()
        ws_connections_active.inc()

    @staticmethod
    def record_ws_disconnection() -> None:
        """Record a session reaching the closed state."""
        from chat_hub.utils.metrics import (
            ws_connections_active,
            ws_connections_total,
        )

        ws_connections_total.labels(status="closed").inc()
        ws_connections_active.dec()

    @staticmethod
    def record_ws_message_received() -> None:
        from chat_hub.utils.metrics import ws_messages_received_total

        ws_messages_received_total.inc()

    @staticmethod
    def record_ws_message_sent() -> None:
        from chat_hub.utils.metrics import ws_messages_sent_total

        ws_messages_sent_total.inc()

    @staticmethod
    def record_ws_message_dropped(reason: str) -> None:
        """
        Record a message that was not delivered.

        Args:
            reason: One of 'parse_error', 'queue_overflow', 'endpoint_closed'
        """
        from chat_hub.utils.metrics import ws_messages_dropped_total

        ws_messages_dropped_total.labels(reason=reason).inc()

    @staticmethod
    def record_broadcast(duration: float) -> None:
        """
        Record how long one broadcast fan-out took.

        Args:
            duration: Fan-out duration in seconds
        """
        from chat_hub.utils.metrics import ws_broadcast_duration_seconds

        ws_broadcast_duration_seconds.observe(duration)

    @staticmethod
    def record_admin_disconnect(removed: bool) -> None:
        from chat_hub.utils.metrics import ws_admin_disconnects_total

        ws_admin_disconnects_total.labels(
            result="removed" if removed else "not_found"
        ).inc()
