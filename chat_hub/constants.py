"""
Application-level constants for hardcoded hub behavior.

These values are part of the wire protocol or internal safety limits and
should NEVER be changed via environment variables. For configurable values
(queue size, overflow policy, admin token, etc.), see chat_hub/settings.py.
"""

# ============================================================================
# Identity Allocation
# ============================================================================

# First identity handed out; 0 is reserved and never issued
FIRST_IDENTITY = 1


# ============================================================================
# WebSocket Protocol Constants
# ============================================================================

# Path of the chat upgrade endpoint
WS_CHAT_PATH = "/ws"

# Timeout (seconds) when closing WebSocket connections gracefully
WS_CLOSE_TIMEOUT_SECONDS = 5


# ============================================================================
# Admin Endpoint
# ============================================================================

# Fixed response body of the admin disconnect endpoint
ADMIN_DISCONNECT_RESPONSE = "Done"


# ============================================================================
# Logging
# ============================================================================

# Maximum size of one JSON log line before the message is truncated
MAX_LOG_SIZE_BYTES = 16 * 1024


# ============================================================================
# Admin Authentication
# ============================================================================

# Bearer token used when no ADMIN_BEARER_TOKEN secret is configured
DEFAULT_ADMIN_BEARER_TOKEN = "Bear"
