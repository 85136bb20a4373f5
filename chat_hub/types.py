"""
Type definitions and aliases for the broadcast hub.

Example:
    ```python
    from chat_hub.types import Identity, Payload


    def deliver(identity: Identity, payload: Payload) -> None:
        ...
    ```
"""

from typing import Literal, NewType

Identity = NewType("Identity", int)
"""Process-unique connection identity, issued once per connection."""

Payload = str | bytes
"""A frame body: ``str`` for text frames, ``bytes`` for binary frames."""

OverflowPolicy = Literal["drop_oldest", "disconnect"]
"""What a full delivery queue does with one more payload."""
