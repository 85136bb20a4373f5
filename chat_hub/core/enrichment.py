"""Stamping inbound chat messages with the sender's identity."""

from pydantic import ValidationError

from chat_hub.exceptions import EnvelopeParseError
from chat_hub.schemas.envelope import InboundEnvelope, OutboundEnvelope
from chat_hub.types import Identity, Payload


def enrich(payload: Payload, sender_id: Identity) -> Payload:
    """
    Parses an inbound frame and sets ``uid`` to the sender's identity.

    Binary frames are returned unchanged. Text frames must hold a JSON object
    with string ``name`` and ``message`` fields; both are passed through
    byte-for-byte, any inbound ``uid`` or extra field is discarded.

    Args:
        payload: Frame body as received from the client.
        sender_id: Identity of the session that received the frame.

    Returns:
        Payload: JSON text ``{"name": ..., "uid": ..., "message": ...}`` for
            text frames, the original bytes for binary frames.

    Raises:
        EnvelopeParseError: If a text frame is not a valid chat envelope.
    """
    if not isinstance(payload, str):
        return payload

    try:
        inbound = InboundEnvelope.model_validate_json(payload)
    except ValidationError as exc:
        raise EnvelopeParseError(
            f"Invalid chat envelope from {sender_id}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc

    return OutboundEnvelope(
        name=inbound.name, uid=sender_id, message=inbound.message
    ).model_dump_json()
