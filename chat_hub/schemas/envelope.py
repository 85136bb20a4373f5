from pydantic import BaseModel, ConfigDict, Field


class InboundEnvelope(BaseModel):
    """Chat message as sent by a client; any ``uid`` it carries is ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    message: str


class OutboundEnvelope(BaseModel):
    """Chat message as broadcast, stamped with the sender's identity."""

    model_config = ConfigDict(frozen=True)

    name: str
    uid: int = Field(ge=1)
    message: str
