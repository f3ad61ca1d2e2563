"""Forwarded event envelope model and event type enum."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Kinds of gateway events forwarded to the webhook."""

    CHANNEL_MESSAGE = "channel_message"
    SLASH_COMMAND = "slash_command"


class ForwardedEnvelope(BaseModel):
    """Flat record POSTed to the webhook. Serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    type: EventType
    user_id: str = Field(alias="userId")
    message: str
    channel_id: str = Field(alias="channelId")
    message_id: str | None = Field(default=None, alias="messageId")
    interaction_id: str | None = Field(default=None, alias="interactionId")

    def to_payload(self) -> dict:
        """Return the JSON body, omitting unset optional identifiers."""
        return self.model_dump(by_alias=True, exclude_none=True)
