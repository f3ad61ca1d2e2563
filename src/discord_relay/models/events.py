"""Inbound gateway event models with extracted fields (no raw gateway objects)."""

from typing import Any

from pydantic import BaseModel


class InboundMessage(BaseModel):
    """A channel message as observed on the gateway."""

    author_id: str
    author_is_bot: bool = False
    channel_id: str
    content: str = ""
    attachment_urls: list[str] = []
    message_id: str | None = None


class CommandOption(BaseModel):
    """A single supplied slash-command argument."""

    name: str
    value: Any = None  # str, int, float, bool, or snowflake string; None when absent


class SlashCommandInvocation(BaseModel):
    """A slash-command interaction as observed on the gateway."""

    user_id: str
    user_is_bot: bool = False
    channel_id: str
    command_name: str  # Includes sub-command path, e.g., "config set"
    options: list[CommandOption] = []
    interaction_id: str | None = None
