"""Normalization of heterogeneous gateway events into one envelope shape."""

from typing import Any

from discord_relay.models.envelope import EventType, ForwardedEnvelope
from discord_relay.models.events import InboundMessage, SlashCommandInvocation

NO_TEXT_PLACEHOLDER = "[No text content]"
EMPTY_OPTION_PLACEHOLDER = "[empty]"


def message_text(message: InboundMessage) -> str:
    """Return the human-readable text for a channel message.

    Trimmed content when present, otherwise a bracketed list of attachment
    URLs, otherwise a fixed placeholder.
    """
    text = message.content.strip()
    if text:
        return text
    if message.attachment_urls:
        return f"[Attachment(s): {', '.join(message.attachment_urls)}]"
    return NO_TEXT_PLACEHOLDER


def format_option_value(value: Any) -> str:
    """Render a slash-command option value for display."""
    if value is None or value == "":
        return EMPTY_OPTION_PLACEHOLDER
    if isinstance(value, bool):
        return "true" if value else "false"
    # Number options arrive as floats; 5.0 displays as "5"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def command_text(invocation: SlashCommandInvocation) -> str:
    """Return ``/name`` followed by ``opt: value`` pairs, e.g. ``/ping x: 5, y: [empty]``."""
    text = f"/{invocation.command_name}"
    if invocation.options:
        pairs = ", ".join(
            f"{option.name}: {format_option_value(option.value)}"
            for option in invocation.options
        )
        text = f"{text} {pairs}"
    return text


def normalize_message(message: InboundMessage) -> ForwardedEnvelope:
    """Build a channel_message envelope from an accepted message."""
    return ForwardedEnvelope(
        type=EventType.CHANNEL_MESSAGE,
        user_id=message.author_id,
        message=message_text(message),
        channel_id=message.channel_id,
        message_id=message.message_id,
    )


def normalize_command(invocation: SlashCommandInvocation) -> ForwardedEnvelope:
    """Build a slash_command envelope from an accepted invocation."""
    return ForwardedEnvelope(
        type=EventType.SLASH_COMMAND,
        user_id=invocation.user_id,
        message=command_text(invocation),
        channel_id=invocation.channel_id,
        interaction_id=invocation.interaction_id,
    )
