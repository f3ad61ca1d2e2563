"""Channel allow-list and bot-author filtering for inbound events."""

import logging
from collections.abc import Collection

from discord_relay.models.events import InboundMessage, SlashCommandInvocation

logger = logging.getLogger(__name__)


def is_allowed_channel(channel_id: str, allowed_channels: Collection[str]) -> bool:
    """Return True if channel_id is in the allow-list (exact match).

    An empty allow-list is a configuration error: it is logged and every
    event is rejected until corrected.
    """
    if not allowed_channels:
        logger.error("TARGET_CHANNELS is not configured; ignoring event from channel %s", channel_id)
        return False
    return channel_id in allowed_channels


def should_forward_message(message: InboundMessage, allowed_channels: Collection[str]) -> bool:
    """Apply message filters in order:

    1. Bot author -> skip (prevents relaying our own or other bots' output)
    2. Channel not allow-listed -> skip
    """
    if message.author_is_bot:
        return False
    return is_allowed_channel(message.channel_id, allowed_channels)


def should_forward_command(
    invocation: SlashCommandInvocation, allowed_channels: Collection[str]
) -> bool:
    """Same filters as should_forward_message, applied to a slash-command invocation."""
    if invocation.user_is_bot:
        return False
    return is_allowed_channel(invocation.channel_id, allowed_channels)
