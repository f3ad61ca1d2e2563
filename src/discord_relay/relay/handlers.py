"""Relay entry points: filter, normalize, and dispatch inbound events."""

import logging

from discord_relay.config import Settings
from discord_relay.models.envelope import ForwardedEnvelope
from discord_relay.models.events import InboundMessage, SlashCommandInvocation
from discord_relay.relay.filters import should_forward_command, should_forward_message
from discord_relay.relay.forwarder import dispatch_envelope
from discord_relay.relay.normalizer import normalize_command, normalize_message

logger = logging.getLogger(__name__)


def handle_message(message: InboundMessage, settings: Settings) -> ForwardedEnvelope | None:
    """Relay a channel message if it passes the filters.

    Returns the dispatched envelope, or None if the message was filtered out.
    The webhook POST runs as a separate task; its outcome is only logged.
    """
    if not should_forward_message(message, settings.allowed_channels):
        return None

    envelope = normalize_message(message)

    logger.info(
        "Message in channel %s from user %s: %s",
        envelope.channel_id,
        envelope.user_id,
        envelope.message,
    )

    dispatch_envelope(envelope, settings.webhook_url)
    return envelope


def handle_command(
    invocation: SlashCommandInvocation, settings: Settings
) -> ForwardedEnvelope | None:
    """Relay a slash-command invocation if it passes the filters."""
    if not should_forward_command(invocation, settings.allowed_channels):
        return None

    envelope = normalize_command(invocation)

    logger.info(
        "Slash command in channel %s from user %s: %s",
        envelope.channel_id,
        envelope.user_id,
        envelope.message,
    )

    dispatch_envelope(envelope, settings.webhook_url)
    return envelope
