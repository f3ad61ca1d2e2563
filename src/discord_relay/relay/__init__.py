"""Event relay: channel filtering, envelope normalization, and webhook forwarding."""

from discord_relay.relay.filters import (
    is_allowed_channel,
    should_forward_command,
    should_forward_message,
)
from discord_relay.relay.forwarder import dispatch_envelope, drain_pending, forward_envelope
from discord_relay.relay.handlers import handle_command, handle_message
from discord_relay.relay.normalizer import normalize_command, normalize_message

__all__ = [
    "dispatch_envelope",
    "drain_pending",
    "forward_envelope",
    "handle_command",
    "handle_message",
    "is_allowed_channel",
    "normalize_command",
    "normalize_message",
    "should_forward_command",
    "should_forward_message",
]
