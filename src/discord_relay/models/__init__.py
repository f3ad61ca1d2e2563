"""Data models for the Discord relay pipeline."""

from discord_relay.models.envelope import EventType, ForwardedEnvelope
from discord_relay.models.events import CommandOption, InboundMessage, SlashCommandInvocation

__all__ = [
    "CommandOption",
    "EventType",
    "ForwardedEnvelope",
    "InboundMessage",
    "SlashCommandInvocation",
]
