"""Discord gateway ingress: bot client, event conversion, and slash commands."""

from discord_relay.gateway.client import RelayBot, build_intents
from discord_relay.gateway.events import (
    invocation_from_interaction,
    message_from_discord,
    parse_command_options,
)

__all__ = [
    "RelayBot",
    "build_intents",
    "invocation_from_interaction",
    "message_from_discord",
    "parse_command_options",
]
