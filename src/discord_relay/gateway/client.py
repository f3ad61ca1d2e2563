"""Discord gateway client.

Owns the discord.py connection and hands message and slash-command events
to the relay handlers. Session, heartbeat and reconnect handling stay with
discord.py.
"""

import logging

import discord
from discord import app_commands

from discord_relay.config import Settings
from discord_relay.gateway import commands as relay_commands
from discord_relay.gateway.events import invocation_from_interaction, message_from_discord
from discord_relay.relay.handlers import handle_command, handle_message

logger = logging.getLogger(__name__)


def build_intents() -> discord.Intents:
    """Gateway intents: guild messages with content (privileged intent)."""
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class RelayBot(discord.Client):
    """discord.py client that relays allow-listed channel activity to the webhook.

    Only slash commands are registered (on ``tree``); there are no prefix
    commands, so messages are relayed and never parsed as commands.
    """

    def __init__(self, settings: Settings) -> None:
        super().__init__(intents=build_intents())
        self.tree = app_commands.CommandTree(self)
        self.settings = settings

    async def setup_hook(self) -> None:
        relay_commands.setup(self)

    @property
    def is_connected(self) -> bool:
        """True while the gateway session is ready and not closed."""
        return self.is_ready() and not self.is_closed()

    async def on_ready(self) -> None:
        logger.info(
            "Bot is online as %s (id=%s), guilds=%d",
            self.user,
            self.user.id if self.user else None,
            len(self.guilds),
        )
        try:
            await self.tree.sync()
            logger.info("Slash command tree synced")
        except discord.HTTPException as exc:
            logger.error("Failed to sync slash commands: %s", exc)

    async def on_resumed(self) -> None:
        logger.info("Gateway connection resumed")

    async def on_disconnect(self) -> None:
        logger.warning("Gateway connection lost")

    async def on_message(self, message: discord.Message) -> None:
        handle_message(message_from_discord(message), self.settings)

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        invocation = invocation_from_interaction(interaction)
        if invocation is None:
            return
        handle_command(invocation, self.settings)
