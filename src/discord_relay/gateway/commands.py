"""Built-in slash commands.

Invocations of these commands are relayed like any other slash command by
RelayBot.on_interaction; the callbacks here only acknowledge the user.
"""

import logging

import discord
from discord import app_commands

logger = logging.getLogger(__name__)


def setup(bot: discord.Client) -> None:
    """Register built-in slash commands on the client's ``tree`` (an app_commands.CommandTree)."""
    bot.tree.add_command(ping)
    logger.info("Relay slash commands registered")


@app_commands.command(
    name="ping",
    description="Check that the relay bot is online",
)
async def ping(interaction: discord.Interaction) -> None:
    await interaction.response.send_message("Pong!", ephemeral=True)
