"""Conversion of discord.py gateway objects into relay event models."""

import discord

from discord_relay.models.events import CommandOption, InboundMessage, SlashCommandInvocation

_NESTING_OPTION_TYPES = (
    discord.AppCommandOptionType.subcommand.value,
    discord.AppCommandOptionType.subcommand_group.value,
)


def message_from_discord(message: discord.Message) -> InboundMessage:
    """Extract the relay-relevant fields from a gateway message."""
    return InboundMessage(
        author_id=str(message.author.id),
        author_is_bot=message.author.bot,
        channel_id=str(message.channel.id),
        content=message.content or "",
        attachment_urls=[attachment.url for attachment in message.attachments],
        message_id=str(message.id),
    )


def parse_command_options(data: dict) -> tuple[str, list[CommandOption]]:
    """Flatten raw interaction data into a command path and its leaf options.

    Sub-command and sub-command-group options extend the command path
    (``config set``); the options nested under the innermost one are returned.
    """
    path = [data.get("name", "")]
    raw_options = data.get("options") or []

    while raw_options and raw_options[0].get("type") in _NESTING_OPTION_TYPES:
        path.append(raw_options[0].get("name", ""))
        raw_options = raw_options[0].get("options") or []

    options = [
        CommandOption(name=raw["name"], value=raw.get("value"))
        for raw in raw_options
        if raw.get("name")
    ]
    return " ".join(part for part in path if part), options


def invocation_from_interaction(
    interaction: discord.Interaction,
) -> SlashCommandInvocation | None:
    """Extract a slash-command invocation, or None for any other interaction.

    Buttons, modals, autocomplete and context-menu commands are not relayed.
    """
    if interaction.type is not discord.InteractionType.application_command:
        return None

    data = interaction.data or {}
    if data.get("type", discord.AppCommandType.chat_input.value) != discord.AppCommandType.chat_input.value:
        return None

    command_name, options = parse_command_options(data)
    channel_id = interaction.channel_id

    return SlashCommandInvocation(
        user_id=str(interaction.user.id),
        user_is_bot=interaction.user.bot,
        channel_id=str(channel_id) if channel_id is not None else "",
        command_name=command_name,
        options=options,
        interaction_id=str(interaction.id),
    )
