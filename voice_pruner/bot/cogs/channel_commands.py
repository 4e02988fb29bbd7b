"""
Cog: slash-команды /is-monitored, /monitored, /unmonitored — какие голосовые каналы отслеживаются ботом.
"""
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from voice_pruner.engine import policy
from voice_pruner.utils import responses
from voice_pruner.utils.logging import get_logger

logger = get_logger("channel_commands")


def channel_report(guild: discord.Guild, channel_id: Optional[int], monitored: bool) -> str:
    """
    С channel_id — `true`/`false` (совпадает ли состояние канала с monitored).
    Без channel_id — список голосовых каналов с таким состоянием.
    """
    if channel_id is not None:
        channel = guild.get_channel(channel_id)
        if channel is None:
            logger.error("channel_not_cached", guild_id=guild.id, channel_id=channel_id)
            return responses.INTERNAL_ERROR
        if not policy.is_voice_channel(channel):
            return responses.NOT_A_VOICE_CHANNEL
        return responses.flag(policy.is_monitored(channel) == monitored)

    names = [
        channel.name
        for channel in guild.channels
        if policy.is_voice_channel(channel) and policy.is_monitored(channel) == monitored
    ]
    return responses.channel_list(names)


class ChannelCommands(commands.Cog):
    """Просмотр отслеживаемых и неотслеживаемых голосовых каналов."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    async def _reply(
        self,
        interaction: discord.Interaction,
        channel: Optional[app_commands.AppCommandChannel],
        monitored: bool,
        require_move_members: bool = True,
    ) -> None:
        if interaction.guild is None:
            await interaction.response.send_message(responses.UNAVAILABLE_IN_DMS)
            return
        if require_move_members and not interaction.permissions.move_members:
            await interaction.response.send_message(responses.MISSING_MOVE_MEMBERS)
            return
        channel_id = channel.id if channel is not None else None
        await interaction.response.send_message(
            channel_report(interaction.guild, channel_id, monitored)
        )

    @app_commands.command(name="is-monitored", description="Checks if a voice channel is monitored")
    @app_commands.guild_only()
    @app_commands.describe(channel="Returns `true` if the voice channel is monitored")
    async def is_monitored(
        self,
        interaction: discord.Interaction,
        channel: app_commands.AppCommandChannel,
    ) -> None:
        await self._reply(interaction, channel, monitored=True, require_move_members=False)

    @app_commands.command(name="monitored", description="List monitored voice channels")
    @app_commands.guild_only()
    @app_commands.default_permissions(move_members=True)
    @app_commands.describe(channel="Returns `true` if the voice channel is monitored")
    async def monitored(
        self,
        interaction: discord.Interaction,
        channel: Optional[app_commands.AppCommandChannel] = None,
    ) -> None:
        await self._reply(interaction, channel, monitored=True)

    @app_commands.command(name="unmonitored", description="List unmonitored voice channels")
    @app_commands.guild_only()
    @app_commands.default_permissions(move_members=True)
    @app_commands.describe(channel="Returns `true` if the voice channel is unmonitored")
    async def unmonitored(
        self,
        interaction: discord.Interaction,
        channel: Optional[app_commands.AppCommandChannel] = None,
    ) -> None:
        await self._reply(interaction, channel, monitored=False)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(ChannelCommands(bot))
