"""
Cog: slash-команда /prune — ручной проход по гильдии, каналу или одному пользователю.
Роль no-auto-prune здесь не учитывается.
"""
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from voice_pruner.engine import enforcer
from voice_pruner.engine.errors import InternalError, SearchError
from voice_pruner.utils import responses
from voice_pruner.utils.logging import get_logger

logger = get_logger("prune_commands")


async def run_prune(
    interaction: discord.Interaction,
    channel: Optional[app_commands.AppCommandChannel] = None,
    role: Optional[discord.Role] = None,
    member: Optional[discord.Member] = None,
) -> tuple[int, Optional[SearchError]]:
    """
    Подтвердить interaction сразу (проход может быть долгим), выполнить prune
    и отредактировать исходный ответ: "<count> users pruned" или текст ошибки.
    Возвращает (count, error).
    """
    await interaction.response.defer(thinking=True)

    count, error = 0, None
    try:
        count = await enforcer.prune(
            interaction.guild,
            channel_id=channel.id if channel is not None else None,
            role_id=role.id if role is not None else None,
            user_id=member.id if member is not None else None,
        )
        content = responses.pruned(count)
    except SearchError as e:
        error = e
        if isinstance(e, InternalError):
            logger.error("prune_internal_error", guild_id=interaction.guild_id, error=str(e))
        content = e.user_message

    await interaction.edit_original_response(content=content)
    return count, error


class PruneCommands(commands.Cog):
    """Ручное отключение пользователей без права CONNECT."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @app_commands.command(name="prune", description="Prune users from voice channels")
    @app_commands.guild_only()
    @app_commands.default_permissions(move_members=True)
    @app_commands.describe(
        channel="Only from this voice channel",
        role="Only users with this role",
        member="Only this user",
    )
    async def prune(
        self,
        interaction: discord.Interaction,
        channel: Optional[app_commands.AppCommandChannel] = None,
        role: Optional[discord.Role] = None,
        member: Optional[discord.Member] = None,
    ) -> None:
        if interaction.guild is None:
            await interaction.response.send_message(responses.UNAVAILABLE_IN_DMS)
            return
        if not interaction.permissions.move_members:
            await interaction.response.send_message(responses.MISSING_MOVE_MEMBERS)
            return
        await run_prune(interaction, channel, role, member)


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(PruneCommands(bot))
