"""
Discord-бот: intents, загрузка cogs (permission_watch, prune_commands, channel_commands), on_ready.
Экземпляр создаётся один раз при старте и передаётся во все cogs.
"""
from typing import Any, Optional

import discord
from discord import app_commands
from discord.ext import commands

from voice_pruner.utils import responses
from voice_pruner.utils.logging import get_logger

logger = get_logger("bot")

EXTENSIONS = (
    "voice_pruner.bot.cogs.permission_watch",
    "voice_pruner.bot.cogs.prune_commands",
    "voice_pruner.bot.cogs.channel_commands",
)


class PrunerBot(commands.Bot):
    """
    Бот, отключающий из голосовых каналов пользователей без права CONNECT.
    guild_id — если задан, slash-команды регистрируются только в этой гильдии.
    """

    def __init__(
        self,
        guild_id: Optional[int] = None,
        status: discord.Status = discord.Status.online,
        **kwargs: Any,
    ) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.voice_states = True
        intents.members = True  # GUILD_MEMBERS — privileged
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            status=status,
            **kwargs,
        )
        self.guild_id = guild_id

    async def setup_hook(self) -> None:
        """Загрузка cogs и обработчика ошибок slash-команд."""
        for extension in EXTENSIONS:
            await self.load_extension(extension)
        self.tree.error(self.on_app_command_error)

    async def on_ready(self) -> None:
        logger.info(
            "bot_ready",
            user=str(self.user),
            guild_count=len(self.guilds),
        )

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        """Необработанная ошибка команды: в лог, пользователю — общий текст."""
        command = interaction.command.name if interaction.command else None
        logger.error(
            "app_command_failed",
            command=command,
            guild_id=interaction.guild_id,
            error=repr(error),
            exc_info=error,
        )
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=responses.INTERNAL_ERROR)
            else:
                await interaction.response.send_message(responses.INTERNAL_ERROR)
        except discord.HTTPException as e:
            logger.warning("app_command_error_reply_failed", status=e.status)

    async def sync_commands(self, remove: bool = False) -> None:
        """
        Зарегистрировать slash-команды (или удалить все при remove=True)
        глобально или в гильдии guild_id.
        """
        guild = discord.Object(id=self.guild_id) if self.guild_id is not None else None
        if remove:
            self.tree.clear_commands(guild=guild)
        elif guild is not None:
            self.tree.copy_global_to(guild=guild)
        synced = await self.tree.sync(guild=guild)
        logger.info(
            "slash_commands_synced",
            guild_id=self.guild_id,
            removed=remove,
            count=len(synced),
        )


def create_bot(guild_id: Optional[int] = None, status: str = "online") -> PrunerBot:
    """Фабрика: создаёт экземпляр бота."""
    return PrunerBot(guild_id=guild_id, status=discord.Status(status))
