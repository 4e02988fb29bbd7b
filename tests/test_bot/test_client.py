"""
Тесты клиента: загрузка cogs в setup_hook, регистрация и удаление slash-команд, обработчик ошибок команд.
"""
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord import app_commands

from voice_pruner.bot.client import create_bot
from voice_pruner.utils import responses


@pytest.mark.asyncio
async def test_setup_hook_loads_cogs_and_commands():
    bot = create_bot()

    await bot.setup_hook()

    assert bot.get_cog("PermissionWatch") is not None
    assert bot.get_cog("PruneCommands") is not None
    assert bot.get_cog("ChannelCommands") is not None
    names = {command.name for command in bot.tree.get_commands()}
    assert names == {"prune", "is-monitored", "monitored", "unmonitored"}


@pytest.mark.asyncio
async def test_sync_commands_to_guild():
    bot = create_bot(guild_id=123)
    await bot.setup_hook()
    bot.tree.sync = AsyncMock(return_value=[])

    await bot.sync_commands()

    guild = bot.tree.sync.call_args.kwargs["guild"]
    assert guild.id == 123
    assert len(bot.tree.get_commands(guild=discord.Object(id=123))) == 4


@pytest.mark.asyncio
async def test_sync_commands_remove_clears_global_tree():
    bot = create_bot()
    await bot.setup_hook()
    bot.tree.sync = AsyncMock(return_value=[])

    await bot.sync_commands(remove=True)

    bot.tree.sync.assert_called_once_with(guild=None)
    assert bot.tree.get_commands() == []


def test_create_bot_status():
    bot = create_bot(status="idle")

    assert bot.guild_id is None
    assert bot.intents.members is True
    assert bot.intents.voice_states is True


def _interaction(done: bool) -> MagicMock:
    interaction = MagicMock()
    interaction.command.name = "prune"
    interaction.guild_id = 123
    interaction.response.is_done = MagicMock(return_value=done)
    interaction.response.send_message = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    return interaction


@pytest.mark.asyncio
async def test_tree_error_sends_internal_error():
    bot = create_bot()
    await bot.setup_hook()
    interaction = _interaction(done=False)

    await bot.tree.on_error(interaction, app_commands.AppCommandError("boom"))

    interaction.response.send_message.assert_awaited_once_with(responses.INTERNAL_ERROR)
    interaction.edit_original_response.assert_not_called()


@pytest.mark.asyncio
async def test_tree_error_edits_deferred_response():
    bot = create_bot()
    await bot.setup_hook()
    interaction = _interaction(done=True)

    await bot.tree.on_error(interaction, app_commands.AppCommandError("boom"))

    interaction.edit_original_response.assert_awaited_once_with(content=responses.INTERNAL_ERROR)
    interaction.response.send_message.assert_not_called()
