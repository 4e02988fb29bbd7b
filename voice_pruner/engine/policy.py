"""
Политика гильдии: какой канал отслеживается и включено ли авто-удаление.
"""
from __future__ import annotations

import discord

from voice_pruner.utils.permissions import can_manage_voice

OPT_OUT_ROLE_NAME = "no-auto-prune"

MONITORED_CHANNEL_TYPES = frozenset(
    {discord.ChannelType.voice, discord.ChannelType.stage_voice}
)


def is_voice_channel(channel: discord.abc.GuildChannel) -> bool:
    return channel.type in MONITORED_CHANNEL_TYPES


def is_monitored(channel: discord.abc.GuildChannel) -> bool:
    """Голосовой (или stage) канал, в котором у бота есть MOVE_MEMBERS."""
    return is_voice_channel(channel) and can_manage_voice(channel)


def auto_prune_enabled(guild: discord.Guild) -> bool:
    """
    False, если у бота есть роль no-auto-prune.
    False и тогда, когда участника-бота ещё нет в кэше (начальная синхронизация).
    """
    me = guild.me
    if me is None:
        return False
    return not any(role.name == OPT_OUT_ROLE_NAME for role in me.roles)
