"""
Поиск пользователей в голосовых каналах, которым нельзя там находиться (нет CONNECT).
Права проверяются в момент поиска по текущему кэшу discord.py.
"""
from __future__ import annotations

from typing import Optional

import discord

from voice_pruner.engine import policy
from voice_pruner.engine.errors import (
    InternalError,
    NotAVoiceChannel,
    NotInVoice,
    SearchError,
    UnmonitoredChannel,
)
from voice_pruner.utils.logging import get_logger
from voice_pruner.utils.permissions import can_connect

logger = get_logger("engine.search")


class CandidateSearch:
    """Поиск кандидатов на отключение в одной гильдии."""

    def __init__(self, guild: discord.Guild) -> None:
        self.guild = guild

    def _has_role(self, member: discord.Member, role_id: Optional[int]) -> bool:
        # роль @everyone (id == id гильдии) есть у всех
        if role_id is None or role_id == self.guild.id:
            return True
        return any(role.id == role_id for role in member.roles)

    def channel(self, channel_id: int, role_id: Optional[int] = None) -> list[int]:
        """
        ID пользователей в канале без права CONNECT.
        С role_id — только участники с этой ролью.
        """
        channel = self.guild.get_channel(channel_id)
        if channel is None:
            raise InternalError(f"channel {channel_id} not in cache")
        if not policy.is_voice_channel(channel):
            raise NotAVoiceChannel()
        if not policy.is_monitored(channel):
            raise UnmonitoredChannel()

        logger.debug("searching_channel", channel_id=channel_id, role_id=role_id)
        result: list[int] = []
        for user_id in list(channel.voice_states):
            member = self.guild.get_member(user_id)
            if member is None:
                logger.warning(
                    "member_not_cached",
                    guild_id=self.guild.id,
                    channel_id=channel_id,
                    user_id=user_id,
                )
                continue
            if not self._has_role(member, role_id):
                continue
            if not can_connect(member, channel):
                result.append(user_id)
        return result

    def guild_wide(self, role_id: Optional[int] = None) -> list[int]:
        """Объединение channel() по всем отслеживаемым каналам; остальные каналы пропускаются."""
        result: list[int] = []
        for channel in self.guild.channels:
            if not policy.is_voice_channel(channel):
                continue
            try:
                result.extend(self.channel(channel.id, role_id))
            except SearchError:
                continue
        return result

    def user(self, user_id: int) -> bool:
        """
        True, если пользователя нужно отключить.
        NotInVoice — пользователь не в голосовом канале, UnmonitoredChannel — канал не отслеживается.
        """
        member = self.guild.get_member(user_id)
        if member is None or member.voice is None or member.voice.channel is None:
            raise NotInVoice()
        channel = member.voice.channel
        if not policy.is_monitored(channel):
            raise UnmonitoredChannel()
        return not can_connect(member, channel)

    def member(self, user_id: int) -> list[int]:
        """Ноль или один пользователь: [user_id], если его нужно отключить."""
        try:
            return [user_id] if self.user(user_id) else []
        except (NotInVoice, UnmonitoredChannel):
            return []
