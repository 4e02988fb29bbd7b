"""
Фикстуры pytest: фейковая гильдия discord.py (каналы, участники, роли, голосовые состояния), настройки.
Права в канале: бот получает MOVE_MEMBERS по флагу канала, участник — CONNECT, если его нет в channel.denied.
"""
from typing import Any, Iterable, Optional
from unittest.mock import AsyncMock

import discord
import pytest


BOT_ID = 1
GUILD_ID = 999888777


class FakeRole:
    def __init__(self, guild: "FakeGuild", role_id: int, name: str, permissions: int = 0) -> None:
        self.guild = guild
        self.id = role_id
        self.name = name
        self.permissions = discord.Permissions(permissions)


class FakeVoiceState:
    def __init__(self, channel: "FakeChannel") -> None:
        self.channel = channel


class FakeMember:
    """
    Мок discord.Member. move_to(None) убирает участника из канала,
    как это сделает кэш после VOICE_STATE_UPDATE.
    """

    def __init__(self, guild: "FakeGuild", user_id: int, roles: Iterable[FakeRole] = ()) -> None:
        self.guild = guild
        self.id = user_id
        self.roles = [guild.default_role, *roles]
        self.voice: Optional[FakeVoiceState] = None
        self.move_to = AsyncMock(side_effect=self._move_to)

    async def _move_to(self, channel: Any, reason: Optional[str] = None) -> None:
        if self.voice is not None:
            self.voice.channel.voice_states.pop(self.id, None)
        self.voice = None


class FakeChannel:
    def __init__(
        self,
        guild: "FakeGuild",
        channel_id: int,
        name: str,
        channel_type: discord.ChannelType = discord.ChannelType.voice,
        bot_can_manage: bool = True,
    ) -> None:
        self.guild = guild
        self.id = channel_id
        self.name = name
        self.type = channel_type
        self.bot_can_manage = bot_can_manage
        self.denied: set[int] = set()
        self.overwrites: dict[Any, discord.PermissionOverwrite] = {}
        self.voice_states: dict[int, FakeVoiceState] = {}

    def permissions_for(self, member: FakeMember) -> discord.Permissions:
        if member is self.guild.me:
            return discord.Permissions(move_members=self.bot_can_manage, connect=True)
        return discord.Permissions(connect=member.id not in self.denied)


class FakeGuild:
    """Мок discord.Guild: id, channels, get_channel, get_member, me, default_role."""

    def __init__(self, guild_id: int = GUILD_ID, bot_cached: bool = True) -> None:
        self.id = guild_id
        self.default_role = FakeRole(self, guild_id, "@everyone")
        self.channels: list[FakeChannel] = []
        self.members: dict[int, FakeMember] = {}
        self.me: Optional[FakeMember] = None
        if bot_cached:
            self.me = self.add_member(BOT_ID)

    def get_channel(self, channel_id: int) -> Optional[FakeChannel]:
        for channel in self.channels:
            if channel.id == channel_id:
                return channel
        return None

    def get_member(self, user_id: int) -> Optional[FakeMember]:
        return self.members.get(user_id)

    def add_role(self, role_id: int, name: str, permissions: int = 0) -> FakeRole:
        return FakeRole(self, role_id, name, permissions)

    def add_channel(self, channel_id: int, name: str = "voice", **kwargs: Any) -> FakeChannel:
        channel = FakeChannel(self, channel_id, name, **kwargs)
        self.channels.append(channel)
        return channel

    def add_member(
        self,
        user_id: int,
        roles: Iterable[FakeRole] = (),
        channel: Optional[FakeChannel] = None,
        connect: bool = True,
    ) -> FakeMember:
        member = FakeMember(self, user_id, roles)
        self.members[user_id] = member
        if channel is not None:
            member.voice = FakeVoiceState(channel)
            channel.voice_states[user_id] = member.voice
            if not connect:
                channel.denied.add(user_id)
        return member


def http_error(status: int = 403, reason: str = "Forbidden") -> discord.HTTPException:
    response = type("Response", (), {"status": status, "reason": reason})()
    return discord.HTTPException(response, "Missing Permissions")


# --- Фикстуры ---


@pytest.fixture
def guild() -> FakeGuild:
    """Гильдия, в кэше которой уже есть участник-бот."""
    return FakeGuild()


@pytest.fixture
def voice_channel(guild) -> FakeChannel:
    """Отслеживаемый голосовой канал."""
    return guild.add_channel(100500, "General")


@pytest.fixture(autouse=True)
def patch_settings(monkeypatch):
    """Тестовые переменные окружения для Settings."""
    monkeypatch.setenv("DISCORD_TOKEN", "test-token")
    monkeypatch.delenv("DISCORD_GUILD_ID", raising=False)
    monkeypatch.delenv("CREDENTIALS_DIRECTORY", raising=False)
    # Сброс кэша настроек, чтобы get_settings() подхватил env
    import voice_pruner.config.settings as _settings_mod
    monkeypatch.setattr(_settings_mod, "_settings", None)


@pytest.fixture
def make_guild():
    """Фабрика гильдий (например, без участника-бота в кэше: make_guild(bot_cached=False))."""
    return FakeGuild


@pytest.fixture
def make_http_error():
    return http_error
