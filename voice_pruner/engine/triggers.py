"""
События, которые могут изменить право CONNECT, и область повторной проверки для каждого.
should_skip читает значение из кэша ДО применения обновления (discord.py передаёт его как before).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import discord

from voice_pruner.engine.policy import MONITORED_CHANNEL_TYPES

# (target_id, allow, deny) по каждому overwrite канала, отсортировано по target_id
OverwriteSignature = tuple[tuple[int, int, int], ...]


def overwrite_signature(channel: discord.abc.GuildChannel) -> OverwriteSignature:
    entries = []
    for target, overwrite in channel.overwrites.items():
        allow, deny = overwrite.pair()
        entries.append((target.id, allow.value, deny.value))
    return tuple(sorted(entries))


@dataclass(frozen=True)
class ChannelOverwritesChanged:
    """Обновление канала. cached_overwrites is None — канала не было в кэше."""
    guild_id: int
    channel_id: int
    channel_type: discord.ChannelType
    overwrites: OverwriteSignature
    cached_overwrites: Optional[OverwriteSignature]

    @classmethod
    def from_update(
        cls,
        before: Optional[discord.abc.GuildChannel],
        after: discord.abc.GuildChannel,
    ) -> "ChannelOverwritesChanged":
        return cls(
            guild_id=after.guild.id,
            channel_id=after.id,
            channel_type=after.type,
            overwrites=overwrite_signature(after),
            cached_overwrites=overwrite_signature(before) if before is not None else None,
        )


@dataclass(frozen=True)
class MemberRolesChanged:
    guild_id: int
    user_id: int

    @classmethod
    def from_member(cls, member: discord.Member) -> "MemberRolesChanged":
        return cls(guild_id=member.guild.id, user_id=member.id)


@dataclass(frozen=True)
class RolePermissionsChanged:
    """Обновление роли. cached_permissions is None — роли не было в кэше."""
    guild_id: int
    role_id: int
    permissions: int
    cached_permissions: Optional[int]

    @classmethod
    def from_update(
        cls,
        before: Optional[discord.Role],
        after: discord.Role,
    ) -> "RolePermissionsChanged":
        return cls(
            guild_id=after.guild.id,
            role_id=after.id,
            permissions=after.permissions.value,
            cached_permissions=before.permissions.value if before is not None else None,
        )


@dataclass(frozen=True)
class RoleDeleted:
    guild_id: int
    role_id: int

    @classmethod
    def from_role(cls, role: discord.Role) -> "RoleDeleted":
        return cls(guild_id=role.guild.id, role_id=role.id)


Trigger = Union[ChannelOverwritesChanged, MemberRolesChanged, RolePermissionsChanged, RoleDeleted]


@dataclass(frozen=True)
class ChannelScope:
    channel_id: int


@dataclass(frozen=True)
class MemberScope:
    user_id: int


@dataclass(frozen=True)
class GuildScope:
    pass


Scope = Union[ChannelScope, MemberScope, GuildScope]


def should_skip(trigger: Trigger) -> bool:
    """True, если обновление не может изменить результат проверки (порядок правил важен)."""
    if isinstance(trigger, ChannelOverwritesChanged):
        if trigger.channel_type not in MONITORED_CHANNEL_TYPES:
            return True
        if trigger.cached_overwrites is None:
            return False
        return trigger.overwrites == trigger.cached_overwrites
    if isinstance(trigger, MemberRolesChanged):
        return False
    if isinstance(trigger, RolePermissionsChanged):
        return trigger.permissions == trigger.cached_permissions
    if isinstance(trigger, RoleDeleted):
        return False
    raise TypeError(f"unknown trigger: {type(trigger).__name__}")


def resolve_scope(trigger: Trigger) -> Scope:
    """
    Область повторной проверки. Любое изменение роли — вся гильдия:
    какие каналы затронуты, дёшево не вычислить, а фильтр по держателям роли
    не работает для @everyone.
    """
    if isinstance(trigger, ChannelOverwritesChanged):
        return ChannelScope(trigger.channel_id)
    if isinstance(trigger, MemberRolesChanged):
        return MemberScope(trigger.user_id)
    if isinstance(trigger, (RolePermissionsChanged, RoleDeleted)):
        return GuildScope()
    raise TypeError(f"unknown trigger: {type(trigger).__name__}")


def gate(trigger: Trigger) -> Optional[Scope]:
    """Область проверки или None, если событие можно пропустить."""
    if should_skip(trigger):
        return None
    return resolve_scope(trigger)
