"""
Проверка прав в голосовом канале: can_manage_voice (бот), can_connect (участник).
Эффективные права считает discord.py (channel.permissions_for), здесь только чтение нужных битов.
"""

from __future__ import annotations

import discord


def can_manage_voice(channel: discord.abc.GuildChannel) -> bool:
    """
    Проверяет, может ли бот отключать участников в канале.
    Для отключения от войса (move_to(None)) требуется право MOVE_MEMBERS у бота в канале.
    """
    me = channel.guild.me
    if me is None:
        return False
    return channel.permissions_for(me).move_members


def can_connect(member: discord.Member, channel: discord.abc.GuildChannel) -> bool:
    """
    Проверяет, разрешено ли участнику находиться в канале (право CONNECT с учётом overwrites).
    """
    return channel.permissions_for(member).connect
