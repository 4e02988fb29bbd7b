"""
Применение политики: автоматический проход по событию (handle/enforce) и ручной проход по команде (prune).
Права и роль no-auto-prune читаются заново в начале каждого прохода.
"""
from typing import Optional

import discord
import structlog

from voice_pruner.engine import actions, policy
from voice_pruner.engine.errors import InternalError, SearchError
from voice_pruner.engine.search import CandidateSearch
from voice_pruner.engine.triggers import (
    ChannelScope,
    GuildScope,
    MemberScope,
    Scope,
    Trigger,
    gate,
)
from voice_pruner.utils.logging import get_logger

logger = get_logger("engine.enforcer")


def _candidates(search: CandidateSearch, scope: Scope) -> list[int]:
    if isinstance(scope, ChannelScope):
        return search.channel(scope.channel_id)
    if isinstance(scope, MemberScope):
        return search.member(scope.user_id)
    if isinstance(scope, GuildScope):
        return search.guild_wide()
    raise TypeError(f"unknown scope: {type(scope).__name__}")


async def enforce(guild: discord.Guild, scope: Scope) -> int:
    """
    Автоматический проход по области. Возвращает число отключённых пользователей.
    Ошибки поиска не выходят наружу: только лог.
    """
    with structlog.contextvars.bound_contextvars(guild_id=guild.id, scope=repr(scope)):
        if not policy.auto_prune_enabled(guild):
            logger.debug("auto_prune_disabled")
            return 0

        try:
            users = _candidates(CandidateSearch(guild), scope)
        except InternalError as e:
            logger.error("auto_prune_search_failed", error=str(e))
            return 0
        except SearchError as e:
            logger.debug("auto_prune_no_candidates", reason=type(e).__name__)
            return 0

        if not users:
            return 0

        removed = await actions.remove_all(guild, users)
        logger.info("auto_prune_finished", candidates=len(users), removed=removed)
        return removed


async def handle(guild: discord.Guild, trigger: Trigger) -> int:
    """Событие → фильтр изменений → область → проход."""
    scope = gate(trigger)
    if scope is None:
        logger.debug("trigger_skipped", trigger=type(trigger).__name__, guild_id=guild.id)
        return 0
    return await enforce(guild, scope)


async def prune(
    guild: discord.Guild,
    channel_id: Optional[int] = None,
    role_id: Optional[int] = None,
    user_id: Optional[int] = None,
) -> int:
    """
    Ручной проход (slash-команда /prune). Роль no-auto-prune не учитывается.
    user_id — только этот пользователь; channel_id — один канал; иначе вся гильдия.
    Ошибки SearchError пробрасываются вызывающему коду.
    """
    search = CandidateSearch(guild)
    if user_id is not None:
        users = [user_id] if search.user(user_id) else []
    elif channel_id is not None:
        users = search.channel(channel_id, role_id)
    else:
        users = search.guild_wide(role_id)

    removed = await actions.remove_all(guild, users)
    logger.info(
        "manual_prune_finished",
        guild_id=guild.id,
        channel_id=channel_id,
        role_id=role_id,
        user_id=user_id,
        candidates=len(users),
        removed=removed,
    )
    return removed
