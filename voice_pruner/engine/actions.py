"""
Модуль действий: отключение пользователей от голосовых каналов.
Все отключения одного прохода выполняются параллельно; ошибки логируются по каждому пользователю, без повторов.
"""
import asyncio
from collections.abc import Iterable

import discord

from voice_pruner.utils.logging import get_logger

logger = get_logger("engine.actions")

DISCONNECT_REASON = "missing connect permission"


async def disconnect(guild: discord.Guild, user_id: int) -> bool:
    """
    Отключить пользователя от голосового канала (move_to(None)).
    Возвращает True при успехе, False при ошибке.
    """
    member = guild.get_member(user_id)
    if member is None:
        logger.warning("disconnect_skipped_member_not_cached", guild_id=guild.id, user_id=user_id)
        return False

    try:
        await member.move_to(None, reason=DISCONNECT_REASON)
    except discord.HTTPException as e:
        logger.exception(
            "disconnect_failed",
            guild_id=guild.id,
            user_id=user_id,
            status=e.status,
        )
        return False
    logger.debug("user_disconnected", guild_id=guild.id, user_id=user_id)
    return True


async def remove_all(guild: discord.Guild, user_ids: Iterable[int]) -> int:
    """Отключить всех пользователей параллельно. Возвращает число успешных отключений."""
    user_ids = list(user_ids)
    if not user_ids:
        return 0

    results = await asyncio.gather(
        *(disconnect(guild, user_id) for user_id in user_ids),
        return_exceptions=True,
    )
    removed = 0
    for user_id, result in zip(user_ids, results):
        if isinstance(result, BaseException):
            logger.error(
                "disconnect_error",
                guild_id=guild.id,
                user_id=user_id,
                error=repr(result),
            )
            continue
        if result:
            removed += 1
    return removed
