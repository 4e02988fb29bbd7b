"""
Тексты ответов slash-команд: символы и готовые сообщения.
"""

WARNING = "⚠️"
BULLET_POINT = "•"

INTERNAL_ERROR = "**Internal error**"
UNAVAILABLE_IN_DMS = f"{WARNING} **Unavailable in DMs**"
MISSING_MOVE_MEMBERS = f"{WARNING} **Requires the `MOVE_MEMBERS` permission**"
NOT_A_VOICE_CHANNEL = f"{WARNING} **Not a voice channel**"
NOT_IN_VOICE = f"{WARNING} **User is not in a voice channel**"
UNMONITORED = "**Channel is unmonitored**"


def flag(value: bool) -> str:
    return "`true`" if value else "`false`"


def pruned(count: int) -> str:
    return f"{count} users pruned"


def channel_list(names: list[str]) -> str:
    """Маркированный список каналов; пустой список — `None`."""
    if not names:
        return "`None`"
    return "".join(f"`{BULLET_POINT} {name}`\n" for name in names)
