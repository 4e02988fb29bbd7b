"""
Ошибки поиска кандидатов. Текст для пользователя показывает только cog команд;
автоматический путь их только логирует.
"""
from voice_pruner.utils import responses


class SearchError(Exception):
    """Базовая ошибка поиска. user_message — текст ответа на slash-команду."""

    user_message: str = responses.INTERNAL_ERROR


class UnmonitoredChannel(SearchError):
    user_message = responses.UNMONITORED


class NotAVoiceChannel(SearchError):
    user_message = responses.NOT_A_VOICE_CHANNEL


class NotInVoice(SearchError):
    user_message = responses.NOT_IN_VOICE


class InternalError(SearchError):
    """Нет ожидаемой записи в кэше. Подробности — только в лог, пользователю общий текст."""

    user_message = responses.INTERNAL_ERROR
