"""
Точка входа: бот, отключающий из голосовых каналов пользователей без права CONNECT.
Запуск: python -m voice_pruner.main [--config config.yaml] [--commands set|remove]
"""
import argparse
import asyncio
import signal
from typing import Callable, Optional, Sequence

from voice_pruner.bot.client import create_bot
from voice_pruner.config.settings import get_settings, load_config_yaml
from voice_pruner.utils.logging import get_logger, setup_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="voice-pruner",
        description="Removes members lacking connect permission from voice channels",
    )
    parser.add_argument("--config", default="config.yaml", help="path to config.yaml")
    parser.add_argument(
        "--commands",
        choices=("set", "remove"),
        help="register or remove slash commands and exit",
    )
    return parser.parse_args(argv)


def shutdown_handler(bot, pending: set) -> Callable[[], None]:
    """
    Обработчик SIGTERM: запускает bot.close() задачей в текущем цикле.
    Ссылка на задачу хранится в pending до её завершения.
    """

    def _handler() -> None:
        task = asyncio.get_running_loop().create_task(bot.close())
        pending.add(task)
        task.add_done_callback(pending.discard)

    return _handler


async def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    settings = get_settings()
    config_yaml = load_config_yaml(args.config)
    setup_logging(config_yaml=config_yaml)
    logger = get_logger("main")

    token = settings.resolve_token()
    bot = create_bot(
        guild_id=settings.DISCORD_GUILD_ID,
        status=config_yaml.get("bot", {}).get("status", "online"),
    )

    if args.commands is not None:
        async with bot:
            # login вызывает setup_hook: cogs и дерево команд уже загружены
            await bot.login(token)
            await bot.sync_commands(remove=args.commands == "remove")
        return

    loop = asyncio.get_running_loop()
    pending: set = set()
    try:
        loop.add_signal_handler(signal.SIGTERM, shutdown_handler(bot, pending))
    except NotImplementedError:
        logger.warning("sigterm_handler_unavailable")

    logger.info("starting_bot", guild_id=settings.DISCORD_GUILD_ID)
    async with bot:
        await bot.start(token)
    logger.info("shutdown_complete")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
