import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand, BotCommandScopeDefault

from lucky_bot import config
from lucky_bot.db import StateStore, init_db
from lucky_bot.handlers import setup_routers
from lucky_bot.services.turns import TurnDispatcher

COMMANDS = [BotCommand(command="start", description="Say hello to the bot")]


async def on_startup(bot: Bot) -> None:
    await bot.set_my_commands(COMMANDS, scope=BotCommandScopeDefault())
    logging.info("Command menu updated")


async def main() -> None:
    if not config.bot_token:
        raise RuntimeError("BOT_TOKEN is not set")

    logging.basicConfig(level=config.log_level)
    init_db(config.database_url)

    bot = Bot(token=config.bot_token)
    dp = Dispatcher()
    dp.startup.register(on_startup)
    dp.include_router(setup_routers())
    dp["turns"] = TurnDispatcher(
        StateStore(), logging.getLogger("lucky_bot.turns"), pace=config.pace_scale
    )

    await dp.start_polling(bot)


if __name__ == "__main__":
    asyncio.run(main())
