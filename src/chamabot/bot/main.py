"""Bot process entrypoint."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from chamabot.app import create_app
from chamabot.bot.handlers import router
from chamabot.config.logging import configure_logging
from chamabot.config.settings import load_settings

logger = logging.getLogger(__name__)


async def main() -> None:
    """Run the Telegram bot polling loop."""

    settings = load_settings()
    configure_logging(settings.log_level)

    app = create_app(settings)
    if app.pool is not None:
        await app.pool.open(wait=True)

    logger.info("starting engine=%s store=%s", app.engine.name, "postgres" if app.pool else "memory")

    bot = Bot(token=settings.telegram_bot_token, default=DefaultBotProperties(parse_mode=None))
    dp = Dispatcher()
    dp.include_router(router)

    try:
        await dp.start_polling(bot, app=app)
    finally:
        logger.info("shutting down")
        if app.pool is not None:
            await app.pool.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
