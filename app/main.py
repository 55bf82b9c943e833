import asyncio
from app.loader import load_bot
from loguru import logger


async def main():
    """
    Entry point - wire the assistant into the Telegram bot and start polling.
    """
    bot, dp = load_bot()
    try:
        logger.info("Starting dealership assistant bot...")
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        logger.info("Bot stopped")


if __name__ == "__main__":
    asyncio.run(main())
