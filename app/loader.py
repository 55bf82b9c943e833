from aiogram import Bot, Dispatcher
from aiogram.types import Update
from typing import Any, Awaitable, Callable
from app.config import Settings
from app.chat.assistant import ChatAssistant, build_assistant
from app.utils.catalog import VehicleCatalog
from app.utils.logging import setup_logging
from app.handlers import start, financing, chat
from loguru import logger


class DependencyMiddleware:
    """Middleware to inject dependencies into handlers."""

    def __init__(self, assistant: ChatAssistant):
        self.assistant = assistant

    async def __call__(
        self,
        handler: Callable[[Update, dict[str, Any]], Awaitable[Any]],
        event: Update,
        data: dict[str, Any]
    ) -> Any:
        data["assistant"] = self.assistant
        data["formatter"] = self.assistant.formatter
        return await handler(event, data)


def load_catalog(settings: Settings) -> VehicleCatalog:
    """
    Load the inventory sheet. The bot refuses to start without it.
    """
    try:
        logger.info("Initializing VehicleCatalog...")
        catalog = VehicleCatalog(settings=settings)
    except FileNotFoundError as e:
        logger.error(f"CRITICAL: Inventory file not found: {e}")
        raise RuntimeError(f"Inventory file not found: {e}") from e
    except ValueError as e:
        logger.error(f"CRITICAL: Inventory validation error: {e}")
        raise RuntimeError(f"Inventory validation failed: {e}") from e

    vehicle_count = len(catalog.get_all_vehicles())
    logger.info(f"VehicleCatalog initialized: {vehicle_count} vehicles loaded")
    if vehicle_count == 0:
        logger.warning("Inventory is empty - every search will come back with no match")
    return catalog


def load_bot() -> tuple[Bot, Dispatcher]:
    """
    Load bot, dispatcher, and register all handlers.
    Returns (bot, dispatcher) tuple.
    """
    settings = Settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info("Settings loaded")

    if not settings.BOT_TOKEN:
        raise RuntimeError("BOT_TOKEN is not set")

    bot = Bot(token=settings.BOT_TOKEN)
    dp = Dispatcher()

    catalog = load_catalog(settings)
    assistant = build_assistant(settings, catalog)

    dp.message.middleware(DependencyMiddleware(assistant))

    # Commands first: the chat router accepts any text
    dp.include_router(start.router)
    dp.include_router(financing.router)
    dp.include_router(chat.router)

    logger.info("All handlers registered")

    return bot, dp
