from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    BOT_TOKEN: str = ""

    # Inventory sheet (.xlsx or .csv)
    INVENTORY_PATH: str = "inventory.xlsx"

    # Dealership wording used in replies
    DEALER_NAME: str = "Atro Motors"
    CURRENCY: str = "Ksh"
    PRICE_RANGE_TEXT: str = "Ksh 1.5M to Ksh 15M"

    # Fixed seed makes template choice reproducible
    RANDOM_SEED: Optional[int] = None

    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "bot.log"

    class Config:
        env_file = ".env"
