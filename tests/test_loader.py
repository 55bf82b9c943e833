from unittest.mock import AsyncMock

import pytest

from app.chat.assistant import ChatAssistant
from app.config import Settings
from app.loader import DependencyMiddleware, load_catalog
from app.utils.logging import setup_logging


def test_load_catalog_from_settings(tmp_path):
    path = tmp_path / "stock.csv"
    path.write_text(
        "make,model,year,price,mileage,fuel_type,transmission,body_type,status\n"
        "Honda,Fit,2016,1200000,80000,petrol,automatic,hatchback,available\n",
        encoding="utf-8",
    )
    catalog = load_catalog(Settings(_env_file=None, INVENTORY_PATH=str(path)))
    assert [v.model for v in catalog.get_all_vehicles()] == ["Fit"]


def test_load_catalog_refuses_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="not found"):
        load_catalog(Settings(_env_file=None, INVENTORY_PATH=str(tmp_path / "missing.xlsx")))


@pytest.mark.asyncio
async def test_dependency_middleware_injects_assistant(catalog, formatter):
    assistant = ChatAssistant(inventory=catalog, formatter=formatter)
    middleware = DependencyMiddleware(assistant)
    handler = AsyncMock(return_value="ok")
    data = {}

    assert await middleware(handler, object(), data) == "ok"
    assert data["assistant"] is assistant
    assert data["formatter"] is formatter


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "bot.log"
    logger = setup_logging("DEBUG", str(log_file))
    logger.info("assistant ready")
    logger.remove()  # closes the file sink
    assert "assistant ready" in log_file.read_text(encoding="utf-8")
