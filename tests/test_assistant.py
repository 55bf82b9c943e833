from unittest.mock import AsyncMock, MagicMock

import pytest
from loguru import logger

from app.chat.assistant import ChatAssistant, build_assistant
from app.chat.templates import LOOKUP_FAILURE_RESPONSE, NO_MATCH_RESPONSE, TEMPLATES
from app.config import Settings
from app.errors import LookupFailure
from app.models.dto import Intent
from app.utils.catalog import VehicleCatalog


@pytest.fixture
def assistant(catalog, formatter, clock):
    return ChatAssistant(inventory=catalog, formatter=formatter, clock=clock)


@pytest.fixture
def broken_inventory():
    inventory = MagicMock()
    inventory.find = AsyncMock(side_effect=ConnectionError("db down"))
    inventory.count = AsyncMock(side_effect=LookupFailure("inventory offline"))
    return inventory


@pytest.mark.asyncio
async def test_greeting_turn(assistant):
    reply = await assistant.handle("Hi, do you have Toyota SUVs?", "chat-1")
    assert reply == TEMPLATES[Intent.GREETING][0].format(dealer="Atro Motors")


@pytest.mark.asyncio
async def test_vehicle_inquiry_lists_matching_vehicles(assistant):
    reply = await assistant.handle("Show me Toyota SUVs under 5 million", "chat-1")
    assert "I found 1 vehicle(s)" in reply
    assert "1. Toyota Harrier 2018" in reply
    assert "Axio" not in reply


@pytest.mark.asyncio
async def test_vehicle_inquiry_without_match(assistant):
    reply = await assistant.handle("Any Ford trucks?", "chat-1")
    assert reply == NO_MATCH_RESPONSE


@pytest.mark.asyncio
async def test_price_question_lists_cheapest_three(assistant):
    reply = await assistant.handle("under 3 million", "chat-1")
    bullets = [line for line in reply.splitlines() if line.startswith("• ")]
    assert bullets == [
        "• Toyota Axio 2016: Ksh 1,650,000",
        "• Subaru Forester 2017: Ksh 2,450,000",
    ]


@pytest.mark.asyncio
async def test_price_question_below_catalogue(assistant):
    reply = await assistant.handle("My budget is 500k", "chat-1")
    assert "Ksh 500,000" in reply


@pytest.mark.asyncio
async def test_availability_counts_stock(assistant):
    reply = await assistant.handle("What's in stock?", "chat-1")
    assert "We have 4 vehicles currently available" in reply


@pytest.mark.asyncio
async def test_template_intents_do_not_touch_inventory(formatter, clock):
    inventory = MagicMock()
    inventory.find = AsyncMock()
    inventory.count = AsyncMock()
    assistant = ChatAssistant(inventory=inventory, formatter=formatter, clock=clock)

    await assistant.handle("When do you open?", "chat-1")
    await assistant.handle("Can I get a loan?", "chat-1")

    inventory.find.assert_not_awaited()
    inventory.count.assert_not_awaited()


@pytest.mark.asyncio
async def test_financing_quote(assistant):
    reply = await assistant.handle("loan of 1 million at 10% for 12 months", "chat-1")
    assert "Monthly payment: Ksh 87,915.89" in reply


@pytest.mark.asyncio
async def test_financing_quote_with_invalid_terms(assistant):
    reply = await assistant.handle("loan of 1 million at 0% for 12 months", "chat-1")
    assert reply.startswith("I couldn't calculate that quote")
    assert len(assistant.history("chat-1")) == 2


@pytest.mark.asyncio
async def test_financing_without_terms_uses_template(assistant):
    reply = await assistant.handle("I need a loan", "chat-1")
    assert reply == TEMPLATES[Intent.FINANCING][0].format(dealer="Atro Motors")


@pytest.mark.asyncio
async def test_lookup_failure_degrades_to_apology(broken_inventory, formatter, clock):
    assistant = ChatAssistant(inventory=broken_inventory, formatter=formatter, clock=clock)

    assert await assistant.handle("Show me Toyota SUVs", "chat-1") == LOOKUP_FAILURE_RESPONSE
    assert await assistant.handle("What's in stock?", "chat-1") == LOOKUP_FAILURE_RESPONSE

    history = assistant.history("chat-1")
    assert [t.role for t in history] == ["user", "assistant", "user", "assistant"]
    assert history[-1].content == LOOKUP_FAILURE_RESPONSE


@pytest.mark.asyncio
async def test_each_turn_appends_user_then_assistant(assistant):
    await assistant.handle("hello", "chat-1")
    reply = await assistant.handle("Any Subaru?", "chat-1")

    history = assistant.history("chat-1")
    assert [(t.role, t.content) for t in history[2:]] == [("user", "Any Subaru?"), ("assistant", reply)]
    assert [t.timestamp for t in history] == sorted(t.timestamp for t in history)


@pytest.mark.asyncio
async def test_sessions_are_independent(assistant):
    await assistant.handle("hello", "chat-1")
    await assistant.handle("hello", "chat-2")
    await assistant.handle("What's in stock?", "chat-2")

    assert len(assistant.history("chat-1")) == 2
    assert len(assistant.history("chat-2")) == 4
    assert assistant.history("unknown") == ()


@pytest.mark.asyncio
async def test_history_is_not_used_for_classification(assistant):
    await assistant.handle("Show me Toyota SUVs", "chat-1")
    reply = await assistant.handle("under 2 million", "chat-1")
    # a standalone budget is a PRICE question, Toyota/SUV are not carried over
    assert "Toyota Axio 2016" in reply
    assert "Here are some vehicles within your price range" in reply


@pytest.mark.asyncio
async def test_reset_clears_history(assistant):
    await assistant.handle("hello", "chat-1")
    assert assistant.reset("chat-1") is True
    assert assistant.history("chat-1") == ()
    assert assistant.reset("never-seen") is False


def test_build_assistant_from_settings(catalog):
    settings = Settings(_env_file=None, DEALER_NAME="Kilimani Autos", CURRENCY="KES", RANDOM_SEED=3)
    assistant = build_assistant(settings, catalog)

    assert isinstance(assistant.inventory, VehicleCatalog)
    assert assistant.formatter.currency == "KES"
    assert assistant.formatter.dealer_name == "Kilimani Autos"


@pytest.mark.asyncio
async def test_financing_quote_out_of_range(assistant):
    reply = await assistant.handle("loan of 1 million at 12% for 9999999999 months", "chat-1")
    assert reply.startswith("I couldn't calculate that quote")
    assert [t.role for t in assistant.history("chat-1")] == ["user", "assistant"]


@pytest.mark.asyncio
async def test_unexpected_error_still_answers(formatter, clock):
    inventory = MagicMock()
    inventory.find = AsyncMock(return_value=[object()])  # not a Vehicle
    assistant = ChatAssistant(inventory=inventory, formatter=formatter, clock=clock)

    assert await assistant.handle("Show me Toyota SUVs", "chat-1") == LOOKUP_FAILURE_RESPONSE
    assert len(assistant.history("chat-1")) == 2


@pytest.mark.asyncio
async def test_lookup_failure_is_logged_once(broken_inventory, formatter, clock):
    records = []
    sink_id = logger.add(records.append, level="ERROR")
    try:
        assistant = ChatAssistant(inventory=broken_inventory, formatter=formatter, clock=clock)
        await assistant.handle("Show me Toyota SUVs", "chat-1")
    finally:
        logger.remove(sink_id)

    assert len(records) == 1
    assert "Inventory lookup failed" in records[0]
