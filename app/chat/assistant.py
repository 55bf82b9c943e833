import random
from datetime import datetime
from typing import Callable, List, Optional, Tuple, Union

from loguru import logger

from app.chat.intent import classify
from app.chat.templates import LOOKUP_FAILURE_RESPONSE
from app.config import Settings
from app.errors import LookupFailure, ValidationError
from app.models.dto import Intent, InventoryQuery, SlotSet
from app.utils.amortization import amortize
from app.utils.catalog import InventoryLookup, Vehicle
from app.utils.query_builder import build_query
from app.utils.response_helpers import ResponseFormatter
from app.utils.sessions import SessionStore, Turn, utc_now
from app.utils.text_parsers import extract_loan_terms, extract_slots


class ChatAssistant:
    """
    Rule-based dealership assistant.

    handle() runs one turn: classify + extract slots, read the inventory when
    the intent needs it, format the reply and record both turns in the
    session. Turns of one session must be fed in order by the caller.
    """

    def __init__(
        self,
        inventory: InventoryLookup,
        formatter: Optional[ResponseFormatter] = None,
        sessions: Optional[SessionStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.inventory = inventory
        self.formatter = formatter or ResponseFormatter()
        self.sessions = sessions or SessionStore()
        self.clock = clock or utc_now

    async def handle(self, message: str, session_id: str) -> str:
        text = message or ""
        session = self.sessions.get_or_create(session_id)
        session.append_turn("user", text, self.clock())

        intent = classify(text)
        slots = extract_slots(text)
        logger.info(f"[{session_id}] intent={intent.value} slots={slots.model_dump(exclude_none=True)}")

        try:
            reply = await self._respond(intent, slots, text)
        except LookupFailure:
            logger.exception(f"[{session_id}] Inventory lookup failed")
            reply = LOOKUP_FAILURE_RESPONSE
        except Exception:
            logger.exception(f"[{session_id}] Failed to answer message")
            reply = LOOKUP_FAILURE_RESPONSE

        session.append_turn("assistant", reply, self.clock())
        return reply

    async def _respond(self, intent: Intent, slots: SlotSet, text: str) -> str:
        if intent == Intent.FINANCING:
            terms = extract_loan_terms(text)
            if terms is not None:
                try:
                    result = amortize(terms.principal, terms.annual_rate, terms.term_months)
                except ValidationError as e:
                    logger.info(f"Rejected loan terms {terms.model_dump()}: {e}")
                    return self.formatter.format_quote_error(e)
                return self.formatter.format_quote(terms, result)

        query = build_query(intent, slots)
        if query is None:
            return self.formatter.format(intent, slots)

        result = await self._lookup(query)
        return self.formatter.format(intent, slots, result)

    async def _lookup(self, query: InventoryQuery) -> Union[List[Vehicle], int]:
        try:
            if query.count_only:
                return await self.inventory.count(query)
            return await self.inventory.find(query)
        except LookupFailure:
            raise
        except Exception as e:
            raise LookupFailure(f"{type(e).__name__}: {e} (query {query.model_dump()})") from e

    def reset(self, session_id: str) -> bool:
        return self.sessions.clear(session_id)

    def history(self, session_id: str) -> Tuple[Turn, ...]:
        session = self.sessions.get(session_id)
        return session.history if session else ()


def build_assistant(settings: Settings, inventory: InventoryLookup) -> ChatAssistant:
    formatter = ResponseFormatter(
        rng=random.Random(settings.RANDOM_SEED),
        currency=settings.CURRENCY,
        dealer_name=settings.DEALER_NAME,
        price_range=settings.PRICE_RANGE_TEXT,
    )
    return ChatAssistant(inventory=inventory, formatter=formatter, sessions=SessionStore())
