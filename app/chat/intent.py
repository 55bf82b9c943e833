"""
Keyword intent classifier for the dealership assistant.

Every message gets exactly one Intent. INTENT_RULES is walked top to bottom
and the first rule with a keyword contained in the lower-cased text wins, so
the order of the list decides ties ("Hi, do you have Toyota SUVs?" is a
GREETING). Keywords are substrings, not whole words.
"""
from typing import List, Sequence, Tuple

from app.models.dto import Intent
from app.utils.text_parsers import MAKES

GREETING_KEYWORDS = ["hello", "hi", "hey", "good morning", "good afternoon", "good evening"]

VEHICLE_KEYWORDS = ["car", "vehicle", "suv", "sedan"] + MAKES

FINANCING_KEYWORDS = [
    "finance",
    "loan",
    "payment",
    "installment",
    "credit",
    "interest rate",
    "down payment",
]

TEST_DRIVE_KEYWORDS = ["test drive", "drive test", "try car", "test car"]

PRICE_KEYWORDS = [
    "price",
    "cost",
    "how much",
    "affordable",
    "budget",
    "expensive",
    "cheap",
    # bare budget statements: "under 2 million"
    "under",
    "below",
    "million",
    "thousand",
]

AVAILABILITY_KEYWORDS = ["available", "in stock", "have", "stock", "inventory"]

CONTACT_KEYWORDS = ["contact", "call", "phone", "email", "whatsapp", "address", "location"]

HOURS_KEYWORDS = ["hour", "open", "close", "time", "when", "weekend", "sunday"]

WARRANTY_KEYWORDS = ["warranty", "guarantee", "cover", "insurance", "protection"]

# Highest priority first. GENERAL is the fallback and has no keywords.
INTENT_RULES: List[Tuple[Intent, Sequence[str]]] = [
    (Intent.GREETING, GREETING_KEYWORDS),
    (Intent.VEHICLE_INQUIRY, VEHICLE_KEYWORDS),
    (Intent.FINANCING, FINANCING_KEYWORDS),
    (Intent.TEST_DRIVE, TEST_DRIVE_KEYWORDS),
    (Intent.PRICE, PRICE_KEYWORDS),
    (Intent.AVAILABILITY, AVAILABILITY_KEYWORDS),
    (Intent.CONTACT, CONTACT_KEYWORDS),
    (Intent.HOURS, HOURS_KEYWORDS),
    (Intent.WARRANTY, WARRANTY_KEYWORDS),
]


def matches(text_lower: str, keywords: Sequence[str]) -> bool:
    return any(kw in text_lower for kw in keywords)


def classify(text: str) -> Intent:
    """Returns the first matching intent from INTENT_RULES, or GENERAL."""
    text_lower = (text or "").lower()
    for intent, keywords in INTENT_RULES:
        if matches(text_lower, keywords):
            return intent
    return Intent.GENERAL
