import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from app.models.dto import LoanTerms, SlotSet

# Vocabulary order is the tie-break: the first entry found in the text wins,
# regardless of where it appears in the message.
MAKES = [
    "toyota",
    "mercedes",
    "bmw",
    "subaru",
    "honda",
    "ford",
    "nissan",
    "mazda",
    "volkswagen",
    "mitsubishi",
    "audi",
    "lexus",
    "hyundai",
    "kia",
    "isuzu",
]

# Makes that are not written in plain title case
MAKE_DISPLAY = {
    "bmw": "BMW",
}

BODY_TYPES = ["suv", "sedan", "hatchback", "truck", "luxury", "coupe", "convertible", "wagon"]

UNIT_MULTIPLIERS = {
    "k": 1_000,
    "thousand": 1_000,
    "m": 1_000_000,
    "million": 1_000_000,
}

# "2 million", "500k", "1.5m" -- the unit must end the token, so "36 months" is not a price
PRICE_PATTERN = re.compile(
    r"(\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:[.,]\d+)?)\s*(thousand|million|k|m)\b", re.IGNORECASE
)
# "1,500" is a thousands group, "2,5" a decimal comma
GROUPED_NUMBER_PATTERN = re.compile(r"\d{1,3}(?:,\d{3})+(?:\.\d+)?")

RATE_PATTERN = re.compile(r"(\d+(?:[.,]\d+)?)\s*(?:%|percent\b|per cent\b)", re.IGNORECASE)
TERM_PATTERN = re.compile(r"(\d+)\s*(months?|mos?|years?|yrs?)\b", re.IGNORECASE)
PLAIN_AMOUNT_PATTERN = re.compile(r"\b\d{1,3}(?:,\d{3})+\b|\b\d{4,}\b")


def normalize_make(make: str) -> str:
    """toyota -> Toyota, bmw -> BMW"""
    return MAKE_DISPLAY.get(make, make.title())


def _to_number(value: str) -> float:
    if GROUPED_NUMBER_PATTERN.fullmatch(value):
        return float(value.replace(",", ""))
    return float(value.replace(",", "."))


def parse_price(text: str) -> Optional[float]:
    """
    Finds the first number followed by a unit token (k/thousand, m/million).
    Returns the scaled value or None.
    """
    match = PRICE_PATTERN.search(text)
    if not match:
        return None
    try:
        number = _to_number(match.group(1))
    except ValueError:
        return None
    value = number * UNIT_MULTIPLIERS[match.group(2).lower()]
    if value <= 0:
        return None
    return int(value) if value.is_integer() else value


def find_make(text: str) -> Optional[str]:
    text_lower = text.lower()
    for make in MAKES:
        if make in text_lower:
            return normalize_make(make)
    return None


def find_body_type(text: str) -> Optional[str]:
    text_lower = text.lower()
    for body_type in BODY_TYPES:
        if body_type in text_lower:
            return body_type
    return None


def extract_slots(text: str) -> SlotSet:
    """
    Extracts price bound, make and body type from a message.
    Every field stays None when nothing matches; never raises.
    """
    text = text or ""
    return SlotSet(
        price_max=parse_price(text),
        make=find_make(text),
        body_type=find_body_type(text),
    )


def extract_loan_terms(text: str) -> Optional[LoanTerms]:
    """
    Pulls (amount, annual rate, term in months) out of a financing question,
    e.g. "loan of 2 million at 12% for 36 months".
    Returns None unless all three parts are present.
    """
    text = text or ""

    # --- Rate ---
    rate_match = RATE_PATTERN.search(text)
    if not rate_match:
        return None

    # --- Term ---
    term_match = TERM_PATTERN.search(text)
    if not term_match:
        return None
    term = int(term_match.group(1))
    if term_match.group(2).lower().startswith("y"):
        term *= 12

    # --- Amount ---
    # Spans already used by rate/term must not be read as the amount
    masked = text
    for match in (rate_match, term_match):
        start, end = match.span()
        masked = masked[:start] + " " * (end - start) + masked[end:]

    amount = parse_price(masked)
    if amount is None:
        plain = PLAIN_AMOUNT_PATTERN.search(masked)
        if plain:
            amount = int(plain.group(0).replace(",", ""))
    if amount is None:
        return None

    try:
        rate = Decimal(rate_match.group(1).replace(",", "."))
    except InvalidOperation:
        return None

    return LoanTerms(
        principal=Decimal(str(amount)),
        annual_rate=rate,
        term_months=term,
    )
