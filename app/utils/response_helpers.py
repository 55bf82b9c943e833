import random
from typing import List, Optional, Sequence, Union

from app.chat.templates import (
    FINANCING_UPSELL,
    NO_MATCH_RESPONSE,
    TEMPLATES,
    VEHICLE_LIST_CLOSING,
)
from app.errors import ValidationError
from app.models.dto import AmortizationResult, Intent, LoanTerms, SlotSet
from app.utils.catalog import Vehicle

QueryResult = Union[List[Vehicle], int, None]


def format_number(value) -> str:
    """1500000 -> '1,500,000', 1234.5 -> '1,234.50'"""
    value = float(value)
    if value.is_integer():
        return f"{value:,.0f}"
    return f"{value:,.2f}"


class ResponseFormatter:
    """
    Renders the reply for an intent.

    Template-only intents pick one of their canned texts with `rng`, so a
    seeded random.Random gives reproducible output. Inventory intents are
    rendered from the vehicles / count returned by the inventory.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        currency: str = "Ksh",
        dealer_name: str = "Atro Motors",
        price_range: str = "Ksh 1.5M to Ksh 15M",
    ):
        self.rng = rng or random.Random()
        self.currency = currency
        self.dealer_name = dealer_name
        self.price_range = price_range

    def money(self, value) -> str:
        return f"{self.currency} {format_number(value)}"

    def format(self, intent: Intent, slots: SlotSet, result: QueryResult = None) -> str:
        if intent == Intent.VEHICLE_INQUIRY:
            return self.format_vehicle_list(result or [])
        if intent == Intent.PRICE:
            return self.format_price_list(result or [], slots.price_max)
        if intent == Intent.AVAILABILITY:
            return self.format_availability(result or 0, slots.make)
        return self.pick_template(intent)

    def pick_template(self, intent: Intent) -> str:
        options = TEMPLATES.get(intent) or TEMPLATES[Intent.GENERAL]
        return self.rng.choice(options).format(dealer=self.dealer_name)

    def format_vehicle_list(self, vehicles: Sequence[Vehicle]) -> str:
        if not vehicles:
            return NO_MATCH_RESPONSE

        response = f"I found {len(vehicles)} vehicle(s) that might interest you:\n\n"
        for index, vehicle in enumerate(vehicles, start=1):
            mileage = f"{format_number(vehicle.mileage)} km" if vehicle.mileage is not None else "N/A"
            response += f"{index}. {vehicle.make} {vehicle.model} {vehicle.year}\n"
            response += f"   Price: {self.money(vehicle.price)}\n"
            response += f"   Mileage: {mileage}\n"
            response += f"   Fuel: {vehicle.fuel_type}, Transmission: {vehicle.transmission}\n\n"

        response += VEHICLE_LIST_CLOSING
        return response

    def format_price_list(self, vehicles: Sequence[Vehicle], price_max: Optional[float] = None) -> str:
        if not vehicles:
            if price_max:
                return (
                    f"I couldn't find vehicles within {self.money(price_max)}. "
                    f"Our vehicles typically range from {self.price_range}."
                )
            return f"Our vehicles range from {self.price_range}. What's your budget range?"

        lines = ["Here are some vehicles within your price range:", ""]
        for vehicle in vehicles[:3]:
            lines.append(f"• {vehicle.make} {vehicle.model} {vehicle.year}: {self.money(vehicle.price)}")
        lines.append("")
        lines.append(FINANCING_UPSELL)
        return "\n".join(lines)

    def format_availability(self, count: int, make: Optional[str] = None) -> str:
        if count == 0:
            if make:
                return f"We currently don't have {make} vehicles in stock, but we're expecting new arrivals soon."
            return (
                "We don't have any vehicles in stock right now, but new arrivals are expected soon. "
                "Could you tell me which make or type you're interested in?"
            )
        if make:
            return f"We have {count} {make} vehicle(s) currently available. Would you like me to show you the details?"
        return (
            f"We have {count} vehicles currently available in our inventory. "
            "What type of vehicle are you looking for?"
        )

    def format_quote(self, terms: LoanTerms, result: AmortizationResult) -> str:
        return (
            f"Here's an estimate for a loan of {self.money(terms.principal)} "
            f"at {terms.annual_rate}% over {terms.term_months} months:\n\n"
            f"• Monthly payment: {self.money(result.monthly_payment)}\n"
            f"• Total payment: {self.money(result.total_payment)}\n"
            f"• Total interest: {self.money(result.total_interest)}\n\n"
            "Would you like to apply for pre-approval?"
        )

    def format_quote_error(self, error: ValidationError) -> str:
        return f"I couldn't calculate that quote: {error}. Please check the amount, rate and term."
