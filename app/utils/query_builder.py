from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from app.models.dto import Intent, InventoryQuery, SlotSet


@dataclass(frozen=True)
class QueryPlan:
    """How an intent reads the inventory."""
    limit: Optional[int]
    slot_fields: Tuple[str, ...]
    count_only: bool = False


# Intents missing from this table are answered from templates only.
QUERY_PLANS: Dict[Intent, QueryPlan] = {
    Intent.VEHICLE_INQUIRY: QueryPlan(limit=5, slot_fields=("make", "body_type", "price_max")),
    Intent.PRICE: QueryPlan(limit=3, slot_fields=("make", "body_type", "price_max")),
    Intent.AVAILABILITY: QueryPlan(limit=None, slot_fields=("make",), count_only=True),
}


def needs_inventory(intent: Intent) -> bool:
    return intent in QUERY_PLANS


def build_query(intent: Intent, slots: SlotSet) -> Optional[InventoryQuery]:
    """
    Turns intent + slots into an inventory query (available vehicles,
    cheapest first). Returns None for intents that do not touch inventory.
    """
    plan = QUERY_PLANS.get(intent)
    if plan is None:
        return None

    filters = {name: getattr(slots, name) for name in plan.slot_fields if getattr(slots, name) is not None}
    return InventoryQuery(
        limit=plan.limit,
        count_only=plan.count_only,
        **filters,
    )
