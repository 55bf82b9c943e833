from app.utils.catalog import VehicleCatalog, Vehicle, InventoryLookup
from app.utils.amortization import amortize, calculate_payment
from app.utils.sessions import ConversationSession, SessionStore, Turn

__all__ = [
    "VehicleCatalog",
    "Vehicle",
    "InventoryLookup",
    "amortize",
    "calculate_payment",
    "ConversationSession",
    "SessionStore",
    "Turn",
]
