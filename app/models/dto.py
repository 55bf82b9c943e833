from decimal import Decimal
from enum import Enum
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Intent(str, Enum):
    GREETING = "greeting"
    VEHICLE_INQUIRY = "vehicle_inquiry"
    FINANCING = "financing"
    TEST_DRIVE = "test_drive"
    PRICE = "price"
    AVAILABILITY = "availability"
    CONTACT = "contact"
    HOURS = "hours"
    WARRANTY = "warranty"
    GENERAL = "general"


class SlotSet(BaseModel):
    """Structured values pulled out of a single message. None = unconstrained."""
    model_config = ConfigDict(frozen=True)

    price_max: Optional[float] = Field(default=None, gt=0)
    make: Optional[str] = None
    body_type: Optional[str] = None


class InventoryQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["available"] = "available"
    make: Optional[str] = None
    body_type: Optional[str] = None
    price_max: Optional[float] = None
    sort_by: Tuple[str, Literal["asc", "desc"]] = ("price", "asc")
    limit: Optional[int] = None
    count_only: bool = False


class LoanTerms(BaseModel):
    principal: Decimal
    annual_rate: Decimal
    term_months: int


class AmortizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal


class PaymentCalculation(BaseModel):
    """Financing workflow quote: loan amount net of the down payment."""
    loan_amount: Decimal
    down_payment: Decimal
    principal: Decimal
    monthly_payment: Decimal
    total_payment: Decimal
    total_interest: Decimal
