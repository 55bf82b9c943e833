"""
Fixed-rate loan amortization.

Used both by the chat assistant (on-demand quotes) and by the financing
workflow (`calculate_payment`). Everything here is pure and synchronous.
"""
from decimal import ROUND_HALF_UP, Decimal, DecimalException, InvalidOperation
from typing import Union

from app.errors import InvalidInputError
from app.models.dto import AmortizationResult, PaymentCalculation

Number = Union[int, float, Decimal, str]

CENTS = Decimal("0.01")


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _to_decimal(value: Number, field: str) -> Decimal:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidInputError(f"{field} must be a number, got {value!r}") from None
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be finite, got {value!r}")
    return result


def _to_months(value: Number) -> int:
    months = _to_decimal(value, "term_months")
    if months != months.to_integral_value():
        raise InvalidInputError(f"term_months must be a whole number, got {value!r}")
    return int(months)


def amortize(principal: Number, annual_rate_percent: Number, term_months: Number) -> AmortizationResult:
    """
    Monthly payment for a fixed-rate loan (standard annuity formula).

        r = annual_rate_percent / 100 / 12
        M = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Raises InvalidInputError when principal, monthly rate or term is not positive.
    Outputs are rounded half-up to cents; total_interest is taken from the
    rounded total so that total_interest == total_payment - principal.
    """
    p = _to_decimal(principal, "principal")
    rate = _to_decimal(annual_rate_percent, "annual_rate_percent")
    n = _to_months(term_months)

    monthly_rate = rate / 100 / 12

    if p <= 0 or monthly_rate <= 0 or n <= 0:
        raise InvalidInputError("Invalid input values: principal, interest rate and term must be positive")

    try:
        growth = (1 + monthly_rate) ** n
        if growth == 1:
            raise InvalidInputError("Interest rate is too small to amortize")
        monthly_payment = p * monthly_rate * growth / (growth - 1)
        total_payment = _round(monthly_payment * n)
        total_interest = _round(total_payment - p)
        monthly_payment = _round(monthly_payment)
    except DecimalException as e:
        raise InvalidInputError(f"Loan terms out of range: {type(e).__name__}") from e

    return AmortizationResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment,
        total_interest=total_interest,
    )


def calculate_payment(
    loan_amount: Number,
    interest_rate: Number,
    loan_term: Number,
    down_payment: Number = 0,
) -> PaymentCalculation:
    """
    Quote for a financing application: the down payment is deducted from the
    loan amount before amortizing.
    """
    amount = _to_decimal(loan_amount, "loan_amount")
    down = _to_decimal(down_payment or 0, "down_payment")
    if down < 0:
        raise InvalidInputError("down_payment cannot be negative")

    principal = amount - down
    result = amortize(principal, interest_rate, loan_term)

    return PaymentCalculation(
        loan_amount=amount,
        down_payment=down,
        principal=principal,
        monthly_payment=result.monthly_payment,
        total_payment=result.total_payment,
        total_interest=result.total_interest,
    )
