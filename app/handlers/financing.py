from aiogram import Router, F
from aiogram.types import Message
from app.errors import ValidationError
from app.utils.amortization import calculate_payment
from app.utils.response_helpers import ResponseFormatter
from loguru import logger

router = Router()

USAGE = (
    "Usage: /quote <loan amount> <annual rate %> <term in months> [down payment]\n"
    "Example: /quote 2000000 12 36 500000"
)


def format_calculation(calc, formatter: ResponseFormatter) -> str:
    lines = [
        f"Loan amount: {formatter.money(calc.loan_amount)}",
        f"Down payment: {formatter.money(calc.down_payment)}",
        f"Financed: {formatter.money(calc.principal)}",
        "",
        f"Monthly payment: {formatter.money(calc.monthly_payment)}",
        f"Total payment: {formatter.money(calc.total_payment)}",
        f"Total interest: {formatter.money(calc.total_interest)}",
    ]
    return "\n".join(lines)


@router.message(F.text.startswith("/quote"))
async def cmd_quote(message: Message, formatter: ResponseFormatter):
    """
    /quote handler - payment calculation for a financing application.
    """
    args = (message.text or "").split()[1:]
    if len(args) not in (3, 4):
        await message.answer(USAGE)
        return

    args = [a.replace(",", "") for a in args]
    try:
        calc = calculate_payment(*args)
    except ValidationError as e:
        logger.info(f"Rejected /quote {args}: {e}")
        await message.answer(f"Invalid input values: {e}\n\n{USAGE}")
        return

    await message.answer(format_calculation(calc, formatter))
