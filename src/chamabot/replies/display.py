"""Display helpers for money, progress and dates.

Formatting is presentation only; ledger arithmetic never goes through these functions.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, localcontext

from chamabot.ledger.models import MONEY_PRECISION


def format_amount(value: Decimal, currency: str = "KES") -> str:
    """Render an amount with thousands separators, e.g. `KES 1,250.5`.

    Whole amounts drop their fractional part (`1000.00` -> `1,000`).
    """

    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        if value == value.to_integral_value():
            body = f"{value.quantize(Decimal(1)):,}"
        else:
            body = f"{value.normalize():,f}"
    return f"{currency} {body}" if currency else body


def progress_percent(contributed: Decimal, goal: Decimal) -> int:
    """Percentage of `goal` reached, rounded half up to a whole number."""

    with localcontext() as ctx:
        ctx.prec = MONEY_PRECISION
        ratio = contributed / goal * 100
        return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_day(value: date | datetime) -> str:
    """Render a calendar day as `DD/MM/YYYY`."""

    return value.strftime("%d/%m/%Y")
