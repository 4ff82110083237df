"""Command keywords and the amount grammar.

These tables drive the classifier and should remain small and deterministic.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

REGISTER_COMMAND = "join chama"
BALANCE_COMMAND = "balance"
PAYMENT_PREFIX = "paid "
HELP_KEYWORD = "help"
HELP_SHORTCUT = "?"
REGISTRATION_SEPARATOR = ","

# Substring matches, so "this" counts as a greeting. That is the long-standing behavior.
GREETING_KEYWORDS: tuple[str, ...] = ("hello", "hi", "hey")

# At most 15 whole digits and 2 decimal places, so sums stay well inside Decimal precision.
_AMOUNT_RE = re.compile(
    r"^(?:(?:kes|ksh|ksh\.)\s*)?(?P<value>\d{1,15}(?:\.\d{1,2})?)$",
    flags=re.IGNORECASE,
)


def parse_amount(text: str | None) -> Decimal | None:
    """Parse a user-entered amount such as `500`, `1250.50` or `KES 1000`.

    Returns:
        The amount as a `Decimal`, or `None` when the text is not an unsigned decimal number of at
        most 15 whole digits and 2 decimal places.
        Zero is returned as-is; positivity is the caller's rule.
    """

    match = _AMOUNT_RE.fullmatch((text or "").strip())
    if not match:
        return None
    try:
        return Decimal(match.group("value"))
    except InvalidOperation:
        return None


def is_greeting(text: str) -> bool:
    """Whether normalized text contains any greeting keyword."""

    return any(keyword in text for keyword in GREETING_KEYWORDS)
