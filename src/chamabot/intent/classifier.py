"""Rules-based message classifier.

The classifier is deliberately strict and deterministic:
    - it only recognizes a fixed set of commands and keywords,
    - rules are evaluated in a fixed priority order and the first match wins,
    - it never raises; unrecognized text becomes the fallback intent.
"""

from __future__ import annotations

from chamabot.intent.dictionaries import (
    BALANCE_COMMAND,
    HELP_KEYWORD,
    HELP_SHORTCUT,
    PAYMENT_PREFIX,
    REGISTER_COMMAND,
    REGISTRATION_SEPARATOR,
    is_greeting,
    parse_amount,
)
from chamabot.intent.normalize import normalize_text
from chamabot.intent.schema import Intent, IntentKind


def _parse_registration(text: str) -> Intent:
    """Parse a `Full Name, Amount` registration reply."""

    parts = text.split(REGISTRATION_SEPARATOR)
    if len(parts) != 2:
        return Intent(kind=IntentKind.provide_registration, valid=False)

    name = parts[0].strip()
    amount = parse_amount(parts[1])
    valid = bool(name) and amount is not None and amount > 0
    return Intent(
        kind=IntentKind.provide_registration,
        name=name or None,
        amount=amount,
        valid=valid,
    )


def _parse_payment(text: str) -> Intent:
    """Parse a `Paid <amount>` message; `text` is the stripped original message."""

    amount_text = text[len(PAYMENT_PREFIX):].strip()
    amount = parse_amount(amount_text)
    valid = amount is not None and amount > 0
    return Intent(
        kind=IntentKind.log_payment,
        amount=amount,
        amount_text=amount_text,
        valid=valid,
    )


def classify(text: str | None, *, has_member: bool) -> Intent:
    """Classify a raw chat message.

    Args:
        text: The message as typed by the user.
        has_member: Whether a member is already registered for this conversation. Registration
            replies are only recognized while nobody is registered.
    """

    raw = (text or "").strip()
    normalized = normalize_text(raw)

    if normalized == REGISTER_COMMAND:
        return Intent(kind=IntentKind.register)

    if not has_member and REGISTRATION_SEPARATOR in raw:
        return _parse_registration(raw)

    if normalized == BALANCE_COMMAND:
        return Intent(kind=IntentKind.check_balance)

    if raw.lower().startswith(PAYMENT_PREFIX):
        return _parse_payment(raw)

    if HELP_KEYWORD in normalized or normalized == HELP_SHORTCUT:
        return Intent(kind=IntentKind.help)

    if is_greeting(normalized):
        return Intent(kind=IntentKind.greeting)

    return Intent(kind=IntentKind.fallback)
