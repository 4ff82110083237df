"""Apply a classified intent to a ledger.

Ledger errors are expected outcomes here, not failures: each one is converted to an `Outcome` the
reply formatter can answer, and the ledger is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from chamabot.intent.schema import Intent, IntentKind
from chamabot.ledger.errors import AlreadyRegistered, InvalidAmount, InvalidInput, NotRegistered
from chamabot.ledger.ledger import Ledger
from chamabot.ledger.models import Member


class Outcome(StrEnum):
    """Result of applying an intent."""

    ok = "ok"
    invalid_input = "invalid_input"
    invalid_amount = "invalid_amount"
    already_registered = "already_registered"
    not_registered = "not_registered"


@dataclass(frozen=True)
class DispatchResult:
    """Ledger outcome plus the member state the reply should describe."""

    outcome: Outcome
    member: Member | None
    amount: Decimal | None = None
    mutated: bool = False


def _register(intent: Intent, ledger: Ledger) -> DispatchResult:
    if not intent.valid or intent.name is None or intent.amount is None:
        return DispatchResult(Outcome.invalid_input, ledger.get_status())
    try:
        member = ledger.register(intent.name, intent.amount)
    except AlreadyRegistered:
        return DispatchResult(Outcome.already_registered, ledger.get_status())
    except InvalidInput:
        return DispatchResult(Outcome.invalid_input, ledger.get_status())
    return DispatchResult(Outcome.ok, member, amount=member.monthly_goal, mutated=True)


def _pay(intent: Intent, ledger: Ledger) -> DispatchResult:
    if not ledger.has_member:
        return DispatchResult(Outcome.not_registered, None)

    if not intent.valid or intent.amount is None:
        return DispatchResult(Outcome.invalid_amount, ledger.get_status())
    try:
        member = ledger.record_payment(intent.amount)
    except NotRegistered:
        return DispatchResult(Outcome.not_registered, None)
    except InvalidAmount:
        return DispatchResult(Outcome.invalid_amount, ledger.get_status())
    return DispatchResult(Outcome.ok, member, amount=intent.amount, mutated=True)


def dispatch(intent: Intent, ledger: Ledger) -> DispatchResult:
    """Run the ledger operation an intent asks for (if any)."""

    if intent.kind == IntentKind.provide_registration:
        return _register(intent, ledger)
    if intent.kind == IntentKind.log_payment:
        return _pay(intent, ledger)
    return DispatchResult(Outcome.ok, ledger.get_status())
