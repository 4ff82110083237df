"""Intent schema (Pydantic models).

This schema is the contract between the classifier and the dispatcher. Malformed parameters are not
errors at this level: they are carried as `valid=False` and answered with a specific reply.
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class IntentKind(StrEnum):
    """Supported message intents, in matching priority order."""

    register = "register"
    provide_registration = "provide_registration"
    check_balance = "check_balance"
    log_payment = "log_payment"
    help = "help"
    greeting = "greeting"
    fallback = "fallback"


_PARAMETERLESS_KINDS = frozenset(
    {
        IntentKind.register,
        IntentKind.check_balance,
        IntentKind.help,
        IntentKind.greeting,
        IntentKind.fallback,
    }
)


class Intent(BaseModel):
    """A classified message with its extracted parameters."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: IntentKind
    name: str | None = None
    amount: Decimal | None = None
    amount_text: str | None = None
    valid: bool = True

    @model_validator(mode="after")
    def validate_semantics(self) -> Intent:
        """Enforce cross-field invariants between the intent kind and its parameters."""

        if self.kind in _PARAMETERLESS_KINDS:
            if self.name is not None or self.amount is not None or self.amount_text is not None:
                raise ValueError(f"{self.kind} intents carry no parameters")
            if not self.valid:
                raise ValueError(f"{self.kind} intents are always valid")

        if self.kind == IntentKind.provide_registration and self.valid:
            if not self.name:
                raise ValueError("a valid registration requires a name")
            if self.amount is None or self.amount <= 0:
                raise ValueError("a valid registration requires a positive amount")

        if self.kind == IntentKind.log_payment:
            if self.amount_text is None:
                raise ValueError("log_payment requires amount_text")
            if self.valid and (self.amount is None or self.amount <= 0):
                raise ValueError("a valid payment requires a positive amount")

        return self
