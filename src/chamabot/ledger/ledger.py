"""Single-member contribution ledger.

The ledger owns at most one `Member` and is the only place contribution arithmetic happens. Callers
load the member from a store, wrap it in a `Ledger`, apply one operation and save the result.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal, InvalidOperation

from chamabot.ledger.errors import AlreadyRegistered, InvalidAmount, InvalidInput, NotRegistered
from chamabot.ledger.models import Member, utc_now

logger = logging.getLogger(__name__)

Number = Decimal | int | float | str

MAX_AMOUNT = Decimal("999999999999999.99")


def _to_positive_decimal(value: Number) -> Decimal | None:
    """Coerce `value` to a finite, positive money `Decimal` (or `None` if that is impossible).

    Amounts above `MAX_AMOUNT` or with more than two decimal places are refused, so counter
    arithmetic never rounds.
    """

    if isinstance(value, bool):
        return None
    try:
        # `str()` keeps floats at their shortest repr instead of their binary expansion.
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    if amount > MAX_AMOUNT or amount.as_tuple().exponent < -2:
        return None
    return amount


class Ledger:
    """Register a member, record their payments and report their progress."""

    def __init__(
            self,
            member: Member | None = None,
            *,
            clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._member = member
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def has_member(self) -> bool:
        return self._member is not None

    def register(self, name: str, monthly_goal: Number) -> Member:
        """Create the member.

        Raises:
            AlreadyRegistered: If a member already exists.
            InvalidInput: If `name` is blank or `monthly_goal` is not a finite positive number.
        """

        with self._lock:
            if self._member is not None:
                raise AlreadyRegistered(f"already registered as {self._member.name!r}")

            clean_name = (name or "").strip()
            if not clean_name:
                raise InvalidInput("name must not be empty")

            goal = _to_positive_decimal(monthly_goal)
            if goal is None:
                raise InvalidInput("monthly goal must be a positive number")

            member = Member(name=clean_name, monthly_goal=goal, joined_at=self._clock())
            self._member = member

        logger.info("member registered goal=%s", goal)
        return member

    def record_payment(self, amount: Number) -> Member:
        """Add `amount` to both the period and the lifetime counters.

        Raises:
            NotRegistered: If no member exists.
            InvalidAmount: If `amount` is not a finite positive number.
        """

        with self._lock:
            if self._member is None:
                raise NotRegistered("no member is registered")

            value = _to_positive_decimal(amount)
            if value is None:
                raise InvalidAmount(f"invalid payment amount: {amount!r}")

            updated = self._member.with_payment(value)
            self._member = updated

        logger.info("payment recorded amount=%s period_total=%s", value, updated.current_period_contributions)
        return updated

    def get_status(self) -> Member | None:
        """Return the current member, if any."""

        return self._member
