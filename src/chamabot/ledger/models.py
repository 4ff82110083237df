"""Member record (Pydantic model).

The model is immutable: ledger updates build a new instance, so a reader never observes one counter
updated without the other.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal, localcontext

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

# Digits available for counter arithmetic and display; far above any accepted amount.
MONEY_PRECISION = 60


class Member(BaseModel):
    """A registered chama member and their contribution counters."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1)
    monthly_goal: Decimal = Field(gt=0, allow_inf_nan=False)
    current_period_contributions: Decimal = Field(default=Decimal(0), ge=0, allow_inf_nan=False)
    total_contributions: Decimal = Field(default=Decimal(0), ge=0, allow_inf_nan=False)
    joined_at: AwareDatetime

    @model_validator(mode="after")
    def validate_counters(self) -> Member:
        """Validate that the period counter never exceeds the lifetime counter."""

        if self.current_period_contributions > self.total_contributions:
            raise ValueError("current_period_contributions must be <= total_contributions")
        return self

    @property
    def remaining(self) -> Decimal:
        """Amount left to reach this period's goal (negative when over goal)."""

        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            return self.monthly_goal - self.current_period_contributions

    @property
    def goal_reached(self) -> bool:
        return self.current_period_contributions >= self.monthly_goal

    def with_payment(self, amount: Decimal) -> Member:
        """Return a copy with `amount` added to both counters (exactly, never rounded)."""

        with localcontext() as ctx:
            ctx.prec = MONEY_PRECISION
            current = self.current_period_contributions + amount
            total = self.total_contributions + amount
        return self.model_copy(
            update={"current_period_contributions": current, "total_contributions": total}
        )

    @classmethod
    def from_json(cls, payload: str | bytes) -> Member:
        """Decode a member from its stored JSON form."""

        return cls.model_validate_json(payload)

    def to_json(self) -> str:
        """Encode the member for storage (Decimals as strings, ISO-8601 timestamp)."""

        return self.model_dump_json()


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""

    return datetime.now(UTC)
