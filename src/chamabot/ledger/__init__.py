"""Member contribution ledger."""

from chamabot.ledger.errors import (
    AlreadyRegistered,
    InvalidAmount,
    InvalidInput,
    LedgerError,
    NotRegistered,
)
from chamabot.ledger.ledger import Ledger
from chamabot.ledger.models import Member

__all__ = [
    "AlreadyRegistered",
    "InvalidAmount",
    "InvalidInput",
    "Ledger",
    "LedgerError",
    "Member",
    "NotRegistered",
]
