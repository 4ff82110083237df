"""Ledger error taxonomy.

Every error is recoverable: the dispatcher maps each one to a specific reply and the ledger state is
left exactly as it was before the failing call.
"""

from __future__ import annotations


class LedgerError(ValueError):
    """Base class for rejected ledger operations."""


class InvalidInput(LedgerError):
    """Raised when a registration has an empty name or a non-positive goal."""


class InvalidAmount(LedgerError):
    """Raised when a payment amount is non-positive or not a finite number."""


class AlreadyRegistered(LedgerError):
    """Raised when registering while a member already exists."""


class NotRegistered(LedgerError):
    """Raised when recording a payment before anyone registered."""
