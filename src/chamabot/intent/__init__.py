"""Intent classification.

The intent layer turns a raw chat message into a strict `Intent` object, which the dispatcher then
applies to the member's ledger.
"""

from chamabot.intent.classifier import classify
from chamabot.intent.schema import Intent, IntentKind

__all__ = ["Intent", "IntentKind", "classify"]
