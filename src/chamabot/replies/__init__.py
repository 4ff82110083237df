"""Reply texts."""

from chamabot.replies.formatter import format_reply
from chamabot.replies.texts import help_text, monthly_reminder, welcome_text

__all__ = ["format_reply", "help_text", "monthly_reminder", "welcome_text"]
