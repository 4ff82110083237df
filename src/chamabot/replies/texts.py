"""Static and member-specific reply texts not tied to a classified intent."""

from __future__ import annotations

from chamabot.ledger.models import Member
from chamabot.replies.display import format_amount

JOIN_FIRST = "👆 Please join the Chama first by typing 'Join Chama'"

COMMANDS = (
    '• "Join Chama" - Register as a member\n'
    '• "Balance" - Check your contribution status\n'
    '• "Paid [amount]" - Log a contribution'
)


def welcome_text() -> str:
    return (
        "👋 Hello! I'm Chama Bot, your friendly contribution assistant! "
        "Type 'Join Chama' to get started, or try commands like 'Balance', "
        "'Paid [amount]', or just say hello!"
    )


def help_text() -> str:
    return (
        "🤝 I'm here to help! Here's what I can do:\n\n"
        f"📝 Commands:\n{COMMANDS}\n\n"
        "💡 Examples:\n"
        "• Join Chama\n"
        "• Paid 1000\n"
        "• Balance\n\n"
        "Just type naturally - I understand! 😊"
    )


def fallback_text() -> str:
    return (
        "🤔 I didn't quite understand that. Try:\n\n"
        '• "Join Chama" to register\n'
        '• "Balance" to check your progress\n'
        '• "Paid [amount]" to log contributions\n'
        '• "Help" for more commands\n\n'
        "I'm here to help! 😊"
    )


def monthly_reminder(member: Member | None, *, currency: str = "KES") -> str:
    """Reminder to pay this month's contribution (or a nudge to join first)."""

    if member is None:
        return JOIN_FIRST
    return (
        f"📅 Hi {member.name}, just a reminder to send your "
        f"{format_amount(member.monthly_goal, currency)} contribution by the 5th of this month. 💰"
    )
