"""Reply formatter.

Hard contract: every classified message gets exactly one non-empty reply. The wording is free, but
the content of each reply (which amounts, which instruction) is fixed per intent and outcome.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from chamabot.engine.dispatcher import DispatchResult, Outcome
from chamabot.intent.schema import Intent, IntentKind
from chamabot.ledger.models import Member
from chamabot.replies.display import format_amount, format_day, progress_percent
from chamabot.replies.texts import COMMANDS, JOIN_FIRST, fallback_text, help_text

_REGISTRATION_FORMAT = "❌ Please use the format: Full Name, Amount\nExample: Monicah Mwanzia, 1000"
_PAYMENT_FORMAT = "❌ Please enter a valid amount. Example: Paid 500"


def _register_prompt() -> str:
    return (
        "🎉 Welcome to Chama Bot!\n\n"
        "I'm here to help you manage your contributions. "
        "Please reply with your full name and monthly contribution amount.\n\n"
        "Example: Monicah Mwanzia, 1000"
    )


def _registered(member: Member, currency: str) -> str:
    return (
        f"🎊 Thanks {member.name}! You've been registered successfully.\n\n"
        f"Your monthly contribution goal is {format_amount(member.monthly_goal, currency)}.\n\n"
        f"You can now use commands like:\n{COMMANDS}\n\n"
        "Just chat with me anytime! 😊"
    )


def _balance(member: Member, currency: str) -> str:
    contributed = member.current_period_contributions
    percentage = progress_percent(contributed, member.monthly_goal)
    closing = "🎉 Congratulations! Goal achieved!" if percentage >= 100 else "💪 Keep it up!"
    return (
        f"📊 Hi {member.name}!\n\n"
        "💰 This month's progress:\n"
        f"• Contributed: {format_amount(contributed, currency)}\n"
        f"• Monthly goal: {format_amount(member.monthly_goal, currency)}\n"
        f"• Remaining: {format_amount(member.remaining, currency)}\n"
        f"• Progress: {percentage}%\n\n"
        f"{closing}"
    )


def _payment_received(member: Member, amount: Decimal, currency: str, today: date) -> str:
    closing = (
        "🎉 Congratulations! You've reached your monthly goal!"
        if member.goal_reached
        else "👍 Great progress!"
    )
    return (
        f"✅ Thanks {member.name}! {format_amount(amount, currency)} "
        f"received on {format_day(today)}.\n\n"
        "💰 Your updated balance this month is "
        f"{format_amount(member.current_period_contributions, currency)}.\n\n"
        f"{closing}"
    )


def _greeting(member: Member | None) -> str:
    if member is not None:
        return f"👋 Hello {member.name}! How can I help you today?"
    return "👋 Hello! I'm Chama Bot. Type 'Join Chama' to get started!"


def format_reply(
        intent: Intent,
        result: DispatchResult,
        *,
        currency: str = "KES",
        today: date,
) -> str:
    """Render the reply for a dispatched intent."""

    kind = intent.kind
    outcome = result.outcome

    if kind == IntentKind.register:
        return _register_prompt()

    if kind == IntentKind.provide_registration:
        if outcome == Outcome.ok and result.member is not None:
            return _registered(result.member, currency)
        if outcome == Outcome.already_registered and result.member is not None:
            return f"ℹ️ You're already registered as {result.member.name}. Type 'Balance' to see your progress."
        return _REGISTRATION_FORMAT

    if kind == IntentKind.check_balance:
        if result.member is None:
            return JOIN_FIRST
        return _balance(result.member, currency)

    if kind == IntentKind.log_payment:
        if outcome == Outcome.not_registered:
            return JOIN_FIRST
        if outcome == Outcome.ok and result.member is not None and result.amount is not None:
            return _payment_received(result.member, result.amount, currency, today)
        return _PAYMENT_FORMAT

    if kind == IntentKind.help:
        return help_text()

    if kind == IntentKind.greeting:
        return _greeting(result.member)

    return fallback_text()
