"""Member persistence behind a small async key-value interface."""

from chamabot.storage.base import MemberStore
from chamabot.storage.memory import InMemoryMemberStore

__all__ = ["InMemoryMemberStore", "MemberStore"]
