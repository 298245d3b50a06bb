"""
Canonical data models for index membership.

Membership changes are immutable events; the constituent set for any
date is derived by replaying them (see backtest.constituents).
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MembershipAction(str, Enum):
    """Direction of an index membership change."""
    ADD = "add"
    REMOVE = "remove"

    @classmethod
    def parse(cls, value: str) -> "MembershipAction":
        """Accept the spellings index providers use for additions and deletions."""
        normalized = str(value).strip().lower()
        if normalized in ("add", "added", "addition", "in"):
            return cls.ADD
        if normalized in ("remove", "removed", "removal", "delete", "deleted", "out"):
            return cls.REMOVE
        raise ValueError(f"Unknown membership action: {value!r}")


@dataclass(frozen=True)
class MembershipEvent:
    """A security joining or leaving the index, effective on its date."""
    date: date
    ticker: str
    action: MembershipAction
