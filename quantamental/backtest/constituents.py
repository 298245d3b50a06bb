"""
Point-in-time index membership.

Only a current constituent list is usually available, so historical
membership is rebuilt by replaying add/remove events against a known
snapshot. An event dated e takes effect on e: a ticker added on e is a
constituent as of e, a ticker removed on e is not.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable

import pandas as pd

from ..data.models import MembershipAction, MembershipEvent
from ..errors import MembershipReplayError
from ..logging.config import get_backtest_logger
from ..utils.dates import parse_date

logger = get_backtest_logger(__name__)


@dataclass(frozen=True)
class MembershipDiff:
    """Difference between a reconstructed and a recorded constituent set."""
    missing: frozenset[str]   # recorded but not reconstructed
    extra: frozenset[str]     # reconstructed but not recorded

    @property
    def matches(self) -> bool:
        return not self.missing and not self.extra


def reconcile(reconstructed: Iterable[str], recorded: Iterable[str]) -> MembershipDiff:
    """Compare a replayed constituent set against an independently recorded one."""
    reconstructed, recorded = frozenset(reconstructed), frozenset(recorded)
    return MembershipDiff(missing=recorded - reconstructed, extra=reconstructed - recorded)


class MembershipLedger:
    """Replays membership events around a snapshot to answer as-of queries."""

    def __init__(
        self,
        events: Iterable[MembershipEvent],
        snapshot: Iterable[str],
        snapshot_date: Any,
        strict: bool = False,
    ) -> None:
        self.events = sorted(events, key=lambda event: event.date)
        self.snapshot = frozenset(snapshot)
        self.snapshot_date = parse_date(snapshot_date)
        self.strict = strict

    def constituents_at(self, as_of: Any) -> frozenset[str]:
        """
        Constituent set at the close of a date.

        Dates before the snapshot undo the events in (as_of, snapshot_date],
        newest first; later dates apply the events in (snapshot_date, as_of],
        oldest first.
        """
        as_of = parse_date(as_of)
        members = set(self.snapshot)

        if as_of < self.snapshot_date:
            for event in reversed(self.events):
                if as_of < event.date <= self.snapshot_date:
                    self._undo(members, event)
        elif as_of > self.snapshot_date:
            for event in self.events:
                if self.snapshot_date < event.date <= as_of:
                    self._apply(members, event)

        return frozenset(members)

    def membership_frame(self, dates: Iterable[Any]) -> pd.DataFrame:
        """
        Boolean date x ticker matrix of membership.

        Both sweeps start at the snapshot: dates before it walk backwards
        undoing events, later dates walk forwards applying them. Each row
        therefore equals constituents_at for its date, even when lenient
        mode skips over an inconsistent event.
        """
        index = pd.DatetimeIndex(sorted(pd.Timestamp(d) for d in dates), name="date")
        if index.empty:
            return pd.DataFrame(index=index, dtype=bool)

        by_date: dict[pd.Timestamp, frozenset[str]] = {}

        members = set(self.snapshot)
        newest_first = list(reversed(self.events))
        position = 0
        for when in reversed(index):
            day = when.date()
            if day >= self.snapshot_date:
                continue
            while position < len(newest_first) and newest_first[position].date > day:
                if newest_first[position].date <= self.snapshot_date:
                    self._undo(members, newest_first[position])
                position += 1
            by_date[when] = frozenset(members)

        members = set(self.snapshot)
        position = 0
        for when in index:
            day = when.date()
            if day < self.snapshot_date:
                continue
            while position < len(self.events) and self.events[position].date <= day:
                if self.events[position].date > self.snapshot_date:
                    self._apply(members, self.events[position])
                position += 1
            by_date[when] = frozenset(members)

        rows = [by_date[when] for when in index]
        tickers = sorted(set().union(*rows))
        frame = pd.DataFrame(
            [[ticker in row for ticker in tickers] for row in rows],
            index=index,
            columns=pd.Index(tickers, name="ticker"),
            dtype=bool,
        )
        return frame

    def reconcile_with(self, as_of: Any, recorded: Iterable[str]) -> MembershipDiff:
        """Replay to a date and compare against a recorded snapshot for that date."""
        diff = reconcile(self.constituents_at(as_of), recorded)
        if not diff.matches:
            logger.warning(
                "Reconstructed membership differs from recorded snapshot",
                as_of=str(parse_date(as_of)),
                missing=sorted(diff.missing),
                extra=sorted(diff.extra),
            )
        return diff

    def _apply(self, members: set[str], event: MembershipEvent) -> None:
        if event.action is MembershipAction.ADD:
            if event.ticker in members:
                self._inconsistent("added while already a constituent", event)
            members.add(event.ticker)
        else:
            if event.ticker not in members:
                self._inconsistent("removed while not a constituent", event)
            members.discard(event.ticker)

    def _undo(self, members: set[str], event: MembershipEvent) -> None:
        if event.action is MembershipAction.ADD:
            if event.ticker not in members:
                self._inconsistent("addition cannot be undone, ticker not a constituent", event)
            members.discard(event.ticker)
        else:
            if event.ticker in members:
                self._inconsistent("removal cannot be undone, ticker still a constituent", event)
            members.add(event.ticker)

    def _inconsistent(self, reason: str, event: MembershipEvent) -> None:
        message = f"{event.ticker} {reason} ({event.action.value} on {event.date})"
        if self.strict:
            raise MembershipReplayError(
                message,
                ticker=event.ticker,
                event_date=event.date,
                action=event.action.value,
            )
        logger.warning(
            "Inconsistent membership event",
            ticker=event.ticker,
            event_date=str(event.date),
            action=event.action.value,
            reason=reason,
        )


def snapshot_date_default(prices_index: pd.DatetimeIndex) -> date:
    """The snapshot is assumed to describe the last trading date with prices."""
    return prices_index.max().date()
