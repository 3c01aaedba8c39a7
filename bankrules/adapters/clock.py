"""Clock adapters.

Implements ClockPort for production (wall clock) and for deterministic
hosts such as the specification suite (fixed instant).
"""

from datetime import datetime, timedelta, timezone

from bankrules.core.ports import ClockPort


class SystemClock(ClockPort):
    """Wall-clock time in UTC.

    Daily transfer totals are bucketed by the UTC calendar day.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(ClockPort):
    """A clock frozen at a given instant, advanced only on request."""

    def __init__(self, instant: datetime):
        """Initialize the clock.

        Args:
            instant: Timezone-aware timestamp to report.

        Raises:
            ValueError: If instant is naive.
        """
        if instant.tzinfo is None:
            raise ValueError("instant must be timezone-aware")
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward (or backward, for a negative delta)."""
        self.instant = self.instant + delta
