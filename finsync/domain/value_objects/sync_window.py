"""Inclusive date window for transaction fetches."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncWindow:
    """Inclusive calendar-date range.

    Attributes:
        start_date: First day included.
        end_date: Last day included.

    Example:
        >>> window = SyncWindow.last_days(90, today=date(2024, 12, 31))
        >>> window.start_date
        datetime.date(2024, 10, 3)
    """

    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        """Validate window bounds.

        Raises:
            ValueError: If start_date is after end_date.
        """
        if self.start_date > self.end_date:
            raise ValueError(
                f"start_date {self.start_date} is after end_date {self.end_date}"
            )

    @classmethod
    def last_days(cls, days: int, today: date | None = None) -> "SyncWindow":
        """Build a window covering the last `days` days, today included.

        Args:
            days: Window length in days (at least 1).
            today: Window end (defaults to current UTC date).

        Raises:
            ValueError: If days is less than 1.
        """
        if days < 1:
            raise ValueError("days must be at least 1")
        end = today or datetime.now(UTC).date()
        return cls(start_date=end - timedelta(days=days - 1), end_date=end)

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date

    def clamp_to_recent(self, days: int) -> "SyncWindow":
        """Shrink the window to at most its last `days` days."""
        if self.days <= days:
            return self
        return SyncWindow(
            start_date=self.end_date - timedelta(days=days - 1),
            end_date=self.end_date,
        )
