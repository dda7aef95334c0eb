"""
time_range.py
-------------
Half-open [start, end) interval used by the slot generator and the overlap
guard.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class TimeRange:
    """
    Immutable time range.

    Invariant: start must be before end.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> "TimeRange":
        return cls(start=start, end=start + timedelta(minutes=minutes))

    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Adjacent ranges (one ends exactly where the other starts) do not overlap."""
        return not (self.end <= other.start or self.start >= other.end)

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d %H:%M} - {self.end:%H:%M}"
