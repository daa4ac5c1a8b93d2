"""Calendar time snapshot model - pure data structures independent of any calendar feed."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


TEMPORAL_FIELDS = ("second", "minute", "day", "month", "year")


class SnapshotState(Enum):
    """How much of a snapshot the calendar feed actually delivered."""
    ABSENT = "absent"
    PARTIAL = "partial"
    COMPLETE = "complete"


@dataclass
class TimeSnapshot:
    """A point in the external calendar, as delivered by the time feed."""
    second: Optional[int] = None
    minute: Optional[int] = None
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None

    # Display fields are passed through untouched
    hour: Optional[int] = None
    day_of_the_week: Optional[int] = None
    weekdays: List[str] = field(default_factory=list)
    display: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["TimeSnapshot"]:
        """
        Build a snapshot from a calendar feed value.

        Args:
            raw: Dict from the feed (camelCase keys accepted), or None

        Returns:
            TimeSnapshot, possibly partial, or None if the feed sent nothing
        """
        if not isinstance(raw, dict):
            return None

        day_of_the_week = raw.get("day_of_the_week", raw.get("dayOfTheWeek"))
        weekdays = raw.get("weekdays")
        display = raw.get("display")

        return cls(
            second=_as_int(raw.get("second")),
            minute=_as_int(raw.get("minute")),
            day=_as_int(raw.get("day")),
            month=_as_int(raw.get("month")),
            year=_as_int(raw.get("year")),
            hour=_as_int(raw.get("hour")),
            day_of_the_week=_as_int(day_of_the_week),
            weekdays=list(weekdays) if isinstance(weekdays, list) else [],
            display=dict(display) if isinstance(display, dict) else {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "second": self.second,
            "minute": self.minute,
            "hour": self.hour,
            "day": self.day,
            "month": self.month,
            "year": self.year,
            "dayOfTheWeek": self.day_of_the_week,
            "weekdays": list(self.weekdays),
            "display": dict(self.display),
        }

    @property
    def weekday(self) -> str:
        """Name of the weekday, or empty string if the feed didn't provide one."""
        if self.day_of_the_week is None:
            return ""
        if 0 <= self.day_of_the_week < len(self.weekdays):
            return self.weekdays[self.day_of_the_week]
        return ""


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid calendar value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def snapshot_state(snapshot: Optional[TimeSnapshot]) -> SnapshotState:
    """Classify a snapshot as absent, partial or complete."""
    if snapshot is None:
        return SnapshotState.ABSENT
    if all(getattr(snapshot, name) is not None for name in TEMPORAL_FIELDS):
        return SnapshotState.COMPLETE
    return SnapshotState.PARTIAL


def is_valid(snapshot: Optional[TimeSnapshot]) -> bool:
    """A snapshot is valid only when all five temporal fields are present."""
    return snapshot_state(snapshot) is SnapshotState.COMPLETE


def same_date(first: TimeSnapshot, second: TimeSnapshot) -> bool:
    """True if both snapshots fall on the same calendar day."""
    return (
        first.day == second.day
        and first.month == second.month
        and first.year == second.year
    )
