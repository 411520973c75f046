"""Data models for course sections and their meeting times."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


MAX_PERIOD = 12
MAX_WEEK = 53


class Day(IntEnum):
    """Teaching days, Monday through Saturday."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5

    @property
    def token(self) -> str:
        """Day token as written in the source timetable (e.g. "T.Ba")."""
        return DAY_TOKENS[self]

    @classmethod
    def from_token(cls, token: str) -> Optional["Day"]:
        """Look up a day by its timetable token, or None if unknown."""
        return TOKEN_DAYS.get(token)


DAY_TOKENS = {
    Day.MONDAY: "T.Hai",
    Day.TUESDAY: "T.Ba",
    Day.WEDNESDAY: "T.Tư",
    Day.THURSDAY: "T.Năm",
    Day.FRIDAY: "T.Sáu",
    Day.SATURDAY: "T.Bảy",
}

TOKEN_DAYS = {token: day for day, token in DAY_TOKENS.items()}


@dataclass(frozen=True)
class Interval:
    """A recurring weekly block of consecutive teaching periods."""

    day: Day
    start_period: int
    end_period: int

    def __post_init__(self) -> None:
        if not 1 <= self.start_period <= MAX_PERIOD:
            raise ValueError(f"Start period must be 1-{MAX_PERIOD}, got {self.start_period}")
        if not 1 <= self.end_period <= MAX_PERIOD:
            raise ValueError(f"End period must be 1-{MAX_PERIOD}, got {self.end_period}")
        if self.start_period > self.end_period:
            raise ValueError("Start period must not be after end period")

    @property
    def day_name(self) -> str:
        return self.day.token

    @property
    def period_count(self) -> int:
        return self.end_period - self.start_period + 1

    @property
    def periods(self) -> range:
        return range(self.start_period, self.end_period + 1)

    def overlaps(self, other: "Interval") -> bool:
        """Return True if both blocks fall on the same day and share a period."""
        if self.day != other.day:
            return False
        return self.start_period <= other.end_period and other.start_period <= self.end_period


@dataclass(frozen=True)
class CourseSection:
    """Represents one offered section of a course."""

    id: str
    course_code: str
    sequence: str
    title: str
    instructor: str
    capacity: int
    enrolled: int
    raw_schedule: str = field(default="")
    raw_weeks: str = field(default="")
    time_slot: Optional[Interval] = field(default=None)  # None = no fixed meeting time
    weeks: frozenset[int] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {self.capacity}")
        if self.enrolled < 0:
            raise ValueError(f"Enrolled count must be non-negative, got {self.enrolled}")

    @property
    def is_full(self) -> bool:
        return self.enrolled >= self.capacity

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.enrolled, 0)

    @property
    def is_scheduled(self) -> bool:
        return self.time_slot is not None
