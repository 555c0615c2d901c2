"""
Domain models for time ranges, clinic opening hours and bookable slots.
"""

from dataclasses import dataclass, field
from datetime import time
from typing import List

from pendulum import DateTime


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open time range ``[start, end)``.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """
        Check if this range overlaps with another.

        Ranges that only touch (one ends where the other starts) do not
        overlap.
        """
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.format('DD/MM/YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass
class WorkingHours:
    """
    Clinic opening hours.
    """
    start_time: time
    end_time: time
    closed_weekdays: List[int] = field(default_factory=lambda: [6])  # 0=Monday, 6=Sunday
    timezone: str = "America/Sao_Paulo"

    def is_working_day(self, dt: DateTime) -> bool:
        """Check if the clinic is open on the given date."""
        return dt.day_of_week not in self.closed_weekdays

    def get_working_hours_for_day(self, date: DateTime) -> TimeRange | None:
        """
        Get the opening hours for a specific day, in clinic time.
        Returns None if the clinic is closed that day.
        """
        date = date.in_timezone(self.timezone)

        if not self.is_working_day(date):
            return None

        start = date.set(
            hour=self.start_time.hour,
            minute=self.start_time.minute,
            second=0,
            microsecond=0
        )
        end = date.set(
            hour=self.end_time.hour,
            minute=self.end_time.minute,
            second=0,
            microsecond=0
        )

        return TimeRange(start=start, end=end)


WEEKDAY_NAMES = {
    0: "Segunda-feira",
    1: "Terça-feira",
    2: "Quarta-feira",
    3: "Quinta-feira",
    4: "Sexta-feira",
    5: "Sábado",
    6: "Domingo",
}


@dataclass(frozen=True)
class AvailableSlot:
    """
    A bookable appointment slot.
    """
    time_range: TimeRange

    @property
    def start(self) -> DateTime:
        return self.time_range.start

    @property
    def end(self) -> DateTime:
        return self.time_range.end

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Weekday, DD/MM/YYYY | HH:mm – HH:mm (N min)
        """
        weekday = WEEKDAY_NAMES[self.start.day_of_week]
        date_str = self.start.format("DD/MM/YYYY")
        time_str = f"{self.start.format('HH:mm')} – {self.end.format('HH:mm')}"
        duration = self.time_range.duration_minutes()

        return f"{weekday}, {date_str} | {time_str} ({duration} min)"
