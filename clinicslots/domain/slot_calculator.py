"""
Core business logic for calculating bookable appointment slots.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O).
"""

from datetime import timedelta
from typing import Iterable, List

from pendulum import DateTime

from .exceptions import InvalidDuration
from .models import AvailableSlot, TimeRange, WorkingHours


def _slot_step(duration_minutes: float) -> timedelta:
    """Slot length as a timedelta, rejecting lengths that are not positive."""
    if duration_minutes <= 0:
        raise InvalidDuration(
            f"Slot duration must be greater than zero, got {duration_minutes}"
        )

    step = timedelta(minutes=duration_minutes)

    # Sub-microsecond durations round down to an empty step
    if step <= timedelta(0):
        raise InvalidDuration(f"Slot duration {duration_minutes} is too small")

    return step


def compute_slots(
    window_start: DateTime,
    window_end: DateTime,
    duration_minutes: float,
    booked_starts: Iterable[DateTime] = (),
    booked_intervals: Iterable[TimeRange] = (),
) -> List[DateTime]:
    """
    Compute candidate appointment start times inside a window.

    Candidates are laid out back to back from ``window_start`` in steps of
    ``duration_minutes``. A candidate ``[t, t + duration)`` is kept when it
    ends no later than ``window_end`` and overlaps none of the booked
    intervals. Rejected candidates are skipped, not retried at a finer
    granularity.

    Args:
        window_start: First instant a slot may start
        window_end: Instant every slot must end by
        duration_minutes: Length of each slot, must be positive
        booked_starts: Start times of bookings that last ``duration_minutes``
        booked_intervals: Bookings with their own explicit start and end

    Returns:
        Ascending list of free slot start times

    Raises:
        InvalidDuration: If ``duration_minutes`` is not a positive length
    """
    step = _slot_step(duration_minutes)

    if window_start >= window_end:
        return []

    booked = [TimeRange(start=start, end=start + step) for start in booked_starts]
    booked.extend(booked_intervals)

    slots: List[DateTime] = []
    current = window_start

    while current + step <= window_end:
        candidate = TimeRange(start=current, end=current + step)

        if not any(candidate.overlaps(interval) for interval in booked):
            slots.append(current)

        current = current + step

    return slots


class SlotAvailabilityCalculator:
    """
    Calculates bookable slots for a single clinic day.

    The day's opening hours form the search window; the actual slot layout
    is delegated to ``compute_slots``.
    """

    def __init__(self, working_hours: WorkingHours):
        self.working_hours = working_hours

    def find_available_slots(
        self,
        day: DateTime,
        duration_minutes: float,
        booked_starts: Iterable[DateTime] = (),
        booked_intervals: Iterable[TimeRange] = (),
    ) -> List[AvailableSlot]:
        """
        Find all bookable slots on the given day.

        Args:
            day: Any instant on the requested day
            duration_minutes: Length of the appointment
            booked_starts: Start times of bookings lasting ``duration_minutes``
            booked_intervals: Bookings with explicit start and end

        Returns:
            List of AvailableSlot objects, empty when the clinic is closed
        """
        step = _slot_step(duration_minutes)
        opening_hours = self.working_hours.get_working_hours_for_day(day)

        if opening_hours is None:
            return []

        starts = compute_slots(
            window_start=opening_hours.start,
            window_end=opening_hours.end,
            duration_minutes=duration_minutes,
            booked_starts=booked_starts,
            booked_intervals=booked_intervals,
        )

        return [
            AvailableSlot(time_range=TimeRange(start=start, end=start + step))
            for start in starts
        ]
