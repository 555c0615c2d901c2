"""
Application services for finding bookable appointment slots.

The service pulls the day's appointments through a clinic client adapter and
delegates the slot layout to the domain-level ``SlotAvailabilityCalculator``.
This keeps the CLI thin and lets tests swap the backend for a simple stub.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from pendulum import DateTime

from ..domain.appointments import Appointment, Service, StaffMember
from ..domain.exceptions import UnknownServiceError
from ..domain.models import AvailableSlot, TimeRange
from ..domain.slot_calculator import SlotAvailabilityCalculator

logger = logging.getLogger(__name__)


class ClinicClientProtocol(Protocol):
    """Protocol describing the clinic client behaviour needed by the service."""

    def get_appointments(self) -> List[Appointment]:
        """Return all appointments known to the clinic."""

    def get_services(self) -> List[Service]:
        """Return the services offered by the clinic."""

    def get_staff(self) -> List[StaffMember]:
        """Return the clinic staff."""


class AvailabilityService:
    """
    Orchestrates appointment retrieval and slot calculation.
    """

    def __init__(
        self,
        clinic_client: ClinicClientProtocol,
        calculator: SlotAvailabilityCalculator,
    ) -> None:
        self._clinic_client = clinic_client
        self._calculator = calculator

    def appointments_for_day(
        self,
        day: DateTime,
        staff_id: Optional[int] = None,
    ) -> List[Appointment]:
        """Appointments touching ``day``, oldest first."""
        day_range = TimeRange(start=day.start_of("day"), end=day.start_of("day").add(days=1))

        appointments = [
            appointment
            for appointment in self._clinic_client.get_appointments()
            if appointment.start < appointment.end
            and appointment.time_range.overlaps(day_range)
            and (staff_id is None or appointment.staff_id == staff_id)
        ]

        return sorted(appointments, key=lambda a: a.start)

    def booked_intervals_for_day(
        self,
        day: DateTime,
        staff_id: Optional[int] = None,
    ) -> List[TimeRange]:
        """Intervals on ``day`` that are not available for booking."""
        return [
            appointment.time_range
            for appointment in self.appointments_for_day(day, staff_id=staff_id)
            if appointment.blocks_availability()
        ]

    def find_service(self, service_id: int) -> Service:
        for service in self._clinic_client.get_services():
            if service.id == service_id:
                return service

        raise UnknownServiceError(f"Unknown service id: {service_id}")

    def find_slots(
        self,
        *,
        day: DateTime,
        duration_minutes: Optional[int] = None,
        service_id: Optional[int] = None,
        staff_id: Optional[int] = None,
    ) -> List[AvailableSlot]:
        """
        Compute bookable slots on ``day``.

        The slot length is the service duration when ``service_id`` is given,
        ``duration_minutes`` otherwise.
        """
        if service_id is not None:
            duration_minutes = self.find_service(service_id).duration

        if duration_minutes is None:
            raise ValueError("Either duration_minutes or service_id is required")

        booked = self.booked_intervals_for_day(day, staff_id=staff_id)
        logger.debug(
            "Computing %s-minute slots on %s with %d booked interval(s)",
            duration_minutes,
            day.to_date_string(),
            len(booked),
        )

        return self._calculator.find_available_slots(
            day=day,
            duration_minutes=duration_minutes,
            booked_intervals=booked,
        )
