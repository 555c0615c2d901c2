"""
Tests for the AvailabilityService orchestration layer.
"""

from datetime import time
from typing import List

import pendulum
import pytest

from clinicslots.adapters.mock_clinic_client import MockClinicClient
from clinicslots.domain.appointments import Appointment, AppointmentStatus, Service, StaffMember
from clinicslots.domain.exceptions import UnknownServiceError
from clinicslots.domain.models import WorkingHours
from clinicslots.domain.slot_calculator import SlotAvailabilityCalculator
from clinicslots.services.availability import AvailabilityService

TZ = "America/Sao_Paulo"


def at(value: str):
    return pendulum.parse(value, tz=TZ)


class StubClinicClient:
    """Minimal stub matching ClinicClientProtocol."""

    def __init__(self, appointments: List[Appointment], services: List[Service] | None = None):
        self._appointments = appointments
        self._services = services or []
        self.calls = 0

    def get_appointments(self) -> List[Appointment]:
        self.calls += 1
        return list(self._appointments)

    def get_services(self) -> List[Service]:
        return list(self._services)

    def get_staff(self) -> List[StaffMember]:
        return []


def _build_service(client, start_hour: int = 9, end_hour: int = 12) -> AvailabilityService:
    working_hours = WorkingHours(
        start_time=time(start_hour, 0),
        end_time=time(end_hour, 0),
        closed_weekdays=[6],
        timezone=TZ,
    )
    calculator = SlotAvailabilityCalculator(working_hours=working_hours)
    return AvailabilityService(clinic_client=client, calculator=calculator)


def _appointment(id, start, end, staff_id=1, status=AppointmentStatus.SCHEDULED):
    return Appointment(id=id, staff_id=staff_id, start=at(start), end=at(end), status=status)


def test_booked_intervals_skip_cancelled_and_other_days():
    """Only blocking appointments on the requested day are returned."""
    client = StubClinicClient([
        _appointment(1, "2024-11-25 09:00", "2024-11-25 10:00"),
        _appointment(2, "2024-11-25 10:00", "2024-11-25 10:30", status=AppointmentStatus.CANCELLED),
        _appointment(3, "2024-11-26 09:00", "2024-11-26 10:00"),
        _appointment(4, "2024-11-25 11:00", "2024-11-25 11:30", status=AppointmentStatus.NO_SHOW),
    ])
    service = _build_service(client)

    intervals = service.booked_intervals_for_day(at("2024-11-25"))

    assert [(i.start.hour, i.start.minute) for i in intervals] == [(9, 0), (11, 0)]


def test_booked_intervals_filtered_by_staff():
    client = StubClinicClient([
        _appointment(1, "2024-11-25 09:00", "2024-11-25 10:00", staff_id=1),
        _appointment(2, "2024-11-25 10:00", "2024-11-25 11:00", staff_id=2),
    ])
    service = _build_service(client)

    intervals = service.booked_intervals_for_day(at("2024-11-25"), staff_id=2)

    assert len(intervals) == 1
    assert intervals[0].start == at("2024-11-25 10:00")


def test_appointments_for_day_sorted_and_ignores_broken_ranges():
    client = StubClinicClient([
        _appointment(1, "2024-11-25 15:00", "2024-11-25 16:00"),
        _appointment(2, "2024-11-25 08:00", "2024-11-25 08:30"),
        _appointment(3, "2024-11-25 12:00", "2024-11-25 12:00"),
    ])
    service = _build_service(client)

    appointments = service.appointments_for_day(at("2024-11-25"))

    assert [a.id for a in appointments] == [2, 1]


def test_find_slots_with_explicit_duration():
    """Appointments of any length block the slots they touch."""
    client = StubClinicClient([
        _appointment(1, "2024-11-25 09:00", "2024-11-25 10:15"),
    ])
    service = _build_service(client)

    slots = service.find_slots(day=at("2024-11-25"), duration_minutes=30)

    assert [s.start.format("HH:mm") for s in slots] == ["10:30", "11:00", "11:30"]


def test_find_slots_uses_service_duration():
    client = StubClinicClient(
        appointments=[_appointment(1, "2024-11-25 10:00", "2024-11-25 11:00")],
        services=[Service(id=7, name="Limpeza", duration=60)],
    )
    service = _build_service(client)

    slots = service.find_slots(day=at("2024-11-25"), service_id=7, duration_minutes=15)

    assert [s.start.format("HH:mm") for s in slots] == ["09:00", "11:00"]
    assert all(s.time_range.duration_minutes() == 60 for s in slots)


def test_find_slots_unknown_service():
    service = _build_service(StubClinicClient([]))

    with pytest.raises(UnknownServiceError):
        service.find_slots(day=at("2024-11-25"), service_id=99)


def test_find_slots_requires_a_duration():
    service = _build_service(StubClinicClient([]))

    with pytest.raises(ValueError):
        service.find_slots(day=at("2024-11-25"))


def test_find_slots_with_bundled_mock_data():
    """End-to-end run against the bundled sample agenda."""
    client = MockClinicClient(timezone=TZ)
    service = _build_service(client, start_hour=7, end_hour=20)
    day = at("2024-11-25")

    staff_slots = service.find_slots(day=day, duration_minutes=60, staff_id=1)
    all_slots = service.find_slots(day=day, duration_minutes=60)

    assert [s.start.hour for s in staff_slots] == [7, 8, 10, 12, 13, 14, 15, 16, 17, 18, 19]
    assert [s.start.hour for s in all_slots] == [7, 8, 12, 13, 14, 15, 16, 17, 18, 19]


def test_find_slots_on_closed_day():
    client = StubClinicClient([])
    service = _build_service(client)

    assert service.find_slots(day=at("2024-11-24"), duration_minutes=30) == []
