"""
Domain layer - Pure business logic without external dependencies.
"""

from .appointments import Appointment, AppointmentStatus, Service, StaffMember
from .exceptions import ClinicAPIError, ClinicSlotsError, InvalidDuration, UnknownServiceError
from .models import AvailableSlot, TimeRange, WorkingHours
from .slot_calculator import SlotAvailabilityCalculator, compute_slots

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AvailableSlot",
    "ClinicAPIError",
    "ClinicSlotsError",
    "InvalidDuration",
    "Service",
    "SlotAvailabilityCalculator",
    "StaffMember",
    "TimeRange",
    "UnknownServiceError",
    "WorkingHours",
    "compute_slots",
]
