"""
Appointments, services and staff as served by the clinic backend.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional

from pendulum import DateTime

from .models import TimeRange


class AppointmentStatus:
    """Known appointment status values."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


STATUS_LABELS = {
    AppointmentStatus.SCHEDULED: "Agendado",
    AppointmentStatus.IN_PROGRESS: "Em andamento",
    AppointmentStatus.COMPLETED: "Concluído",
    AppointmentStatus.CANCELLED: "Cancelado",
    AppointmentStatus.NO_SHOW: "Não Compareceu",
}

STATUS_COLORS = {
    AppointmentStatus.SCHEDULED: "#60a5fa",
    AppointmentStatus.IN_PROGRESS: "#f43f5e",
    AppointmentStatus.COMPLETED: "#34d399",
    AppointmentStatus.CANCELLED: "#f87171",
    AppointmentStatus.NO_SHOW: "#fbbf24",
}

DEFAULT_STATUS_COLOR = "#9CA3AF"


def status_label(status: str) -> str:
    """Human readable label for a status, falling back to the raw value."""
    if status in STATUS_LABELS:
        return STATUS_LABELS[status]
    return status[:1].upper() + status[1:]


def status_color(status: str) -> str:
    """Calendar colour for a status."""
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


@dataclass(frozen=True)
class Service:
    """A treatment offered by the clinic."""
    id: int
    name: str
    duration: int  # minutes
    price: float = 0.0


@dataclass(frozen=True)
class StaffMember:
    """A professional who can be booked."""
    id: int
    full_name: str
    position: str = ""


@dataclass(frozen=True)
class Appointment:
    """
    A booked appointment.

    Only cancelled appointments give their time back; every other status
    keeps the interval occupied.
    """
    id: int
    staff_id: int
    start: DateTime
    end: DateTime
    status: str = AppointmentStatus.SCHEDULED
    client_id: Optional[int] = None
    client_name: str = ""
    service_id: Optional[int] = None
    notes: str = ""

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)

    def blocks_availability(self) -> bool:
        return self.status != AppointmentStatus.CANCELLED

    def duration_minutes(self) -> int:
        return self.time_range.duration_minutes()


def end_time_for_service(start: DateTime, service: Service) -> DateTime:
    """End time of an appointment for ``service`` starting at ``start``."""
    return start + timedelta(minutes=service.duration)


def to_calendar_event(
    appointment: Appointment,
    staff_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Convert an appointment into a calendar event mapping.

    Keys follow the calendar widget of the dashboard (camelCase).
    """
    color = status_color(appointment.status)

    return {
        "id": str(appointment.id),
        "title": f"Appointment: {appointment.client_name}",
        "start": appointment.start.isoformat(),
        "end": appointment.end.isoformat(),
        "backgroundColor": color,
        "borderColor": color,
        "extendedProps": {
            "clientId": appointment.client_id,
            "staffId": appointment.staff_id,
            "serviceId": appointment.service_id,
            "status": appointment.status,
            "notes": appointment.notes,
            "staffName": staff_name or f"Profissional #{appointment.staff_id}",
        },
    }
