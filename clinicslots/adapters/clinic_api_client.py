"""
REST client for the clinic dashboard backend.
"""

import logging
from typing import Any, Dict, List

import pendulum
import requests
from pendulum import DateTime

from ..domain.appointments import Appointment, AppointmentStatus, Service, StaffMember
from ..domain.exceptions import ClinicAPIError

logger = logging.getLogger(__name__)


def parse_datetime(value: str, timezone: str) -> DateTime:
    """
    Parse an ISO 8601 string into a pendulum DateTime in ``timezone``.

    Strings without an offset are taken to be local clinic time.
    """
    dt = pendulum.parse(value, tz=timezone)

    if isinstance(dt, DateTime):
        return dt.in_timezone(timezone)

    raise ValueError(f"Could not parse datetime: {value}")


def parse_appointment(record: Dict[str, Any], timezone: str) -> Appointment:
    """
    Build an Appointment from a backend record.

    Record format:
    {
        "id": 12,
        "clientId": 3,
        "clientName": "Ana Souza",
        "staffId": 2,
        "serviceId": 5,
        "startTime": "2024-11-25T09:00:00",
        "endTime": "2024-11-25T10:00:00",
        "status": "scheduled",
        "notes": ""
    }
    """
    return Appointment(
        id=int(record["id"]),
        staff_id=int(record["staffId"]),
        start=parse_datetime(record["startTime"], timezone),
        end=parse_datetime(record["endTime"], timezone),
        status=record.get("status") or AppointmentStatus.SCHEDULED,
        client_id=record.get("clientId"),
        client_name=record.get("clientName") or "",
        service_id=record.get("serviceId"),
        notes=record.get("notes") or "",
    )


def parse_service(record: Dict[str, Any]) -> Service:
    return Service(
        id=int(record["id"]),
        name=record["name"],
        duration=int(record["duration"]),
        price=float(record.get("price") or 0),
    )


def parse_staff_member(record: Dict[str, Any]) -> StaffMember:
    # Staff names live on the linked user account
    user = record.get("user") or {}
    return StaffMember(
        id=int(record["id"]),
        full_name=user.get("fullName") or record.get("fullName") or f"Profissional #{record['id']}",
        position=record.get("position") or "",
    )


def parse_records(records: List[Dict[str, Any]], parser, kind: str) -> list:
    """Apply ``parser`` to each record, logging and skipping broken ones."""
    parsed = []

    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping non-object %s record: %r", kind, record)
            continue

        try:
            parsed.append(parser(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping invalid %s record %r: %s", kind, record.get("id"), e)

    return parsed


class ClinicApiClient:
    """
    Client for the clinic backend JSON collections.

    Uses the /api/appointments, /api/services and /api/staff endpoints.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str | None = None,
        timezone: str = "America/Sao_Paulo",
        timeout: int = 30
    ):
        """
        Initialize the API client.

        Args:
            base_url: Root URL of the clinic backend
            api_token: Optional bearer token issued by the auth service
            timezone: IANA timezone used for naive timestamps
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timezone = timezone
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}

        if api_token:
            self.headers["Authorization"] = f"Bearer {api_token}"

    def _get_collection(self, path: str) -> List[Dict[str, Any]]:
        """
        GET a JSON collection.

        Raises:
            ClinicAPIError: If the request fails or the body is not a list
        """
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)

        try:
            response = requests.get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise ClinicAPIError(f"Failed to fetch {path} from clinic backend: {e}") from e
        except ValueError as e:
            raise ClinicAPIError(f"Invalid JSON returned by {path}: {e}") from e

        if not isinstance(data, list):
            raise ClinicAPIError(f"Expected a JSON list from {path}, got {type(data).__name__}")

        return data

    def get_appointments(self) -> List[Appointment]:
        records = self._get_collection("/api/appointments")
        return parse_records(
            records,
            lambda record: parse_appointment(record, self.timezone),
            "appointment",
        )

    def get_services(self) -> List[Service]:
        return parse_records(self._get_collection("/api/services"), parse_service, "service")

    def get_staff(self) -> List[StaffMember]:
        return parse_records(self._get_collection("/api/staff"), parse_staff_member, "staff")
