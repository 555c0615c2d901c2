"""
Mock clinic backend client for working without a running server.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..domain.appointments import Appointment, Service, StaffMember
from .clinic_api_client import parse_appointment, parse_records, parse_service, parse_staff_member

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_clinic_data.json"


class MockClinicClient:
    """
    Client that serves clinic collections from a JSON file.

    The file holds ``appointments``, ``services`` and ``staff`` lists in the
    same shape the backend returns them.
    """

    def __init__(self, data_file: Path | None = None, timezone: str = "America/Sao_Paulo"):
        self.data_file = data_file or DEFAULT_DATA_FILE
        self.timezone = timezone
        self._data = self._load_data()

    def _load_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Load mock clinic data from the JSON file."""
        if not self.data_file.exists():
            return {}

        with open(self.data_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def get_appointments(self) -> List[Appointment]:
        return parse_records(
            self._data.get("appointments", []),
            lambda record: parse_appointment(record, self.timezone),
            "appointment",
        )

    def get_services(self) -> List[Service]:
        return parse_records(self._data.get("services", []), parse_service, "service")

    def get_staff(self) -> List[StaffMember]:
        return parse_records(self._data.get("staff", []), parse_staff_member, "staff")
