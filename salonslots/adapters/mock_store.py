"""
Mock storage client backed by a JSON file, for use without the hosted database.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pendulum import DateTime
from pydantic import ValidationError

from ..domain.models import Appointment, ProfessionalAbsence, ProfessionalSchedule
from ..schemas import AbsenceRecord, AppointmentRecord, ProfessionalRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "mock_salon_data.json"


class MockStorageClient:
    """
    Mock client that serves salon data from a JSON document.

    The document has the same shape as the database tables:
    ``{"professionals": [...], "appointments": [...], "professional_absences": [...]}``.
    Invalid rows are skipped, like the REST client does.
    """

    def __init__(self, data_file: Optional[Path] = None, data: Optional[Dict[str, Any]] = None):
        """
        Initialize the mock client.

        Args:
            data_file: JSON file to load (defaults to the bundled sample data)
            data: Already loaded document; takes precedence over ``data_file``
        """
        self.data_file = data_file or DEFAULT_DATA_FILE
        self._data = data if data is not None else self._load_data()

    def _load_data(self) -> Dict[str, Any]:
        """Load mock salon data from the JSON file."""
        if not self.data_file.exists():
            logger.warning("Mock data file %s not found, using empty data", self.data_file)
            return {}

        with open(self.data_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        return list(self._data.get(table, []))

    def _professionals(self) -> List[ProfessionalSchedule]:
        professionals: List[ProfessionalSchedule] = []
        for row in self._rows("professionals"):
            try:
                professionals.append(ProfessionalRecord.model_validate(row).to_domain())
            except ValidationError as e:
                logger.warning("Skipping invalid professional %s: %s", row.get("id"), e)
        return professionals

    async def get_professional(self, professional_id: int) -> Optional[ProfessionalSchedule]:
        for professional in self._professionals():
            if professional.id == professional_id:
                return professional
        return None

    async def list_professionals(self) -> List[ProfessionalSchedule]:
        return sorted(self._professionals(), key=lambda p: p.name.lower())

    async def get_appointments(
        self,
        professional_id: int,
        start_time: Optional[DateTime],
        end_time: Optional[DateTime],
        timezone: str = "UTC"
    ) -> List[Appointment]:
        appointments: List[Appointment] = []

        for row in self._rows("appointments"):
            try:
                appointment = AppointmentRecord.model_validate(row).to_domain(timezone)
            except ValidationError as e:
                logger.warning("Skipping invalid appointment %s: %s", row.get("id"), e)
                continue

            if appointment.professional_id != professional_id:
                continue
            if start_time is not None and appointment.appointment_date < start_time:
                continue
            if end_time is not None and appointment.appointment_date >= end_time:
                continue

            appointments.append(appointment)

        return sorted(appointments, key=lambda a: a.appointment_date)

    async def get_absences(self, professional_id: int, day: DateTime) -> List[ProfessionalAbsence]:
        absences: List[ProfessionalAbsence] = []
        for row in self._rows("professional_absences"):
            try:
                absence = AbsenceRecord.model_validate(row).to_domain()
            except ValidationError as e:
                logger.warning("Skipping invalid absence %s: %s", row.get("id"), e)
                continue
            if absence.professional_id == professional_id and absence.date == day.date():
                absences.append(absence)
        return absences

    async def test_connection(self) -> int:
        """Mock connection test: number of professionals in the data file."""
        return len(self._professionals())
