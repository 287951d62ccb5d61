"""
REST client for the hosted salon database (PostgREST-style endpoint).
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

import requests
from pendulum import DateTime
from pydantic import BaseModel, ValidationError

from ..domain.exceptions import StorageError
from ..domain.models import Appointment, ProfessionalAbsence, ProfessionalSchedule
from ..schemas import AbsenceRecord, AppointmentRecord, ProfessionalRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RestStorageClient:
    """
    Client for the database's REST interface.

    Tables are exposed under ``/rest/v1/<table>`` and filtered with
    PostgREST operators (``eq.``, ``gte.``, ``lt.``).
    """

    REST_PREFIX = "/rest/v1"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the REST client.

        Args:
            base_url: Project URL, e.g. https://xyz.supabase.co
            api_key: Project API key (sent as apikey and bearer token)
            timeout: Request timeout in seconds
            session: Optional preconfigured requests session
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json"
        }

    async def get_professional(self, professional_id: int) -> Optional[ProfessionalSchedule]:
        rows = await self._fetch("professionals", [("id", f"eq.{professional_id}")])
        professionals = self._parse_rows(rows, ProfessionalRecord)
        if not professionals:
            return None
        return professionals[0].to_domain()

    async def list_professionals(self) -> List[ProfessionalSchedule]:
        rows = await self._fetch("professionals", [("order", "name.asc")])
        return [record.to_domain() for record in self._parse_rows(rows, ProfessionalRecord)]

    async def get_appointments(
        self,
        professional_id: int,
        start_time: Optional[DateTime],
        end_time: Optional[DateTime],
        timezone: str = "UTC"
    ) -> List[Appointment]:
        """
        Get the appointments of a professional that start inside [start, end).

        Args:
            professional_id: Owning professional
            start_time: Inclusive lower bound, or None
            end_time: Exclusive upper bound, or None
            timezone: IANA timezone the returned instants are converted to

        Returns:
            Appointments ordered by start time

        Raises:
            StorageError: If the request fails
        """
        params = [("professional_id", f"eq.{professional_id}")]
        if start_time is not None:
            params.append(("appointment_date", f"gte.{start_time.in_timezone('UTC').to_iso8601_string()}"))
        if end_time is not None:
            params.append(("appointment_date", f"lt.{end_time.in_timezone('UTC').to_iso8601_string()}"))
        params.append(("order", "appointment_date.asc"))

        rows = await self._fetch("appointments", params)
        return [
            record.to_domain(timezone)
            for record in self._parse_rows(rows, AppointmentRecord)
        ]

    async def get_absences(self, professional_id: int, day: DateTime) -> List[ProfessionalAbsence]:
        rows = await self._fetch(
            "professional_absences",
            [
                ("professional_id", f"eq.{professional_id}"),
                ("date", f"eq.{day.to_date_string()}"),
            ]
        )
        return [record.to_domain() for record in self._parse_rows(rows, AbsenceRecord)]

    async def test_connection(self) -> int:
        """
        Check that the endpoint answers and the key is accepted.

        Returns:
            Number of professionals visible with the configured key

        Raises:
            StorageError: If the connection test fails
        """
        rows = await self._fetch("professionals", [("select", "id")])
        return len(rows)

    async def _fetch(self, table: str, params: Sequence[Tuple[str, str]]) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._get, table, params)

    def _get(self, table: str, params: Sequence[Tuple[str, str]]) -> List[Dict[str, Any]]:
        url = f"{self.base_url}{self.REST_PREFIX}/{table}"
        logger.debug("GET %s %s", url, params)

        try:
            response = self.session.get(
                url,
                headers=self.headers,
                params=list(params),
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.RequestException as e:
            raise StorageError(f"Failed to fetch '{table}' from the salon database: {e}") from e
        except ValueError as e:
            raise StorageError(f"Invalid JSON returned for '{table}': {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Unexpected response for '{table}': expected a list of rows")

        return data

    @staticmethod
    def _parse_rows(rows: List[Dict[str, Any]], model: Type[RecordT]) -> List[RecordT]:
        """Validate rows, skipping (and logging) the ones that do not fit."""
        records: List[RecordT] = []
        for row in rows:
            try:
                records.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning("Skipping invalid %s row %s: %s", model.__name__, row.get("id"), e)
        return records
