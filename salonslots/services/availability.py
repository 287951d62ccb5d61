"""
Application services for finding bookable appointment slots.

The service coordinates fetching professionals, absences and appointments
via a storage client adapter and delegates the actual slot calculation to
the domain-level ``SlotCalculator``. It also decides which explanation the
caller should show when no slot is available.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol, Sequence

from pendulum import DateTime

from ..domain.models import Appointment, ProfessionalAbsence, ProfessionalSchedule, Slot
from ..domain.slot_calculator import SlotCalculator, filter_elapsed_slots
from ..domain.stats import ProfessionalStats, compute_professional_stats

logger = logging.getLogger(__name__)


class StorageClientProtocol(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    async def get_professional(self, professional_id: int) -> Optional[ProfessionalSchedule]:
        """Return the professional or None if unknown."""

    async def list_professionals(self) -> List[ProfessionalSchedule]:
        """Return all professionals ordered by name."""

    async def get_appointments(
        self,
        professional_id: int,
        start_time: Optional[DateTime],
        end_time: Optional[DateTime],
        timezone: str,
    ) -> List[Appointment]:
        """Return appointments of a professional starting inside [start, end).

        A bound of None leaves that side of the window open.
        """

    async def get_absences(
        self,
        professional_id: int,
        day: DateTime,
    ) -> List[ProfessionalAbsence]:
        """Return absences of a professional on the given day."""


class AvailabilityStatus(Enum):
    """Why a slot list looks the way it does."""

    NO_PROFESSIONAL = "Selecione um profissional para ver os horários."
    NO_SCHEDULE = "Este profissional não tem um horário de trabalho definido."
    PROFESSIONAL_ABSENT = "Este profissional está ausente no dia selecionado."
    NO_AVAILABILITY = "Nenhum horário disponível para este profissional no dia selecionado."
    AVAILABLE = "Horários disponíveis."

    @property
    def message(self) -> str:
        return self.value


@dataclass
class AvailabilityResult:
    """Slots for one professional and day, plus the reason when empty."""
    status: AvailabilityStatus
    slots: List[Slot] = field(default_factory=list)
    professional: Optional[ProfessionalSchedule] = None
    absence: Optional[ProfessionalAbsence] = None

    @property
    def message(self) -> str:
        return self.status.message


class AvailabilityService:
    """
    Orchestrates data retrieval and slot calculation.

    Dependency inversion toward a protocol makes it easy to plug in the real
    REST adapter or the mock store in tests.
    """

    def __init__(
        self,
        storage_client: StorageClientProtocol,
        slot_calculator: SlotCalculator,
    ) -> None:
        self._storage_client = storage_client
        self._slot_calculator = slot_calculator

    async def find_slots(
        self,
        *,
        professional_id: Optional[int],
        selected_date: DateTime,
        service_duration_minutes: int,
        timezone: str,
        now: Optional[DateTime] = None,
    ) -> AvailabilityResult:
        """
        Fetch the professional's data for the day and compute bookable slots.

        When ``now`` is given, slots starting before it are hidden.
        """
        if professional_id is None:
            return AvailabilityResult(status=AvailabilityStatus.NO_PROFESSIONAL)

        day = selected_date.in_timezone(timezone).start_of("day")

        professional = await self._storage_client.get_professional(professional_id)
        if professional is None:
            logger.info("Professional %s not found", professional_id)
            return AvailabilityResult(status=AvailabilityStatus.NO_PROFESSIONAL)

        if not professional.has_work_hours():
            return AvailabilityResult(
                status=AvailabilityStatus.NO_SCHEDULE,
                professional=professional,
            )

        absences = await self._storage_client.get_absences(professional_id, day)
        absence = next((a for a in absences if a.date == day.date()), None)
        if absence is not None:
            logger.debug("Professional %s absent on %s", professional_id, absence.date)
            return AvailabilityResult(
                status=AvailabilityStatus.PROFESSIONAL_ABSENT,
                professional=professional,
                absence=absence,
            )

        appointments = await self._storage_client.get_appointments(
            professional_id=professional_id,
            start_time=day,
            end_time=day.add(days=1),
            timezone=timezone,
        )
        logger.debug(
            "Loaded %d appointment(s) for professional %s on %s",
            len(appointments), professional_id, day.to_date_string()
        )

        slots = self.calculate_slots(
            selected_date=day,
            appointments=appointments,
            professional=professional,
            service_duration_minutes=service_duration_minutes,
        )
        if now is not None:
            slots = filter_elapsed_slots(slots, now)

        return AvailabilityResult(
            status=self.classify(professional, slots),
            slots=slots,
            professional=professional,
        )

    def calculate_slots(
        self,
        *,
        selected_date: DateTime,
        appointments: Sequence[Appointment],
        professional: Optional[ProfessionalSchedule],
        service_duration_minutes: int,
    ) -> List[Slot]:
        """Calculate bookable slots from already loaded data."""
        return self._slot_calculator.find_available_slots(
            selected_date=selected_date,
            appointments=appointments,
            professional=professional,
            service_duration_minutes=service_duration_minutes,
        )

    @staticmethod
    def classify(
        professional: Optional[ProfessionalSchedule],
        slots: Sequence[Slot],
    ) -> AvailabilityStatus:
        """
        Derive the explanation for a slot list from which inputs were present.
        """
        if professional is None:
            return AvailabilityStatus.NO_PROFESSIONAL
        if not professional.has_work_hours():
            return AvailabilityStatus.NO_SCHEDULE
        if not slots:
            return AvailabilityStatus.NO_AVAILABILITY
        return AvailabilityStatus.AVAILABLE

    async def list_professionals(self) -> List[ProfessionalSchedule]:
        return await self._storage_client.list_professionals()

    async def get_stats(
        self,
        *,
        professional_id: int,
        timezone: str,
        now: DateTime,
    ) -> ProfessionalStats:
        """Compute booking statistics over all appointments of a professional."""
        appointments = await self._storage_client.get_appointments(
            professional_id=professional_id,
            start_time=None,
            end_time=None,
            timezone=timezone,
        )
        return compute_professional_stats(
            appointments,
            professional_id=professional_id,
            now=now.in_timezone(timezone),
        )
