"""
Core business logic for calculating bookable appointment slots.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O, no clock reads).
"""

from typing import Iterable, List, Optional

from pendulum import DateTime

from .models import Appointment, ProfessionalSchedule, Slot, TimeRange

DEFAULT_SLOT_INTERVAL_MINUTES = 30


class SlotCalculator:
    """
    Calculates the bookable start times of a professional on one day.

    Algorithm:
    1. Anchor the professional's work window (and lunch break) to the day
    2. Keep only the professional's appointments on that day
    3. Step from work start in fixed increments until the service would
       end after closing time
    4. Keep a candidate if it overlaps neither an appointment nor lunch
    """

    def __init__(self, slot_interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES):
        if slot_interval_minutes <= 0:
            raise ValueError("slot_interval_minutes must be greater than zero")
        self.slot_interval_minutes = slot_interval_minutes

    def find_available_slots(
        self,
        selected_date: DateTime,
        appointments: Iterable[Appointment],
        professional: Optional[ProfessionalSchedule],
        service_duration_minutes: int
    ) -> List[Slot]:
        """
        Find all bookable start times for a service on the selected day.

        Args:
            selected_date: Day to search; its time of day is ignored
            appointments: All known appointments (filtered here by
                professional and day)
            professional: Schedule of the professional, or None
            service_duration_minutes: Duration of the service being booked

        Returns:
            Slots ordered by start time. Empty when no professional is
            given, the schedule is undefined or nothing is free.
        """
        if professional is None or service_duration_minutes <= 0:
            return []

        work_range = professional.work_range_for_day(selected_date)
        if work_range is None:
            return []

        lunch_range = professional.lunch_range_for_day(selected_date)
        day_appointments = self._appointments_for_day(
            appointments,
            professional_id=professional.id,
            day=selected_date
        )

        slots: List[Slot] = []
        current = work_range.start

        while True:
            slot_end = current.add(minutes=service_duration_minutes)

            # Never offer a slot that runs past closing time
            if slot_end > work_range.end:
                break

            if (
                not self._is_occupied(current, slot_end, day_appointments)
                and not self._is_during_lunch(current, slot_end, lunch_range)
            ):
                slots.append(
                    Slot(start=current, end=slot_end, label=current.format("HH:mm"))
                )

            current = current.add(minutes=self.slot_interval_minutes)

        return slots

    @staticmethod
    def _appointments_for_day(
        appointments: Iterable[Appointment],
        professional_id: int,
        day: DateTime
    ) -> List[Appointment]:
        return [
            appointment for appointment in appointments
            if appointment.professional_id == professional_id
            and appointment.is_on_day(day)
        ]

    @staticmethod
    def _is_occupied(
        start: DateTime,
        end: DateTime,
        appointments: List[Appointment]
    ) -> bool:
        return any(appointment.overlaps(start, end) for appointment in appointments)

    @staticmethod
    def _is_during_lunch(
        start: DateTime,
        end: DateTime,
        lunch_range: Optional[TimeRange]
    ) -> bool:
        """
        A slot conflicts with lunch if it starts inside the break or runs
        into it. A slot ending exactly when lunch begins is allowed.
        """
        if lunch_range is None:
            return False
        return start < lunch_range.end and lunch_range.start < end


def filter_elapsed_slots(slots: Iterable[Slot], now: DateTime) -> List[Slot]:
    """
    Drop slots that start before ``now``.

    The calculator never reads the clock; callers that hide past slots
    inject the current instant here.
    """
    return [slot for slot in slots if slot.start >= now]
