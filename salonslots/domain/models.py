"""
Domain models for schedules, appointments and bookable slots.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from pendulum import DateTime

from .time_of_day import anchor_to_day, format_time_of_day, minutes_between, parse_time_of_day


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Half-open overlap check: touching ranges do not overlap."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.format('DD.MM.YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class ProfessionalSchedule:
    """
    Working-hours configuration of a professional.

    Any of the time fields may be missing. The ordering invariants
    (work start before work end, lunch inside the work window) are not
    enforced here; the day-range helpers return ``None`` instead.
    """
    id: int
    name: str = ""
    work_start_time: Optional[time] = None
    work_end_time: Optional[time] = None
    lunch_start_time: Optional[time] = None
    lunch_end_time: Optional[time] = None

    @classmethod
    def from_strings(
        cls,
        id: int,
        name: str = "",
        work_start_time: Optional[str] = None,
        work_end_time: Optional[str] = None,
        lunch_start_time: Optional[str] = None,
        lunch_end_time: Optional[str] = None
    ) -> "ProfessionalSchedule":
        """Build a schedule from nullable ``HH:MM`` strings."""
        return cls(
            id=id,
            name=name,
            work_start_time=parse_time_of_day(work_start_time),
            work_end_time=parse_time_of_day(work_end_time),
            lunch_start_time=parse_time_of_day(lunch_start_time),
            lunch_end_time=parse_time_of_day(lunch_end_time),
        )

    def has_work_hours(self) -> bool:
        return self.work_start_time is not None and self.work_end_time is not None

    def has_lunch_break(self) -> bool:
        return self.lunch_start_time is not None and self.lunch_end_time is not None

    def work_minutes(self) -> int:
        """Length of the work window in minutes (0 when undefined or inverted)."""
        if not self.has_work_hours():
            return 0
        return max(minutes_between(self.work_start_time, self.work_end_time), 0)

    def work_range_for_day(self, day: DateTime) -> Optional[TimeRange]:
        """
        Get the work window anchored to a specific day.
        Returns None if hours are missing or the window is empty/inverted.
        """
        if not self.has_work_hours():
            return None
        return _anchored_range(day, self.work_start_time, self.work_end_time)

    def lunch_range_for_day(self, day: DateTime) -> Optional[TimeRange]:
        """
        Get the lunch break anchored to a specific day.
        Returns None if no (valid) lunch break is configured.
        """
        if not self.has_lunch_break():
            return None
        return _anchored_range(day, self.lunch_start_time, self.lunch_end_time)

    def describe_hours(self) -> str:
        """Human readable work hours, e.g. '09:00 – 18:00 (almoço 12:00 – 13:00)'."""
        if not self.has_work_hours():
            return "não definido"
        text = f"{format_time_of_day(self.work_start_time)} – {format_time_of_day(self.work_end_time)}"
        if self.has_lunch_break():
            text += (
                f" (almoço {format_time_of_day(self.lunch_start_time)}"
                f" – {format_time_of_day(self.lunch_end_time)})"
            )
        return text


def _anchored_range(day: DateTime, start: time, end: time) -> Optional[TimeRange]:
    start_dt = anchor_to_day(day, start)
    end_dt = anchor_to_day(day, end)
    if start_dt >= end_dt:
        return None
    return TimeRange(start=start_dt, end=end_dt)


@dataclass(frozen=True)
class Appointment:
    """
    An existing booking. Immutable input to the availability calculation.
    """
    professional_id: int
    appointment_date: DateTime
    end_date: DateTime
    id: Optional[int] = None
    client_name: Optional[str] = None
    service: Optional[str] = None
    price: Optional[float] = None

    def overlaps(self, start: DateTime, end: DateTime) -> bool:
        """Half-open overlap check against the interval [start, end)."""
        return start < self.end_date and self.appointment_date < end

    def is_on_day(self, day: DateTime) -> bool:
        """Check whether the appointment starts on the calendar day of ``day``."""
        local_start = self.appointment_date.astimezone(day.tzinfo)
        return local_start.date() == day.date()


@dataclass(frozen=True)
class ProfessionalAbsence:
    """A day on which a professional does not work."""
    professional_id: int
    date: date
    reason: Optional[str] = None


@dataclass(frozen=True)
class Slot:
    """
    A bookable start time on the requested day.
    """
    start: DateTime
    end: DateTime
    label: str

    def format_display(self) -> str:
        """
        Format the slot for display.
        Format: Dia da semana, DD/MM/YYYY | HH:MM – HH:MM
        """
        weekday_names = {
            0: "Segunda-feira",
            1: "Terça-feira",
            2: "Quarta-feira",
            3: "Quinta-feira",
            4: "Sexta-feira",
            5: "Sábado",
            6: "Domingo"
        }

        weekday = weekday_names[self.start.weekday()]
        date_str = self.start.format("DD/MM/YYYY")
        return f"{weekday}, {date_str} | {self.label} – {self.end.format('HH:mm')}"
