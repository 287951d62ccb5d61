"""
Typed record contracts for data exchanged with the salon database.

Records are validated when they cross the API boundary and then converted
into the plain domain models used by the calculator.
"""

import datetime
from typing import Optional

import pendulum
from pendulum import DateTime
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .domain.models import Appointment, ProfessionalAbsence, ProfessionalSchedule
from .domain.time_of_day import parse_time_of_day


def parse_instant(value: str, timezone: str = "UTC") -> DateTime:
    """
    Parse an ISO-8601 instant into a pendulum DateTime in ``timezone``.

    Naive values are interpreted as UTC.

    Raises:
        ValueError: If the value is not a date-time
    """
    parsed = pendulum.parse(value, tz="UTC")
    if not isinstance(parsed, DateTime):
        raise ValueError(f"Could not parse datetime: {value}")
    return parsed.in_timezone(timezone)


class ProfessionalRecord(BaseModel):
    """Row of the ``professionals`` table."""
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str = ""
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None

    @field_validator(
        "work_start_time", "work_end_time", "lunch_start_time", "lunch_end_time",
        mode="before"
    )
    @classmethod
    def blank_to_none(cls, value):
        """Treat empty strings from forms as 'not configured'."""
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("work_start_time", "work_end_time", "lunch_start_time", "lunch_end_time")
    @classmethod
    def validate_time_of_day(cls, value: Optional[str]) -> Optional[str]:
        """Accept H:MM, HH:MM and HH:MM:SS only."""
        parse_time_of_day(value)
        return value

    def to_domain(self) -> ProfessionalSchedule:
        return ProfessionalSchedule.from_strings(
            id=self.id,
            name=self.name,
            work_start_time=self.work_start_time,
            work_end_time=self.work_end_time,
            lunch_start_time=self.lunch_start_time,
            lunch_end_time=self.lunch_end_time,
        )


class AppointmentRecord(BaseModel):
    """Row of the ``appointments`` table."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    professional_id: int
    appointment_date: str
    end_date: str
    client_name: Optional[str] = None
    service: Optional[str] = None
    price: Optional[float] = None
    is_confirmed: bool = False

    @field_validator("appointment_date", "end_date")
    @classmethod
    def validate_instant(cls, value: str) -> str:
        """Ensure the value parses as an ISO-8601 date-time."""
        parse_instant(value)
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "AppointmentRecord":
        """Reject appointments that end before they start."""
        if parse_instant(self.end_date) < parse_instant(self.appointment_date):
            raise ValueError("end_date must not be before appointment_date")
        return self

    def to_domain(self, timezone: str = "UTC") -> Appointment:
        return Appointment(
            id=self.id,
            professional_id=self.professional_id,
            appointment_date=parse_instant(self.appointment_date, timezone),
            end_date=parse_instant(self.end_date, timezone),
            client_name=self.client_name,
            service=self.service,
            price=self.price,
        )


class AbsenceRecord(BaseModel):
    """Row of the ``professional_absences`` table."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    professional_id: int
    date: datetime.date
    reason: Optional[str] = None

    def to_domain(self) -> ProfessionalAbsence:
        return ProfessionalAbsence(
            professional_id=self.professional_id,
            date=self.date,
            reason=self.reason,
        )
