"""
Small builders shared by the tests.
"""

import pendulum

from salonslots.domain.models import Appointment

TZ = "America/Sao_Paulo"


def at(text: str):
    """Parse a local 'YYYY-MM-DD HH:mm' string in the salon timezone."""
    return pendulum.parse(text, tz=TZ)


def booking(start: str, end: str, professional_id: int = 1, **kwargs) -> Appointment:
    """Build an appointment from two local time strings."""
    return Appointment(
        professional_id=professional_id,
        appointment_date=at(start),
        end_date=at(end),
        **kwargs
    )
