"""
Shared fixtures for the test suite.
"""

import pytest

from salonslots.domain.models import ProfessionalSchedule


@pytest.fixture
def nine_to_five() -> ProfessionalSchedule:
    """Professional working 09:00-17:00 without lunch break."""
    return ProfessionalSchedule.from_strings(
        id=1,
        name="Ana",
        work_start_time="09:00",
        work_end_time="17:00",
    )


@pytest.fixture
def nine_to_five_with_lunch() -> ProfessionalSchedule:
    """Professional working 09:00-17:00 with lunch 12:00-13:00."""
    return ProfessionalSchedule.from_strings(
        id=1,
        name="Ana",
        work_start_time="09:00",
        work_end_time="17:00",
        lunch_start_time="12:00",
        lunch_end_time="13:00",
    )
