"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import Appointment, ProfessionalAbsence, ProfessionalSchedule, Slot, TimeRange
from .slot_calculator import SlotCalculator, filter_elapsed_slots
from .stats import ProfessionalStats, compute_professional_stats

__all__ = [
    "Appointment",
    "ProfessionalAbsence",
    "ProfessionalSchedule",
    "Slot",
    "TimeRange",
    "SlotCalculator",
    "filter_elapsed_slots",
    "ProfessionalStats",
    "compute_professional_stats",
]
