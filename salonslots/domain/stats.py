"""
Per-professional booking statistics for the professional detail view.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from pendulum import DateTime

from .models import Appointment


@dataclass(frozen=True)
class ProfessionalStats:
    """Aggregated booking figures of one professional."""
    total_services: int
    monthly_services: int
    weekly_services: int
    top_service: Optional[Tuple[str, int]] = None
    top_client: Optional[Tuple[str, int]] = None


def compute_professional_stats(
    appointments: Iterable[Appointment],
    professional_id: int,
    now: DateTime
) -> ProfessionalStats:
    """
    Aggregate the appointments of a professional.

    Month and week are taken relative to ``now`` (weeks are ISO weeks),
    evaluated in ``now``'s timezone.
    """
    own = sorted(
        (a for a in appointments if a.professional_id == professional_id),
        key=lambda a: a.appointment_date
    )

    current_week = now.isocalendar()[:2]
    monthly = 0
    weekly = 0

    for appointment in own:
        local_start = appointment.appointment_date.astimezone(now.tzinfo)
        if (local_start.year, local_start.month) == (now.year, now.month):
            monthly += 1
        if local_start.isocalendar()[:2] == current_week:
            weekly += 1

    return ProfessionalStats(
        total_services=len(own),
        monthly_services=monthly,
        weekly_services=weekly,
        top_service=_most_common([a.service for a in own]),
        top_client=_most_common([a.client_name for a in own]),
    )


def _most_common(values: List[Optional[str]]) -> Optional[Tuple[str, int]]:
    # Counter preserves insertion order, so ties go to the earliest booking
    counts = Counter(value for value in values if value)
    if not counts:
        return None
    name, count = counts.most_common(1)[0]
    return name, count
