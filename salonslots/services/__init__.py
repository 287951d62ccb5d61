"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import (
    AvailabilityResult,
    AvailabilityService,
    AvailabilityStatus,
    StorageClientProtocol,
)

__all__ = [
    "AvailabilityResult",
    "AvailabilityService",
    "AvailabilityStatus",
    "StorageClientProtocol",
]
