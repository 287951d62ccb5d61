"""
Domain-specific exception hierarchy for the salon availability application.
"""


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class StorageError(SalonSlotsError):
    """Raised when salon data cannot be fetched or parsed."""


class ConfigurationError(SalonSlotsError):
    """Raised when the application configuration is missing or invalid."""
