"""
Domain-specific exception hierarchy for the clinic slot finder.
"""


class ClinicSlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidDuration(ClinicSlotsError, ValueError):
    """Raised when a slot duration is zero or negative."""


class ClinicAPIError(ClinicSlotsError):
    """Raised when clinic data cannot be fetched or parsed."""


class UnknownServiceError(ClinicSlotsError):
    """Raised when a requested service id is not offered by the clinic."""
