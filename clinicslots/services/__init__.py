"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, ClinicClientProtocol

__all__ = ["AvailabilityService", "ClinicClientProtocol"]
