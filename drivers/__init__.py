"""
Drivers domain package.

Public API:
- Candidate (driver snapshot supplied by the host), DriverStatus
"""
from .models import Candidate, DriverStatus, DEFAULT_RATING, DEFAULT_ACCEPTANCE_RATE

__all__ = ["Candidate",
           "DriverStatus",
             "DEFAULT_RATING",
               "DEFAULT_ACCEPTANCE_RATE",
               ]
