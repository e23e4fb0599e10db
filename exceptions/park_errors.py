"""
Custom exceptions raised by the park operations core.

Three kinds of failure are reported to callers:
- validation: null/empty arguments, invalid shift or tier labels
- not found: references absent from the park catalogue
- conflict: an employee already holding an assignment for a (day, shift)

None of them are retried automatically; the administrator workflow decides
what to do next.
"""
from typing import Any, Dict, Optional


class ParkError(Exception):
    """Base class for every error raised by the park operations core."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"


class ValidationError(ParkError):
    """Raised when an argument is missing, empty or outside its closed set."""

    pass


class NotFoundError(ParkError):
    """Raised when a referenced entity is not registered in the catalogue."""

    pass


class ConflictError(ParkError):
    """Raised when an operation would break a uniqueness invariant."""

    pass


# =============================================================================
# STAFFING
# =============================================================================

class StaffingError(ParkError):
    """Base class for staffing assignment failures."""

    pass


class StaffingValidationError(StaffingError, ValidationError):
    """Invalid staffing request (null argument, bad shift, unqualified employee)."""

    pass


class StaffingNotFoundError(StaffingError, NotFoundError):
    """Employee or assignment target unknown to the park catalogue."""

    pass


class StaffingConflictError(StaffingError, ConflictError):
    """Employee already assigned somewhere in the park for that day and shift."""

    pass


# =============================================================================
# ATTRACTIONS
# =============================================================================

class AttractionError(ParkError):
    """Base class for attraction administration failures."""

    pass


class AttractionValidationError(AttractionError, ValidationError):
    """Invalid maintenance range, season bounds or exclusivity tier."""

    pass


class AttractionNotFoundError(AttractionError, NotFoundError):
    """Attraction not registered in the park catalogue."""

    pass


# =============================================================================
# PERSISTENCE
# =============================================================================

class PersistenceError(ParkError):
    """Raised when flat-file records cannot be read, parsed or written."""

    pass
