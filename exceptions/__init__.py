"""
Error taxonomy for park operations.
"""
from .park_errors import (
    ParkError,
    ValidationError,
    NotFoundError,
    ConflictError,
    StaffingError,
    StaffingValidationError,
    StaffingNotFoundError,
    StaffingConflictError,
    AttractionError,
    AttractionValidationError,
    AttractionNotFoundError,
    PersistenceError,
)

__all__ = [
    "ParkError", "ValidationError", "NotFoundError", "ConflictError",
    "StaffingError", "StaffingValidationError", "StaffingNotFoundError",
    "StaffingConflictError",
    "AttractionError", "AttractionValidationError", "AttractionNotFoundError",
    "PersistenceError",
]
