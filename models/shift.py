"""
Shift model.
"""
from enum import Enum
from typing import Any, Optional


class Shift(Enum):
    """Working periods of a park day."""
    OPENING = "Opening"
    CLOSING = "Closing"

    @classmethod
    def from_label(cls, label: Any) -> Optional["Shift"]:
        """
        Convert a shift label to a Shift.

        Args:
            label: A Shift member or its label ("Opening", "Closing").
                The legacy labels "Apertura" and "Cierre" are accepted.

        Returns:
            Shift member, or None if the label is not in the closed set
        """
        if isinstance(label, cls):
            return label
        if not isinstance(label, str):
            return None

        mapping = {
            "opening": cls.OPENING,
            "apertura": cls.OPENING,
            "closing": cls.CLOSING,
            "cierre": cls.CLOSING,
        }
        return mapping.get(label.lower().strip())

    @classmethod
    def is_valid(cls, label: Any) -> bool:
        """Check if a label belongs to the closed set of shifts."""
        return cls.from_label(label) is not None

    def __str__(self) -> str:
        return self.value
