"""
Exclusivity tier model.
"""
from enum import Enum
from typing import Any, Optional


class ExclusivityTier(Enum):
    """
    Ranked ticket/attraction category governing entry rights.

    Ordered Familiar < Gold < Diamond. A ticket tier grants entry to every
    attraction tier at or below it.
    """
    FAMILIAR = "Familiar"
    GOLD = "Gold"
    DIAMOND = "Diamond"

    @property
    def rank(self) -> int:
        """Position in the total order (Familiar is 0)."""
        return _RANKS[self]

    def __lt__(self, other: "ExclusivityTier") -> bool:
        if not isinstance(other, ExclusivityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "ExclusivityTier") -> bool:
        if not isinstance(other, ExclusivityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "ExclusivityTier") -> bool:
        if not isinstance(other, ExclusivityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "ExclusivityTier") -> bool:
        if not isinstance(other, ExclusivityTier):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def from_string(cls, value: Any) -> Optional["ExclusivityTier"]:
        """
        Convert a tier label to an ExclusivityTier.

        Accepts members, English labels and the legacy labels
        "Oro" / "Diamante". Anything else yields None.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None

        mapping = {
            "familiar": cls.FAMILIAR,
            "gold": cls.GOLD,
            "oro": cls.GOLD,
            "diamond": cls.DIAMOND,
            "diamante": cls.DIAMOND,
        }
        return mapping.get(value.lower().strip())

    @classmethod
    def is_valid(cls, tier: Any) -> bool:
        """Check membership in the closed set of tiers. Never raises."""
        return cls.from_string(tier) is not None

    @classmethod
    def has_access(cls, ticket_tier: Any, attraction_tier: Any) -> bool:
        """
        Decide whether a ticket tier grants entry to an attraction tier.

        Args:
            ticket_tier: Tier printed on the ticket
            attraction_tier: Tier required by the attraction

        Returns:
            True iff both tiers are valid and ticket_tier >= attraction_tier
        """
        ticket = cls.from_string(ticket_tier)
        attraction = cls.from_string(attraction_tier)
        if ticket is None or attraction is None:
            return False
        return ticket >= attraction

    def __str__(self) -> str:
        return self.value


_RANKS = {
    ExclusivityTier.FAMILIAR: 0,
    ExclusivityTier.GOLD: 1,
    ExclusivityTier.DIAMOND: 2,
}
