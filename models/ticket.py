"""
Ticket models and FastPass tokens.

Each ticket variant decides access to an attraction through ``can_access``.
Tier comparison is shared; seasonal tickets add a validity period and
single-attraction tickets are bound to one attraction and burn on use.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Protocol, runtime_checkable

from models.calendar import DayLike, same_day, to_day
from models.tier import ExclusivityTier


@runtime_checkable
class AccessChecker(Protocol):
    """Anything that can decide entry to an attraction."""

    def can_access(self, attraction: Any, on: Optional[DayLike] = None) -> bool:
        ...

    def mark_used(self) -> None:
        ...

    def is_used(self) -> bool:
        ...


@dataclass(eq=False)
class Ticket:
    """
    Fields common to every ticket.

    Attributes:
        id: Unique ticket identifier
        name: Ticket name as sold
        count: Number of entries on the ticket
        exclusivity: Tier of the ticket (None means unusable)
        purchase_date: Day the ticket was bought
        status: Sales status (e.g. "active")
        channel: Where it was sold (e.g. "online", "booth")
        employee_discount: Whether an employee discount was applied
        used: Whether the ticket has been used
    """
    id: str
    name: str = ""
    count: int = 1
    exclusivity: Optional[ExclusivityTier] = ExclusivityTier.FAMILIAR
    purchase_date: Optional[date] = None
    status: str = "active"
    channel: str = ""
    employee_discount: bool = False
    used: bool = False

    def __post_init__(self):
        self.purchase_date = to_day(self.purchase_date)

    def _tier_allows(self, attraction: Any) -> bool:
        if attraction is None:
            return False
        return ExclusivityTier.has_access(
            self.exclusivity, getattr(attraction, "exclusivity", None)
        )

    def can_access(self, attraction: Any, on: Optional[DayLike] = None) -> bool:
        return self._tier_allows(attraction)

    def mark_used(self) -> None:
        """Mark the ticket as used. There is no way back."""
        self.used = True

    def is_used(self) -> bool:
        return self.used

    def apply_employee_discount(self) -> None:
        self.employee_discount = True

    @property
    def variant(self) -> str:
        return "basic"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Ticket):
            return self.id == other.id
        return False


@dataclass(eq=False)
class BasicTicket(Ticket):
    """Ticket that only checks the exclusivity tier."""
    category: str = ""


@dataclass(eq=False)
class SeasonalTicket(Ticket):
    """
    Ticket valid between two days.

    Attributes:
        valid_from: First valid day (inclusive)
        valid_to: Last valid day (inclusive)
        season_type: Season label (e.g. "Summer")
        category: Sales category
    """
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    season_type: str = ""
    category: str = ""

    def __post_init__(self):
        super().__post_init__()
        self.valid_from = to_day(self.valid_from)
        self.valid_to = to_day(self.valid_to)

    def is_valid_on(self, day: Optional[DayLike]) -> bool:
        """Check if the day falls inside the validity period."""
        target = to_day(day)
        if target is None or self.valid_from is None or self.valid_to is None:
            return False
        return self.valid_from <= target <= self.valid_to

    def can_access(self, attraction: Any, on: Optional[DayLike] = None) -> bool:
        """Tier check plus validity on the given day (today by default)."""
        if not self._tier_allows(attraction):
            return False
        return self.is_valid_on(on if on is not None else date.today())

    @property
    def variant(self) -> str:
        return "seasonal"


@dataclass(eq=False)
class SingleAttractionTicket(Ticket):
    """Single-use ticket bound to exactly one attraction."""
    attraction: Any = None

    def can_access(self, attraction: Any, on: Optional[DayLike] = None) -> bool:
        """Only the bound attraction, and only while unused."""
        if attraction is None or self.attraction is None:
            return False
        return attraction is self.attraction and not self.used

    @property
    def variant(self) -> str:
        return "single"


# =============================================================================
# FASTPASS
# =============================================================================

@dataclass
class FastPass:
    """
    Same-day priority token attached to a ticket.

    Attributes:
        ticket: Ticket the pass was issued for
        valid_day: The one day the pass can be used
        used: Whether the pass has been used
    """
    ticket: Optional[Ticket]
    valid_day: Optional[date]
    used: bool = False

    def __post_init__(self):
        self.valid_day = to_day(self.valid_day)

    def is_valid(self, day: Optional[DayLike]) -> bool:
        """Valid only while unused and on its own calendar day."""
        if self.used:
            return False
        return same_day(day, self.valid_day)

    def mark_used(self) -> None:
        self.used = True
