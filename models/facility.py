"""
Service place model (cafeterias, ticket booths and shops).
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from models.roster import WorkplaceRoster


class ServicePlaceKind(Enum):
    """Types of service places."""
    CAFETERIA = "Cafeteria"
    TICKET_BOOTH = "Ticket Booth"
    SHOP = "Shop"

    @classmethod
    def from_string(cls, value: str) -> "ServicePlaceKind":
        """Convert string to ServicePlaceKind enum."""
        mapping = {
            "cafeteria": cls.CAFETERIA,
            "ticket booth": cls.TICKET_BOOTH,
            "ticket_booth": cls.TICKET_BOOTH,
            "taquilla": cls.TICKET_BOOTH,
            "shop": cls.SHOP,
            "tienda": cls.SHOP,
        }
        return mapping.get(str(value).lower().strip(), cls.SHOP)


@dataclass
class ServicePlace:
    """
    A place where employees serve visitors.

    Staffing rules by kind:
    - Cafeteria: at least one trained cook and one cashier per shift
    - Ticket booth and shop: at least one cashier per shift

    Attributes:
        id: Unique identifier, used as the catalogue key
        name: Display name
        location: Where in the park it stands
        kind: Cafeteria, ticket booth or shop
        menu: Dishes served (cafeteria)
        capacity: Seats (cafeteria)
        payment_methods: Accepted payment methods (ticket booth)
        roster: Staff rostered on the place
    """
    id: str
    name: str
    location: str = ""
    kind: ServicePlaceKind = ServicePlaceKind.SHOP
    menu: List[str] = field(default_factory=list)
    capacity: int = 0
    payment_methods: List[str] = field(default_factory=list)
    roster: WorkplaceRoster = field(default_factory=WorkplaceRoster, repr=False)

    @property
    def requires_cook(self) -> bool:
        return self.kind == ServicePlaceKind.CAFETERIA

    def __str__(self) -> str:
        return f"{self.name} ({self.kind.value})"

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, ServicePlace):
            return self.id == other.id
        return False
