"""Common test fixtures."""

from datetime import date

import pytest

from config import AppConfig, PersistenceConfig
from models.attraction import Attraction, AttractionKind, RiskLevel
from models.employee import Employee, EmployeeRole
from models.facility import ServicePlace, ServicePlaceKind
from models.tier import ExclusivityTier
from staffing.catalog import InMemoryCatalog
from staffing.engine import StaffingAssignmentEngine


@pytest.fixture
def day() -> date:
    return date(2025, 7, 14)


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Configuration writing only into the test's temp directory."""
    return AppConfig(
        persistence=PersistenceConfig(data_dir=str(tmp_path / "data")),
        output_dir=str(tmp_path / "output"),
    )


@pytest.fixture
def high_operator() -> Employee:
    return Employee(
        id="E1", name="Ana Ruiz", role=EmployeeRole.HIGH_RISK_OPERATOR,
        email="ana@park.test", trained=True,
    )


@pytest.fixture
def medium_operator() -> Employee:
    return Employee(
        id="E2", name="Luis Gomez", role=EmployeeRole.MEDIUM_RISK_OPERATOR,
        certified_until=date(2025, 12, 31),
    )


@pytest.fixture
def cook() -> Employee:
    return Employee(id="E3", name="Marta Diaz", role=EmployeeRole.COOK, trained=True)


@pytest.fixture
def cashier() -> Employee:
    return Employee(id="E4", name="Pablo Mora", role=EmployeeRole.CASHIER)


@pytest.fixture
def regular() -> Employee:
    return Employee(id="E5", name="Sofia Leon", role=EmployeeRole.REGULAR)


@pytest.fixture
def cleaner() -> Employee:
    return Employee(id="E6", name="Juan Vega", role=EmployeeRole.GENERAL_SERVICE)


@pytest.fixture
def roller_coaster() -> Attraction:
    return Attraction(
        name="Thunder Coaster",
        kind=AttractionKind.MECHANICAL,
        exclusivity=ExclusivityTier.DIAMOND,
        required_staff=2,
        location="North",
        capacity=24,
        weather_restriction="No rain",
        risk_level=RiskLevel.HIGH,
    )


@pytest.fixture
def carousel() -> Attraction:
    return Attraction(
        name="Carousel",
        kind=AttractionKind.MECHANICAL,
        exclusivity=ExclusivityTier.FAMILIAR,
        required_staff=1,
        risk_level=RiskLevel.MEDIUM,
    )


@pytest.fixture
def museum() -> Attraction:
    return Attraction(
        name="History Hall",
        kind=AttractionKind.CULTURAL,
        exclusivity=ExclusivityTier.GOLD,
        required_staff=1,
        min_age=8,
    )


@pytest.fixture
def cafeteria() -> ServicePlace:
    return ServicePlace(
        id="C1", name="Main Cafeteria", kind=ServicePlaceKind.CAFETERIA,
        menu=["Burger", "Salad"], capacity=80,
    )


@pytest.fixture
def booth() -> ServicePlace:
    return ServicePlace(
        id="T1", name="North Booth", kind=ServicePlaceKind.TICKET_BOOTH,
        payment_methods=["cash", "card"],
    )


@pytest.fixture
def catalog(
    high_operator, medium_operator, cook, cashier, regular, cleaner,
    roller_coaster, carousel, museum, cafeteria, booth
) -> InMemoryCatalog:
    return InMemoryCatalog(
        employees=[high_operator, medium_operator, cook, cashier, regular, cleaner],
        attractions=[roller_coaster, carousel, museum],
        service_places=[cafeteria, booth],
    )


@pytest.fixture
def engine(catalog, app_config) -> StaffingAssignmentEngine:
    return StaffingAssignmentEngine(catalog, app_config=app_config)
