from datetime import datetime, timedelta, timezone

import pytest

from app.utils.catalog import Vehicle, VehicleCatalog
from app.utils.response_helpers import ResponseFormatter

# Mock data for the inventory
MOCK_VEHICLES = [
    {
        "make": "Toyota", "model": "Harrier", "year": 2018, "price": 3_200_000,
        "mileage": 45_000, "fuel_type": "petrol", "transmission": "automatic",
        "body_type": "suv", "status": "available",
    },
    {
        "make": "Toyota", "model": "Axio", "year": 2016, "price": 1_650_000,
        "mileage": None, "fuel_type": "hybrid", "transmission": "automatic",
        "body_type": "sedan", "status": "available",
    },
    {
        "make": "Subaru", "model": "Forester", "year": 2017, "price": 2_450_000,
        "mileage": 78_000, "fuel_type": "petrol", "transmission": "automatic",
        "body_type": "suv", "status": "available",
    },
    {
        "make": "BMW", "model": "X5", "year": 2019, "price": 8_900_000,
        "mileage": 30_500, "fuel_type": "diesel", "transmission": "automatic",
        "body_type": "suv", "status": "available",
    },
    {
        "make": "Mazda", "model": "Demio", "year": 2015, "price": 950_000,
        "mileage": 92_000, "fuel_type": "petrol", "transmission": "manual",
        "body_type": "hatchback", "status": "sold",
    },
]


class FirstChoice:
    """Stand-in RNG that always picks the first template."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def vehicles():
    return [Vehicle(**v) for v in MOCK_VEHICLES]


@pytest.fixture
def catalog(vehicles):
    return VehicleCatalog.from_vehicles(vehicles)


@pytest.fixture
def formatter():
    return ResponseFormatter(rng=FirstChoice())


@pytest.fixture
def clock():
    """Deterministic clock: each call is one second after the previous."""
    start = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)
    ticks = iter(range(10_000))

    def now():
        return start + timedelta(seconds=next(ticks))

    return now
