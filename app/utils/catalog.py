from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

import pandas as pd
from loguru import logger

from app.config import Settings
from app.errors import LookupFailure
from app.models.dto import InventoryQuery


@dataclass(frozen=True)
class Vehicle:
    """Read-only projection of an inventory vehicle."""
    make: str
    model: str
    year: int
    price: float
    fuel_type: str
    transmission: str
    mileage: Optional[int] = None   # km
    body_type: Optional[str] = None
    status: str = "available"       # available / reserved / sold / coming-soon


class InventoryLookup(Protocol):
    """The inventory collaborator the assistant reads from."""

    async def find(self, query: InventoryQuery) -> List[Vehicle]: ...

    async def count(self, query: InventoryQuery) -> int: ...


REQUIRED_COLUMNS = ["make", "model", "year", "price", "fuel_type", "transmission"]


class VehicleCatalog:
    """
    In-memory inventory loaded from an Excel or CSV sheet.

    Columns: make, model, year, price, mileage, fuel_type, transmission,
    body_type, status. Rows that cannot be parsed are skipped with a warning.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog_path: Optional[Union[str, Path]] = None,
        vehicles: Optional[Iterable[Vehicle]] = None,
    ):
        if vehicles is not None:
            self._vehicles: List[Vehicle] = list(vehicles)
            return

        if catalog_path is None:
            if settings is None:
                settings = Settings()
            catalog_path = settings.INVENTORY_PATH

        catalog_path = Path(catalog_path)
        logger.info(f"Looking for inventory file at: {catalog_path.absolute()}")

        if not catalog_path.exists():
            logger.error(f"Inventory file not found: {catalog_path.absolute()}")
            raise FileNotFoundError(f"Inventory file not found: {catalog_path.absolute()}")

        self._vehicles = self._load(catalog_path)
        logger.info(f"Loaded {len(self._vehicles)} vehicles from inventory")

    @classmethod
    def from_vehicles(cls, vehicles: Iterable[Vehicle]) -> "VehicleCatalog":
        return cls(vehicles=vehicles)

    def _load(self, path: Path) -> List[Vehicle]:
        if path.suffix.lower() in (".xlsx", ".xls"):
            df = pd.read_excel(path)
        else:
            df = pd.read_csv(path)

        df.columns = [str(c).strip().lower() for c in df.columns]
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Inventory file is missing columns: {', '.join(missing)}")

        vehicles = []
        for idx, row in df.iterrows():
            try:
                year = self._parse_int(row["year"])
                price = self._parse_float(row["price"])
                if year is None or price is None or price <= 0:
                    logger.warning(f"Skipping row {idx}: bad year/price")
                    continue

                vehicles.append(Vehicle(
                    make=self._parse_str(row["make"]),
                    model=self._parse_str(row["model"]),
                    year=year,
                    price=price,
                    fuel_type=self._parse_str(row["fuel_type"]),
                    transmission=self._parse_str(row["transmission"]),
                    mileage=self._parse_int(row.get("mileage")),
                    body_type=self._parse_str(row.get("body_type")).lower() or None,
                    status=self._parse_str(row.get("status")).lower() or "available",
                ))
            except (TypeError, ValueError) as e:
                logger.warning(f"Error parsing row {idx}: {e}")
                continue

        return vehicles

    def _parse_str(self, value) -> str:
        if value is None or pd.isna(value):
            return ""
        return str(value).strip()

    def _parse_int(self, value) -> Optional[int]:
        if value is None or pd.isna(value):
            return None
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return None

    def _parse_float(self, value) -> Optional[float]:
        if value is None or pd.isna(value):
            return None
        try:
            return float(str(value).replace(",", ""))
        except (TypeError, ValueError):
            return None

    def _matching(self, query: InventoryQuery) -> List[Vehicle]:
        results = []
        for vehicle in self._vehicles:
            if vehicle.status != query.status:
                continue
            if query.make and vehicle.make.lower() != query.make.lower():
                continue
            if query.body_type and (vehicle.body_type or "").lower() != query.body_type.lower():
                continue
            if query.price_max is not None and vehicle.price > query.price_max:
                continue
            results.append(vehicle)

        field, direction = query.sort_by
        results.sort(key=lambda v: getattr(v, field), reverse=(direction == "desc"))
        return results

    async def find(self, query: InventoryQuery) -> List[Vehicle]:
        try:
            results = self._matching(query)
        except (AttributeError, TypeError) as e:
            raise LookupFailure(f"Inventory query failed: {e}") from e
        if query.limit is not None:
            results = results[:query.limit]
        return results

    async def count(self, query: InventoryQuery) -> int:
        try:
            return len(self._matching(query))
        except (AttributeError, TypeError) as e:
            raise LookupFailure(f"Inventory query failed: {e}") from e

    def get_all_vehicles(self) -> List[Vehicle]:
        return self._vehicles.copy()
