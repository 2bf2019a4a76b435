"""Domain models for store, distribution center and division records."""

from dataclasses import dataclass, field
from typing import Optional

ALL_DIVISIONS = "All"
ALL_DCS = "ALL"
DIVISIONS: tuple[str, ...] = ("Northern", "Southern", "Eastern", "Midwestern")

PERIODS: tuple[str, ...] = ("DAILY", "WEEKLY")


@dataclass(slots=True, frozen=True)
class Store:
    """A single retail store point. Loaded once and never mutated."""

    store_id: str
    longitude: float
    latitude: float
    division: str
    dc_id: str
    health: float
    assigned: bool = False
    store_name: Optional[str] = None
    turnover: Optional[float] = None
    return_pct: Optional[float] = None
    country: Optional[str] = None
    state: Optional[str] = None


@dataclass(slots=True, frozen=True)
class DistributionCenter:
    """Represents a distribution center with its store roll-up."""

    dc_id: str
    name: str
    division: str
    longitude: float
    latitude: float
    rollup_health: float
    store_count: int


@dataclass(slots=True, frozen=True)
class DivisionRegion:
    """Boundary of a division, as GeoJSON polygon or multipolygon geometry."""

    division: str
    geometry: dict


@dataclass(slots=True, frozen=True)
class GeoDataset:
    """Immutable snapshot of everything the map can show."""

    stores: tuple[Store, ...]
    dcs: dict[str, DistributionCenter] = field(default_factory=dict)
    regions: dict[str, DivisionRegion] = field(default_factory=dict)

    def store(self, store_id: str) -> Optional[Store]:
        for store in self.stores:
            if store.store_id == store_id:
                return store
        return None
