from __future__ import annotations

from enum import Enum
from typing import Dict, List


class Region(str, Enum):
    TX = "TX"
    CA = "CA"
    NY = "NY"
    FL = "FL"
    IL = "IL"

    @property
    def source(self) -> str:
        """Grid operator that publishes demand for this region."""
        return GRID_OPERATORS[self]

    @property
    def label(self) -> str:
        return REGION_NAMES[self]

    @classmethod
    def parse(cls, code: str) -> "Region":
        """Case-insensitive lookup; raises ValueError for unknown codes."""
        return cls((code or "").strip().upper())


class EnergySource(str, Enum):
    GAS = "Gas"
    NUCLEAR = "Nuclear"
    SOLAR = "Solar"
    WIND = "Wind"


GRID_OPERATORS: Dict[Region, str] = {
    Region.TX: "ERCOT",
    Region.CA: "CAISO",
    Region.NY: "NYISO",
    Region.FL: "FRCC",
    Region.IL: "PJM",
}

REGION_NAMES: Dict[Region, str] = {
    Region.TX: "Texas",
    Region.CA: "California",
    Region.NY: "New York",
    Region.FL: "Florida",
    Region.IL: "Illinois",
}

ENERGY_SOURCES: List[str] = [s.value for s in EnergySource]
