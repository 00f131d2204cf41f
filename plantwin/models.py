"""
Pydantic models for the occupancy and goal engine

All models are frozen: the engine only reads them and derives new values.
"""

import math
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================
# Geometry
# ============================================================

class Vertex(BaseModel):
    """Point in an Earth-centered Cartesian frame (meters)"""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data):
        # Scene files store vertices as [x, y] or [x, y, z]
        if isinstance(data, (list, tuple)):
            if len(data) not in (2, 3):
                raise ValueError(f"vertex needs 2 or 3 components, got {len(data)}")
            return dict(zip(("x", "y", "z"), data))
        return data


class Region(BaseModel):
    """
    Closed vertex loop (last vertex connects to first) with planning attributes

    Fewer than 3 vertices is a valid, degenerate region with zero area.
    """
    model_config = ConfigDict(frozen=True)

    vertices: Tuple[Vertex, ...] = ()
    height: Optional[float] = None
    category: Optional[str] = None
    has_overlay_feature: bool = False

    # Pre-computed area (e.g. corridor length x width) replacing the shoelace result
    area_override: Optional[float] = None

    id: Optional[str] = None

    @property
    def extrusion_height(self) -> Optional[float]:
        """Height if extrusion was requested, otherwise None"""
        if self.height is not None and self.height > 0:
            return self.height
        return None

    def label(self) -> str:
        return self.id or f"<{self.category or 'uncategorized'}:{len(self.vertices)} vertices>"


# ============================================================
# Catalog entries
# ============================================================

class MeasurementBasis(str, Enum):
    """Whether headcount and cost scale with footprint area or volume"""
    AREA = "area"
    VOLUME = "volume"


HeadcountMultiplier = Callable[[float], float]


def stacked_levels(floor_height: float = 5.0) -> HeadcountMultiplier:
    """Multiplier counting whole levels of `floor_height` meters in a region's height"""
    def levels(height: float) -> float:
        return float(math.floor(height / floor_height))

    return levels


class Category(BaseModel):
    """Planning classification with cost/income/density/livability constants"""
    model_config = ConfigDict(frozen=True)

    id: str
    color_hex: str = "#FFFFFF"
    unit_cost: float = 0.0          # euro per unit of measurement
    income_percent: float = 0.0     # % of cost returned as income
    density_per_unit: float = 0.0   # residents/workers/spaces per unit
    livability_score: float = 5.0   # 1-10, not scaled by size
    measurement_basis: MeasurementBasis = MeasurementBasis.VOLUME

    # Applied to headcount for regions with positive height
    headcount_multiplier: Optional[HeadcountMultiplier] = Field(default=None, exclude=True)

    def measurement_for(
        self,
        area: float,
        volume: Optional[float]
    ) -> Tuple[float, MeasurementBasis]:
        """
        Pick the quantity this category is measured by

        Volume-based categories fall back to area when the region has no volume.
        """
        if self.measurement_basis == MeasurementBasis.VOLUME and volume is not None and volume > 0:
            return volume, MeasurementBasis.VOLUME
        return area, MeasurementBasis.AREA

    def headcount_for(
        self,
        area: float,
        volume: Optional[float],
        height: Optional[float]
    ) -> float:
        measurement, _ = self.measurement_for(area, volume)
        headcount = self.density_per_unit * measurement
        if self.headcount_multiplier is not None and height is not None and height > 0:
            headcount *= self.headcount_multiplier(height)
        return headcount


class GoalTargetType(str, Enum):
    """Derived metric a goal is measured against"""
    NATURE_PERCENTAGE = "nature_percentage"
    COMMERCIAL_PERCENTAGE = "commercial_percentage"
    RESIDENTS_COUNT = "residents_count"
    WORKERS_COUNT = "workers_count"
    PARKING_COUNT = "parking_count"
    PEOPLE_COUNT = "people_count"  # legacy aggregate headcount


class Comparison(str, Enum):
    MIN = "min"
    MAX = "max"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Comparison"]:
        """Case-insensitive lookup; None for anything unrecognized"""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


class Goal(BaseModel):
    """Numeric planning target checked against the occupancy breakdown"""
    model_config = ConfigDict(frozen=True)

    id: str
    description: str = ""
    target_type: GoalTargetType
    target_value: float
    # Kept as a string: unknown comparisons are evaluated, not rejected
    comparison: str = Comparison.MIN.value
    enabled: bool = True


# ============================================================
# Results
# ============================================================

class AreaVolume(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: float
    volume: Optional[float] = None
    height: Optional[float] = None


class CategoryOccupation(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: float = 0.0
    volume: Optional[float] = None
    percent: float = 0.0
    headcount: float = 0.0


class OccupancyBreakdown(BaseModel):
    """Occupied area of a boundary, split per category plus "unoccupied" """
    model_config = ConfigDict(frozen=True)

    boundary_area: float = 0.0
    occupied_area: float = 0.0
    occupied_percent: float = 0.0
    per_category: Dict[str, CategoryOccupation] = Field(default_factory=dict)
    unoccupied_key: str = Field(default="unoccupied", exclude=True)

    @property
    def unoccupied(self) -> CategoryOccupation:
        return self.per_category.get(self.unoccupied_key, CategoryOccupation())

    def get(self, category_id: str) -> Optional[CategoryOccupation]:
        return self.per_category.get(category_id)

    def categories(self) -> List[str]:
        """Populated category ids, excluding the synthetic unoccupied entry"""
        return [key for key in self.per_category if key != self.unoccupied_key]


class GoalResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal_id: str
    description: str
    achieved: bool
    current_value: float
    target_value: float
    comparison: str


class RegionMetrics(BaseModel):
    """Cost, income, headcount and livability for a single region or corridor"""
    model_config = ConfigDict(frozen=True)

    cost: float = 0.0
    income: float = 0.0
    headcount: float = 0.0
    livability: float = 0.0
    measurement: float = 0.0
    basis: str = "unknown"  # area, volume, none (no category) or unknown (not in catalog)
