"""
Occupancy and goal engine for city-planning digital twins

Computes planar area and volume of drawn regions, which regions lie inside
a planning boundary, per-category land use, and whether planning goals are met.
"""

from .config import EngineConfig, get_config, validate_config
from .models import (
    Vertex, Region, Category, MeasurementBasis, Goal, GoalTargetType, Comparison,
    AreaVolume, CategoryOccupation, OccupancyBreakdown, GoalResult, RegionMetrics,
    stacked_levels
)
from .catalog import (
    CategoryCatalog, GoalCatalog, InMemoryCategoryCatalog, InMemoryGoalCatalog,
    default_category_catalog, default_goal_catalog
)
from .engine import PlanningEngine

__version__ = "1.0.0"

__all__ = [
    "EngineConfig",
    "get_config",
    "validate_config",
    "Vertex",
    "Region",
    "Category",
    "MeasurementBasis",
    "Goal",
    "GoalTargetType",
    "Comparison",
    "AreaVolume",
    "CategoryOccupation",
    "OccupancyBreakdown",
    "GoalResult",
    "RegionMetrics",
    "stacked_levels",
    "CategoryCatalog",
    "GoalCatalog",
    "InMemoryCategoryCatalog",
    "InMemoryGoalCatalog",
    "default_category_catalog",
    "default_goal_catalog",
    "PlanningEngine",
]
