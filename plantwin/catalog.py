"""
Read-only category and goal catalogs

The engine never owns these; persistence (or a scene file, or a test)
builds a catalog and passes it in.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol

from loguru import logger
from pydantic import ValidationError

from .config import EngineConfig, get_config
from .models import Category, Goal, GoalTargetType, stacked_levels


class CategoryCatalog(Protocol):
    def lookup(self, category_id: str) -> Optional[Category]:
        ...


class GoalCatalog(Protocol):
    def list_enabled(self) -> List[Goal]:
        ...


class InMemoryCategoryCatalog:
    """Category lookup table keyed by category id"""

    def __init__(self, categories: Iterable[Category] = ()):
        self._categories: Dict[str, Category] = {}
        for category in categories:
            if category.id in self._categories:
                logger.warning(f"Duplicate category '{category.id}', keeping the last definition")
            self._categories[category.id] = category

    def lookup(self, category_id: str) -> Optional[Category]:
        if category_id is None:
            return None
        return self._categories.get(category_id)

    def list_all(self) -> List[Category]:
        return list(self._categories.values())

    def __contains__(self, category_id: str) -> bool:
        return category_id in self._categories

    def __len__(self) -> int:
        return len(self._categories)


class InMemoryGoalCatalog:
    """Goal list in definition order"""

    def __init__(self, goals: Iterable[Goal] = ()):
        self._goals: List[Goal] = list(goals)

    def list_all(self) -> List[Goal]:
        return list(self._goals)

    def list_enabled(self) -> List[Goal]:
        return [goal for goal in self._goals if goal.enabled]

    def __len__(self) -> int:
        return len(self._goals)


# ============================================================
# Construction from plain mappings (JSON scene files)
# ============================================================

def category_from_dict(data: Dict[str, Any]) -> Category:
    """
    Build a Category from a mapping

    A `stacked_level_height_m` entry attaches the stacked-levels headcount
    multiplier with that level height.
    """
    fields = dict(data)
    level_height = fields.pop("stacked_level_height_m", None)
    if level_height is not None:
        if isinstance(level_height, bool) or not isinstance(level_height, (int, float)):
            raise ValueError(f"stacked_level_height_m must be a number, got {level_height!r}")
        if level_height <= 0:
            raise ValueError(f"stacked_level_height_m must be positive, got {level_height}")
        fields["headcount_multiplier"] = stacked_levels(level_height)
    return Category(**fields)


def goal_from_dict(data: Dict[str, Any]) -> Goal:
    return Goal(**data)


def category_catalog_from_dicts(entries: Iterable[Dict[str, Any]]) -> InMemoryCategoryCatalog:
    return InMemoryCategoryCatalog(category_from_dict(entry) for entry in entries)


def goal_catalog_from_dicts(entries: Iterable[Dict[str, Any]]) -> InMemoryGoalCatalog:
    """Build a goal catalog, skipping entries that do not validate"""
    goals = []
    for i, entry in enumerate(entries):
        try:
            goals.append(goal_from_dict(entry))
        except ValidationError as e:
            logger.warning(f"Skipping invalid goal #{i} ({entry.get('id', '?')}): {e.error_count()} error(s)")
    return InMemoryGoalCatalog(goals)


# ============================================================
# Defaults
# ============================================================

DEFAULT_CATEGORIES: List[Dict[str, Any]] = [
    # Placeholder for freshly drawn regions
    {"id": "poly", "color_hex": "#808080", "unit_cost": 0, "income_percent": 0,
     "density_per_unit": 0, "livability_score": 5, "measurement_basis": "area"},

    # Infrastructure and nature
    {"id": "nature", "color_hex": "#008000", "unit_cost": 150, "income_percent": 0,
     "density_per_unit": 0, "livability_score": 10, "measurement_basis": "area"},
    {"id": "water", "color_hex": "#1E88E5", "unit_cost": 300, "income_percent": 0,
     "density_per_unit": 0, "livability_score": 7, "measurement_basis": "area"},
    {"id": "road", "color_hex": "#A9A9A9", "unit_cost": 100, "income_percent": 5,
     "density_per_unit": 0, "livability_score": 8, "measurement_basis": "area"},
    {"id": "parking space", "color_hex": "#78909C", "unit_cost": 100, "income_percent": 10,
     "density_per_unit": 0, "livability_score": 6, "measurement_basis": "area"},
    {"id": "covered parking space", "color_hex": "#8D6E63", "unit_cost": 1500, "income_percent": 15,
     "density_per_unit": 0, "livability_score": 10, "measurement_basis": "volume"},

    # Residential buildings
    {"id": "detached house", "color_hex": "#E53935", "unit_cost": 500, "income_percent": 12,
     "density_per_unit": 0.005, "livability_score": 4, "measurement_basis": "volume"},
    {"id": "townhouse", "color_hex": "#FB8C00", "unit_cost": 400, "income_percent": 8,
     "density_per_unit": 0.01, "livability_score": 6, "measurement_basis": "volume"},
    {"id": "apartment", "color_hex": "#8E24AA", "unit_cost": 300, "income_percent": 12,
     "density_per_unit": 0.006, "livability_score": 5, "measurement_basis": "volume"},

    # Commercial buildings
    {"id": "commercial building", "color_hex": "#039BE5", "unit_cost": 200, "income_percent": 15,
     "density_per_unit": 0.018, "livability_score": 2, "measurement_basis": "volume"},
]

DEFAULT_GOALS: List[Dict[str, Any]] = [
    {"id": "nature_min", "description": "Minimum 20% nature",
     "target_type": GoalTargetType.NATURE_PERCENTAGE, "target_value": 20.0, "comparison": "min"},
    {"id": "commercial_max", "description": "Maximum 15% commercial buildings",
     "target_type": GoalTargetType.COMMERCIAL_PERCENTAGE, "target_value": 15.0, "comparison": "max"},
    {"id": "residents_min", "description": "Minimum 3000 residents",
     "target_type": GoalTargetType.RESIDENTS_COUNT, "target_value": 3000.0, "comparison": "min"},
    {"id": "workers_min", "description": "Minimum 1000 workers",
     "target_type": GoalTargetType.WORKERS_COUNT, "target_value": 1000.0, "comparison": "min"},
    {"id": "parking_min", "description": "Minimum 4500 parking spaces",
     "target_type": GoalTargetType.PARKING_COUNT, "target_value": 4500.0, "comparison": "min"},
    {"id": "people_min", "description": "Minimum 4000 people in total",
     "target_type": GoalTargetType.PEOPLE_COUNT, "target_value": 4000.0, "comparison": "min",
     "enabled": False},
]


def default_category_catalog(config: Optional[EngineConfig] = None) -> InMemoryCategoryCatalog:
    """Standard planning categories; multi-level types get the stacked-levels rule"""
    config = config or get_config()
    multi_level = set(config.groups.multi_level)
    floor_height = config.geometry.floor_height_m

    categories = []
    for entry in DEFAULT_CATEGORIES:
        category = category_from_dict(entry)
        if category.id in multi_level:
            category = category.model_copy(update={"headcount_multiplier": stacked_levels(floor_height)})
        categories.append(category)
    return InMemoryCategoryCatalog(categories)


def default_goal_catalog() -> InMemoryGoalCatalog:
    return goal_catalog_from_dicts(DEFAULT_GOALS)
