"""
Engine facade for the occupancy and goal calculations

Wires the analysis components together behind the three calls the request
layer needs:

  1. compute_area_volume  - single region edit
  2. compute_occupancy    - full scene recomputation
  3. check_goals          - goal dashboard refresh (runs compute_occupancy)

Catalogs are injected read-only collaborators; the engine keeps no state
between calls.
"""

from typing import Iterable, List, Optional

from loguru import logger

from .analysis import (
    AreaVolumeCalculator, ContainmentTester, GoalEvaluator,
    OccupancyAggregator, RegionMetricsCalculator, TangentPlaneProjector
)
from .catalog import CategoryCatalog, GoalCatalog, InMemoryGoalCatalog
from .config import EngineConfig, get_config, validate_config
from .models import AreaVolume, GoalResult, OccupancyBreakdown, Region, RegionMetrics


class PlanningEngine:
    """
    Occupancy and goal engine

    Usage:
        engine = PlanningEngine(default_category_catalog(), default_goal_catalog())
        breakdown = engine.compute_occupancy(boundary, regions)
        results = engine.check_goals(boundary, regions)
    """

    def __init__(
        self,
        categories: CategoryCatalog,
        goals: Optional[GoalCatalog] = None,
        config: Optional[EngineConfig] = None
    ):
        self.config = config or get_config()
        validate_config(self.config)

        self.categories = categories
        self.goals = goals if goals is not None else InMemoryGoalCatalog()

        geometry = self.config.geometry
        self.calculator = AreaVolumeCalculator(geometry, TangentPlaneProjector(geometry))
        self.containment = ContainmentTester()
        self.aggregator = OccupancyAggregator(
            categories, self.config, calculator=self.calculator, containment=self.containment
        )
        self.evaluator = GoalEvaluator(self.config)
        self.metrics = RegionMetricsCalculator(categories, self.config, calculator=self.calculator)

    def compute_area_volume(self, region: Region) -> AreaVolume:
        return self.calculator.compute(region)

    def compute_occupancy(
        self,
        boundary: Region,
        candidates: Iterable[Region],
        max_workers: Optional[int] = None
    ) -> OccupancyBreakdown:
        return self.aggregator.aggregate(boundary, candidates, max_workers=max_workers)

    def check_goals(
        self,
        boundary: Region,
        candidates: Iterable[Region],
        max_workers: Optional[int] = None
    ) -> List[GoalResult]:
        breakdown = self.compute_occupancy(boundary, candidates, max_workers=max_workers)
        goals = self.goals.list_enabled()
        if not goals:
            logger.info("No enabled goals to check")
        return self.evaluator.evaluate(breakdown, goals)

    def region_metrics(self, region: Region) -> RegionMetrics:
        return self.metrics.for_region(region)

    def corridor_metrics(
        self,
        length: float,
        category_id: Optional[str],
        width: Optional[float] = None
    ) -> RegionMetrics:
        return self.metrics.for_corridor(length, category_id, width)
