"""
Goal evaluation against an occupancy breakdown
"""

from typing import Callable, Dict, Iterable, List, Optional

from loguru import logger

from ..config import CategoryGroups, EngineConfig, get_config
from ..models import Comparison, Goal, GoalResult, GoalTargetType, OccupancyBreakdown

MetricFunction = Callable[[OccupancyBreakdown, CategoryGroups], float]


def _area(breakdown: OccupancyBreakdown, category_id: str) -> float:
    entry = breakdown.get(category_id)
    return entry.area if entry else 0.0


def _headcount(breakdown: OccupancyBreakdown, category_ids: Iterable[str]) -> float:
    total = 0.0
    for category_id in category_ids:
        entry = breakdown.get(category_id)
        if entry:
            total += entry.headcount
    return total


def nature_percentage(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    entry = breakdown.get(groups.nature)
    return entry.percent if entry else 0.0


def commercial_percentage(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    """Commercial share of the building footprint (not of the whole boundary)"""
    building_area = sum(_area(breakdown, category_id) for category_id in groups.buildings)
    if building_area <= 0:
        return 0.0
    return 100.0 * _area(breakdown, groups.commercial) / building_area


def residents_count(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    return _headcount(breakdown, groups.residential)


def workers_count(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    return _headcount(breakdown, [groups.commercial])


def parking_count(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    return _headcount(breakdown, groups.parking)


def people_count(breakdown: OccupancyBreakdown, groups: CategoryGroups) -> float:
    return _headcount(breakdown, breakdown.per_category.keys())


METRICS: Dict[GoalTargetType, MetricFunction] = {
    GoalTargetType.NATURE_PERCENTAGE: nature_percentage,
    GoalTargetType.COMMERCIAL_PERCENTAGE: commercial_percentage,
    GoalTargetType.RESIDENTS_COUNT: residents_count,
    GoalTargetType.WORKERS_COUNT: workers_count,
    GoalTargetType.PARKING_COUNT: parking_count,
    GoalTargetType.PEOPLE_COUNT: people_count,
}

_missing = set(GoalTargetType) - set(METRICS)
if _missing:
    raise RuntimeError(f"No metric registered for goal types: {sorted(t.value for t in _missing)}")


def is_achieved(current_value: float, target_value: float, comparison: Optional[Comparison]) -> bool:
    if comparison == Comparison.MIN:
        return current_value >= target_value
    if comparison == Comparison.MAX:
        return current_value <= target_value
    return False


class GoalEvaluator:
    """Compute each enabled goal's current value and whether it is met"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()

    def current_value(self, breakdown: OccupancyBreakdown, target_type: GoalTargetType) -> float:
        return METRICS[target_type](breakdown, self.config.groups)

    def evaluate_goal(self, breakdown: OccupancyBreakdown, goal: Goal) -> GoalResult:
        current = self.current_value(breakdown, goal.target_type)

        comparison = Comparison.parse(goal.comparison)
        if comparison is None:
            logger.warning(
                f"Goal '{goal.id}' has unrecognized comparison '{goal.comparison}', "
                f"reporting it as not achieved"
            )

        return GoalResult(
            goal_id=goal.id,
            description=goal.description,
            achieved=is_achieved(current, goal.target_value, comparison),
            current_value=current,
            target_value=goal.target_value,
            comparison=goal.comparison,
        )

    def evaluate(self, breakdown: OccupancyBreakdown, goals: Iterable[Goal]) -> List[GoalResult]:
        results = []
        for goal in goals:
            if not goal.enabled:
                continue
            result = self.evaluate_goal(breakdown, goal)
            logger.debug(
                f"Goal {goal.id}: {result.current_value:.2f} {goal.comparison} "
                f"{goal.target_value:.2f} -> {'achieved' if result.achieved else 'not achieved'}"
            )
            results.append(result)

        achieved = sum(1 for r in results if r.achieved)
        logger.info(f"Goals achieved: {achieved}/{len(results)}")
        return results
