"""
Analysis modules for the occupancy and goal engine
"""

from .geometry_utils import GeometryUtils
from .projector import TangentPlaneProjector, LocalFrame, ProjectedLoop
from .area_calculator import AreaVolumeCalculator
from .containment import ContainmentTester
from .occupancy import OccupancyAggregator, RegionContribution
from .goals import GoalEvaluator
from .metrics import RegionMetricsCalculator

__all__ = [
    "GeometryUtils",
    "TangentPlaneProjector",
    "LocalFrame",
    "ProjectedLoop",
    "AreaVolumeCalculator",
    "ContainmentTester",
    "OccupancyAggregator",
    "RegionContribution",
    "GoalEvaluator",
    "RegionMetricsCalculator",
]
