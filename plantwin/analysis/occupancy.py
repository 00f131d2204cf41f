"""
Occupancy aggregation: how much of a boundary is used, and by what

Each candidate region that lies wholly inside the boundary contributes its
area, extruded volume and headcount to its category. Contributions are
computed independently (map) and then summed per category (reduce), so the
map step can run on a thread pool without shared mutable state.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from ..catalog import CategoryCatalog
from ..config import EngineConfig, get_config
from ..models import CategoryOccupation, OccupancyBreakdown, Region
from .area_calculator import AreaVolumeCalculator
from .containment import ContainmentTester


@dataclass(frozen=True)
class RegionContribution:
    """What one contained candidate adds to its category"""
    category: str
    area: float
    volume: Optional[float]
    headcount: float
    overlay_area: float = 0.0
    known_category: bool = True


@dataclass
class _CategoryTotals:
    area: float = 0.0
    volume: Optional[float] = None
    headcount: float = 0.0

    def add(self, contribution: RegionContribution) -> None:
        self.area += contribution.area
        self.headcount += contribution.headcount
        if contribution.volume is not None:
            self.volume = (self.volume or 0.0) + contribution.volume


class OccupancyAggregator:
    """
    Sum occupied area, volume and headcount per category within a boundary

    Overlay features (e.g. green roofs) keep counting towards their own
    category's footprint; their area is additionally credited to the
    overlay target category (nature) as bookkeeping for goals. It is never
    subtracted from the primary category.
    """

    def __init__(
        self,
        categories: CategoryCatalog,
        config: Optional[EngineConfig] = None,
        calculator: Optional[AreaVolumeCalculator] = None,
        containment: Optional[ContainmentTester] = None
    ):
        self.categories = categories
        self.config = config or get_config()
        self.groups = self.config.groups
        self.calculator = calculator or AreaVolumeCalculator(self.config.geometry)
        self.containment = containment or ContainmentTester()

    def aggregate(
        self,
        boundary: Region,
        candidates: Iterable[Region],
        max_workers: Optional[int] = None
    ) -> OccupancyBreakdown:
        boundary_area = self.calculator.area(boundary)
        if boundary_area <= 0:
            logger.warning("Boundary has no area, occupancy is empty")
            return self.empty()

        candidates = list(candidates or [])
        contributions = self._map(boundary, candidates, max_workers)
        totals, occupied_area, overlay_area = self._reduce(contributions)

        # Overlay area is extra bookkeeping on top of the footprint pass
        if overlay_area > 0:
            target = totals.setdefault(self.groups.overlay_target, _CategoryTotals())
            target.area += overlay_area
            logger.debug(
                f"Credited {overlay_area:.2f} m² of overlay features to '{self.groups.overlay_target}'"
            )

        per_category: Dict[str, CategoryOccupation] = {}
        for category_id, total in totals.items():
            per_category[category_id] = CategoryOccupation(
                area=total.area,
                volume=total.volume,
                percent=100.0 * total.area / boundary_area,
                headcount=total.headcount,
            )

        unoccupied_area = boundary_area - occupied_area
        if unoccupied_area < 0:
            logger.warning(
                f"Occupied area {occupied_area:.2f} m² exceeds boundary area {boundary_area:.2f} m² "
                f"(overlapping regions?)"
            )
        per_category[self.groups.unoccupied] = CategoryOccupation(
            area=unoccupied_area,
            percent=100.0 * unoccupied_area / boundary_area,
        )

        occupied_percent = 100.0 * occupied_area / boundary_area
        inside = sum(1 for c in contributions if c is not None)
        logger.info(
            f"Occupancy: {occupied_area:.1f} of {boundary_area:.1f} m² ({occupied_percent:.1f}%), "
            f"{inside}/{len(candidates)} regions inside boundary"
        )

        return OccupancyBreakdown(
            boundary_area=boundary_area,
            occupied_area=occupied_area,
            occupied_percent=occupied_percent,
            per_category=per_category,
            unoccupied_key=self.groups.unoccupied,
        )

    def contribution(self, boundary: Region, candidate: Region) -> Optional[RegionContribution]:
        """Contribution of a single candidate, or None if it is not wholly inside"""
        if not self.containment.contains(boundary, candidate):
            return None

        area = self.calculator.effective_area(candidate)
        height = candidate.extrusion_height
        volume = area * height if height is not None else None

        category_id = candidate.category or self.groups.uncategorized
        category = self.categories.lookup(category_id)
        if category is None:
            headcount = 0.0
        else:
            headcount = category.headcount_for(area, volume, height)

        return RegionContribution(
            category=category_id,
            area=area,
            volume=volume,
            headcount=headcount,
            overlay_area=area if candidate.has_overlay_feature else 0.0,
            known_category=category is not None,
        )

    def empty(self) -> OccupancyBreakdown:
        return OccupancyBreakdown(
            per_category={self.groups.unoccupied: CategoryOccupation()},
            unoccupied_key=self.groups.unoccupied,
        )

    def _map(
        self,
        boundary: Region,
        candidates: List[Region],
        max_workers: Optional[int]
    ) -> List[Optional[RegionContribution]]:
        workers = max_workers or self.config.max_workers
        if workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() keeps input order, so the reduction is deterministic
                return list(executor.map(lambda c: self.contribution(boundary, c), candidates))
        return [self.contribution(boundary, c) for c in candidates]

    def _reduce(
        self,
        contributions: List[Optional[RegionContribution]]
    ) -> Tuple[Dict[str, _CategoryTotals], float, float]:
        totals: Dict[str, _CategoryTotals] = {}
        occupied_area = 0.0
        overlay_area = 0.0
        unknown = set()

        for contribution in contributions:
            if contribution is None:
                continue
            totals.setdefault(contribution.category, _CategoryTotals()).add(contribution)
            occupied_area += contribution.area
            overlay_area += contribution.overlay_area
            if not contribution.known_category:
                unknown.add(contribution.category)

        for category_id in sorted(unknown):
            logger.warning(f"Category '{category_id}' not in catalog, headcount counted as 0")

        return totals, occupied_area, overlay_area
