"""
Per-region planning metrics: cost, income, headcount and livability
"""

from typing import Optional

from loguru import logger

from ..catalog import CategoryCatalog
from ..config import EngineConfig, get_config
from ..models import Category, MeasurementBasis, Region, RegionMetrics
from .area_calculator import AreaVolumeCalculator


class RegionMetricsCalculator:
    """
    Metrics for a single drawn region or corridor

    Cost scales with the category's measurement (area or volume), income is
    a percentage of cost, and livability is the category's fixed score.
    """

    NO_CATEGORY = "none"

    def __init__(
        self,
        categories: CategoryCatalog,
        config: Optional[EngineConfig] = None,
        calculator: Optional[AreaVolumeCalculator] = None
    ):
        self.categories = categories
        self.config = config or get_config()
        self.calculator = calculator or AreaVolumeCalculator(self.config.geometry)

    def for_region(
        self,
        region: Region,
        area: Optional[float] = None,
        volume: Optional[float] = None
    ) -> RegionMetrics:
        """
        Args:
            region: Region with category and optional height
            area: Pre-computed area; computed from the region when omitted
            volume: Pre-computed volume; derived from area and height when omitted
        """
        category_id = region.category
        if not category_id or category_id == self.NO_CATEGORY:
            logger.info(f"Region {region.label()} has no category")
            return RegionMetrics(basis=self.NO_CATEGORY)

        category = self.categories.lookup(category_id)
        if category is None:
            logger.warning(f"Category not found: {category_id}")
            return RegionMetrics(basis="unknown")

        if area is None:
            area = self.calculator.effective_area(region)
        if volume is None:
            volume = self.calculator.volume(region, area)

        # Height follows from the measurements when the caller supplied them
        height = region.extrusion_height
        if height is None and volume and area:
            height = volume / area

        return self._metrics(category, area, volume, height)

    def for_corridor(
        self,
        length: float,
        category_id: Optional[str],
        width: Optional[float] = None
    ) -> RegionMetrics:
        """Corridors (roads, paths) are always measured by area = length x width"""
        if not category_id or category_id == self.NO_CATEGORY:
            return RegionMetrics(basis=self.NO_CATEGORY)

        category = self.categories.lookup(category_id)
        if category is None:
            logger.warning(f"Category not found: {category_id}")
            return RegionMetrics(basis="unknown")

        area = self.calculator.corridor_area(length, width)
        cost = category.unit_cost * area
        return RegionMetrics(
            cost=cost,
            income=cost * category.income_percent / 100.0,
            headcount=category.density_per_unit * area,
            livability=category.livability_score,
            measurement=area,
            basis=MeasurementBasis.AREA.value,
        )

    def _metrics(
        self,
        category: Category,
        area: float,
        volume: Optional[float],
        height: Optional[float]
    ) -> RegionMetrics:
        measurement, basis = category.measurement_for(area, volume)
        cost = category.unit_cost * measurement

        metrics = RegionMetrics(
            cost=cost,
            income=cost * category.income_percent / 100.0,
            headcount=category.headcount_for(area, volume, height),
            livability=category.livability_score,
            measurement=measurement,
            basis=basis.value,
        )
        logger.debug(
            f"Metrics for {category.id}: cost={metrics.cost:.2f}, income={metrics.income:.2f}, "
            f"headcount={metrics.headcount:.2f}, base={metrics.basis}"
        )
        return metrics
