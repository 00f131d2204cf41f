"""
Planar area and extruded volume of regions
"""

from typing import Optional

from loguru import logger

from ..config import GeometryConfig, get_config
from ..models import AreaVolume, Region
from .geometry_utils import GeometryUtils
from .projector import TangentPlaneProjector


class AreaVolumeCalculator:
    """
    Area (m²) via tangent-plane projection + shoelace, volume by extrusion

    Production inputs are geocentric, so the projected area is used. Test and
    sketch inputs in small local coordinates project to (almost) nothing; for
    those the shoelace formula is applied directly to the raw x/y components.
    """

    def __init__(
        self,
        geometry: Optional[GeometryConfig] = None,
        projector: Optional[TangentPlaneProjector] = None
    ):
        self.geometry = geometry or get_config().geometry
        self.projector = projector or TangentPlaneProjector(self.geometry)

    def area(self, region: Region) -> float:
        """Geometric footprint area; `area_override` is not consulted"""
        vertices = region.vertices
        if len(vertices) < 3:
            return 0.0

        projected = self.projector.project(vertices)
        area = GeometryUtils.shoelace_area(projected.planar())

        if area < self.geometry.projection_fallback_epsilon:
            raw = GeometryUtils.raw_xy(vertices)
            area = GeometryUtils.shoelace_area(raw)
            if area == 0.0 and GeometryUtils.polygon_perimeter(raw) == 0.0:
                logger.debug(f"Region {region.label()} collapses to a point")

        return area

    def effective_area(self, region: Region) -> float:
        """
        Area used for occupancy and metrics

        A pre-computed `area_override` (corridor length x width) replaces the
        geometric area; corridors are drawn as polylines with no footprint.
        """
        if region.area_override is not None and region.area_override >= 0:
            return float(region.area_override)
        return self.area(region)

    def volume(self, region: Region, area: Optional[float] = None) -> Optional[float]:
        """Extruded volume, or None when no positive height was given"""
        height = region.extrusion_height
        if height is None:
            return None
        if area is None:
            area = self.area(region)
        return area * height

    def compute(self, region: Region) -> AreaVolume:
        if len(region.vertices) < 3:
            return AreaVolume(area=0.0, volume=None, height=region.height)

        area = self.area(region)
        return AreaVolume(
            area=area,
            volume=self.volume(region, area),
            height=region.height,
        )

    def corridor_area(self, length: float, width: Optional[float] = None) -> float:
        """Area of a linear feature (road, path) from its length and width"""
        if width is None:
            width = self.geometry.default_corridor_width_m
        if length is None or length <= 0 or width <= 0:
            return 0.0
        return length * width
