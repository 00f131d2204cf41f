"""
Containment of candidate regions within a boundary region
"""

from typing import Sequence

from loguru import logger

from ..models import Region, Vertex
from .geometry_utils import GeometryUtils


class ContainmentTester:
    """
    Whole-region containment on the local x/y plane

    A candidate only counts as inside when every one of its vertices is
    inside the boundary. Partial overlap is treated as fully outside; there
    is no clipping. The z component is ignored.
    """

    def point_inside(self, vertex: Vertex, boundary: Sequence[Vertex]) -> bool:
        return GeometryUtils.point_in_polygon(vertex.x, vertex.y, GeometryUtils.raw_xy(boundary))

    def contains(self, boundary: Region, candidate: Region) -> bool:
        if not candidate.vertices:
            return False
        if len(boundary.vertices) < 3:
            return False

        polygon = GeometryUtils.raw_xy(boundary.vertices)
        for vertex in candidate.vertices:
            if not GeometryUtils.point_in_polygon(vertex.x, vertex.y, polygon):
                logger.debug(
                    f"Region {candidate.label()} has vertex ({vertex.x}, {vertex.y}) "
                    f"outside the boundary"
                )
                return False
        return True
