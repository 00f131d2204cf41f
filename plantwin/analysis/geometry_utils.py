"""
Geometry utilities for planar polygon calculations
"""

import math
from typing import Sequence, Tuple

from ..models import Vertex

Point2D = Tuple[float, float]


class GeometryUtils:
    """Utility functions for geometric operations on closed vertex loops"""

    @staticmethod
    def shoelace_area(coords: Sequence[Point2D]) -> float:
        """Calculate polygon area from 2D coordinates (implicitly closed)"""
        if len(coords) < 3:
            return 0.0

        n = len(coords)
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += coords[i][0] * coords[j][1]
            area -= coords[j][0] * coords[i][1]

        return abs(area) / 2.0

    @staticmethod
    def raw_xy(vertices: Sequence[Vertex]) -> list:
        """Drop z and use the vertices as plane coordinates"""
        return [(v.x, v.y) for v in vertices]

    @staticmethod
    def polygon_perimeter(coords: Sequence[Point2D]) -> float:
        """Calculate closed polygon perimeter"""
        if len(coords) < 2:
            return 0.0

        perimeter = 0.0
        n = len(coords)
        for i in range(n):
            j = (i + 1) % n
            dx = coords[j][0] - coords[i][0]
            dy = coords[j][1] - coords[i][1]
            perimeter += math.sqrt(dx*dx + dy*dy)

        return perimeter

    @staticmethod
    def point_in_polygon(x: float, y: float, polygon: Sequence[Point2D]) -> bool:
        """
        Ray casting point-in-polygon test

        Casts a ray towards +x and toggles on every edge whose y-span
        straddles the point and whose crossing lies right of the point.
        For an axis-aligned rectangle, points on the left or bottom edge
        count as inside and points on the right or top edge as outside.
        """
        n = len(polygon)
        inside = False

        for i in range(n):
            xi, yi = polygon[i]
            xj, yj = polygon[(i + 1) % n]

            if (yi > y) != (yj > y):
                x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
                if x < x_cross:
                    inside = not inside

        return inside
