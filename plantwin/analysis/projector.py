"""
Tangent-plane projection of geocentric vertex loops

Builds a local East-North-Up frame at the loop's vertex centroid so that
city-block sized polygons can be measured on a flat plane.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from loguru import logger

from ..config import GeometryConfig, get_config
from ..models import Vertex


@dataclass(frozen=True)
class LocalFrame:
    """East-North-Up axes anchored at `origin`"""
    origin: np.ndarray
    east: np.ndarray
    north: np.ndarray
    up: np.ndarray
    degenerate: bool = False


@dataclass(frozen=True)
class ProjectedLoop:
    """Local coordinates of every vertex, in input order"""
    east: np.ndarray
    north: np.ndarray
    up: np.ndarray
    frame: LocalFrame

    def planar(self) -> list:
        return list(zip(self.east.tolist(), self.north.tolist()))


class TangentPlaneProjector:
    """
    Project 3D vertex loops onto the tangent plane at their centroid

    The "up" axis is the normalized centroid (radial direction), "east" is
    perpendicular to it within the global XY plane and "north" completes the
    frame. Near-zero centroids (already-local test coordinates) give a
    degenerate frame whose projection is all zeros; callers detect that via
    the resulting zero area rather than an exception.
    """

    def __init__(self, geometry: Optional[GeometryConfig] = None):
        self.geometry = geometry or get_config().geometry

    def frame_for(self, vertices: Sequence[Vertex]) -> LocalFrame:
        points = np.array([[v.x, v.y, v.z] for v in vertices], dtype=float)
        origin = points.mean(axis=0)
        eps = self.geometry.frame_epsilon

        length = np.linalg.norm(origin)
        if length < eps:
            logger.debug("Centroid at the frame origin, tangent frame is degenerate")
            return self._degenerate(origin)

        up = origin / length

        east = np.array([-up[1], up[0], 0.0])
        east_length = np.linalg.norm(east)
        if east_length < eps:
            # Centroid on the z axis: east is undefined
            logger.debug("Centroid on the polar axis, tangent frame is degenerate")
            return self._degenerate(origin)
        east = east / east_length

        north = np.cross(up, east)
        north = north / np.linalg.norm(north)

        return LocalFrame(origin=origin, east=east, north=north, up=up)

    def project(self, vertices: Sequence[Vertex]) -> ProjectedLoop:
        frame = self.frame_for(vertices)
        offsets = np.array([[v.x, v.y, v.z] for v in vertices], dtype=float) - frame.origin

        return ProjectedLoop(
            east=offsets @ frame.east,
            north=offsets @ frame.north,
            up=offsets @ frame.up,
            frame=frame,
        )

    @staticmethod
    def _degenerate(origin: np.ndarray) -> LocalFrame:
        zero = np.zeros(3)
        return LocalFrame(origin=origin, east=zero, north=zero, up=zero, degenerate=True)
