"""Shared fixtures for the engine tests."""

import numpy as np
import pytest

from plantwin import (
    Category, EngineConfig, InMemoryCategoryCatalog, MeasurementBasis, Region, Vertex,
    default_category_catalog, stacked_levels
)

EARTH_RADIUS = 6_371_000.0


def _rect(x0, y0, x1, y1, z=0.0, **kwargs):
    return Region(
        vertices=[(x0, y0, z), (x1, y0, z), (x1, y1, z), (x0, y1, z)],
        **kwargs
    )


@pytest.fixture
def rect():
    """Axis-aligned rectangle factory: rect(x0, y0, x1, y1, height=..., category=...)"""
    return _rect


def _tangent_square(side=10.0):
    """Square of `side` meters lying in the tangent plane of a point on the Earth's surface"""
    up = np.array([4.0, 3.0, 5.0])
    up /= np.linalg.norm(up)
    anchor = up * EARTH_RADIUS
    east = np.array([-up[1], up[0], 0.0])
    east /= np.linalg.norm(east)
    north = np.cross(up, east)
    north /= np.linalg.norm(north)

    corners = [(0, 0), (side, 0), (side, side), (0, side)]
    return [Vertex(**dict(zip("xyz", anchor + e * east + n * north))) for e, n in corners]


@pytest.fixture
def tangent_square():
    return _tangent_square


@pytest.fixture
def boundary():
    """100 x 100 m planning boundary (10000 m²)"""
    return _rect(0, 0, 100, 100, id="boundary")


@pytest.fixture
def config():
    return EngineConfig()


@pytest.fixture
def categories():
    return default_category_catalog()


@pytest.fixture
def parking_catalog():
    """Catalog with a parking type that has a non-zero density"""
    return InMemoryCategoryCatalog([
        Category(
            id="covered parking space",
            unit_cost=1500,
            income_percent=15,
            density_per_unit=0.01,
            livability_score=10,
            measurement_basis=MeasurementBasis.AREA,
            headcount_multiplier=stacked_levels(5.0),
        ),
        Category(
            id="parking space",
            density_per_unit=0.04,
            measurement_basis=MeasurementBasis.AREA,
            headcount_multiplier=stacked_levels(5.0),
        ),
    ])
