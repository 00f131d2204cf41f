"""
Configuration settings for the occupancy and goal engine
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class GeometryConfig:
    """Numerical tolerances and fixed physical constants"""
    # Below this centroid magnitude the tangent frame is considered degenerate
    frame_epsilon: float = 1e-9

    # Projected area below this means the input was already local coordinates
    projection_fallback_epsilon: float = 1e-6

    # Stacked parking: one level per this many meters of height
    floor_height_m: float = 5.0

    # Width used for corridors (roads, paths) when none is given
    default_corridor_width_m: float = 3.0


@dataclass
class CategoryGroups:
    """Which category ids feed which derived goal metric"""
    nature: str = "nature"
    commercial: str = "commercial building"

    # Footprint of green-roof style overlay features is credited here
    overlay_target: str = "nature"

    # Synthetic keys in the occupancy breakdown
    unoccupied: str = "unoccupied"
    uncategorized: str = "unknown"

    residential: List[str] = field(default_factory=lambda: [
        "detached house",
        "townhouse",
        "apartment",
    ])

    # Buildings only: nature, water, roads and open parking are excluded
    buildings: List[str] = field(default_factory=lambda: [
        "detached house",
        "townhouse",
        "apartment",
        "commercial building",
        "covered parking space",
    ])

    parking: List[str] = field(default_factory=lambda: [
        "parking space",
        "covered parking space",
    ])

    # Categories whose headcount scales with the number of stacked levels
    multi_level: List[str] = field(default_factory=lambda: [
        "parking space",
        "covered parking space",
    ])


@dataclass
class EngineConfig:
    """Engine configuration"""
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    groups: CategoryGroups = field(default_factory=CategoryGroups)

    # Worker threads for the per-candidate map step (1 = sequential)
    max_workers: int = 1


# Global config instance
config = EngineConfig()


def get_config() -> EngineConfig:
    """Get global configuration"""
    return config


def validate_config(config: EngineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.geometry is None:
        errors.append("geometry configuration is required but not set")
    else:
        geo = config.geometry
        if geo.frame_epsilon is None or geo.frame_epsilon <= 0:
            errors.append(f"geometry.frame_epsilon must be positive, got {geo.frame_epsilon}")
        if geo.projection_fallback_epsilon is None or geo.projection_fallback_epsilon <= 0:
            errors.append(
                f"geometry.projection_fallback_epsilon must be positive, "
                f"got {geo.projection_fallback_epsilon}"
            )
        if geo.floor_height_m is None or geo.floor_height_m <= 0:
            errors.append(f"geometry.floor_height_m must be positive, got {geo.floor_height_m}")
        if geo.default_corridor_width_m is None or geo.default_corridor_width_m < 0:
            errors.append(
                f"geometry.default_corridor_width_m must not be negative, "
                f"got {geo.default_corridor_width_m}"
            )

    if config.groups is None:
        errors.append("groups configuration is required but not set")
    else:
        groups = config.groups
        for name in ("nature", "commercial", "overlay_target", "unoccupied", "uncategorized"):
            if not getattr(groups, name, None):
                errors.append(f"groups.{name} is required but not set")
        if groups.commercial and groups.commercial not in groups.buildings:
            errors.append(f"groups.buildings must include the commercial category '{groups.commercial}'")

    if config.max_workers is None or config.max_workers < 1:
        errors.append(f"max_workers must be at least 1, got {config.max_workers}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
