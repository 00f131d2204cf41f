"""Tests for configuration validation and the engine facade."""

import pytest

from plantwin import (
    EngineConfig, Goal, GoalTargetType, InMemoryGoalCatalog, PlanningEngine, Region,
    default_goal_catalog, get_config, validate_config
)
from plantwin.config import CategoryGroups, GeometryConfig


class TestConfig:

    def test_defaults_are_valid(self):
        validate_config(EngineConfig())

    def test_global_config(self):
        assert get_config().geometry.floor_height_m == 5.0
        assert get_config().groups.nature == "nature"

    def test_all_errors_are_reported(self):
        config = EngineConfig(
            geometry=GeometryConfig(frame_epsilon=0, floor_height_m=-1),
            max_workers=0,
        )
        with pytest.raises(ValueError) as exc_info:
            validate_config(config)

        message = str(exc_info.value)
        assert "frame_epsilon" in message
        assert "floor_height_m" in message
        assert "max_workers" in message

    def test_commercial_must_be_a_building(self):
        config = EngineConfig(groups=CategoryGroups(buildings=["apartment"]))
        with pytest.raises(ValueError, match="commercial"):
            validate_config(config)

    def test_missing_group_name(self):
        with pytest.raises(ValueError, match="groups.nature"):
            validate_config(EngineConfig(groups=CategoryGroups(nature="")))


class TestPlanningEngine:

    def test_invalid_config_is_rejected(self, categories):
        with pytest.raises(ValueError):
            PlanningEngine(categories, config=EngineConfig(max_workers=0))

    def test_compute_area_volume(self, categories, rect):
        result = PlanningEngine(categories).compute_area_volume(rect(0, 0, 10, 10, height=5))

        assert result.area == pytest.approx(100.0)
        assert result.volume == pytest.approx(500.0)

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_compute_area_volume_of_degenerate_corridor(self, categories, count):
        corridor = Region(vertices=[(0, 0), (100, 0)][:count], area_override=300.0, height=2.0)
        result = PlanningEngine(categories).compute_area_volume(corridor)

        assert result.area == 0.0
        assert result.volume is None

    def test_compute_occupancy(self, categories, boundary, rect):
        engine = PlanningEngine(categories)
        breakdown = engine.compute_occupancy(boundary, [rect(10, 10, 30, 20, height=10, category="apartment")])

        assert breakdown.occupied_percent == pytest.approx(2.0)
        assert breakdown.get("apartment").headcount == pytest.approx(12.0)

    def test_check_goals(self, categories, boundary, rect):
        engine = PlanningEngine(categories, default_goal_catalog())
        candidates = [
            rect(0, 0, 50, 50, category="nature"),
            rect(60, 60, 90, 90, height=30, category="apartment"),
            rect(60, 10, 70, 20, height=10, category="commercial building"),
        ]
        results = {r.goal_id: r for r in engine.check_goals(boundary, candidates)}

        assert set(results) == {"nature_min", "commercial_max", "residents_min", "workers_min", "parking_min"}
        assert results["nature_min"].achieved
        assert results["nature_min"].current_value == pytest.approx(25.0)
        # 100 m² commercial of 1000 m² buildings
        assert results["commercial_max"].current_value == pytest.approx(10.0)
        assert results["commercial_max"].achieved
        assert results["residents_min"].current_value == pytest.approx(0.006 * 27000)
        assert not results["residents_min"].achieved
        assert results["workers_min"].current_value == pytest.approx(0.018 * 1000)
        assert results["parking_min"].current_value == 0.0

    def test_check_goals_uses_only_enabled_goals(self, categories, boundary):
        goals = InMemoryGoalCatalog([
            Goal(id="nature", target_type=GoalTargetType.NATURE_PERCENTAGE, target_value=0),
            Goal(id="off", target_type=GoalTargetType.WORKERS_COUNT, target_value=0, enabled=False),
        ])
        results = PlanningEngine(categories, goals).check_goals(boundary, [])

        assert [r.goal_id for r in results] == ["nature"]
        assert results[0].achieved

    def test_no_goal_catalog(self, categories, boundary):
        assert PlanningEngine(categories).check_goals(boundary, []) == []

    def test_parallel_config(self, categories, boundary, rect):
        candidates = [rect(i * 10, 0, i * 10 + 5, 5, category="nature") for i in range(8)]
        sequential = PlanningEngine(categories).compute_occupancy(boundary, candidates)
        parallel = PlanningEngine(categories, config=EngineConfig(max_workers=3)).compute_occupancy(
            boundary, candidates
        )

        assert parallel == sequential
        assert parallel.get("nature").area == pytest.approx(200.0)

    def test_metrics(self, categories, rect):
        engine = PlanningEngine(categories)

        assert engine.region_metrics(rect(0, 0, 10, 10, height=10, category="apartment")).cost == pytest.approx(300000.0)
        assert engine.corridor_metrics(100.0, "road").cost == pytest.approx(30000.0)
