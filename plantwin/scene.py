"""
JSON scene files: a boundary, the drawn regions and optional catalogs

Example:
    {
      "boundary": {"vertices": [[0, 0], [100, 0], [100, 100], [0, 100]]},
      "candidates": [
        {"id": "a1", "category": "apartment", "height": 10,
         "vertices": [[10, 10], [30, 10], [30, 20], [10, 20]]}
      ],
      "categories": [...],   # optional, defaults to the standard catalog
      "goals": [...]         # optional, defaults to the standard goals
    }
"""

import json
import os
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from .catalog import (
    InMemoryCategoryCatalog, InMemoryGoalCatalog,
    category_catalog_from_dicts, default_category_catalog,
    default_goal_catalog, goal_catalog_from_dicts
)
from .config import EngineConfig
from .models import Region


class Scene(BaseModel):
    boundary: Region
    candidates: List[Region] = Field(default_factory=list)
    categories: Optional[List[Dict[str, Any]]] = None
    goals: Optional[List[Dict[str, Any]]] = None

    def category_catalog(self, config: Optional[EngineConfig] = None) -> InMemoryCategoryCatalog:
        if self.categories is None:
            return default_category_catalog(config)
        return category_catalog_from_dicts(self.categories)

    def goal_catalog(self) -> InMemoryGoalCatalog:
        if self.goals is None:
            return default_goal_catalog()
        return goal_catalog_from_dicts(self.goals)


def load_scene(path: str) -> Scene:
    """Load and validate a scene file (raises ValidationError on bad content)"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    scene = Scene.model_validate(data)
    logger.info(f"Loaded scene {path}: {len(scene.candidates)} regions")
    return scene


def save_result(result: Any, output_path: str) -> str:
    """Save a model (or list of models) to a JSON file"""
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(to_jsonable(result), f, indent=2, ensure_ascii=False)

    logger.info(f"Saved result to {output_path}")
    return output_path


def to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json")
    if isinstance(result, list):
        return [to_jsonable(item) for item in result]
    if isinstance(result, dict):
        return {key: to_jsonable(value) for key, value in result.items()}
    return result
