# -*- coding: utf-8 -*-
"""Foods — read-only catalog backed by a JSON document seeded on first access."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..config import StoreConfig
from ..documents import Document, JsonFileDocument
from ..errors import StorageReadFailure
from .models import FoodItem

logger = logging.getLogger(__name__)

SEED_FOODS: List[Dict[str, Any]] = [
    {"id": 1, "name": "Apple", "calories": 95, "protein": 0.5, "carbs": 25, "fats": 0.3},
    {"id": 2, "name": "Egg", "calories": 70, "protein": 6, "carbs": 1, "fats": 5},
    {"id": 3, "name": "Chicken Breast (100g)", "calories": 165, "protein": 31, "carbs": 0, "fats": 3.6},
    {"id": 4, "name": "Rice (1 cup)", "calories": 200, "protein": 4, "carbs": 45, "fats": 0.5},
]


def seed_foods() -> List[Dict[str, Any]]:
    return [dict(item) for item in SEED_FOODS]


def parse_foods(raw: Any) -> List[FoodItem]:
    if not isinstance(raw, list):
        raise StorageReadFailure(
            f"Food document must be a list, got {type(raw).__name__}", parse_error=True
        )
    try:
        return [FoodItem.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise StorageReadFailure(f"Malformed food item: {exc}", parse_error=True) from exc


class FoodCatalog:
    def __init__(self, document: Document) -> None:
        self.document = document

    @classmethod
    def from_config(cls, config: StoreConfig) -> "FoodCatalog":
        return cls(JsonFileDocument(config.foods_file, default_factory=seed_foods))

    def list_foods(self) -> List[FoodItem]:
        """Re-read the catalog; raises StorageReadFailure if it cannot be read or parsed."""
        try:
            return parse_foods(self.document.read_all())
        except StorageReadFailure as exc:
            logger.error("Error loading food database: %s", exc)
            raise
