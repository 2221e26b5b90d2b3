# -*- coding: utf-8 -*-
"""Foods — API endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_food_catalog
from ..errors import StorageReadFailure
from .models import FoodItem
from .storage import FoodCatalog

router = APIRouter(tags=["Foods"])


@router.get("/foods", response_model=List[FoodItem], summary="List available food items")
def list_foods(catalog: FoodCatalog = Depends(get_food_catalog)):
    try:
        return catalog.list_foods()
    except StorageReadFailure as exc:
        detail = "Error parsing foods data" if exc.parse_error else "Error reading foods data"
        raise HTTPException(status_code=500, detail=detail) from exc
