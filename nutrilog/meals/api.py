# -*- coding: utf-8 -*-
"""Meals — API endpoints (one calorie total per user per date)."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_record_store
from ..errors import DuplicateMealDate, MissingField, UserNotFound
from ..records.models import MealEntry
from ..records.storage import UNSET, RecordStore
from .models import AddMealRequest, AddMealResponse

router = APIRouter(tags=["Meals"])


@router.get("/user-meals", response_model=List[MealEntry], summary="List a user's logged meals")
def user_meals(
    email: Optional[str] = Query(default=None),
    store: RecordStore = Depends(get_record_store),
):
    try:
        return store.get_meals(email)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail="User not found") from exc


@router.post("/add-meal", response_model=AddMealResponse, summary="Log the calorie total for a date")
def add_meal(request: AddMealRequest, store: RecordStore = Depends(get_record_store)):
    total = request.total_calories if request.has_total_calories else UNSET
    try:
        meals = store.log_meal(request.email, request.date, total)
    except (MissingField, DuplicateMealDate) as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail="User not found.") from exc
    return AddMealResponse(message="Meal logged successfully", meals=meals)
