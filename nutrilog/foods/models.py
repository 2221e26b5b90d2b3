# -*- coding: utf-8 -*-
"""Foods — Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FoodItem(BaseModel):
    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fats: float = Field(0.0, ge=0)
