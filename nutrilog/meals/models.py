# -*- coding: utf-8 -*-
"""Meals — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..records.models import MealEntry, coerce_text


class AddMealRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    date: Optional[str] = Field(None, description="Calendar date key, e.g. 2024-01-01")
    # Sent as null is stored as null; left out entirely is a missing field.
    total_calories: Optional[float] = Field(None, alias="totalCalories")

    @field_validator("email", "date", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return coerce_text(value)

    @property
    def has_total_calories(self) -> bool:
        return "total_calories" in self.model_fields_set


class AddMealResponse(BaseModel):
    message: str
    meals: List[MealEntry]
