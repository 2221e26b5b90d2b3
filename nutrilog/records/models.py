# -*- coding: utf-8 -*-
"""Records — Pydantic models for the user document."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_text(value: object) -> object:
    """Numbers sent where text is expected (a numeric password, a 20240101 date) are kept as text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class MealEntry(BaseModel):
    # Unknown keys already in the document survive a load/save round-trip.
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    date: str = Field(..., description="Opaque calendar-date key, unique per user")
    # null is a legal stored value; only an absent total is rejected on input.
    total_calories: Optional[float] = Field(None, alias="totalCalories")

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_text(value)


class UserRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    email: str
    password: str
    bmi: Optional[float] = None
    bmi_status: str = Field("", alias="bmiStatus")
    meals: List[MealEntry] = Field(default_factory=list)

    @field_validator("email", "password", mode="before")
    @classmethod
    def _coerce_credentials(cls, value: object) -> object:
        return coerce_text(value)

    @field_validator("bmi_status", mode="before")
    @classmethod
    def _coerce_status(cls, value: object) -> str:
        return "" if value is None else str(value)

    @field_validator("meals", mode="before")
    @classmethod
    def _coerce_meals(cls, value: object) -> object:
        return [] if value is None else value

    def find_meal(self, date: str) -> Optional[MealEntry]:
        for meal in self.meals:
            if meal.date == date:
                return meal
        return None

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class BmiReading(BaseModel):
    bmi: Optional[float] = None
    status: str = ""
