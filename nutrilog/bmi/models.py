# -*- coding: utf-8 -*-
"""BMI — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..records.models import UserRecord, coerce_text


class SaveBmiRequest(BaseModel):
    email: Optional[str] = None
    bmi: Optional[float] = None
    status: Optional[str] = Field(None, description="Classification label, e.g. 'Normal'")

    @field_validator("email", mode="before")
    @classmethod
    def _coerce_email(cls, value: object) -> object:
        return coerce_text(value)

    @field_validator("bmi", mode="before")
    @classmethod
    def _blank_bmi(cls, value: object) -> object:
        # Form inputs send "" for an empty field; treat it as missing.
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SaveBmiResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    updated_user: UserRecord = Field(..., alias="updatedUser")
