# -*- coding: utf-8 -*-
"""Auth — Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, field_validator

from ..records.models import coerce_text


# Fields are optional so that presence is checked by the handlers (400, not 422).
class _Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return coerce_text(value)


class SignupRequest(_Credentials):
    pass


class LoginRequest(_Credentials):
    pass


class MessageResponse(BaseModel):
    message: str
