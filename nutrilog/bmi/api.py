# -*- coding: utf-8 -*-
"""BMI — API endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_record_store
from ..errors import MissingField, UserNotFound
from ..records.models import BmiReading
from ..records.storage import RecordStore
from .models import SaveBmiRequest, SaveBmiResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["BMI"])


@router.get("/user-bmi", response_model=BmiReading, summary="Get the stored BMI for a user")
def user_bmi(
    email: Optional[str] = Query(default=None),
    store: RecordStore = Depends(get_record_store),
):
    try:
        return store.get_bmi(email)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail="User not found") from exc


@router.post("/save-bmi", response_model=SaveBmiResponse, summary="Save (overwrite) a user's BMI")
def save_bmi(request: SaveBmiRequest, store: RecordStore = Depends(get_record_store)):
    logger.info("Incoming BMI data for %s", request.email)
    try:
        record = store.set_bmi(request.email, request.bmi, request.status)
    except MissingField as exc:
        logger.warning("Missing fields in BMI request: %s", request.model_dump())
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except UserNotFound as exc:
        # 400 rather than 404 on this endpoint.
        raise HTTPException(status_code=400, detail="User not found") from exc
    return SaveBmiResponse(message="BMI saved successfully", updated_user=record)
