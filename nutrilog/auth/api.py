# -*- coding: utf-8 -*-
"""Auth — API endpoints (plaintext credential check, no sessions or tokens)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_record_store
from ..errors import AccountExists, InvalidCredentials, MissingField
from ..records.storage import RecordStore
from .models import LoginRequest, MessageResponse, SignupRequest

router = APIRouter(tags=["Auth"])


@router.post("/signup", response_model=MessageResponse, status_code=201, summary="Register a new user")
def signup(request: SignupRequest, store: RecordStore = Depends(get_record_store)):
    try:
        store.create_account(request.email, request.password)
    except (MissingField, AccountExists) as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    return MessageResponse(message="Signup successful. Redirecting to login...")


@router.post("/login", response_model=MessageResponse, summary="Login")
def login(request: LoginRequest, store: RecordStore = Depends(get_record_store)):
    try:
        store.verify_credentials(request.email, request.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=401, detail="Invalid email or password.") from exc
    return MessageResponse(message="Login successful.")
