# -*- coding: utf-8 -*-
"""
nutrilog API

Signup/login, per-user BMI and daily meal-calorie logging, and a static food catalog.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth.api import router as auth_router
from .bmi.api import router as bmi_router
from .config import Settings, StoreConfig, settings
from .deps import get_record_store
from .foods.api import router as foods_router
from .logging_config import setup_logging
from .meals.api import router as meals_router
from .records.storage import RecordStore

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    store_config: Optional[StoreConfig] = None,
) -> FastAPI:
    cfg = app_settings or settings
    setup_logging(cfg.log_level, cfg.log_file)

    app = FastAPI(
        title="nutrilog",
        description="Nutrition tracking: accounts, BMI, daily meal calories, food catalog.",
        version="1.0.0",
    )
    app.state.store_config = store_config or cfg.store_config()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error bodies are {"message": ...} across the whole API.
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"message": "Invalid request body"})

    app.include_router(auth_router)
    app.include_router(bmi_router)
    app.include_router(meals_router)
    app.include_router(foods_router)

    @app.get("/users", summary="Full user collection (debugging)")
    def list_users(store: RecordStore = Depends(get_record_store)) -> List[Dict[str, Any]]:
        return [record.to_document() for record in store.list_users()]

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    return app


app = create_app()
