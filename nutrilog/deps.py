# -*- coding: utf-8 -*-
"""FastAPI dependencies — stores are built per request from the app's StoreConfig."""

from __future__ import annotations

from fastapi import Depends, Request

from .config import StoreConfig
from .foods.storage import FoodCatalog
from .records.storage import RecordStore


def get_store_config(request: Request) -> StoreConfig:
    return request.app.state.store_config


def get_record_store(config: StoreConfig = Depends(get_store_config)) -> RecordStore:
    return RecordStore.from_config(config)


def get_food_catalog(config: StoreConfig = Depends(get_store_config)) -> FoodCatalog:
    return FoodCatalog.from_config(config)
