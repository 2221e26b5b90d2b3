# -*- coding: utf-8 -*-
"""User records (credentials, BMI, meal history) and the store that guards them."""

from .models import BmiReading, MealEntry, UserRecord
from .storage import RecordStore

__all__ = ["BmiReading", "MealEntry", "RecordStore", "UserRecord"]
