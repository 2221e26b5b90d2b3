# -*- coding: utf-8 -*-
"""Records — the user-record store.

Every operation works on the whole collection: it loads the user document,
checks and mutates the in-memory copy, and (for writes) saves the whole
collection back. Nothing is cached between calls.

Without ``lock_writes`` two concurrent mutations each load, mutate and
overwrite independently, so the later save discards the earlier one even
when they touch different users. With ``lock_writes`` every
load-check-mutate-save cycle holds a per-document lock.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from ..config import StoreConfig
from ..documents import Document, JsonFileDocument, exclusive
from ..errors import (
    AccountExists,
    DuplicateMealDate,
    InvalidCredentials,
    MissingField,
    StorageReadFailure,
    StorageWriteFailure,
    UserNotFound,
)
from .models import BmiReading, MealEntry, UserRecord

logger = logging.getLogger(__name__)

# Marks an argument the caller did not supply, as distinct from an explicit None.
UNSET: Any = object()


def parse_records(raw: Any) -> List[UserRecord]:
    if not isinstance(raw, list):
        raise StorageReadFailure(
            f"User document must be a list, got {type(raw).__name__}", parse_error=True
        )
    try:
        return [UserRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise StorageReadFailure(f"Malformed user record: {exc}", parse_error=True) from exc


def _find(records: List[UserRecord], email: Optional[str]) -> Optional[UserRecord]:
    # Exact, case-sensitive match; emails are never normalized.
    for record in records:
        if record.email == email:
            return record
    return None


class RecordStore:
    def __init__(
        self,
        document: Document,
        *,
        lock_writes: bool = False,
        strict_reads: bool = False,
    ) -> None:
        self.document = document
        self.lock_writes = lock_writes
        self.strict_reads = strict_reads

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RecordStore":
        return cls(
            JsonFileDocument(config.users_file),
            lock_writes=config.lock_writes,
            strict_reads=config.strict_reads,
        )

    def _mutation(self):
        return exclusive(self.document, enabled=self.lock_writes)

    # ---- persistence ----

    def load(self) -> List[UserRecord]:
        """Read the full collection.

        A missing document is created empty. An unreadable or malformed one
        yields an empty collection (the next save overwrites it) unless
        ``strict_reads`` is set, in which case the failure propagates.
        """
        try:
            return parse_records(self.document.read_all())
        except StorageReadFailure as exc:
            if self.strict_reads:
                raise
            logger.error("Error loading users, continuing with an empty collection: %s", exc)
            return []

    def save(self, records: List[UserRecord]) -> bool:
        """Overwrite the document with ``records``; returns False if the write failed."""
        try:
            self.document.write_all([record.to_document() for record in records])
        except StorageWriteFailure as exc:
            logger.error("Error saving users: %s", exc)
            return False
        return True

    def list_users(self) -> List[UserRecord]:
        return self.load()

    # ---- accounts ----

    def create_account(self, email: Optional[str], password: Optional[str]) -> UserRecord:
        if not email or not password:
            raise MissingField("Email and password are required.")

        with self._mutation():
            records = self.load()
            if _find(records, email) is not None:
                logger.warning("Signup rejected, account already exists: %s", email)
                raise AccountExists()
            record = UserRecord(email=email, password=password, bmi=None, bmi_status="")
            records.append(record)
            self.save(records)

        logger.info("New user registered: %s", email)
        return record

    def verify_credentials(self, email: Optional[str], password: Optional[str]) -> UserRecord:
        for record in self.load():
            if record.email == email and record.password == password:
                logger.info("User logged in: %s", email)
                return record
        raise InvalidCredentials()

    # ---- BMI ----

    def get_bmi(self, email: Optional[str]) -> BmiReading:
        record = _find(self.load(), email)
        if record is None:
            raise UserNotFound()
        return BmiReading(bmi=record.bmi, status=record.bmi_status)

    def set_bmi(self, email: Optional[str], bmi: Optional[float], status: Optional[str]) -> UserRecord:
        # Zero is rejected together with absent values.
        if not email or not bmi or not status:
            raise MissingField("Missing email, bmi, or status")

        with self._mutation():
            records = self.load()
            record = _find(records, email)
            if record is None:
                logger.error("BMI update for unknown user: %s", email)
                raise UserNotFound()
            record.bmi = bmi
            record.bmi_status = status
            self.save(records)

        logger.info("BMI updated for %s: %s (%s)", email, bmi, status)
        return record

    # ---- meals ----

    def get_meals(self, email: Optional[str]) -> List[MealEntry]:
        record = _find(self.load(), email)
        if record is None:
            raise UserNotFound()
        return list(record.meals)

    def log_meal(
        self,
        email: Optional[str],
        date: Optional[str],
        total_calories: Any = UNSET,
    ) -> List[MealEntry]:
        # None is a storable total; only an omitted one is missing.
        if not email or not date or total_calories is UNSET:
            raise MissingField("All fields are required.")

        with self._mutation():
            records = self.load()
            record = _find(records, email)
            if record is None:
                raise UserNotFound()
            if record.find_meal(date) is not None:
                logger.warning("Duplicate meal for %s on %s rejected", email, date)
                raise DuplicateMealDate()
            record.meals.append(MealEntry(date=date, total_calories=total_calories))
            self.save(records)

        logger.info("Meal logged for %s on %s: %s cal", email, date, total_calories)
        return list(record.meals)
