# -*- coding: utf-8 -*-
"""Error taxonomy shared by the record store, the food catalog and the routers."""

from __future__ import annotations

from typing import Optional


class NutrilogError(Exception):
    default_message = "nutrilog error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ---- storage ----


class StorageError(NutrilogError):
    default_message = "storage error"


class StorageReadFailure(StorageError):
    """A durable document could not be read, or its contents did not parse."""

    default_message = "failed to read document"

    def __init__(self, message: Optional[str] = None, *, parse_error: bool = False) -> None:
        super().__init__(message)
        self.parse_error = parse_error


class StorageWriteFailure(StorageError):
    default_message = "failed to write document"


# ---- domain validation ----


class RecordStoreError(NutrilogError):
    default_message = "record store error"


class AccountExists(RecordStoreError):
    default_message = "User already exists."


class InvalidCredentials(RecordStoreError):
    # Same error for an unknown email and a wrong password.
    default_message = "Invalid email or password."


class UserNotFound(RecordStoreError):
    default_message = "User not found"


class DuplicateMealDate(RecordStoreError):
    default_message = "You have already logged a meal for this date."


class MissingField(RecordStoreError):
    default_message = "Missing required field"
