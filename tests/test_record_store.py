# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import shutil
import tempfile
import unittest
from pathlib import Path

from nutrilog.config import StoreConfig
from nutrilog.documents import MemoryDocument
from nutrilog.errors import (
    AccountExists,
    DuplicateMealDate,
    InvalidCredentials,
    MissingField,
    StorageReadFailure,
    StorageWriteFailure,
    UserNotFound,
)
from nutrilog.records.storage import RecordStore


class _ReadOnlyDocument(MemoryDocument):
    def write_all(self, data) -> None:
        raise StorageWriteFailure("disk full")


class TestAccounts(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = MemoryDocument("accounts")
        self.store = RecordStore(self.doc)

    def test_new_account_has_unset_bmi_and_no_meals(self) -> None:
        record = self.store.create_account("a@x.com", "p")

        self.assertEqual(record.email, "a@x.com")
        self.assertIsNone(record.bmi)
        self.assertEqual(record.bmi_status, "")
        self.assertEqual(record.meals, [])

        stored = json.loads(self.doc.raw)
        self.assertEqual(stored[0]["email"], "a@x.com")
        self.assertEqual(stored[0]["password"], "p")
        self.assertIsNone(stored[0]["bmi"])
        self.assertEqual(stored[0]["bmiStatus"], "")

    def test_duplicate_email_is_rejected_without_changes(self) -> None:
        self.store.create_account("a@x.com", "p")
        self.store.create_account("b@x.com", "q")
        before = self.doc.raw

        with self.assertRaises(AccountExists):
            self.store.create_account("a@x.com", "other")

        self.assertEqual(self.doc.raw, before)
        emails = [r.email for r in self.store.load()]
        self.assertEqual(emails, ["a@x.com", "b@x.com"])

    def test_emails_are_case_sensitive(self) -> None:
        self.store.create_account("a@x.com", "p")
        self.store.create_account("A@x.com", "p")

        self.assertEqual(len(self.store.load()), 2)

    def test_missing_fields_are_rejected(self) -> None:
        for email, password in (("", "p"), ("a@x.com", ""), (None, "p"), ("a@x.com", None)):
            with self.assertRaises(MissingField):
                self.store.create_account(email, password)
        self.assertEqual(self.store.load(), [])

    def test_verify_credentials_requires_exact_match(self) -> None:
        self.store.create_account("a@x.com", "p")

        self.assertEqual(self.store.verify_credentials("a@x.com", "p").email, "a@x.com")
        for email, password in (
            ("a@x.com", "wrong"),
            ("a@x.com", "P"),
            ("a@x.com", "p "),
            ("a@x.co", "p"),
            ("A@x.com", "p"),
            ("nobody@x.com", "p"),
            (None, None),
        ):
            with self.assertRaises(InvalidCredentials):
                self.store.verify_credentials(email, password)

    def test_unknown_email_and_wrong_password_raise_same_error(self) -> None:
        self.store.create_account("a@x.com", "p")

        with self.assertRaises(InvalidCredentials) as unknown:
            self.store.verify_credentials("nobody@x.com", "p")
        with self.assertRaises(InvalidCredentials) as wrong:
            self.store.verify_credentials("a@x.com", "wrong")
        self.assertEqual(unknown.exception.message, wrong.exception.message)


class TestBmi(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = MemoryDocument("bmi")
        self.store = RecordStore(self.doc)
        self.store.create_account("a@x.com", "p")

    def test_set_then_get(self) -> None:
        record = self.store.set_bmi("a@x.com", 27.1, "Overweight")
        self.assertEqual(record.bmi, 27.1)
        self.assertEqual(record.bmi_status, "Overweight")

        reading = self.store.get_bmi("a@x.com")
        self.assertEqual((reading.bmi, reading.status), (27.1, "Overweight"))

    def test_fresh_account_reports_unset_bmi(self) -> None:
        reading = self.store.get_bmi("a@x.com")
        self.assertIsNone(reading.bmi)
        self.assertEqual(reading.status, "")

    def test_repeated_set_is_idempotent(self) -> None:
        self.store.set_bmi("a@x.com", 22.5, "Normal")
        first = self.doc.raw
        self.store.set_bmi("a@x.com", 22.5, "Normal")

        self.assertEqual(self.doc.raw, first)
        records = self.store.load()
        self.assertEqual(len(records), 1)
        self.assertEqual((records[0].bmi, records[0].bmi_status), (22.5, "Normal"))

    def test_set_overwrites_previous_value(self) -> None:
        self.store.set_bmi("a@x.com", 22.5, "Normal")
        self.store.set_bmi("a@x.com", 31.0, "Obese")

        reading = self.store.get_bmi("a@x.com")
        self.assertEqual((reading.bmi, reading.status), (31.0, "Obese"))

    def test_falsy_inputs_are_rejected(self) -> None:
        for email, bmi, status in (
            ("", 22.5, "Normal"),
            ("a@x.com", 0, "Normal"),
            ("a@x.com", None, "Normal"),
            ("a@x.com", 22.5, ""),
        ):
            with self.assertRaises(MissingField):
                self.store.set_bmi(email, bmi, status)
        self.assertIsNone(self.store.get_bmi("a@x.com").bmi)

    def test_unknown_user(self) -> None:
        before = self.doc.raw
        with self.assertRaises(UserNotFound):
            self.store.get_bmi("nobody@x.com")
        with self.assertRaises(UserNotFound):
            self.store.set_bmi("nobody@x.com", 22.5, "Normal")
        self.assertEqual(self.doc.raw, before)


class TestMeals(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = MemoryDocument("meals")
        self.store = RecordStore(self.doc)
        self.store.create_account("a@x.com", "p")
        self.store.create_account("b@x.com", "q")

    def test_log_then_duplicate_date(self) -> None:
        meals = self.store.log_meal("a@x.com", "2024-01-01", 1800)
        self.assertEqual([(m.date, m.total_calories) for m in meals], [("2024-01-01", 1800)])

        before = self.doc.raw
        with self.assertRaises(DuplicateMealDate):
            self.store.log_meal("a@x.com", "2024-01-01", 2500)
        self.assertEqual(self.doc.raw, before)

        meals = self.store.get_meals("a@x.com")
        self.assertEqual(len(meals), 1)
        self.assertEqual(meals[0].total_calories, 1800)

    def test_log_returns_full_history_in_order(self) -> None:
        self.store.log_meal("a@x.com", "2024-01-01", 1800)
        meals = self.store.log_meal("a@x.com", "2024-01-02", 2100)

        self.assertEqual([m.date for m in meals], ["2024-01-01", "2024-01-02"])

    def test_same_date_for_different_users(self) -> None:
        self.store.log_meal("a@x.com", "2024-01-01", 1800)
        self.store.log_meal("b@x.com", "2024-01-01", 2000)

        self.assertEqual(len(self.store.get_meals("a@x.com")), 1)
        self.assertEqual(len(self.store.get_meals("b@x.com")), 1)

    def test_date_is_an_opaque_key(self) -> None:
        self.store.log_meal("a@x.com", "2024-01-01", 1800)
        self.store.log_meal("a@x.com", "01/01/2024", 1900)

        self.assertEqual(len(self.store.get_meals("a@x.com")), 2)

    def test_zero_calories_is_accepted(self) -> None:
        meals = self.store.log_meal("a@x.com", "2024-01-01", 0)
        self.assertEqual(meals[0].total_calories, 0)

    def test_missing_fields(self) -> None:
        for email, date in (("", "2024-01-01"), ("a@x.com", ""), (None, "2024-01-01")):
            with self.assertRaises(MissingField):
                self.store.log_meal(email, date, 1800)
        with self.assertRaises(MissingField):
            self.store.log_meal("a@x.com", "2024-01-01")
        self.assertEqual(self.store.get_meals("a@x.com"), [])

    def test_null_calories_is_stored_as_null(self) -> None:
        meals = self.store.log_meal("a@x.com", "2024-01-01", None)

        self.assertEqual(len(meals), 1)
        self.assertIsNone(meals[0].total_calories)
        stored = json.loads(self.doc.raw)[0]["meals"]
        self.assertEqual(stored, [{"date": "2024-01-01", "totalCalories": None}])
        with self.assertRaises(DuplicateMealDate):
            self.store.log_meal("a@x.com", "2024-01-01", 1800)

    def test_unknown_user(self) -> None:
        with self.assertRaises(UserNotFound):
            self.store.log_meal("nobody@x.com", "2024-01-01", 1800)
        with self.assertRaises(UserNotFound):
            self.store.get_meals("nobody@x.com")

    def test_record_without_meals_key(self) -> None:
        doc = MemoryDocument(raw=json.dumps([{"email": "c@x.com", "password": "p", "bmi": None, "bmiStatus": ""}]))
        store = RecordStore(doc)

        self.assertEqual(store.get_meals("c@x.com"), [])
        store.log_meal("c@x.com", "2024-01-01", 1500)
        self.assertEqual(json.loads(doc.raw)[0]["meals"], [{"date": "2024-01-01", "totalCalories": 1500}])


class TestPersistence(unittest.TestCase):
    def test_save_load_round_trip_preserves_records(self) -> None:
        original = [
            {
                "email": "a@x.com",
                "password": "p",
                "bmi": 22.5,
                "bmiStatus": "Normal",
                "meals": [{"date": "2024-01-01", "totalCalories": 1800}],
                "nickname": "kept",
            },
            {"email": "b@x.com", "password": "q", "bmi": None, "bmiStatus": "", "meals": []},
        ]
        doc = MemoryDocument(raw=json.dumps(original))
        store = RecordStore(doc)

        self.assertTrue(store.save(store.load()))
        self.assertEqual(json.loads(doc.raw), original)

    def test_missing_document_is_created_empty(self) -> None:
        tmp = Path(tempfile.mkdtemp(prefix="nutrilog-store-"))
        try:
            config = StoreConfig(users_file=tmp / "users.json", foods_file=tmp / "foods.json")
            store = RecordStore.from_config(config)

            self.assertEqual(store.load(), [])
            self.assertEqual(json.loads((tmp / "users.json").read_text(encoding="utf-8")), [])
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_every_call_rereads_the_document(self) -> None:
        tmp = Path(tempfile.mkdtemp(prefix="nutrilog-store-"))
        try:
            config = StoreConfig(users_file=tmp / "users.json", foods_file=tmp / "foods.json")
            writer = RecordStore.from_config(config)
            reader = RecordStore.from_config(config)

            writer.create_account("a@x.com", "p")
            self.assertEqual(reader.verify_credentials("a@x.com", "p").email, "a@x.com")

            # Edits made outside the store are picked up on the next call.
            (tmp / "users.json").write_text(
                json.dumps([{"email": "a@x.com", "password": "changed"}]), encoding="utf-8"
            )
            with self.assertRaises(InvalidCredentials):
                reader.verify_credentials("a@x.com", "p")
            self.assertEqual(reader.verify_credentials("a@x.com", "changed").email, "a@x.com")
        finally:
            shutil.rmtree(tmp, ignore_errors=True)

    def test_corrupt_document_degrades_to_empty(self) -> None:
        doc = MemoryDocument(raw="[{broken")
        store = RecordStore(doc)

        self.assertEqual(store.load(), [])
        with self.assertRaises(UserNotFound):
            store.get_bmi("a@x.com")

        # The next write replaces the corrupt contents.
        store.create_account("a@x.com", "p")
        self.assertEqual([r["email"] for r in json.loads(doc.raw)], ["a@x.com"])

    def test_non_list_document_degrades_to_empty(self) -> None:
        store = RecordStore(MemoryDocument(raw=json.dumps({"email": "a@x.com"})))
        self.assertEqual(store.load(), [])

    def test_malformed_record_degrades_to_empty(self) -> None:
        store = RecordStore(MemoryDocument(raw=json.dumps([{"password": "no email"}])))
        self.assertEqual(store.load(), [])

    def test_null_calorie_meal_does_not_wipe_other_users(self) -> None:
        doc = MemoryDocument(
            raw=json.dumps(
                [
                    {"email": "a@x.com", "password": "p", "meals": [{"date": "2024-01-01", "totalCalories": None}]},
                    {"email": "b@x.com", "password": "q", "bmi": 22.5},
                ]
            )
        )
        store = RecordStore(doc)

        store.create_account("c@x.com", "r")

        stored = json.loads(doc.raw)
        self.assertEqual([user["email"] for user in stored], ["a@x.com", "b@x.com", "c@x.com"])
        self.assertEqual(stored[0]["meals"], [{"date": "2024-01-01", "totalCalories": None}])
        self.assertEqual(stored[1]["bmi"], 22.5)

    def test_numeric_password_and_date_are_read_as_text(self) -> None:
        doc = MemoryDocument(
            raw=json.dumps(
                [{"email": "a@x.com", "password": 1234, "meals": [{"date": 20240101, "totalCalories": 1800}]}]
            )
        )
        store = RecordStore(doc)

        self.assertEqual(store.verify_credentials("a@x.com", "1234").email, "a@x.com")
        self.assertEqual(store.get_meals("a@x.com")[0].date, "20240101")
        store.create_account("b@x.com", "q")
        self.assertEqual(len(json.loads(doc.raw)), 2)

    def test_strict_reads_propagate_corruption(self) -> None:
        store = RecordStore(MemoryDocument(raw="[{broken"), strict_reads=True)
        with self.assertRaises(StorageReadFailure):
            store.load()

    def test_write_failures_are_swallowed(self) -> None:
        store = RecordStore(_ReadOnlyDocument("read-only"))

        self.assertFalse(store.save([]))
        record = store.create_account("a@x.com", "p")
        self.assertEqual(record.email, "a@x.com")
        # Nothing reached the document.
        self.assertEqual(store.load(), [])

    def test_list_users_returns_whole_collection(self) -> None:
        store = RecordStore(MemoryDocument("list"))
        store.create_account("a@x.com", "p")
        store.create_account("b@x.com", "q")

        self.assertEqual([r.email for r in store.list_users()], ["a@x.com", "b@x.com"])


if __name__ == "__main__":
    unittest.main()
