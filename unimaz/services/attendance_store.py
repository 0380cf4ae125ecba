"""
Attendance ledger: absence counts and grades per timetable cell.

Records are keyed by composite lesson keys (weekId|day|slot|subject) and kept
in one JSON blob that is read and written wholesale. Subject-level queries
aggregate over every record whose embedded subject matches the query by
comparison key, so "Döv. nəz." and "Dövrələr nəzəriyyəsi (mühazirə)" report
the same total.

Tracking is best effort: storage failures and corrupt data are logged and
read as "no data"; nothing here raises to the caller.
"""

import json
import logging
import math
import threading
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from unimaz.config import get_settings
from unimaz.db.storage import (
    CorruptStorageError,
    StorageBackend,
    StorageError,
    create_storage,
)
from unimaz.models.attendance import AttendanceRecord, UserData
from unimaz.services.subject_matcher import find_best_match, keys_match
from unimaz.services.subject_registry import SubjectRegistry, get_subject_registry
from unimaz.utils.lesson_keys import extract_subject_from_key
from unimaz.utils.normalizers import strip_lesson_type
from unimaz.utils.subject_mappings import GLOBAL_SUBJECT_MAPPINGS

logger = logging.getLogger(__name__)

STORAGE_KEY = "unimaz-userdata"
PREVIOUS_ABSENCES_KEY = "unimaz-previous-absences-added"


class AttendanceStore:
    """Read/write API over the persisted user data blob."""

    def __init__(
        self,
        storage: StorageBackend,
        registry: Optional[SubjectRegistry] = None,
        storage_key: str = STORAGE_KEY,
        min_containment_length: int = 3,
        similarity_threshold: Optional[float] = 70,
    ) -> None:
        self.storage = storage
        if registry is None:
            registry = SubjectRegistry(
                GLOBAL_SUBJECT_MAPPINGS, min_containment_length=min_containment_length
            )
        self.registry = registry
        self.storage_key = storage_key
        self.min_containment_length = min_containment_length
        self.similarity_threshold = similarity_threshold
        # serializes read-modify-write cycles within this process
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Blob I/O
    # ------------------------------------------------------------------

    def _parse_user_data(self, raw: Optional[str]) -> UserData:
        if not raw:
            return UserData()
        try:
            return UserData.model_validate(
                json.loads(raw), context={"base_subject": self.base_subject}
            )
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError and ValidationError are ValueErrors
            logger.warning("Ignoring corrupt user data blob: %s", e)
            return UserData()

    def read_user_data(self) -> UserData:
        """Whole ledger; empty when missing, unreadable or corrupt."""
        try:
            raw = self.storage.get_item(self.storage_key)
        except StorageError as e:
            logger.error("Error reading user data: %s", e)
            return UserData()
        return self._parse_user_data(raw)

    def _load_for_write(self) -> Optional[UserData]:
        """Ledger for a read-modify-write, or None if the backend cannot be read.

        A corrupt blob still loads as empty so the write replaces it; an
        unreachable one must not be overwritten.
        """
        try:
            raw = self.storage.get_item(self.storage_key)
        except CorruptStorageError as e:
            logger.warning("Ignoring corrupt user data: %s", e)
            return UserData()
        except StorageError as e:
            logger.error("User data unavailable, update skipped: %s", e)
            return None
        return self._parse_user_data(raw)

    def write_user_data(self, data: UserData) -> bool:
        """Replace the stored ledger. Returns False if the backend failed."""
        try:
            self.storage.set_item(self.storage_key, data.model_dump_json())
            return True
        except StorageError as e:
            logger.error("Error writing user data: %s", e)
            return False

    # ------------------------------------------------------------------
    # Subject matching helpers
    # ------------------------------------------------------------------

    def _key_of_stored(self, stored_key: str) -> str:
        return self.registry.comparison_key(extract_subject_from_key(stored_key))

    def base_subject(self, subject: str) -> str:
        """Canonical name, or the subject without its lesson type annotation."""
        return self.registry.resolve_canonical(subject) or strip_lesson_type(subject)

    def _matching_records(
        self, data: UserData, subject_query: str
    ) -> List[Tuple[str, AttendanceRecord]]:
        query_key = self.registry.comparison_key(subject_query)
        if not query_key:
            return []
        return [
            (key, record)
            for key, record in data.records.items()
            if keys_match(query_key, self._key_of_stored(key), self.min_containment_length)
        ]

    def _find_matching_key(self, data: UserData, subject_query: str) -> Optional[str]:
        return find_best_match(
            self.registry.comparison_key(subject_query),
            data.records.keys(),
            key=self._key_of_stored,
            min_length=self.min_containment_length,
        )

    # ------------------------------------------------------------------
    # Absences
    # ------------------------------------------------------------------

    def get_absence_count(self, subject_query: str) -> int:
        """Total absences over every record whose subject matches the query."""
        data = self.read_user_data()
        return sum(record.absences for _, record in self._matching_records(data, subject_query))

    def get_specific_absence_count(self, key: str) -> int:
        """Absences stored under exactly this key (one lesson card)."""
        record = self.read_user_data().records.get(key)
        return record.absences if record else 0

    def set_absence_count(self, key: str, count: int) -> None:
        """Store ``count`` (clamped to >= 0) under the literal key."""
        if isinstance(count, float) and not math.isfinite(count):
            logger.warning("Rejected non-finite absence count for %s: %s", key, count)
            return
        with self._lock:
            data = self._load_for_write()
            if data is None:
                return
            record = data.records.get(key, AttendanceRecord())
            data.records[key] = record.model_copy(update={"absences": max(0, int(count))})
            self.write_user_data(data)

    def get_matching_subject_key(self, subject_query: str) -> Optional[str]:
        """Literal stored key of the first record matching the query, or None.

        Exact comparison-key matches are preferred over containment matches.
        """
        return self._find_matching_key(self.read_user_data(), subject_query)

    def _adjust_absences(self, subject_query: str, delta: int) -> int:
        if not self.registry.comparison_key(subject_query):
            return 0
        with self._lock:
            data = self._load_for_write()
            if data is None:
                return 0
            matches = self._matching_records(data, subject_query)

            if delta < 0:
                # decrement a record that still has absences to give back
                target = next((key for key, record in matches if record.absences > 0), None)
                if target is None:
                    return 0
            else:
                target = self._find_matching_key(data, subject_query) or subject_query

            record = data.records.get(target, AttendanceRecord())
            data.records[target] = record.model_copy(
                update={"absences": max(0, record.absences + delta)}
            )
            self.write_user_data(data)
            return sum(r.absences for _, r in self._matching_records(data, subject_query))

    def increment_absence_count(self, subject_query: str) -> int:
        """Add one absence to the matching record (or a new one). Returns the new total."""
        return self._adjust_absences(subject_query, 1)

    def decrement_absence_count(self, subject_query: str) -> int:
        """Remove one absence, never going below zero. Returns the new total."""
        return self._adjust_absences(subject_query, -1)

    def get_all_absences(self) -> Dict[str, int]:
        data = self.read_user_data()
        return {key: record.absences for key, record in data.records.items() if record.absences}

    def get_aggregated_absences(self) -> Dict[str, int]:
        """Absence totals grouped by base subject."""
        aggregated: Dict[str, int] = {}
        for key, record in self.read_user_data().records.items():
            if not record.absences:
                continue
            base = self.base_subject(extract_subject_from_key(key))
            aggregated[base] = aggregated.get(base, 0) + record.absences
        return aggregated

    def get_subject_variants(self, base_subject: str) -> List[str]:
        """Stored keys whose base subject is ``base_subject``."""
        return [
            key
            for key in self.read_user_data().records
            if self.base_subject(extract_subject_from_key(key)) == base_subject
        ]

    def get_load_subject_absence_count(self, load_subject: str) -> int:
        """
        Absences for a subject named in the academic load.

        Academic load names are often abbreviated differently from the
        timetable, so this falls back to similarity matching over the
        aggregated base subjects when exact and containment matching fail.
        """
        aggregated = self.get_aggregated_absences()
        match = find_best_match(
            self.registry.comparison_key(load_subject),
            aggregated.keys(),
            key=self.registry.comparison_key,
            min_length=self.min_containment_length,
            threshold=self.similarity_threshold,
        )
        return aggregated[match] if match is not None else 0

    # ------------------------------------------------------------------
    # Grades
    # ------------------------------------------------------------------

    def get_grade(self, key: str) -> Optional[float]:
        """Grade stored under exactly this key, or None."""
        record = self.read_user_data().records.get(key)
        return record.grade if record else None

    def set_grade(self, key: str, value: float) -> None:
        """Store a grade under the literal key. Non-finite values are ignored."""
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            logger.warning("Rejected invalid grade for %s: %r", key, value)
            return
        with self._lock:
            data = self._load_for_write()
            if data is None:
                return
            record = data.records.get(key, AttendanceRecord())
            data.records[key] = record.model_copy(update={"grade": float(value)})
            self.write_user_data(data)

    def remove_grade(self, key: str) -> None:
        with self._lock:
            data = self._load_for_write()
            if data is None:
                return
            record = data.records.get(key)
            if record is None:
                return
            record = record.model_copy(update={"grade": None})
            if record.is_empty():
                del data.records[key]
            else:
                data.records[key] = record
            self.write_user_data(data)

    def get_subject_grades(self, subject_query: str) -> List[float]:
        """Grades of every record matching the subject, in storage order."""
        data = self.read_user_data()
        return [
            record.grade
            for _, record in self._matching_records(data, subject_query)
            if record.grade is not None
        ]

    def sum_subject_grades(self, subject_query: str) -> float:
        return sum(self.get_subject_grades(subject_query))

    def get_all_grades(self) -> Dict[str, float]:
        data = self.read_user_data()
        return {
            key: record.grade for key, record in data.records.items() if record.grade is not None
        }

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def clear_all_user_data(self) -> None:
        """Remove every record. Safe to call repeatedly."""
        with self._lock:
            try:
                self.storage.remove_item(self.storage_key)
            except StorageError as e:
                logger.error("Error clearing user data: %s", e)

    def clear_absences(self) -> None:
        self._clear_field("absences", 0)

    def clear_grades(self) -> None:
        self._clear_field("grade", None)

    def _clear_field(self, field: str, empty_value) -> None:
        with self._lock:
            data = self._load_for_write()
            if data is None:
                return
            records = {}
            for key, record in data.records.items():
                record = record.model_copy(update={field: empty_value})
                if not record.is_empty():
                    records[key] = record
            self.write_user_data(UserData(records=records))

    def export_user_data(self) -> str:
        """Ledger as pretty-printed JSON, for backups."""
        return self.read_user_data().model_dump_json(indent=2)

    def import_user_data(self, blob: str) -> bool:
        """Replace the ledger with a backup. Returns False if the blob is invalid."""
        try:
            parsed = json.loads(blob)
            if not isinstance(parsed, dict):
                raise ValueError("Invalid data structure")
            data = UserData.model_validate(parsed, context={"base_subject": self.base_subject})
        except (ValueError, TypeError) as e:
            logger.error("Error importing user data: %s", e)
            return False
        with self._lock:
            return self.write_user_data(data)

    # ------------------------------------------------------------------
    # Previous absences flag
    # ------------------------------------------------------------------

    def has_added_previous_absences(self) -> bool:
        try:
            return self.storage.get_item(PREVIOUS_ABSENCES_KEY) == "true"
        except StorageError as e:
            logger.error("Error checking previous absences status: %s", e)
            return False

    def mark_previous_absences_added(self) -> None:
        try:
            self.storage.set_item(PREVIOUS_ABSENCES_KEY, "true")
        except StorageError as e:
            logger.error("Error marking previous absences as added: %s", e)


@lru_cache
def get_attendance_store() -> AttendanceStore:
    """Store wired from settings: configured backend plus the shared registry."""
    settings = get_settings()
    return AttendanceStore(
        create_storage(settings),
        registry=get_subject_registry(),
        storage_key=settings.storage_key,
        min_containment_length=settings.min_containment_length,
        similarity_threshold=settings.similarity_threshold,
    )
