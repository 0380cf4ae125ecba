"""Pydantic models for the persisted attendance ledger."""

import math
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from unimaz.utils.lesson_keys import KEY_SEPARATOR, extract_subject_from_key
from unimaz.utils.normalizers import strip_lesson_type


class AttendanceRecord(BaseModel):
    """Absences and grade recorded for one timetable cell."""
    absences: int = Field(default=0, ge=0)
    grade: Optional[float] = None

    @field_validator("grade")
    @classmethod
    def validate_grade(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not math.isfinite(v):
            raise ValueError("grade must be a finite number")
        return v

    def is_empty(self) -> bool:
        return self.absences == 0 and self.grade is None


class UserData(BaseModel):
    """Everything stored for one user, keyed by composite lesson key.

    Blobs written by older clients used two parallel maps,
    ``{"absences": {key: n}, "grades": {key: g}}``. They are folded into
    ``records`` on load.
    """
    records: Dict[str, AttendanceRecord] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_shape(cls, data: Any, info: ValidationInfo) -> Any:
        if not isinstance(data, dict) or "records" in data:
            return data
        if "absences" not in data and "grades" not in data:
            return data

        records: Dict[str, Dict[str, Any]] = {}
        absences = data.get("absences") or {}
        grades = data.get("grades") or {}
        if isinstance(absences, dict):
            for key, count in absences.items():
                records.setdefault(key, {})["absences"] = max(0, int(count))
        if isinstance(grades, dict):
            for key, grade in _drop_subject_totals(grades, info.context).items():
                # per-subject grade lists are collapsed to their sum
                if isinstance(grade, list):
                    grade = sum(grade) if grade else None
                records.setdefault(key, {})["grade"] = grade
        return {"records": records}


def _drop_subject_totals(
    grades: Dict[str, Any], context: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """Remove per-subject running totals kept beside per-lesson grades.

    Older clients added every lesson grade into a grade stored under the
    base subject name as well. Such a total is dropped when a lesson key of
    the same base subject is present; totals without lesson grades stay.
    """
    base_subject: Callable[[str], str] = (context or {}).get("base_subject", strip_lesson_type)
    lesson_bases = {
        base_subject(extract_subject_from_key(key)) for key in grades if KEY_SEPARATOR in key
    }
    return {
        key: grade
        for key, grade in grades.items()
        if KEY_SEPARATOR in key or base_subject(key) not in lesson_bases
    }
