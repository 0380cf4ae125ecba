"""Absence limits derived from a group's academic load."""

import math
from typing import Any, Dict, Iterable, Literal, Mapping, Optional

from unimaz.utils.normalizers import strip_lesson_type

DEFAULT_ABSENCE_LIMIT_RATIO = 0.25
WARNING_SHARE = 0.75

AbsenceStatus = Literal["ok", "warning", "exceeded"]


def calculate_absence_limits(
    academic_load: Optional[Iterable[Mapping[str, Any]]],
    ratio: float = DEFAULT_ABSENCE_LIMIT_RATIO,
) -> Dict[str, int]:
    """Allowed absences per subject: floor(total_hours * ratio).

    Items without a subject or a finite numeric total_hours are skipped.
    """
    if not isinstance(academic_load, (list, tuple)):
        return {}
    limits: Dict[str, int] = {}
    for item in academic_load:
        subject = item.get("subject") if isinstance(item, Mapping) else None
        hours = item.get("total_hours") if isinstance(item, Mapping) else None
        if not subject or not isinstance(hours, (int, float)) or isinstance(hours, bool):
            continue
        if not math.isfinite(hours):
            continue
        limits[subject] = math.floor(hours * ratio)
    return limits


def get_absence_limit_for_subject(
    subject: str, limits: Optional[Mapping[str, int]]
) -> int:
    """Limit for a timetable subject; annotations such as '(məş.)' are ignored. 0 if unknown."""
    if not subject or not limits:
        return 0
    if subject in limits:
        return limits[subject]
    return limits.get(strip_lesson_type(subject), 0)


def absence_status(count: int, limit: int) -> AbsenceStatus:
    """'exceeded' at the limit, 'warning' from 75% of it, otherwise 'ok'."""
    if limit <= 0:
        return "ok"
    if count >= limit:
        return "exceeded"
    if count >= max(1, math.floor(limit * WARNING_SHARE)):
        return "warning"
    return "ok"
