"""Compose and parse composite lesson keys: weekId|dayIndex|lessonIndex|subject."""

from datetime import date
from typing import Optional

from pydantic import ValidationError

from unimaz.models.lessons import LessonKey

KEY_SEPARATOR = "|"


def compose_lesson_key(week_id: str, day_index: int, lesson_index: int, subject: str) -> str:
    """Stable per-lesson key, unique per week, day, slot and subject."""
    return str(
        LessonKey(
            week_id=week_id,
            day_index=day_index,
            lesson_index=lesson_index,
            subject=subject,
        )
    )


def parse_lesson_key(key: str) -> Optional[LessonKey]:
    """Split a composite key. Returns None for legacy or malformed keys."""
    if not key or key.count(KEY_SEPARATOR) < 3:
        return None
    week_id, day_index, lesson_index, subject = key.split(KEY_SEPARATOR, 3)
    try:
        return LessonKey(
            week_id=week_id,
            day_index=int(day_index),
            lesson_index=int(lesson_index),
            subject=subject,
        )
    except (ValueError, ValidationError):
        return None


def extract_subject_from_key(key: str) -> str:
    """
    Subject string embedded in a stored key.

    Composite keys carry the subject after the third separator (the subject
    may itself contain '|'). Legacy keys fall back to the text after the last
    '-', or the whole key.
    """
    if KEY_SEPARATOR in key:
        return key.split(KEY_SEPARATOR, 3)[-1]
    if "-" in key:
        return key[key.rindex("-") + 1:]
    return key


def current_week_id(day: Optional[date] = None) -> str:
    """ISO week id such as '2025-W40' (week number not zero padded)."""
    day = day or date.today()
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week}"
