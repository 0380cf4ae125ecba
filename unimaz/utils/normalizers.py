"""Normalize Azerbaijani subject names for comparison.

Rule order of normalize_subject_name:
  1. NFC, dotted capital İ -> i
  2. lowercase
  3. parenthesized segments (lesson type annotations) -> space, innermost
     first until none remain; an unmatched "(" is kept
  4. drop periods
  5. collapse whitespace
  6. expand whole-token abbreviations: məş, müh, lab
  7. trim
"""

import re
import unicodedata
from typing import Optional

from unimaz.models.subjects import LessonType

# Applied in this order. Whole-token replacement keeps the output idempotent:
# an expanded word is never itself a token matched by a later rule.
ABBREVIATION_EXPANSIONS: tuple[tuple[str, str], ...] = (
    ("məş", "məşğələ"),
    ("müh", "mühazirə"),
    ("lab", "laboratoriya"),
)

LESSON_TYPE_MAPPINGS: dict[str, LessonType] = {
    "mühazirə": "lecture",
    "müh": "lecture",
    "məşğələ": "seminar",
    "məş": "seminar",
    "laboratoriya": "lab",
    "lab": "lab",
    "təcrübə": "practice",
}

_PARENTHESIZED = re.compile(r"\([^()]*\)")
_WHITESPACE = re.compile(r"\s+")
_ABBREVIATION_PATTERNS = tuple(
    (re.compile(rf"(?<!\w){re.escape(short)}(?!\w)"), full)
    for short, full in ABBREVIATION_EXPANSIONS
)


def _fold_case(value: str) -> str:
    # str.lower() turns İ into "i" + COMBINING DOT ABOVE
    return unicodedata.normalize("NFC", value).replace("İ", "i").lower()


def _remove_parenthesized(value: str) -> str:
    # nested segments are peeled from the inside out
    while True:
        stripped = _PARENTHESIZED.sub(" ", value)
        if stripped == value:
            return value
        value = stripped


def normalize_subject_name(subject: str) -> str:
    """Loose comparison form of a subject name. Empty input yields ''."""
    if not subject or not subject.strip():
        return ""
    s = _fold_case(subject)
    s = _remove_parenthesized(s)
    s = s.replace(".", "")
    s = _WHITESPACE.sub(" ", s)
    for pattern, full in _ABBREVIATION_PATTERNS:
        s = pattern.sub(full, s)
    return s.strip()


def strip_lesson_type(subject: str) -> str:
    """Remove parenthesized annotations, keeping the original casing."""
    if not subject:
        return ""
    s = _remove_parenthesized(subject)
    return _WHITESPACE.sub(" ", s).strip()


def detect_lesson_type(subject: str) -> Optional[LessonType]:
    """Lesson type named in a parenthesized annotation, e.g. '(lab.)'. None if absent."""
    if not subject:
        return None
    for segment in _PARENTHESIZED.findall(_fold_case(subject)):
        key = segment.strip("()").replace(".", "").strip()
        if key in LESSON_TYPE_MAPPINGS:
            return LESSON_TYPE_MAPPINGS[key]
    return None
