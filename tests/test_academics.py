"""Tests for absence limits."""

import json

import pytest

from unimaz.services.academics import (
    absence_status,
    calculate_absence_limits,
    get_absence_limit_for_subject,
)

ACADEMIC_LOAD = [
    {"subject": "Fəlsəfə", "total_hours": 30},
    {"subject": "Tətbiqi riyaziyyat", "total_hours": 45},
    {"subject": "Kimya", "total_hours": 60},
]


class TestCalculateAbsenceLimits:
    """Test calculate_absence_limits()."""

    def test_quarter_of_hours_rounded_down(self):
        assert calculate_absence_limits(ACADEMIC_LOAD) == {
            "Fəlsəfə": 7,
            "Tətbiqi riyaziyyat": 11,
            "Kimya": 15,
        }

    def test_custom_ratio(self):
        assert calculate_absence_limits(ACADEMIC_LOAD, ratio=0.5)["Fəlsəfə"] == 15

    @pytest.mark.parametrize("load", [[], None, "Fəlsəfə", {"subject": "Kimya"}])
    def test_empty_or_invalid_load(self, load):
        assert calculate_absence_limits(load) == {}

    def test_non_finite_hours_skipped(self):
        """Test that Infinity and NaN hours from a JSON file are skipped."""
        load = json.loads(
            '[{"subject": "Kimya", "total_hours": Infinity},'
            ' {"subject": "Fəlsəfə", "total_hours": NaN},'
            ' {"subject": "Fizika", "total_hours": -Infinity},'
            ' {"subject": "Tarix", "total_hours": 30}]'
        )

        assert calculate_absence_limits(load) == {"Tarix": 7}

    def test_invalid_items_skipped(self):
        load = [
            {"subject": "Kimya", "total_hours": 60},
            {"subject": "", "total_hours": 30},
            {"subject": "Fəlsəfə"},
            {"subject": "Tarix", "total_hours": "30"},
            {"subject": "Fizika", "total_hours": True},
            "Biologiya",
        ]

        assert calculate_absence_limits(load) == {"Kimya": 15}


class TestGetAbsenceLimitForSubject:
    """Test get_absence_limit_for_subject()."""

    @pytest.fixture
    def limits(self):
        return calculate_absence_limits(ACADEMIC_LOAD)

    def test_exact_name(self, limits):
        assert get_absence_limit_for_subject("Fəlsəfə", limits) == 7

    def test_lesson_type_ignored(self, limits):
        assert get_absence_limit_for_subject("Fəlsəfə (məş.)", limits) == 7
        assert get_absence_limit_for_subject("Tətbiqi riyaziyyat (mühazirə) (qrup A)", limits) == 11

    def test_unknown_subject(self, limits):
        assert get_absence_limit_for_subject("Non-existent subject", limits) == 0
        assert get_absence_limit_for_subject("", limits) == 0

    def test_missing_limits(self):
        assert get_absence_limit_for_subject("Fəlsəfə", None) == 0
        assert get_absence_limit_for_subject("Fəlsəfə", {}) == 0


class TestAbsenceStatus:
    """Test absence_status()."""

    @pytest.mark.parametrize(
        "count, limit, expected",
        [
            (0, 8, "ok"),
            (5, 8, "ok"),
            (6, 8, "warning"),
            (8, 8, "exceeded"),
            (9, 8, "exceeded"),
            (1, 1, "exceeded"),
            (3, 0, "ok"),
        ],
    )
    def test_status(self, count, limit, expected):
        assert absence_status(count, limit) == expected
