"""Tests for composite lesson keys."""

from datetime import date

import pytest
from pydantic import ValidationError

from unimaz.utils.lesson_keys import (
    compose_lesson_key,
    current_week_id,
    extract_subject_from_key,
    parse_lesson_key,
)


class TestComposeLessonKey:
    """Test compose_lesson_key()."""

    def test_compose(self):
        key = compose_lesson_key("2025-W40", 2, 1, "Dövrələr nəzəriyyəsi (mühazirə)")

        assert key == "2025-W40|2|1|Dövrələr nəzəriyyəsi (mühazirə)"

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            compose_lesson_key("2025-W40", -1, 1, "Kimya")


class TestParseLessonKey:
    """Test parse_lesson_key()."""

    def test_parse(self):
        parsed = parse_lesson_key("2025-W40|3|1|Döv.nəz. (lab.)")

        assert parsed is not None
        assert parsed.week_id == "2025-W40"
        assert parsed.day_index == 3
        assert parsed.lesson_index == 1
        assert parsed.subject == "Döv.nəz. (lab.)"

    def test_subject_may_contain_separator(self):
        parsed = parse_lesson_key("2025-W40|0|0|A|B")

        assert parsed is not None
        assert parsed.subject == "A|B"

    @pytest.mark.parametrize("key", ["", "Fəlsəfə", "2025-W40|1|Kimya", "2025-W40|x|1|Kimya"])
    def test_legacy_or_malformed(self, key):
        assert parse_lesson_key(key) is None

    def test_round_trip_through_compose(self):
        key = compose_lesson_key("2025-W41", 4, 3, "Kimya (lab.)")

        assert str(parse_lesson_key(key)) == key


class TestExtractSubjectFromKey:
    """Test extract_subject_from_key()."""

    def test_composite_key(self):
        assert extract_subject_from_key("2025-W40|2|1|Kimya (lab.)") == "Kimya (lab.)"
        assert extract_subject_from_key("2025-W40|2|1|A|B") == "A|B"

    def test_legacy_dash_key(self):
        assert extract_subject_from_key("2025-W40-Kimya") == "Kimya"

    def test_plain_subject(self):
        assert extract_subject_from_key("Fəlsəfə (mühazirə)") == "Fəlsəfə (mühazirə)"


class TestCurrentWeekId:
    """Test current_week_id()."""

    def test_iso_week(self):
        assert current_week_id(date(2025, 9, 29)) == "2025-W40"
        assert current_week_id(date(2024, 1, 22)) == "2024-W4"

    def test_iso_year_boundary(self):
        assert current_week_id(date(2024, 12, 30)) == "2025-W1"

    def test_defaults_to_today(self):
        assert current_week_id().count("-W") == 1
