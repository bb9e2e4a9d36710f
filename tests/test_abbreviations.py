"""Tests for subject and teacher abbreviations."""

import pytest

from flexwise.core.abbreviations import (
    SUBJECT_ABBREVIATIONS,
    mobile_teacher_abbreviation,
    register_abbreviation,
    subject_abbreviation,
    teacher_abbreviation,
)


class TestSubjectAbbreviation:
    @pytest.mark.parametrize(
        "subject,expected",
        [("Mathematik", "Ma"), ("Biologie", "Bio"), ("Französisch", "Fr"), ("Informatik", "If")],
    )
    def test_known_subjects(self, subject, expected):
        assert subject_abbreviation(subject) == expected

    def test_unknown_subject_returned_unchanged(self):
        assert subject_abbreviation("Latein") == "Latein"

    def test_sport_and_spanisch_share_code(self):
        assert subject_abbreviation("Sport") == subject_abbreviation("Spanisch") == "Sp"

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            SUBJECT_ABBREVIATIONS["Latein"] = "La"


class TestTeacherAbbreviation:
    def test_first_initial_and_last_name(self):
        assert mobile_teacher_abbreviation("Anna Weber") == "A.Web"

    def test_uses_last_word(self):
        assert mobile_teacher_abbreviation("Anna Maria Hoffmann") == "A.Hof"

    def test_short_last_name_kept(self):
        assert mobile_teacher_abbreviation("Jan Ott") == "J.Ott"

    def test_single_word_unchanged(self):
        assert mobile_teacher_abbreviation("Weber") == "Weber"

    def test_empty(self):
        assert mobile_teacher_abbreviation("") == ""

    def test_teacher_abbreviation_matches_mobile(self):
        assert teacher_abbreviation("Frau Weber") == "F.Web"


class TestRegisterAbbreviation:
    def test_known_teacher(self):
        assert register_abbreviation("Frau Müller") == "IMü"

    def test_unknown_teacher_unchanged(self):
        assert register_abbreviation("Herr Neu") == "Herr Neu"
