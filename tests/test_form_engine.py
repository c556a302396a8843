"""
Tests for the field form engine.

Key invariants tested:
- Focus moves around a fixed ring and next/prev are inverse
- Numeric fields drop non-digits, enum fields take no free text
- Backspace never touches an enum field; enums change only by cycling
- Validation reports the first failing rule only
"""
import pytest

from courtside.core.exceptions import ValidationError
from courtside.models import ContentType, SkillLevel
from courtside.services.form_engine import (
    EnumField,
    FieldKind,
    Form,
    NumericField,
    TextField,
    int_range,
    max_length,
    required_length,
    separated_parts,
)
from courtside.services.forms import SessionForm, TrainingContentForm


def type_text(form: Form, text: str) -> None:
    for ch in text:
        form.insert_char(ch)


class TestFocusRing:

    def test_session_form_order(self):
        form = SessionForm()
        seen = []
        for _ in range(len(form.fields) + 1):
            seen.append(form.focused_name)
            form.next_field()
        assert seen == [
            "title",
            "description",
            "scheduled_date",
            "scheduled_time",
            "duration_minutes",
            "skill_level",
            "title",
        ]

    def test_prev_from_first_wraps_to_last(self):
        form = SessionForm()
        form.prev_field()
        assert form.focused_name == "skill_level"

    @pytest.mark.parametrize("start", range(6))
    def test_next_then_prev_is_identity(self, start):
        form = SessionForm()
        for _ in range(start):
            form.next_field()
        before = form.focused_name
        form.next_field()
        form.prev_field()
        assert form.focused_name == before

    def test_content_form_order(self):
        form = TrainingContentForm()
        names = []
        for _ in range(4):
            names.append(form.focused_name)
            form.next_field()
        assert names == ["title", "description", "duration_minutes", "content_type"]
        assert form.focused_name == "title"

    def test_duplicate_field_names_rejected(self):
        with pytest.raises(ValueError):
            Form([TextField("a", "A"), TextField("a", "A again")])


class TestInput:

    def test_text_field_appends(self):
        form = SessionForm()
        type_text(form, "Serve")
        assert form.value("title") == "Serve"

    def test_numeric_field_drops_non_digits(self):
        form = SessionForm()
        form.focus("duration_minutes")
        type_text(form, "6a0-")
        assert form.value("duration_minutes") == "60"

    @pytest.mark.parametrize("ch", ["²", "٣", "①"])
    def test_numeric_field_drops_unicode_digits(self, ch):
        form = SessionForm()
        form.focus("duration_minutes")
        type_text(form, "1" + ch)
        assert form.value("duration_minutes") == "1"

    def test_enum_field_rejects_free_text(self):
        form = SessionForm()
        form.focus("skill_level")
        assert form.insert_char("x") is False
        assert form.value("skill_level") is SkillLevel.BEGINNER

    def test_backspace_removes_last_char(self):
        form = SessionForm()
        type_text(form, "Drill")
        form.delete_char()
        assert form.value("title") == "Dril"

    def test_backspace_on_empty_buffer_is_harmless(self):
        form = SessionForm()
        form.delete_char()
        assert form.value("title") == ""

    def test_backspace_on_enum_is_noop(self):
        form = SessionForm()
        form.focus("skill_level")
        form.cycle_next()
        form.delete_char()
        assert form.value("skill_level") is SkillLevel.INTERMEDIATE

    def test_enum_cycles_forward_and_wraps(self):
        form = SessionForm()
        form.focus("skill_level")
        values = []
        for _ in range(3):
            form.cycle_next()
            values.append(form.value("skill_level"))
        assert values == [SkillLevel.INTERMEDIATE, SkillLevel.ADVANCED, SkillLevel.BEGINNER]

    def test_enum_cycles_backward_and_wraps(self):
        form = TrainingContentForm()
        form.focus("content_type")
        form.cycle_prev()
        assert form.value("content_type") is ContentType.COOLDOWN

    def test_cycle_on_text_field_does_nothing(self):
        form = SessionForm()
        type_text(form, "abc")
        form.cycle_next()
        assert form.value("title") == "abc"

    def test_field_kinds(self):
        assert TextField("t", "T").kind is FieldKind.TEXT
        assert NumericField("n", "N").kind is FieldKind.NUMERIC
        assert EnumField.of("e", "E", SkillLevel).kind is FieldKind.ENUM

    def test_set_value_rejects_unknown_option(self):
        form = SessionForm()
        with pytest.raises(ValueError):
            form.set_value("skill_level", "expert")


class TestValidation:

    @pytest.mark.parametrize("length", [3, 4, 50, 99, 100])
    def test_session_title_lengths_accepted(self, length):
        form = SessionForm()
        form.set_value("title", "x" * length)
        assert form.first_error() is None

    def test_session_title_too_short(self):
        form = SessionForm()
        form.set_value("title", "xx")
        assert form.first_error() == ("title", "Title must be at least 3 characters")

    def test_session_title_too_long(self):
        form = SessionForm()
        form.set_value("title", "x" * 101)
        assert form.first_error() == ("title", "Title must be less than 100 characters")

    def test_title_required(self):
        with pytest.raises(ValidationError) as exc:
            SessionForm().validate()
        assert str(exc.value) == "Title is required"
        assert exc.value.field == "title"
        assert exc.value.error_code == "VALIDATION_ERROR_TITLE"

    def test_whitespace_only_title_is_required(self):
        form = SessionForm()
        form.set_value("title", "   ")
        assert form.first_error() == ("title", "Title is required")

    def test_title_is_stripped_before_length_check(self):
        form = SessionForm()
        form.set_value("title", " ab ")
        assert form.first_error() == ("title", "Title must be at least 3 characters")

    def test_content_title_allows_two_characters(self):
        form = TrainingContentForm()
        form.set_value("title", "ab")
        assert form.first_error() is None

    def test_content_title_rejects_one_character(self):
        form = TrainingContentForm()
        form.set_value("title", "a")
        assert form.first_error() == ("title", "Title must be at least 2 characters")

    def test_description_limit(self):
        form = SessionForm()
        form.set_value("title", "Serve Clinic")
        form.set_value("description", "d" * 500)
        assert form.first_error() is None
        form.set_value("description", "d" * 501)
        assert form.first_error() == ("description", "Description must be less than 500 characters")

    @pytest.mark.parametrize("value", ["2026-11-02", "99-99-99"])
    def test_date_structural_check_passes(self, value):
        form = SessionForm()
        form.set_value("title", "Serve Clinic")
        form.set_value("scheduled_date", value)
        assert form.first_error() is None

    @pytest.mark.parametrize("value", ["20261102", "2026-11", "2026-11-02-01"])
    def test_date_structural_check_fails(self, value):
        form = SessionForm()
        form.set_value("title", "Serve Clinic")
        form.set_value("scheduled_date", value)
        assert form.first_error() == ("scheduled_date", "Date format should be YYYY-MM-DD")

    @pytest.mark.parametrize("value", ["0930", "09:30:00"])
    def test_time_structural_check_fails(self, value):
        form = SessionForm()
        form.set_value("title", "Serve Clinic")
        form.set_value("scheduled_time", value)
        assert form.first_error() == ("scheduled_time", "Time format should be HH:MM")

    @pytest.mark.parametrize("value,ok", [("4", False), ("5", True), ("480", True), ("481", False)])
    def test_session_duration_range(self, value, ok):
        form = SessionForm()
        form.set_value("title", "Serve Clinic")
        form.set_value("duration_minutes", value)
        expected = None if ok else ("duration_minutes", "Duration must be between 5 and 480 minutes")
        assert form.first_error() == expected

    def test_content_duration_range(self):
        form = TrainingContentForm()
        form.set_value("title", "Lobs")
        form.set_value("duration_minutes", "1")
        assert form.first_error() is None
        form.set_value("duration_minutes", "0")
        assert form.first_error() == ("duration_minutes", "Duration must be between 1 and 480 minutes")

    def test_only_first_error_reported(self):
        form = SessionForm()
        form.set_value("title", "x")
        form.set_value("scheduled_date", "bad")
        form.set_value("duration_minutes", "999")
        assert form.first_error()[0] == "title"


class TestRuleBuilders:

    def test_int_range_rejects_non_number(self):
        form = Form([TextField("n", "Count")], [int_range("n", "Count", 1, 3)])
        form.set_value("n", "two")
        assert form.first_error() == ("n", "Count must be a number")

    def test_int_range_rejects_unicode_digits(self):
        form = Form([TextField("n", "Count")], [int_range("n", "Count", 1, 30)])
        form.set_value("n", "1²")
        assert form.first_error() == ("n", "Count must be a number")

    def test_int_range_custom_unit(self):
        form = Form([TextField("n", "Sets")], [int_range("n", "Sets", 1, 3, unit="sets")])
        form.set_value("n", "9")
        assert form.first_error() == ("n", "Sets must be between 1 and 3 sets")

    def test_empty_optional_fields_pass(self):
        form = Form(
            [TextField("a", "A"), TextField("b", "B")],
            [max_length("a", "A", 5), separated_parts("b", ":", 2, "bad")],
        )
        assert form.first_error() is None

    def test_required_length_rule(self):
        form = Form([TextField("name", "Name")], [required_length("name", "Name", 2, 4)])
        form.set_value("name", "abcde")
        assert form.first_error() == ("name", "Name must be less than 4 characters")
