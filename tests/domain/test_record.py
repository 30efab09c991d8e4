"""Tests for the document record model."""

import pytest
from pydantic import ValidationError

from cv_editor.domain.record import (
    ContactBlock,
    DocumentRecord,
    EducationEntry,
    ExperienceEntry,
    SkillEntry,
    SkillLevel,
    coerce_skill_level,
)
from cv_editor.domain.sample import SAMPLE_DOCUMENT, sample_record


class TestSkillLevel:
    @pytest.mark.parametrize("value", ["Expert", "Advanced", "Intermediate", "Beginner"])
    def test_canonical_values_kept(self, value):
        assert coerce_skill_level(value).value == value

    @pytest.mark.parametrize("value", ["expert", "Guru", "", None, 3, ["Expert"]])
    def test_anything_else_becomes_beginner(self, value):
        assert coerce_skill_level(value) is SkillLevel.BEGINNER

    def test_entry_coerces_on_validation(self):
        entry = SkillEntry.model_validate({"name": "Go", "level": "Ninja"})
        assert entry.level is SkillLevel.BEGINNER

    def test_missing_level_defaults_to_beginner(self):
        assert SkillEntry.model_validate({"name": "Go"}).level is SkillLevel.BEGINNER


class TestContactBlock:
    def test_name_required(self):
        with pytest.raises(ValidationError):
            ContactBlock.model_validate({"email": "a@b.c"})

    def test_absent_fields_not_serialized(self):
        block = ContactBlock.model_validate({"name": "Ada", "email": "ada@example.com"})
        assert block.fields() == {"name": "Ada", "email": "ada@example.com"}
        assert not block.has_field("phone")
        assert block.value("phone") is None

    def test_empty_string_is_present(self):
        block = ContactBlock.model_validate({"name": "Ada", "phone": ""})
        assert block.has_field("phone")

    def test_extra_fields_preserved(self):
        block = ContactBlock.model_validate({"name": "Ada", "mastodon": "@ada"})
        assert block.fields()["mastodon"] == "@ada"

    def test_null_fields_are_absent(self):
        block = ContactBlock.model_validate({"name": "Ada", "phone": None, "portfolio": None})
        assert block.fields() == {"name": "Ada"}
        assert not block.has_field("portfolio")

    def test_with_and_without_field(self):
        block = ContactBlock.model_validate({"name": "Ada"})
        added = block.with_field("phone", "")
        assert added.has_field("phone")
        assert not block.has_field("phone")
        assert not added.without_field("phone").has_field("phone")

    def test_name_cannot_be_removed(self):
        block = ContactBlock.model_validate({"name": "Ada"})
        assert block.without_field("name") is block


class TestEntries:
    def test_experience_end_date_optional(self):
        entry = ExperienceEntry.model_validate(
            {"company": "A", "position": "B", "startDate": "2020", "responsibilities": ["x"], "technologies": []}
        )
        assert entry.is_ongoing
        assert "endDate" not in entry.to_wire()

    def test_numbers_accepted_as_strings(self):
        entry = EducationEntry.model_validate(
            {"institution": "U", "degree": "BSc", "major": "CS", "graduationYear": 2018, "gpa": 3.8}
        )
        assert entry.graduation_year == "2018"
        assert entry.gpa == "3.8"

    def test_wire_names_are_camel_case(self):
        entry = EducationEntry(institution="U", degree="BSc", major="CS", graduation_year="2018")
        assert entry.to_wire() == {"institution": "U", "degree": "BSc", "major": "CS", "graduationYear": "2018"}

    def test_models_are_frozen(self):
        entry = SkillEntry(name="Go")
        with pytest.raises(ValidationError):
            entry.name = "Rust"

    def test_text_and_list_fields(self):
        assert "company" in ExperienceEntry.text_fields()
        assert "end_date" in ExperienceEntry.text_fields()
        assert ExperienceEntry.list_fields() == ("responsibilities", "technologies")
        assert "level" in SkillEntry.text_fields()
        assert EducationEntry.list_fields() == ("activities",)


class TestDocumentRecord:
    def test_sample_round_trips_to_wire(self):
        assert sample_record().to_wire() == SAMPLE_DOCUMENT

    def test_get_accepts_wire_and_attribute_names(self, minimal_record):
        assert minimal_record.get("contactInfo") is minimal_record.contact_info
        assert minimal_record.get("contact_info") is minimal_record.contact_info
        assert minimal_record.get("nope", "fallback") == "fallback"

    def test_defaults_for_missing_sections(self, minimal_record):
        assert minimal_record.summary == ""
        assert minimal_record.skills == ()
        assert minimal_record.headings is None

    def test_heading_defaults_and_overrides(self):
        record = DocumentRecord.model_validate(
            {"contactInfo": {"name": "Ada"}, "headings": {"experience": "Career"}}
        )
        assert record.heading("experience") == "Career"
        assert record.heading("skills") == "Technical Skills"
        assert record.headings.overridden() == {"experience": "Career"}
