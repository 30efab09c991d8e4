"""Tests for copy-on-write record updates."""

import pytest
from pydantic import ValidationError

from cv_editor.domain.paths import (
    contact_path,
    entry_path,
    format_path,
    get_value,
    heading_path,
    is_text_path,
    item_path,
    merge_record,
    parse_path,
    set_field,
    summary_path,
)
from cv_editor.domain.record import SkillEntry, SkillLevel
from cv_editor.domain.sample import sample_record

TOP_LEVEL = ("contact_info", "summary", "skills", "experiences", "certificates", "courses", "education", "headings")


@pytest.fixture
def record():
    return sample_record()


class TestPathHelpers:
    def test_builders(self):
        assert contact_path("email") == ("contactInfo", "email")
        assert summary_path() == ("summary",)
        assert entry_path("experiences", 0, "company") == ("experiences", 0, "company")
        assert item_path("experiences", 0, "responsibilities", 2) == ("experiences", 0, "responsibilities", 2)
        assert heading_path("skills") == ("headings", "skills")

    def test_parse_and_format(self):
        path = parse_path("experiences.0.responsibilities.1")
        assert path == ("experiences", 0, "responsibilities", 1)
        assert format_path(path) == "experiences.0.responsibilities.1"

    @pytest.mark.parametrize(
        "path, expected",
        [
            (("contactInfo", "name"), True),
            (("contactInfo", "mastodon"), True),
            (("experiences", 0, "endDate"), True),
            (("experiences", 0, "responsibilities", 0), True),
            (("skills", 0, "level"), True),
            (("experiences", 0, "responsibilities"), False),
            (("experiences", "first", "company"), False),
            (("contactInfo",), False),
            (("nope",), False),
            ((), False),
        ],
    )
    def test_is_text_path(self, path, expected):
        assert is_text_path(path) is expected

    def test_get_value(self, record):
        assert get_value(record, ("experiences", 0, "company")) == "Tech Corp"
        assert get_value(record, ("experiences", 5, "company")) is None
        assert get_value(record, ("contactInfo", "twitter")) is None


class TestSetField:
    def test_replaces_leaf(self, record):
        result = set_field(record, ("experiences", 0, "company"), "Acme")
        assert result.changed
        assert result.record.experiences[0].company == "Acme"
        assert result.keys == ("experiences",)
        assert record.experiences[0].company == "Tech Corp"

    def test_untouched_branches_shared(self, record):
        result = set_field(record, ("experiences", 0, "company"), "Acme")
        new = result.record
        assert new is not record
        for name in TOP_LEVEL:
            if name != "experiences":
                assert getattr(new, name) is getattr(record, name)
        assert new.experiences[0].responsibilities is record.experiences[0].responsibilities

    def test_nested_list_item(self, record):
        result = set_field(record, ("experiences", 0, "responsibilities", 1), "Shipped it")
        assert result.record.experiences[0].responsibilities[1] == "Shipped it"
        assert result.record.experiences[0].technologies is record.experiences[0].technologies

    def test_absent_parent_is_noop(self, record):
        result = set_field(record, ("experiences", 3, "company"), "Acme")
        assert not result.changed
        assert result.record is record
        assert result.reason == "absent"

    def test_absent_optional_leaf_is_noop(self, record):
        result = set_field(record, ("contactInfo", "twitter"), "@jd")
        assert result.record is record
        assert result.reason == "absent"

    def test_non_string_target_is_noop(self, record):
        result = set_field(record, ("experiences", 0, "responsibilities"), "oops")
        assert result.record is record
        assert result.reason == "not-a-string"

    def test_path_through_string_is_noop(self, record):
        result = set_field(record, ("summary", "x"), "oops")
        assert result.record is record
        assert result.reason == "not-nested"

    def test_unknown_key_is_noop(self, record):
        assert set_field(record, ("experiences", 0, "salary"), "1").record is record

    def test_empty_path_is_noop(self, record):
        assert set_field(record, (), "x").reason == "empty-path"

    def test_non_string_value_is_noop(self, record):
        assert set_field(record, ("summary",), 42).record is record

    def test_wire_and_attribute_names(self, record):
        a = set_field(record, ("experiences", 0, "startDate"), "2019-01").record
        b = set_field(record, ("experiences", 0, "start_date"), "2019-01").record
        assert a == b

    def test_string_index(self, record):
        assert set_field(record, ("skills", "1", "name"), "Vue").record.skills[1].name == "Vue"

    @pytest.mark.parametrize("value", ["Wizard", "expert", ""])
    def test_skill_level_coerced(self, record, value):
        result = set_field(record, ("skills", 0, "level"), value)
        assert result.changed
        assert result.record.skills[0].level is SkillLevel.BEGINNER

    def test_skill_level_valid_value_kept(self, record):
        result = set_field(record, ("skills", 5, "level"), "Expert")
        assert result.record.skills[5].level is SkillLevel.EXPERT

    def test_extra_contact_field(self):
        record = sample_record()
        record = merge_record(record, {"contactInfo": {"name": "J", "mastodon": "@a"}}).record
        result = set_field(record, ("contactInfo", "mastodon"), "@b")
        assert result.record.contact_info.value("mastodon") == "@b"


class TestMerge:
    def test_replaces_only_named_keys(self, record):
        skills = (SkillEntry(name="Rust", level=SkillLevel.EXPERT),)
        result = merge_record(record, {"skills": skills})
        assert result.changed
        assert result.record.get("skills") == skills
        for name in TOP_LEVEL:
            if name != "skills":
                assert getattr(result.record, name) is getattr(record, name)

    def test_every_merge_is_a_new_record(self, record):
        result = merge_record(record, {"summary": record.summary})
        assert result.changed
        assert result.record is not record

    def test_accepts_plain_data(self, record):
        result = merge_record(record, {"skills": [{"name": "Rust", "level": "bogus"}]})
        assert result.record.skills == (SkillEntry(name="Rust", level=SkillLevel.BEGINNER),)

    def test_passed_instances_kept_by_identity(self, record):
        entry = SkillEntry(name="Rust")
        result = merge_record(record, {"skills": (entry,)})
        assert result.record.skills[0] is entry

    def test_unknown_key_leaves_record(self, record):
        result = merge_record(record, {"hobbies": ["chess"], "summary": "x"})
        assert not result.changed
        assert result.record is record
        assert result.reason == "unknown-key"

    def test_empty_update(self, record):
        assert merge_record(record, {}).reason == "empty-update"

    def test_wrong_shape_raises(self, record):
        with pytest.raises(ValidationError):
            merge_record(record, {"skills": "Rust"})

    def test_removing_optional_contact_field(self, record):
        contact = record.contact_info.fields()
        del contact["phone"]
        result = merge_record(record, {"contactInfo": contact})
        assert "phone" not in result.record.contact_info.fields()
        assert result.record.contact_info.phone is None
