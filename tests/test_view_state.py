"""Tests for per-section view state."""

import pytest

from cv_editor.sections.view_state import SectionViewState


def test_defaults_to_first_variant():
    state = SectionViewState("experiences")
    assert state.variant_id == "timeline"
    assert [v.id for v in state.variants] == ["timeline", "cards", "minimal"]
    assert not state.selector_open


def test_initial_variant():
    assert SectionViewState("skills", "bars").layout == "bars"


def test_unknown_initial_variant_keeps_default():
    assert SectionViewState("skills", "pie").variant_id == "tags"


def test_selecting_closes_selector():
    state = SectionViewState("education")
    assert state.toggle_selector()
    assert state.select_variant("compact")
    assert not state.selector_open
    assert state.variant_id == "compact"


def test_unknown_variant_rejected():
    state = SectionViewState("education")
    state.toggle_selector()
    assert not state.select_variant("fancy")
    assert state.selector_open
    assert state.variant_id == "classic"


def test_entry_toggles():
    state = SectionViewState("education")
    assert state.toggle_names == ("show_activities", "show_gpa")
    assert state.flag(3, "show_gpa")
    assert state.toggle(3, "show_gpa") is False
    assert not state.flag(3, "show_gpa")
    assert state.flag(3, "show_activities")
    assert state.flag(0, "show_gpa")


def test_unknown_toggle():
    with pytest.raises(KeyError):
        SectionViewState("skills").flag(0, "show_bullets")


def test_removal_shifts_toggles():
    state = SectionViewState("experiences")
    state.toggle(0, "show_skills")
    state.toggle(2, "show_bullets")
    state.on_entry_removed(0)
    assert state.flag(0, "show_skills")
    assert not state.flag(1, "show_bullets")
    assert state.flag(2, "show_bullets")


def test_reset():
    state = SectionViewState("experiences", "cards")
    state.toggle(0, "show_skills")
    state.reset()
    assert state.variant_id == "timeline"
    assert state.flag(0, "show_skills")
