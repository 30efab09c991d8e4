"""Section controllers and per-section view state."""

from __future__ import annotations

from .controllers import (
    DEFAULT_ENTRIES,
    DEFAULT_ITEMS,
    ContactController,
    EducationController,
    ExperienceController,
    HeadingsController,
    ListSectionController,
    NestedListController,
    SkillsController,
    SummaryController,
)
from .view_state import SectionViewState

__all__ = [
    "DEFAULT_ENTRIES",
    "DEFAULT_ITEMS",
    "ContactController",
    "EducationController",
    "ExperienceController",
    "HeadingsController",
    "ListSectionController",
    "NestedListController",
    "SectionViewState",
    "SkillsController",
    "SummaryController",
]
