"""Presentation variant catalogs.

Variants are opaque to the editing core: a section's view state picks one by
id and the renderer reads ``container`` and ``item`` to arrange entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Tuple

from .record import SkillLevel


@dataclass(frozen=True)
class StyleVariant:
    id: str
    name: str
    layout: str
    container: str
    item: str


def _variants(*rows: Tuple[str, str, str, str, str]) -> Tuple[StyleVariant, ...]:
    return tuple(StyleVariant(*row) for row in rows)


# id, name, layout, container, item
CONTACT_STYLES = _variants(
    ("modern-grid", "Modern Grid", "grid", "grid", "cell"),
    ("centered", "Centered", "centered", "stack-centered", "line"),
    ("minimalist", "Minimalist", "flex", "row", "inline"),
)

SUMMARY_STYLES = _variants(
    ("single-paragraph", "Single Paragraph", "single", "stack", "paragraph"),
    ("bullet-points", "Bullet Points", "bullets", "list", "bullet"),
    ("multi-paragraph", "Multiple Paragraphs", "paragraphs", "stack", "paragraph"),
)

EXPERIENCE_STYLES = _variants(
    ("timeline", "Timeline", "timeline", "stack", "ruled"),
    ("cards", "Cards", "cards", "grid", "card"),
    ("minimal", "Minimal", "minimal", "stack", "plain"),
)

EDUCATION_STYLES = _variants(
    ("classic", "Classic", "classic", "stack", "ruled"),
    ("modern", "Modern", "modern", "stack", "card"),
    ("compact", "Compact", "compact", "stack", "plain"),
)

SKILL_STYLES = _variants(
    ("tags", "Tags", "tags", "row", "tag"),
    ("grid", "Grid", "grid", "grid", "cell"),
    ("bars", "Progress Bars", "bars", "stack", "bar"),
)

CERTIFICATE_STYLES = _variants(
    ("grid", "Grid", "grid", "grid", "card"),
    ("list", "List", "list", "stack", "line"),
    ("compact", "Compact", "compact", "row", "inline"),
)

COURSE_STYLES = _variants(
    ("grid", "Grid", "grid", "grid", "card"),
    ("timeline", "Timeline", "timeline", "stack", "ruled"),
    ("compact", "Compact", "compact", "row", "inline"),
)

SECTION_STYLES: Dict[str, Tuple[StyleVariant, ...]] = {
    "contactInfo": CONTACT_STYLES,
    "summary": SUMMARY_STYLES,
    "experiences": EXPERIENCE_STYLES,
    "education": EDUCATION_STYLES,
    "skills": SKILL_STYLES,
    "certificates": CERTIFICATE_STYLES,
    "courses": COURSE_STYLES,
}


def variants_for(section: str) -> Tuple[StyleVariant, ...]:
    return SECTION_STYLES.get(section, ())


def default_variant(section: str) -> Optional[StyleVariant]:
    variants = variants_for(section)
    return variants[0] if variants else None


def find_variant(section: str, variant_id: str) -> Optional[StyleVariant]:
    for variant in variants_for(section):
        if variant.id == variant_id:
            return variant
    return None


# ---------------------------------------------------------------------------
# Contact fields
# ---------------------------------------------------------------------------


class ContactField(NamedTuple):
    key: str
    label: str
    icon: str


CONTACT_FIELDS: Tuple[ContactField, ...] = (
    ContactField("name", "Name", "user"),
    ContactField("title", "Title", "user"),
    ContactField("email", "Email", "mail"),
    ContactField("phone", "Phone", "phone"),
    ContactField("location", "Location", "map-pin"),
    ContactField("linkedin", "LinkedIn", "linkedin"),
    ContactField("github", "GitHub", "github"),
)

_EXTRA_CONTACT_FIELDS: Tuple[ContactField, ...] = (
    ContactField("website", "Website", "globe"),
    ContactField("twitter", "Twitter", "twitter"),
)


def contact_field(key: str) -> ContactField:
    """Catalog entry for *key*; unknown keys get a generic entry."""
    for field in CONTACT_FIELDS + _EXTRA_CONTACT_FIELDS:
        if field.key == key:
            return field
    return ContactField(key, key.replace("_", " ").title(), "globe")


# ---------------------------------------------------------------------------
# Skill levels
# ---------------------------------------------------------------------------

LEVEL_BARS: Dict[SkillLevel, int] = {
    SkillLevel.BEGINNER: 25,
    SkillLevel.INTERMEDIATE: 50,
    SkillLevel.ADVANCED: 75,
    SkillLevel.EXPERT: 100,
}

LEVEL_COLORS: Dict[SkillLevel, str] = {
    SkillLevel.BEGINNER: "green",
    SkillLevel.INTERMEDIATE: "blue",
    SkillLevel.ADVANCED: "magenta",
    SkillLevel.EXPERT: "red",
}
