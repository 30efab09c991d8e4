"""CV Editor Domain - Pure logic for the CV document and its text forms.

This package has no store, session or terminal dependencies.
It operates on immutable records, strings and dicts.
"""

from .codec import (
    SECTION_IDS,
    SECTIONS,
    decode_document,
    decode_section,
    serialize_document,
    serialize_section,
)
from .markup import (
    ALIGNMENTS,
    FONT_FAMILIES,
    FONT_SIZES,
    InlineStyle,
    Paragraph,
    RichText,
    canonical_markup,
    markup_to_text,
    parse_markup,
    serialize_markup,
)
from .paths import (
    UpdateResult,
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
from .record import (
    DEFAULT_HEADINGS,
    SKILL_LEVELS,
    CertificateEntry,
    ContactBlock,
    CourseEntry,
    DocumentRecord,
    EducationEntry,
    ExperienceEntry,
    HeadingOverrides,
    SkillEntry,
    SkillLevel,
    coerce_skill_level,
)
from .sample import SAMPLE_DOCUMENT, sample_record
from .styles import CONTACT_FIELDS, LEVEL_BARS, SECTION_STYLES, StyleVariant, find_variant, variants_for
from .typography import INPUT_RULES, apply_typography, match_input_rule

__all__ = [
    # Record
    "DocumentRecord",
    "ContactBlock",
    "SkillEntry",
    "SkillLevel",
    "SKILL_LEVELS",
    "coerce_skill_level",
    "ExperienceEntry",
    "EducationEntry",
    "CertificateEntry",
    "CourseEntry",
    "HeadingOverrides",
    "DEFAULT_HEADINGS",
    "SAMPLE_DOCUMENT",
    "sample_record",
    # Updates
    "UpdateResult",
    "merge_record",
    "set_field",
    "is_text_path",
    "parse_path",
    "format_path",
    "get_value",
    "contact_path",
    "summary_path",
    "entry_path",
    "item_path",
    "heading_path",
    # Codec
    "SECTIONS",
    "SECTION_IDS",
    "serialize_section",
    "decode_section",
    "serialize_document",
    "decode_document",
    # Markup
    "InlineStyle",
    "Paragraph",
    "RichText",
    "parse_markup",
    "serialize_markup",
    "canonical_markup",
    "markup_to_text",
    "FONT_FAMILIES",
    "FONT_SIZES",
    "ALIGNMENTS",
    # Typography
    "INPUT_RULES",
    "match_input_rule",
    "apply_typography",
    # Styles
    "StyleVariant",
    "SECTION_STYLES",
    "variants_for",
    "find_variant",
    "CONTACT_FIELDS",
    "LEVEL_BARS",
]
