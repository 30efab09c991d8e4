"""Raw-text notation for document sections.

The notation is JSON: nested, human-readable, whitespace-insignificant
between tokens. Serialization is canonical (wire names, absent optional
fields omitted), so decoding a serialized value and serializing it again
yields the same text.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Tuple

from pydantic import ValidationError

from ..errors import SectionDecodeError, UnknownSectionError
from .paths import validate_top_level
from .record import DocumentRecord, RecordModel

#: Raw-text sections, in tab order, with display labels.
SECTIONS: Dict[str, str] = {
    "contactInfo": "Contact Info",
    "summary": "Summary",
    "experiences": "Experience",
    "education": "Education",
    "skills": "Skills",
    "certificates": "Certificates",
    "courses": "Courses",
}

SECTION_IDS: Tuple[str, ...] = tuple(SECTIONS)

#: Key used for a section in ``headings`` where it differs from the section id.
HEADING_KEYS: Dict[str, str] = {
    "contactInfo": "contactInfo",
    "summary": "summary",
    "experiences": "experience",
    "education": "education",
    "skills": "skills",
    "certificates": "certificates",
    "courses": "courses",
}

DEFAULT_INDENT = 2


def check_section(section: str) -> str:
    if section not in SECTIONS:
        raise UnknownSectionError(section)
    return section


def _to_plain(value: Any) -> Any:
    if isinstance(value, RecordModel):
        return value.to_wire()
    if isinstance(value, tuple):
        return [_to_plain(item) for item in value]
    return value


def serialize_section(record: DocumentRecord, section: str, indent: int = DEFAULT_INDENT) -> str:
    """Render the *section* slice of *record* as raw text."""
    check_section(section)
    value = record.get(section)
    return json.dumps(_to_plain(value), indent=indent, ensure_ascii=False)


def decode_section(section: str, text: str) -> Any:
    """Decode raw *text* into the structured value of *section*.

    Raises :class:`SectionDecodeError` when the text is not valid notation or
    does not match the section's shape.
    """
    check_section(section)
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise SectionDecodeError(section, f"invalid notation: {e}") from e
    try:
        return validate_top_level(section, data)
    except ValidationError as e:
        raise SectionDecodeError(section, f"{e.error_count()} validation error(s)") from e


def serialize_document(record: DocumentRecord, indent: int = DEFAULT_INDENT) -> str:
    """Render the whole record, headings included."""
    return json.dumps(record.to_wire(), indent=indent, ensure_ascii=False)


def decode_document(text: str) -> DocumentRecord:
    """Decode a whole-record import. Raises :class:`SectionDecodeError`."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise SectionDecodeError("document", f"invalid notation: {e}") from e
    try:
        return DocumentRecord.model_validate(data)
    except ValidationError as e:
        raise SectionDecodeError("document", f"{e.error_count()} validation error(s)") from e
