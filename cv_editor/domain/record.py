"""Structured CV document model.

Every model is frozen and every sequence is a tuple, so a record can only be
changed by building a new one. ``model_copy(update=...)`` keeps untouched
attributes by reference, which is what lets consumers detect changed subtrees
with an identity check.

Wire names are camelCase (``contactInfo``, ``startDate``); attribute names are
snake_case. Both spellings are accepted on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class SkillLevel(str, Enum):
    """Ordered proficiency scale, lowest first."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


SKILL_LEVELS: Tuple[SkillLevel, ...] = tuple(SkillLevel)


def coerce_skill_level(value: Any) -> SkillLevel:
    """Return *value* as a :class:`SkillLevel`, falling back to the lowest level."""
    if isinstance(value, SkillLevel):
        return value
    if isinstance(value, str):
        for level in SKILL_LEVELS:
            if level.value == value:
                return level
    return SkillLevel.BEGINNER


_TEXT_ANNOTATIONS = (str, Optional[str], SkillLevel)
_LIST_ANNOTATIONS = (Tuple[str, ...], Optional[Tuple[str, ...]])


class RecordModel(BaseModel):
    """Base for every node of the document tree."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @classmethod
    def resolve_key(cls, key: str) -> Optional[str]:
        """Map a wire name or attribute name to the attribute name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    @classmethod
    def text_fields(cls) -> Tuple[str, ...]:
        """Attribute names holding a single string (possibly absent)."""
        return tuple(name for name, info in cls.model_fields.items() if info.annotation in _TEXT_ANNOTATIONS)

    @classmethod
    def list_fields(cls) -> Tuple[str, ...]:
        """Attribute names holding an ordered list of strings."""
        return tuple(name for name, info in cls.model_fields.items() if info.annotation in _LIST_ANNOTATIONS)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Contact block
# ---------------------------------------------------------------------------

#: Keys the contact block knows by name, in display order.
CONTACT_KEYS: Tuple[str, ...] = (
    "name",
    "title",
    "email",
    "phone",
    "location",
    "linkedin",
    "github",
    "website",
    "twitter",
)


class ContactBlock(RecordModel):
    """``name`` plus an open set of optional string fields.

    An absent field is ``None`` and is dropped from serialization; an empty
    string is a present field with no text yet.
    """

    model_config = ConfigDict(extra="allow")

    __pydantic_extra__: Dict[str, str] = Field(init=False)

    name: str
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    website: Optional[str] = None
    twitter: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_null_fields(cls, data: Any) -> Any:
        # null means absent for custom keys too
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def fields(self) -> Dict[str, str]:
        """Present fields only, known keys first."""
        return self.to_wire()

    def has_field(self, key: str) -> bool:
        return key in self.fields()

    def value(self, key: str) -> Optional[str]:
        return self.fields().get(key)

    def with_field(self, key: str, value: str) -> "ContactBlock":
        data = self.fields()
        data[key] = value
        return ContactBlock.model_validate(data)

    def without_field(self, key: str) -> "ContactBlock":
        if key == "name" or not self.has_field(key):
            return self
        data = self.fields()
        del data[key]
        return ContactBlock.model_validate(data)


# ---------------------------------------------------------------------------
# List entries
# ---------------------------------------------------------------------------


class SkillEntry(RecordModel):
    name: str
    level: SkillLevel = SkillLevel.BEGINNER

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> SkillLevel:
        return coerce_skill_level(value)


class ExperienceEntry(RecordModel):
    """A position held; ``end_date`` absent means the role is ongoing."""

    company: str
    position: str
    start_date: str
    end_date: Optional[str] = None
    responsibilities: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()

    @property
    def is_ongoing(self) -> bool:
        return self.end_date is None


class CertificateEntry(RecordModel):
    name: str
    issuer: str
    date: str


class CourseEntry(RecordModel):
    name: str
    platform: str
    completion_date: str


class EducationEntry(RecordModel):
    institution: str
    degree: str
    major: str
    graduation_year: str
    gpa: Optional[str] = None
    activities: Optional[Tuple[str, ...]] = None


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

#: Heading shown for a section when no override exists.
DEFAULT_HEADINGS: Dict[str, str] = {
    "contactInfo": "Contact Information",
    "summary": "Professional Summary",
    "experience": "Work Experience",
    "education": "Education",
    "skills": "Technical Skills",
    "certificates": "Certifications",
    "courses": "Professional Development",
}


class HeadingOverrides(RecordModel):
    """Sparse per-section custom headings."""

    contact_info: Optional[str] = None
    summary: Optional[str] = None
    experience: Optional[str] = None
    education: Optional[str] = None
    skills: Optional[str] = None
    certificates: Optional[str] = None
    courses: Optional[str] = None

    def override(self, section: str) -> Optional[str]:
        name = self.resolve_key(section)
        return getattr(self, name) if name else None

    def overridden(self) -> Dict[str, str]:
        return self.to_wire()


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class DocumentRecord(RecordModel):
    """The authoritative CV tree."""

    contact_info: ContactBlock
    summary: str = ""
    skills: Tuple[SkillEntry, ...] = ()
    experiences: Tuple[ExperienceEntry, ...] = ()
    certificates: Tuple[CertificateEntry, ...] = ()
    courses: Tuple[CourseEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    headings: Optional[HeadingOverrides] = None

    def get(self, key: str, default: Any = None) -> Any:
        """Read a top-level value by wire or attribute name."""
        name = self.resolve_key(key)
        if name is None:
            return default
        return getattr(self, name)

    def heading(self, section: str) -> str:
        """Custom heading for *section*, or its default."""
        if self.headings is not None:
            custom = self.headings.override(section)
            if custom is not None:
                return custom
        return DEFAULT_HEADINGS.get(section, section)


#: Entry model for each list-shaped top-level key.
ENTRY_TYPES: Dict[str, type] = {
    "skills": SkillEntry,
    "experiences": ExperienceEntry,
    "certificates": CertificateEntry,
    "courses": CourseEntry,
    "education": EducationEntry,
}
