"""Section controllers: list-level edits expressed as store merges.

Every operation reads the current section from the store, builds a new value
(copying only the entries it touches) and merges it back under the section's
top-level key. Bad indices and keys give an unchanged :class:`UpdateResult`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..bindings import ListBinding, should_offer_remove
from ..domain.codec import HEADING_KEYS
from ..domain.paths import UpdateResult, contact_path
from ..domain.record import (
    SKILL_LEVELS,
    CertificateEntry,
    ContactBlock,
    CourseEntry,
    DocumentRecord,
    EducationEntry,
    ENTRY_TYPES,
    ExperienceEntry,
    HeadingOverrides,
    RecordModel,
    SkillEntry,
    SkillLevel,
    coerce_skill_level,
)
from ..domain.styles import CONTACT_FIELDS, ContactField, contact_field
from ..store import DocumentStore, resolve_store
from .view_state import SectionViewState

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults for new entries and items
# ---------------------------------------------------------------------------

DEFAULT_ENTRIES: Dict[str, Callable[[], RecordModel]] = {
    "experiences": lambda: ExperienceEntry(
        company="Company Name",
        position="Position Title",
        start_date="Start Date",
        end_date="End Date",
        responsibilities=("Describe your key responsibilities and achievements",),
        technologies=("Add technologies used",),
    ),
    "education": lambda: EducationEntry(
        institution="Institution Name",
        degree="Degree Name",
        major="Major/Field of Study",
        graduation_year="Graduation Year",
        gpa="3.5",
        activities=("Add your extracurricular activities", "Add your achievements or honors"),
    ),
    "skills": lambda: SkillEntry(name="New Skill", level=SkillLevel.BEGINNER),
    "certificates": lambda: CertificateEntry(
        name="Certificate Name", issuer="Issuing Organization", date="Completion Date"
    ),
    "courses": lambda: CourseEntry(name="Course Name", platform="Learning Platform", completion_date="Completion Date"),
}

DEFAULT_ITEMS: Dict[str, str] = {
    "responsibilities": "Add your responsibility",
    "technologies": "New Skill",
    "activities": "New activity or achievement",
}

#: Nested lists per section; ``True`` marks lists that should keep one item.
NESTED_LISTS: Dict[str, Dict[str, bool]] = {
    "experiences": {"responsibilities": True, "technologies": False},
    "education": {"activities": False},
}

EntryInput = Union[RecordModel, Mapping[str, Any], None]


# ---------------------------------------------------------------------------
# List sections
# ---------------------------------------------------------------------------


class ListSectionController:
    """append / remove_at / set_field_at for one list-shaped section."""

    def __init__(
        self,
        section: str,
        store: Optional[DocumentStore] = None,
        view_state: Optional[SectionViewState] = None,
    ):
        if section not in ENTRY_TYPES:
            raise ValueError(f"'{section}' is not a list section")
        self.section = section
        self.entry_type = ENTRY_TYPES[section]
        self.store = resolve_store(store, f"{type(self).__name__}({section})")
        self.view_state = view_state

    def entries(self) -> Tuple[Any, ...]:
        return self.store.get_snapshot().get(self.section)

    def _snapshot(self) -> DocumentRecord:
        return self.store.get_snapshot()

    def _commit(self, entries: Tuple[Any, ...]) -> UpdateResult:
        return self.store.merge({self.section: entries})

    def _unchanged(self, reason: str) -> UpdateResult:
        logger.debug("%s: ignored (%s)", self.section, reason)
        return UpdateResult.unchanged(self._snapshot(), reason)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.entries())

    def default_entry(self) -> RecordModel:
        return DEFAULT_ENTRIES[self.section]()

    def append(self, entry: EntryInput = None) -> UpdateResult:
        if entry is None:
            entry = self.default_entry()
        elif not isinstance(entry, self.entry_type):
            entry = self.entry_type.model_validate(entry)
        return self._commit(self.entries() + (entry,))

    def remove_at(self, index: int) -> UpdateResult:
        entries = self.entries()
        if not 0 <= index < len(entries):
            return self._unchanged("index-out-of-range")
        result = self._commit(entries[:index] + entries[index + 1 :])
        if self.view_state is not None:
            self.view_state.on_entry_removed(index)
        return result

    def set_field_at(self, index: int, key: str, value: str) -> UpdateResult:
        """Replace one string field of entry *index*."""
        entries = self.entries()
        if not 0 <= index < len(entries):
            return self._unchanged("index-out-of-range")
        name = self.entry_type.resolve_key(key)
        if name is None:
            return self._unchanged("absent")
        if name not in self.entry_type.text_fields() or not isinstance(value, str):
            return self._unchanged("not-a-string")
        new_value: Any = coerce_skill_level(value) if name == "level" else value
        return self._replace_entry(index, entries[index].model_copy(update={name: new_value}))

    def _replace_entry(self, index: int, entry: RecordModel) -> UpdateResult:
        entries = self.entries()
        return self._commit(entries[:index] + (entry,) + entries[index + 1 :])

    def binding(self) -> ListBinding:
        return ListBinding(self)


class NestedListController(ListSectionController):
    """Adds the same triad for lists inside an entry."""

    def _list_key(self, list_key: str) -> Optional[str]:
        name = self.entry_type.resolve_key(list_key)
        if name is None or name not in NESTED_LISTS.get(self.section, {}):
            return None
        return name

    def items(self, index: int, list_key: str) -> Tuple[str, ...]:
        name = self._list_key(list_key)
        if name is None or not self._in_range(index):
            return ()
        return getattr(self.entries()[index], name) or ()

    def _set_items(self, index: int, name: str, items: Tuple[str, ...]) -> UpdateResult:
        return self._replace_entry(index, self.entries()[index].model_copy(update={name: items}))

    def append_item(self, index: int, list_key: str, value: Optional[str] = None) -> UpdateResult:
        name = self._list_key(list_key)
        if name is None:
            return self._unchanged("absent")
        if not self._in_range(index):
            return self._unchanged("index-out-of-range")
        item = DEFAULT_ITEMS[name] if value is None else value
        return self._set_items(index, name, self.items(index, name) + (item,))

    def remove_item(self, index: int, list_key: str, item_index: int) -> UpdateResult:
        name = self._list_key(list_key)
        if name is None:
            return self._unchanged("absent")
        items = self.items(index, name)
        if not 0 <= item_index < len(items):
            return self._unchanged("index-out-of-range")
        return self._set_items(index, name, items[:item_index] + items[item_index + 1 :])

    def set_item(self, index: int, list_key: str, item_index: int, value: str) -> UpdateResult:
        name = self._list_key(list_key)
        if name is None:
            return self._unchanged("absent")
        if not isinstance(value, str):
            return self._unchanged("not-a-string")
        items = self.items(index, name)
        if not 0 <= item_index < len(items):
            return self._unchanged("index-out-of-range")
        return self._set_items(index, name, items[:item_index] + (value,) + items[item_index + 1 :])

    def offers_item_remove(self, index: int, list_key: str) -> bool:
        name = self._list_key(list_key)
        if name is None:
            return False
        return should_offer_remove(self.items(index, name), NESTED_LISTS[self.section][name])


class ExperienceController(NestedListController):
    def __init__(self, store: Optional[DocumentStore] = None, view_state: Optional[SectionViewState] = None):
        super().__init__("experiences", store, view_state)


class EducationController(NestedListController):
    def __init__(self, store: Optional[DocumentStore] = None, view_state: Optional[SectionViewState] = None):
        super().__init__("education", store, view_state)


class SkillsController(ListSectionController):
    def __init__(self, store: Optional[DocumentStore] = None, view_state: Optional[SectionViewState] = None):
        super().__init__("skills", store, view_state)

    def cycle_level(self, index: int) -> UpdateResult:
        """Advance the skill's level, wrapping from Expert to Beginner."""
        entries = self.entries()
        if not 0 <= index < len(entries):
            return self._unchanged("index-out-of-range")
        current = SKILL_LEVELS.index(entries[index].level)
        next_level = SKILL_LEVELS[(current + 1) % len(SKILL_LEVELS)]
        return self._replace_entry(index, entries[index].model_copy(update={"level": next_level}))


# ---------------------------------------------------------------------------
# Contact block
# ---------------------------------------------------------------------------


class ContactController:
    """Edits the open set of contact fields; ``name`` is always present."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = resolve_store(store, "ContactController")

    def contact(self) -> ContactBlock:
        return self.store.get_snapshot().contact_info

    def present_fields(self) -> List[ContactField]:
        present = self.contact().fields()
        known = [field for field in CONTACT_FIELDS if field.key in present]
        catalog = {field.key for field in CONTACT_FIELDS}
        return known + [contact_field(key) for key in present if key not in catalog]

    def available_fields(self) -> List[ContactField]:
        present = self.contact().fields()
        return [field for field in CONTACT_FIELDS if field.key != "name" and field.key not in present]

    def offers_remove(self, key: str) -> bool:
        return key != "name" and self.contact().has_field(key)

    def set_field(self, key: str, value: str) -> UpdateResult:
        return self.store.set_field(contact_path(key), value)

    def add_field(self, key: str) -> UpdateResult:
        contact = self.contact()
        if key == "name" or contact.has_field(key):
            return UpdateResult.unchanged(self.store.get_snapshot(), "present")
        return self.store.merge({"contactInfo": contact.with_field(key, "")})

    def remove_field(self, key: str) -> UpdateResult:
        contact = self.contact()
        if key == "name":
            return UpdateResult.unchanged(self.store.get_snapshot(), "required")
        if not contact.has_field(key):
            return UpdateResult.unchanged(self.store.get_snapshot(), "absent")
        return self.store.merge({"contactInfo": contact.without_field(key)})


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

PARAGRAPH_SEPARATOR = "\n\n"


class SummaryController:
    """Summary text seen as one block or as blank-line separated segments.

    The layout comes from the section's view state and is never stored.
    """

    def __init__(self, store: Optional[DocumentStore] = None, view_state: Optional[SectionViewState] = None):
        self.store = resolve_store(store, "SummaryController")
        self.view_state = view_state if view_state is not None else SectionViewState("summary")

    @property
    def layout(self) -> str:
        return self.view_state.layout or "single"

    def segments(self) -> List[str]:
        summary = self.store.get_snapshot().summary
        if self.layout == "single":
            return [summary]
        return summary.split(PARAGRAPH_SEPARATOR)

    def _commit(self, segments: List[str]) -> UpdateResult:
        return self.store.merge({"summary": PARAGRAPH_SEPARATOR.join(segments)})

    def set_segment(self, index: int, value: str) -> UpdateResult:
        segments = self.segments()
        if not 0 <= index < len(segments):
            return UpdateResult.unchanged(self.store.get_snapshot(), "index-out-of-range")
        if self.layout == "single":
            return self.store.merge({"summary": value})
        segments[index] = value
        return self._commit(segments)

    def add_segment(self, value: str = "") -> UpdateResult:
        if self.layout == "single":
            return UpdateResult.unchanged(self.store.get_snapshot(), "single-layout")
        return self._commit(self.segments() + [value])

    def remove_segment(self, index: int) -> UpdateResult:
        if self.layout == "single":
            return UpdateResult.unchanged(self.store.get_snapshot(), "single-layout")
        segments = self.segments()
        if not 0 <= index < len(segments):
            return UpdateResult.unchanged(self.store.get_snapshot(), "index-out-of-range")
        del segments[index]
        return self._commit(segments)

    def change_layout(self, variant_id: str) -> UpdateResult:
        """Switch variant and rewrite the summary for it, dropping blank segments."""
        previous = self.segments()
        if not self.view_state.select_variant(variant_id):
            return UpdateResult.unchanged(self.store.get_snapshot(), "unknown-variant")
        parts = [part for segment in previous for part in segment.split(PARAGRAPH_SEPARATOR) if part.strip()]
        return self._commit(parts)


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


class HeadingsController:
    """Custom section headings, stored sparsely under ``headings``."""

    def __init__(self, store: Optional[DocumentStore] = None):
        self.store = resolve_store(store, "HeadingsController")

    @staticmethod
    def heading_key(section: str) -> Optional[str]:
        key = HEADING_KEYS.get(section, section)
        return key if HeadingOverrides.resolve_key(key) else None

    def heading(self, section: str) -> str:
        return self.store.get_snapshot().heading(self.heading_key(section) or section)

    def set_heading(self, section: str, text: str) -> UpdateResult:
        key = self.heading_key(section)
        if key is None:
            return UpdateResult.unchanged(self.store.get_snapshot(), "unknown-key")
        headings = self.store.get_snapshot().headings or HeadingOverrides()
        name = HeadingOverrides.resolve_key(key)
        return self.store.merge({"headings": headings.model_copy(update={name: text})})

    def clear_heading(self, section: str) -> UpdateResult:
        key = self.heading_key(section)
        headings = self.store.get_snapshot().headings
        if key is None or headings is None or headings.override(key) is None:
            return UpdateResult.unchanged(self.store.get_snapshot(), "absent")
        updated = headings.model_copy(update={HeadingOverrides.resolve_key(key): None})
        return self.store.merge({"headings": updated if updated.overridden() else None})
