"""Editing session: wires the store, controllers, fields and raw-text views."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Sequence, Union

from .bindings import BoundField
from .config import EditorConfig
from .domain.codec import SECTION_IDS, decode_document, serialize_document
from .domain.paths import FieldPath, PathKey, UpdateResult, parse_path
from .domain.record import DocumentRecord
from .domain.sample import sample_record
from .observability import EditorObserver
from .raw_text import RawTextWorkspace
from .sections.controllers import (
    ContactController,
    EducationController,
    ExperienceController,
    HeadingsController,
    ListSectionController,
    SkillsController,
    SummaryController,
)
from .sections.view_state import SectionViewState
from .store import DocumentStore, document_context

logger = logging.getLogger(__name__)

PathInput = Union[str, Sequence[PathKey]]


def load_seed(path: Union[str, Path]) -> DocumentRecord:
    """Read a whole-document seed file.

    Raises ``OSError`` when unreadable and ``SectionDecodeError`` when the
    text is not a valid document.
    """
    text = Path(path).read_text(encoding="utf-8")
    return decode_document(text)


class EditorSession:
    """One editing session over one document."""

    def __init__(
        self,
        record: Optional[DocumentRecord] = None,
        config: Optional[EditorConfig] = None,
        observer: Optional[EditorObserver] = None,
    ):
        self.config = config or EditorConfig()
        self.observer = observer or EditorObserver(verbose=self.config.verbose)
        self.store = DocumentStore(record if record is not None else sample_record(), observer=self.observer)

        self.view_states: Dict[str, SectionViewState] = {
            section: SectionViewState(section, self.config.variants.get(section)) for section in SECTION_IDS
        }
        self.raw_text = RawTextWorkspace(
            self.store,
            indent=self.config.raw_text_indent,
            observer=self.observer,
            active_section=self.config.default_section,
        )

        self.contact = ContactController(self.store)
        self.summary = SummaryController(self.store, self.view_states["summary"])
        self.experiences = ExperienceController(self.store, self.view_states["experiences"])
        self.education = EducationController(self.store, self.view_states["education"])
        self.skills = SkillsController(self.store, self.view_states["skills"])
        self.certificates = ListSectionController("certificates", self.store, self.view_states["certificates"])
        self.courses = ListSectionController("courses", self.store, self.view_states["courses"])
        self.headings = HeadingsController(self.store)

        self._fields: Dict[FieldPath, BoundField] = {}

    @classmethod
    def from_config(cls, config: EditorConfig, observer: Optional[EditorObserver] = None) -> "EditorSession":
        """Seed from ``config.seed_path`` when set, else the bundled sample."""
        record = load_seed(config.seed_path) if config.seed_path else None
        return cls(record=record, config=config, observer=observer)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> DocumentRecord:
        return self.store.get_snapshot()

    def list_controller(self, section: str) -> ListSectionController:
        controllers: Dict[str, ListSectionController] = {
            "experiences": self.experiences,
            "education": self.education,
            "skills": self.skills,
            "certificates": self.certificates,
            "courses": self.courses,
        }
        if section not in controllers:
            raise KeyError(f"'{section}' is not a list section")
        return controllers[section]

    @contextmanager
    def context(self) -> Iterator[DocumentStore]:
        with document_context(self.store) as store:
            yield store

    # ------------------------------------------------------------------
    # Rich-text fields
    # ------------------------------------------------------------------

    def field(self, path: PathInput) -> BoundField:
        """Bound field for *path*, created on first use."""
        key = parse_path(path) if isinstance(path, str) else tuple(path)
        bound = self._fields.get(key)
        if bound is None or not bound.attached:
            bound = BoundField(key, self.store, placeholder=self.config.placeholder, observer=self.observer)
            self._fields[key] = bound
        return bound

    def close_field(self, path: PathInput) -> None:
        key = parse_path(path) if isinstance(path, str) else tuple(path)
        bound = self._fields.pop(key, None)
        if bound is not None:
            bound.close()

    def close(self) -> None:
        for bound in self._fields.values():
            bound.close()
        self._fields.clear()

    # ------------------------------------------------------------------
    # Whole-document import/export
    # ------------------------------------------------------------------

    def import_document(self, text: str) -> UpdateResult:
        """Replace the record with a decoded document. Raises on bad text."""
        return self.store.replace(decode_document(text))

    def export_document(self) -> str:
        return serialize_document(self.snapshot, indent=self.config.raw_text_indent)
