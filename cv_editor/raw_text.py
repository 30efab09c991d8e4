"""Raw-text buffers for document sections.

Each section has an editable text buffer. Until a section is first edited its
buffer is a fresh serialization of the store. After that the buffer holds the
user's text verbatim, valid or not, and every edit that decodes is merged
into the store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .bindings import BufferBinding
from .domain.codec import DEFAULT_INDENT, SECTION_IDS, SECTIONS, check_section, decode_section, serialize_section
from .domain.paths import UpdateResult
from .errors import SectionDecodeError
from .observability import EditorObserver
from .store import DocumentStore, resolve_store

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "contactInfo"


@dataclass(frozen=True)
class BufferEditResult:
    """Outcome of one buffer edit. ``error`` is informational only."""

    section: str
    applied: bool
    error: Optional[str] = None
    update: Optional[UpdateResult] = None


class RawTextWorkspace:
    """Per-section raw-text buffers plus the active tab."""

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        indent: int = DEFAULT_INDENT,
        observer: Optional[EditorObserver] = None,
        active_section: str = DEFAULT_SECTION,
    ):
        self.store = resolve_store(store, "RawTextWorkspace")
        self.indent = indent
        self.observer = observer
        self._buffers: Dict[str, str] = {}
        self._active = check_section(active_section)

    @property
    def sections(self) -> Tuple[str, ...]:
        return SECTION_IDS

    @staticmethod
    def label(section: str) -> str:
        return SECTIONS[check_section(section)]

    # ------------------------------------------------------------------
    # Active tab
    # ------------------------------------------------------------------

    @property
    def active_section(self) -> str:
        return self._active

    def select_section(self, section: str) -> str:
        """Switch tabs. Buffers of other sections are kept."""
        self._active = check_section(section)
        return self._active

    # ------------------------------------------------------------------
    # Buffers
    # ------------------------------------------------------------------

    def is_touched(self, section: str) -> bool:
        return check_section(section) in self._buffers

    def touched_sections(self) -> Tuple[str, ...]:
        return tuple(section for section in SECTION_IDS if section in self._buffers)

    def buffer_text(self, section: Optional[str] = None) -> str:
        """The user's text once touched; otherwise the current serialization."""
        section = check_section(section or self._active)
        if section in self._buffers:
            return self._buffers[section]
        return serialize_section(self.store.get_snapshot(), section, self.indent)

    def on_buffer_change(self, section: str, text: str) -> BufferEditResult:
        """Store *text* as typed; merge it into the store when it decodes."""
        check_section(section)
        self._buffers[section] = text
        try:
            value = decode_section(section, text)
        except SectionDecodeError as e:
            logger.debug("raw %s not applied: %s", section, e.reason)
            if self.observer:
                self.observer.log_raw_edit(section, applied=False, error=e.reason)
            return BufferEditResult(section=section, applied=False, error=e.reason)
        update = self.store.merge({section: value})
        if self.observer:
            self.observer.log_raw_edit(section, applied=True)
        return BufferEditResult(section=section, applied=True, update=update)

    def discard(self, section: str) -> None:
        """Forget the buffer so the section shows the store again."""
        self._buffers.pop(check_section(section), None)

    # ------------------------------------------------------------------
    # Presentation boundary
    # ------------------------------------------------------------------

    def binding(self, section: Optional[str] = None) -> BufferBinding:
        return BufferBinding(self, check_section(section or self._active))
