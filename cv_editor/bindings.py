"""Presentation boundary between views and the editing core.

Per field a view gets ``(value, on_change)``, per list section
``(entries, on_append, on_remove_at, on_field_change)`` and per raw-text
section ``(buffer_text, on_buffer_change)``. Nothing else couples rendering
to the core.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence, Tuple

from .domain.paths import FieldPath, PathKey, UpdateResult, format_path, get_value
from .domain.record import DocumentRecord
from .editor.commands import CommandSurface
from .editor.field import DEFAULT_PLACEHOLDER, RichTextField
from .editor.reconciler import FieldReconciler
from .observability import EditorObserver
from .store import DocumentStore, resolve_store

if TYPE_CHECKING:
    from .raw_text import BufferEditResult, RawTextWorkspace
    from .sections.controllers import ListSectionController


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, str):
        return value
    return None


def should_offer_remove(items: Sequence[Any], required: bool = False) -> bool:
    """Whether a remove control belongs next to each of *items*.

    A required non-empty list keeps its last item; the controllers still
    allow removing it.
    """
    if not items:
        return False
    return not required or len(items) > 1


class FieldBinding:
    """``(value, on_change)`` for one string leaf of the record."""

    def __init__(self, path: Sequence[PathKey], store: Optional[DocumentStore] = None):
        self.path: FieldPath = tuple(path)
        self.store = resolve_store(store, f"FieldBinding({format_path(self.path)})")

    @property
    def value(self) -> Optional[str]:
        return self.read(self.store.get_snapshot())

    def read(self, record: DocumentRecord) -> Optional[str]:
        return _as_text(get_value(record, self.path))

    def on_change(self, value: str) -> UpdateResult:
        return self.store.set_field(self.path, value)


class BoundField:
    """A rich-text field kept in step with one path of the store.

    Local edits go to the store as path updates. Published snapshots come back
    through a :class:`FieldReconciler`, which only reloads on a real change.
    """

    def __init__(
        self,
        path: Sequence[PathKey],
        store: Optional[DocumentStore] = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
        observer: Optional[EditorObserver] = None,
    ):
        self.binding = FieldBinding(path, store)
        self.observer = observer
        self.field = RichTextField(
            self.binding.value or "",
            placeholder=placeholder,
            on_change=self._on_local_change,
            field_id=format_path(self.binding.path),
        )
        self.reconciler = FieldReconciler(self.field, observer)
        self.commands = CommandSurface(self.field)
        self._unsubscribe: Optional[Callable[[], None]] = self.binding.store.subscribe(self._on_snapshot)
        self.last_result: Optional[UpdateResult] = None

    @property
    def path(self) -> FieldPath:
        return self.binding.path

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def _on_local_change(self, markup: str) -> None:
        if self.observer:
            self.observer.log_field_change(self.field.field_id or "?", len(markup))
        self.last_result = self.binding.on_change(markup)

    def _on_snapshot(self, record: DocumentRecord, _old: DocumentRecord) -> None:
        value = self.binding.read(record)
        if value is None:
            return
        self.reconciler.reconcile(value)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class ListBinding:
    """``(entries, on_append, on_remove_at, on_field_change)`` for a list section."""

    def __init__(self, controller: "ListSectionController"):
        self.controller = controller

    @property
    def entries(self) -> Tuple[Any, ...]:
        return self.controller.entries()

    def on_append(self, entry: Any = None) -> UpdateResult:
        return self.controller.append(entry)

    def on_remove_at(self, index: int) -> UpdateResult:
        return self.controller.remove_at(index)

    def on_field_change(self, index: int, key: str, value: str) -> UpdateResult:
        return self.controller.set_field_at(index, key, value)

    def offers_remove(self) -> bool:
        return should_offer_remove(self.entries)


class BufferBinding:
    """``(buffer_text, on_buffer_change)`` for one raw-text section."""

    def __init__(self, workspace: "RawTextWorkspace", section: str):
        self.workspace = workspace
        self.section = section

    @property
    def buffer_text(self) -> str:
        return self.workspace.buffer_text(self.section)

    def on_buffer_change(self, text: str) -> "BufferEditResult":
        return self.workspace.on_buffer_change(self.section, text)
