"""Authoritative document store.

The store owns the only shared document value. Updates never mutate the
current record; they publish a new one and notify subscribers synchronously
with ``(new, old)``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Iterator, List, Mapping, Optional, Sequence, Union

from .domain.paths import PathKey, UpdateResult, format_path, merge_record, set_field
from .domain.record import DocumentRecord
from .errors import StoreContextError
from .observability import EditorObserver

logger = logging.getLogger(__name__)

Listener = Callable[[DocumentRecord, DocumentRecord], None]


class DocumentStore:
    """Holds the current :class:`DocumentRecord` and applies updates to it."""

    def __init__(
        self,
        initial: Union[DocumentRecord, Mapping[str, Any]],
        observer: Optional[EditorObserver] = None,
    ):
        if not isinstance(initial, DocumentRecord):
            initial = DocumentRecord.model_validate(initial)
        self._record = initial
        self._listeners: List[Listener] = []
        self.observer = observer
        self.version = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_snapshot(self) -> DocumentRecord:
        return self._record

    @property
    def snapshot(self) -> DocumentRecord:
        return self._record

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def merge(self, partial: Mapping[str, Any]) -> UpdateResult:
        """Replace the top-level values named in *partial*."""
        result = merge_record(self._record, partial)
        self._publish("merge", result, ", ".join(map(str, partial)))
        return result

    def set_field(self, path: Sequence[PathKey], value: str) -> UpdateResult:
        """Replace one string leaf; a bad path leaves the record untouched."""
        result = set_field(self._record, path, value)
        self._publish("set_field", result, format_path(path))
        return result

    def replace(self, record: DocumentRecord) -> UpdateResult:
        """Swap in a whole record, e.g. after a document import."""
        if record is self._record:
            result = UpdateResult.unchanged(record, "same-record")
        else:
            result = UpdateResult(record=record, changed=True, keys=tuple(DocumentRecord.model_fields))
        self._publish("replace", result, "document")
        return result

    def _publish(self, operation: str, result: UpdateResult, target: str) -> None:
        if not result.changed:
            if self.observer:
                self.observer.log_store_noop(operation, target, result.reason)
            return
        old, self._record = self._record, result.record
        self.version += 1
        if self.observer:
            self.observer.log_store_update(operation, result.keys, self.version)
        for listener in list(self._listeners):
            listener(self._record, old)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every published change. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


# ---------------------------------------------------------------------------
# Context access
# ---------------------------------------------------------------------------

_current: ContextVar[Optional[DocumentStore]] = ContextVar("cv_editor_store", default=None)


@contextmanager
def document_context(store: DocumentStore) -> Iterator[DocumentStore]:
    """Make *store* the current store for the duration of the block."""
    token = _current.set(store)
    try:
        yield store
    finally:
        _current.reset(token)


def current_store(consumer: str = "consumer") -> DocumentStore:
    """Return the current store; raises :class:`StoreContextError` outside a context."""
    store = _current.get()
    if store is None:
        raise StoreContextError(consumer)
    return store


def resolve_store(store: Optional[DocumentStore], consumer: str) -> DocumentStore:
    return store if store is not None else current_store(consumer)
