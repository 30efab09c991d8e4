"""Observability for editing sessions - event log and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)


@dataclass
class EditorEvent:
    """A single event in an editing session."""

    timestamp: datetime
    event_type: str  # "store_update", "store_noop", "raw_edit", "field_change", "field_reload", "error"
    data: Dict[str, Any]


class EditorObserver:
    """
    Observability layer for tracking an editing session.

    Collects events and mirrors them to the ``cv_editor`` logger.
    """

    def __init__(self, session_id: Optional[str] = None, verbose: bool = False):
        self.events: List[EditorEvent] = []
        self.logger = logging.getLogger("cv_editor")
        self.session_id = session_id
        self.verbose = verbose
        self._setup_logging()

    def _prefix(self) -> str:
        return f"[{self.session_id}] " if self.session_id else ""

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.INFO if self.verbose else logging.WARNING)

    def _record(self, event_type: str, data: Dict[str, Any]) -> EditorEvent:
        event = EditorEvent(timestamp=datetime.now(), event_type=event_type, data=data)
        self.events.append(event)
        return event

    def log_store_update(self, operation: str, keys: Sequence[str], version: int):
        """
        Log a published snapshot.

        Args:
            operation: "merge" or "set_field"
            keys: Top-level keys replaced by the update
            version: Snapshot version after the update
        """
        self._record("store_update", {"operation": operation, "keys": list(keys), "version": version})
        self.logger.info(f"{self._prefix()}Store {operation}: {', '.join(keys)} (v{version})")

    def log_store_noop(self, operation: str, target: str, reason: Optional[str]):
        self._record("store_noop", {"operation": operation, "target": target, "reason": reason})
        self.logger.debug(f"{self._prefix()}Store {operation} ignored for {target}: {reason}")

    def log_raw_edit(self, section: str, applied: bool, error: Optional[str] = None):
        """
        Log an edit to a raw-text buffer.

        Args:
            section: Raw-text section id
            applied: Whether the buffer decoded and reached the store
            error: Decode failure, when not applied
        """
        self._record("raw_edit", {"section": section, "applied": applied, "error": error})
        if applied:
            self.logger.info(f"{self._prefix()}Raw edit applied: {section}")
        else:
            self.logger.debug(f"{self._prefix()}Raw edit kept as draft: {section} ({error})")

    def log_field_change(self, field_id: str, length: int):
        self._record("field_change", {"field": field_id, "length": length})
        self.logger.debug(f"{self._prefix()}Field changed: {field_id} ({length} chars)")

    def log_field_reload(self, field_id: str):
        self._record("field_reload", {"field": field_id})
        self.logger.info(f"{self._prefix()}Field reloaded from store: {field_id}")

    def log_error(self, error_type: str, message: str, context: Optional[Dict[str, Any]] = None):
        """
        Log an error event.

        Args:
            error_type: Type of error (e.g., "config", "seed")
            message: Error message
            context: Additional context about the error
        """
        self._record("error", {"error_type": error_type, "message": message, "context": context or {}})
        self.logger.error(f"{self._prefix()}Error ({error_type}): {message}")

    def get_session_stats(self) -> Dict[str, Any]:
        """Aggregated counts for the current session."""
        raw_edits = [e for e in self.events if e.event_type == "raw_edit"]
        applied = sum(1 for e in raw_edits if e.data.get("applied"))
        return {
            "event_count": len(self.events),
            "store_updates": sum(1 for e in self.events if e.event_type == "store_update"),
            "store_noops": sum(1 for e in self.events if e.event_type == "store_noop"),
            "raw_edits": len(raw_edits),
            "raw_edits_applied": applied,
            "field_changes": sum(1 for e in self.events if e.event_type == "field_change"),
            "field_reloads": sum(1 for e in self.events if e.event_type == "field_reload"),
            "errors": sum(1 for e in self.events if e.event_type == "error"),
        }

    def session_table(self) -> Table:
        stats = self.get_session_stats()
        table = Table(title="Session Summary", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Total Events", str(stats["event_count"]))
        table.add_row("Store Updates", f"{stats['store_updates']} ({stats['store_noops']} ignored)")
        table.add_row("Raw Edits", f"{stats['raw_edits']} ({stats['raw_edits_applied']} applied)")
        table.add_row("Field Changes", str(stats["field_changes"]))
        table.add_row("Field Reloads", str(stats["field_reloads"]))
        table.add_row("Errors", str(stats["errors"]))
        return table

    def print_session_summary(self, console: Optional[Console] = None):
        """Print a formatted summary of the session."""
        (console or Console()).print(self.session_table())

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
        self.logger.info("Observer events cleared")
