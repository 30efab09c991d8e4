"""Decides when an external value must be pushed into a live field."""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.markup import canonical_markup
from ..observability import EditorObserver
from .field import RichTextField

logger = logging.getLogger(__name__)


class FieldReconciler:
    """Reloads a field only when the authoritative value really differs.

    The store republishes the whole record on every change, and a field's own
    emitted markup comes straight back as the authoritative value. Reloading
    in either case would reset the cursor mid-edit.
    """

    def __init__(self, field: RichTextField, observer: Optional[EditorObserver] = None):
        self.field = field
        self.observer = observer

    def needs_reload(self, value: Optional[str]) -> bool:
        value = value or ""
        current = self.field.markup
        if value == current:
            return False
        return canonical_markup(value) != current

    def reconcile(self, value: Optional[str]) -> bool:
        """Push *value* into the field when it differs. Returns whether it did."""
        if not self.needs_reload(value):
            return False
        self.field.set_content(value)
        field_id = self.field.field_id or "?"
        logger.debug("reloaded field %s", field_id)
        if self.observer:
            self.observer.log_field_reload(field_id)
        return True
