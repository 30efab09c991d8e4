"""CV Editor - structured CV document editing with rich-text fields and raw-text views."""

from __future__ import annotations

from .session import EditorSession
from .store import DocumentStore, current_store, document_context

__version__ = "0.1.0"

__all__ = ["DocumentStore", "EditorSession", "current_store", "document_context", "__version__"]
