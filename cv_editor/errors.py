"""Error types shared across the editor."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CVEditorError(Exception):
    """Application-level error with a stable machine-readable code."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class StoreContextError(CVEditorError, RuntimeError):
    """A consumer ran outside an initialized document store.

    This is a contract violation and is never recovered from.
    """

    def __init__(self, consumer: str = "consumer") -> None:
        super().__init__(
            "NO_STORE_CONTEXT",
            f"{consumer} must be used within an active document store context",
            {"consumer": consumer},
        )


class UnknownSectionError(CVEditorError, KeyError):
    """A section id outside the known set was requested."""

    def __init__(self, section: str) -> None:
        super().__init__("UNKNOWN_SECTION", f"Unknown section '{section}'", {"section": section})

    def __str__(self) -> str:
        return self.message


class SectionDecodeError(CVEditorError, ValueError):
    """Raw text could not be decoded into a section's structured shape."""

    def __init__(self, section: str, reason: str) -> None:
        super().__init__("DECODE_FAILED", f"Cannot decode '{section}': {reason}", {"section": section})
        self.section = section
        self.reason = reason
