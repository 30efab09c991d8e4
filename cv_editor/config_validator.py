"""Configuration validator for CV Editor startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from .config import apply_env_overrides
from .domain.codec import SECTION_IDS
from .domain.styles import find_variant, variants_for


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []
    data = apply_env_overrides(raw_config)

    # --- Editor ---
    editor = data.get("editor", {})
    if not isinstance(editor, dict):
        errors.append(
            ConfigError(
                field="editor",
                message="editor must be a mapping",
                severity=Severity.ERROR,
            )
        )
        editor = {}

    placeholder = editor.get("placeholder", "")
    if not isinstance(placeholder, str):
        errors.append(
            ConfigError(
                field="editor.placeholder",
                message=f"editor.placeholder must be a string, got {placeholder!r}",
                severity=Severity.ERROR,
            )
        )

    indent = editor.get("raw_text_indent", 2)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0 or indent > 8:
        errors.append(
            ConfigError(
                field="editor.raw_text_indent",
                message=f"editor.raw_text_indent must be an integer between 0 and 8, got {indent!r}",
                severity=Severity.ERROR,
            )
        )

    default_section = editor.get("default_section", "contactInfo")
    if default_section not in SECTION_IDS:
        errors.append(
            ConfigError(
                field="editor.default_section",
                message=f"Unknown section '{default_section}'. Expected one of: {', '.join(SECTION_IDS)}",
                severity=Severity.ERROR,
            )
        )

    # --- Variants ---
    variants = data.get("variants", {}) or {}
    if not isinstance(variants, dict):
        errors.append(
            ConfigError(
                field="variants",
                message="variants must be a mapping of section to variant id",
                severity=Severity.ERROR,
            )
        )
        variants = {}
    for section, variant_id in variants.items():
        if section not in SECTION_IDS:
            errors.append(
                ConfigError(
                    field=f"variants.{section}",
                    message=f"Unknown section '{section}'",
                    severity=Severity.WARNING,
                )
            )
        elif find_variant(section, str(variant_id)) is None:
            known = ", ".join(v.id for v in variants_for(section))
            errors.append(
                ConfigError(
                    field=f"variants.{section}",
                    message=f"Unknown variant '{variant_id}'. Expected one of: {known}",
                    severity=Severity.WARNING,
                )
            )

    # --- Seed ---
    seed_path = data.get("seed_path")
    if seed_path:
        if not isinstance(seed_path, str):
            errors.append(
                ConfigError(
                    field="seed_path",
                    message=f"seed_path must be a string, got {seed_path!r}",
                    severity=Severity.ERROR,
                )
            )
        elif not Path(seed_path).is_file():
            errors.append(
                ConfigError(
                    field="seed_path",
                    message=f"Seed file does not exist: {seed_path}. The bundled sample will be used.",
                    severity=Severity.WARNING,
                )
            )

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
