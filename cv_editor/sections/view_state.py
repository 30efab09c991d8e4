"""Per-section presentation state.

Variant choice, the open selector and per-entry toggles belong to one view.
None of it is read from or written to the document store.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..domain.styles import StyleVariant, default_variant, find_variant, variants_for

#: Per-entry toggles and their defaults, by section.
ENTRY_TOGGLES: Dict[str, Dict[str, bool]] = {
    "experiences": {"show_bullets": True, "show_skills": True},
    "education": {"show_activities": True, "show_gpa": True},
}


class SectionViewState:
    """View-local settings for one section."""

    def __init__(self, section: str, variant_id: Optional[str] = None):
        self.section = section
        self.variant: Optional[StyleVariant] = default_variant(section)
        self.selector_open = False
        self._toggles: List[Dict[str, bool]] = []
        if variant_id:
            self.select_variant(variant_id)

    @property
    def variants(self) -> Tuple[StyleVariant, ...]:
        return variants_for(self.section)

    @property
    def variant_id(self) -> Optional[str]:
        return self.variant.id if self.variant else None

    @property
    def layout(self) -> Optional[str]:
        return self.variant.layout if self.variant else None

    def toggle_selector(self) -> bool:
        self.selector_open = not self.selector_open
        return self.selector_open

    def select_variant(self, variant_id: str) -> bool:
        variant = find_variant(self.section, variant_id)
        if variant is None:
            return False
        self.variant = variant
        self.selector_open = False
        return True

    # ------------------------------------------------------------------
    # Entry toggles
    # ------------------------------------------------------------------

    @property
    def toggle_names(self) -> Tuple[str, ...]:
        return tuple(ENTRY_TOGGLES.get(self.section, {}))

    def _defaults(self, name: str) -> bool:
        defaults = ENTRY_TOGGLES.get(self.section, {})
        if name not in defaults:
            raise KeyError(f"{self.section} has no entry toggle '{name}'")
        return defaults[name]

    def flag(self, index: int, name: str) -> bool:
        default = self._defaults(name)
        if 0 <= index < len(self._toggles):
            return self._toggles[index].get(name, default)
        return default

    def toggle(self, index: int, name: str) -> bool:
        value = not self.flag(index, name)
        while len(self._toggles) <= index:
            self._toggles.append({})
        self._toggles[index][name] = value
        return value

    def on_entry_removed(self, index: int) -> None:
        """Shift later entries' toggles down to follow their new positions."""
        if 0 <= index < len(self._toggles):
            del self._toggles[index]

    def reset(self) -> None:
        self.variant = default_variant(self.section)
        self.selector_open = False
        self._toggles.clear()
