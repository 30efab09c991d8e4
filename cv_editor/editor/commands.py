"""Floating command surface shown over a field's selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..domain.markup import ALIGNMENTS, FONT_FAMILIES, FONT_SIZES, CatalogOption
from .field import RichTextField


@dataclass(frozen=True)
class CommandButton:
    command: str
    label: str
    active: bool


_MARK_BUTTONS: Tuple[Tuple[str, str], ...] = (("bold", "B"), ("italic", "I"), ("underline", "U"))
_ALIGN_LABELS: Dict[str, str] = {"left": "Left", "center": "Center", "right": "Right"}


class CommandSurface:
    """Formatting commands for one field, available only over a selection."""

    def __init__(self, field: RichTextField):
        self.field = field
        self._commands: Dict[str, Callable[[Optional[str]], bool]] = {
            "bold": lambda _value: field.toggle_bold(),
            "italic": lambda _value: field.toggle_italic(),
            "underline": lambda _value: field.toggle_underline(),
            "textAlign": lambda value: field.set_text_align(value or ""),
            "fontFamily": field.set_font_family,
            "unsetFontFamily": lambda _value: field.unset_font_family(),
            "fontSize": field.set_font_size,
            "unsetFontSize": lambda _value: field.unset_font_size(),
        }

    @property
    def visible(self) -> bool:
        return self.field.editable and self.field.has_selection

    @property
    def commands(self) -> Tuple[str, ...]:
        return tuple(self._commands)

    def buttons(self) -> List[CommandButton]:
        if not self.visible:
            return []
        buttons = [CommandButton(name, label, self.field.is_active(name)) for name, label in _MARK_BUTTONS]
        for alignment in ALIGNMENTS:
            buttons.append(
                CommandButton(
                    f"textAlign:{alignment}",
                    _ALIGN_LABELS[alignment],
                    self.field.is_active("textAlign", alignment),
                )
            )
        return buttons

    @property
    def font_families(self) -> Tuple[CatalogOption, ...]:
        return FONT_FAMILIES

    @property
    def font_sizes(self) -> Tuple[CatalogOption, ...]:
        return FONT_SIZES

    def run(self, command: str, value: Optional[str] = None) -> bool:
        """Run *command* against the selection. ``False`` when hidden or not applied.

        ``textAlign:center`` style ids carry their value inline.
        """
        if ":" in command and value is None:
            command, value = command.split(":", 1)
        handler = self._commands.get(command)
        if handler is None:
            raise ValueError(f"Unknown command: {command}")
        if not self.visible:
            return False
        return handler(value)
