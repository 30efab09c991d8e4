"""Rich-text field engine.

One :class:`RichTextField` owns the content of one inline-editable region.
Keystrokes and commands edit its :class:`~cv_editor.domain.markup.RichText`
model; every committed change whose canonical markup differs from the last
one is reported through ``on_change``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from ..domain.markup import (
    ALIGNMENTS,
    DEFAULT_ALIGNMENT,
    FONT_FAMILY_VALUES,
    FONT_SIZE_VALUES,
    MARKS,
    EMPTY,
    InlineStyle,
    RichText,
    parse_markup,
    serialize_markup,
)
from ..domain.typography import match_input_rule

logger = logging.getLogger(__name__)

DEFAULT_PLACEHOLDER = "Click to edit..."

ChangeHandler = Callable[[str], None]


@dataclass(frozen=True)
class Selection:
    anchor: int
    head: int

    @classmethod
    def cursor(cls, position: int) -> "Selection":
        return cls(position, position)

    @property
    def start(self) -> int:
        return min(self.anchor, self.head)

    @property
    def end(self) -> int:
        return max(self.anchor, self.head)

    @property
    def empty(self) -> bool:
        return self.anchor == self.head


class RichTextField:
    """Editable rich-text region with a markup string as its value."""

    def __init__(
        self,
        content: Optional[str] = "",
        placeholder: str = DEFAULT_PLACEHOLDER,
        on_change: Optional[ChangeHandler] = None,
        editable: bool = True,
        field_id: Optional[str] = None,
    ):
        self.placeholder = placeholder
        self.on_change = on_change
        self.editable = editable
        self.field_id = field_id
        self._doc = parse_markup(content)
        self._markup = serialize_markup(self._doc)
        self._selection = Selection.cursor(self._doc.length)
        self._pending: Optional[InlineStyle] = None
        self.change_count = 0
        self.reload_count = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def markup(self) -> str:
        """Canonical markup; ``""`` when the field is empty."""
        return self._markup

    @property
    def document(self) -> RichText:
        return self._doc

    @property
    def text(self) -> str:
        return self._doc.text

    @property
    def is_empty(self) -> bool:
        return self._doc.is_empty

    @property
    def display_text(self) -> str:
        """What the region shows: the text, or the placeholder when empty."""
        return self.placeholder if self.is_empty else self.text

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def has_selection(self) -> bool:
        return not self._selection.empty

    @property
    def selected_text(self) -> str:
        return self.text[self._selection.start : self._selection.end]

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def set_content(self, content: Optional[str], emit: bool = False) -> None:
        """Load *content* from outside. Only emits when *emit* is set."""
        previous = self._markup
        self._doc = parse_markup(content)
        self._markup = serialize_markup(self._doc)
        self._selection = Selection(self._doc.clamp(self._selection.anchor), self._doc.clamp(self._selection.head))
        self._pending = None
        self.reload_count += 1
        if emit and self._markup != previous:
            self._emit()

    def clear(self) -> bool:
        return self._commit(EMPTY, Selection.cursor(0))

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select(self, anchor: int, head: Optional[int] = None) -> None:
        head = anchor if head is None else head
        self._selection = Selection(self._doc.clamp(anchor), self._doc.clamp(head))
        self._pending = None

    def select_all(self) -> None:
        self.select(0, self._doc.length)

    def select_text(self, needle: str) -> bool:
        """Select the first occurrence of *needle*."""
        index = self.text.find(needle)
        if index < 0 or not needle:
            return False
        self.select(index, index + len(needle))
        return True

    def move_cursor(self, position: int) -> None:
        self.select(position)

    def move_to_end(self) -> None:
        self.select(self._doc.length)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _insertion_style(self) -> InlineStyle:
        if self._pending is not None:
            return self._pending
        if self.has_selection:
            styles = self._doc.styles_in(self._selection.start, self._selection.end)
            if styles:
                return styles[0]
        return self._doc.style_at(self._selection.start)

    def _replace_selection(self, text: str) -> RichText:
        style = self._insertion_style()
        start = self._selection.start
        return self._doc.delete(start, self._selection.end).insert(start, text, style)

    def type_text(self, text: str) -> bool:
        """Type *text* one keystroke at a time, running input rules."""
        changed = False
        for ch in text:
            changed = self._type_char(ch) or changed
        return changed

    def _type_char(self, ch: str) -> bool:
        if not self.editable:
            return False
        if ch == "\n":
            return self.split_paragraph()
        start = self._selection.start
        doc = self._replace_selection(ch)
        cursor = start + 1
        index, local = doc.locate(cursor)
        paragraph = doc.paragraphs[index]
        hit = match_input_rule(paragraph.text[:local])
        if hit:
            rule_start, rule_end, replacement = hit
            base = doc.offset_of(index)
            style = paragraph.styles[rule_start]
            doc = doc.delete(base + rule_start, base + rule_end).insert(base + rule_start, replacement, style)
            cursor += len(replacement) - (rule_end - rule_start)
        return self._commit(doc, Selection.cursor(cursor), keep_pending=True)

    def insert_text(self, text: str) -> bool:
        """Paste *text* as one change; input rules do not run."""
        if not self.editable or not text:
            return False
        start = self._selection.start
        doc = self._replace_selection(text)
        return self._commit(doc, Selection.cursor(start + len(text)))

    def split_paragraph(self) -> bool:
        if not self.editable:
            return False
        start = self._selection.start
        doc = self._replace_selection("\n")
        return self._commit(doc, Selection.cursor(start + 1), keep_pending=True)

    def delete_backward(self) -> bool:
        if not self.editable:
            return False
        if self.has_selection:
            start, end = self._selection.start, self._selection.end
        elif self._selection.head > 0:
            start, end = self._selection.head - 1, self._selection.head
        else:
            return False
        return self._commit(self._doc.delete(start, end), Selection.cursor(start))

    def delete_forward(self) -> bool:
        if not self.editable:
            return False
        if self.has_selection:
            start, end = self._selection.start, self._selection.end
        elif self._selection.head < self._doc.length:
            start, end = self._selection.head, self._selection.head + 1
        else:
            return False
        return self._commit(self._doc.delete(start, end), Selection.cursor(start))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _selected_styles(self) -> List[InlineStyle]:
        if self.has_selection:
            return self._doc.styles_in(self._selection.start, self._selection.end)
        return [self._insertion_style()]

    def _restyle(self, fn: Callable[[InlineStyle], InlineStyle]) -> bool:
        if not self.editable:
            return False
        if not self.has_selection:
            self._pending = fn(self._insertion_style())
            return True
        if not self._doc.styles_in(self._selection.start, self._selection.end):
            return False
        self._commit(self._doc.restyle(self._selection.start, self._selection.end, fn), self._selection)
        return True

    def _toggle(self, mark: str) -> bool:
        turn_on = not all(style.has(mark) for style in self._selected_styles())
        return self._restyle(lambda style: style.with_mark(mark, turn_on))

    def toggle_bold(self) -> bool:
        return self._toggle("bold")

    def toggle_italic(self) -> bool:
        return self._toggle("italic")

    def toggle_underline(self) -> bool:
        return self._toggle("underline")

    def set_text_align(self, alignment: str) -> bool:
        if not self.editable or alignment not in ALIGNMENTS:
            return False
        align = None if alignment == DEFAULT_ALIGNMENT else alignment
        self._commit(self._doc.realign(self._selection.start, self._selection.end, align), self._selection)
        return True

    def set_font_family(self, family: Optional[str]) -> bool:
        if not family or family not in FONT_FAMILY_VALUES:
            return False
        return self._restyle(lambda style: replace(style, font_family=family))

    def unset_font_family(self) -> bool:
        return self._restyle(lambda style: replace(style, font_family=None))

    def set_font_size(self, size: Optional[object]) -> bool:
        value = str(size).strip() if size is not None else ""
        if value.endswith("px"):
            value = value[:-2].strip()
        if value not in FONT_SIZE_VALUES:
            return False
        return self._restyle(lambda style: replace(style, font_size=value))

    def unset_font_size(self) -> bool:
        return self._restyle(lambda style: replace(style, font_size=None))

    def is_active(self, name: str, value: Optional[str] = None) -> bool:
        """Whether a mark, alignment, family or size covers the selection."""
        if name == "textAlign":
            alignments = self._doc.alignments_in(self._selection.start, self._selection.end)
            return bool(alignments) and all(a == value for a in alignments)
        styles = self._selected_styles()
        if not styles:
            return False
        if name in MARKS:
            return all(style.has(name) for style in styles)
        if name == "fontFamily":
            return all(style.font_family == value for style in styles)
        if name == "fontSize":
            return all(style.font_size == str(value) for style in styles)
        return False

    # ------------------------------------------------------------------
    # Change reporting
    # ------------------------------------------------------------------

    def _commit(self, doc: RichText, selection: Selection, keep_pending: bool = False) -> bool:
        self._doc = doc
        self._selection = Selection(doc.clamp(selection.anchor), doc.clamp(selection.head))
        if not keep_pending:
            self._pending = None
        markup = serialize_markup(doc)
        if markup == self._markup:
            return False
        self._markup = markup
        self._emit()
        return True

    def _emit(self) -> None:
        self.change_count += 1
        logger.debug("field %s changed (%d chars)", self.field_id or "?", len(self._markup))
        if self.on_change is not None:
            self.on_change(self._markup)

