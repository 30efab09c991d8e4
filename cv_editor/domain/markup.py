"""Rich-text content model and its markup string form.

A :class:`RichText` is a tuple of paragraphs. Each paragraph keeps its text,
one :class:`InlineStyle` per character and an optional alignment. Offsets are
plain-text positions in which every paragraph boundary counts as one
position, so ``RichText.text`` joins paragraphs with ``"\\n"``.

Canonical markup::

    <p style="text-align: center"><span style="font-family: inter; font-size: 16px">
    <strong><em><u>text</u></em></strong></span></p>

Parsing is tolerant: unknown tags are dropped and their text kept, and
malformed input never raises.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, replace
from html.parser import HTMLParser
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class CatalogOption(NamedTuple):
    label: str
    value: str


FONT_FAMILIES: Tuple[CatalogOption, ...] = (
    CatalogOption("Inter", "inter"),
    CatalogOption("Roboto", "roboto"),
    CatalogOption("Poppins", "poppins"),
    CatalogOption("Montserrat", "montserrat"),
    CatalogOption("Open Sans", "opensans"),
    CatalogOption("Playfair Display", "playfair"),
    CatalogOption("Lato", "lato"),
    CatalogOption("Source Sans Pro", "source"),
    CatalogOption("Ubuntu", "ubuntu"),
    CatalogOption("Merriweather", "merriweather"),
)

FONT_SIZES: Tuple[CatalogOption, ...] = (
    CatalogOption("Extra Small", "12"),
    CatalogOption("Small", "14"),
    CatalogOption("Base", "16"),
    CatalogOption("Large", "18"),
    CatalogOption("Extra Large", "20"),
    CatalogOption("2XL", "24"),
    CatalogOption("3XL", "30"),
    CatalogOption("4XL", "36"),
)

ALIGNMENTS: Tuple[str, ...] = ("left", "center", "right")
DEFAULT_ALIGNMENT = "left"

FONT_FAMILY_VALUES = frozenset(option.value for option in FONT_FAMILIES)
FONT_SIZE_VALUES = frozenset(option.value for option in FONT_SIZES)

MARKS: Tuple[str, ...] = ("bold", "italic", "underline")


# ---------------------------------------------------------------------------
# Content model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InlineStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    font_family: Optional[str] = None
    font_size: Optional[str] = None

    def has(self, mark: str) -> bool:
        return bool(getattr(self, mark))

    def with_mark(self, mark: str, on: bool) -> "InlineStyle":
        if mark not in MARKS:
            raise ValueError(f"Unknown mark: {mark}")
        return replace(self, **{mark: on})

    def css(self) -> str:
        parts = []
        if self.font_family:
            parts.append(f"font-family: {self.font_family}")
        if self.font_size:
            parts.append(f"font-size: {self.font_size}px")
        return "; ".join(parts)


PLAIN = InlineStyle()


@dataclass(frozen=True)
class Paragraph:
    text: str = ""
    styles: Tuple[InlineStyle, ...] = ()
    align: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.text) != len(self.styles):
            raise ValueError("Paragraph text and styles must have the same length")

    @classmethod
    def plain(cls, text: str, style: InlineStyle = PLAIN, align: Optional[str] = None) -> "Paragraph":
        return cls(text=text, styles=(style,) * len(text), align=align)

    def __len__(self) -> int:
        return len(self.text)

    def runs(self) -> List[Tuple[str, InlineStyle]]:
        """Consecutive characters sharing a style."""
        out: List[Tuple[str, InlineStyle]] = []
        for ch, style in zip(self.text, self.styles):
            if out and out[-1][1] == style:
                out[-1] = (out[-1][0] + ch, style)
            else:
                out.append((ch, style))
        return out

    def slice(self, start: int, end: int) -> "Paragraph":
        return Paragraph(self.text[start:end], self.styles[start:end], self.align)

    def concat(self, other: "Paragraph") -> "Paragraph":
        return Paragraph(self.text + other.text, self.styles + other.styles, self.align)

    def restyle(self, start: int, end: int, fn: Callable[[InlineStyle], InlineStyle]) -> "Paragraph":
        styles = self.styles[:start] + tuple(fn(s) for s in self.styles[start:end]) + self.styles[end:]
        return Paragraph(self.text, styles, self.align)

    def with_align(self, align: Optional[str]) -> "Paragraph":
        return Paragraph(self.text, self.styles, align)


@dataclass(frozen=True)
class RichText:
    paragraphs: Tuple[Paragraph, ...] = (Paragraph(),)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)

    @property
    def length(self) -> int:
        return sum(len(p) for p in self.paragraphs) + len(self.paragraphs) - 1

    @property
    def is_empty(self) -> bool:
        return len(self.paragraphs) == 1 and not self.paragraphs[0].text

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, self.length))

    def offset_of(self, index: int) -> int:
        """Offset at which paragraph *index* starts."""
        return sum(len(p) + 1 for p in self.paragraphs[:index])

    def locate(self, offset: int) -> Tuple[int, int]:
        """Map *offset* to ``(paragraph index, offset within paragraph)``."""
        offset = self.clamp(offset)
        start = 0
        for index, paragraph in enumerate(self.paragraphs):
            end = start + len(paragraph)
            if offset <= end:
                return index, offset - start
            start = end + 1
        last = len(self.paragraphs) - 1
        return last, len(self.paragraphs[last])

    def paragraph_span(self, start: int, end: int) -> range:
        first, _ = self.locate(start)
        last, _ = self.locate(end)
        return range(first, last + 1)

    def delete(self, start: int, end: int) -> "RichText":
        start, end = self.clamp(start), self.clamp(end)
        if start >= end:
            return self
        i, a = self.locate(start)
        j, b = self.locate(end)
        first, last = self.paragraphs[i], self.paragraphs[j]
        merged = first.slice(0, a).concat(last.slice(b, len(last)))
        return RichText(self.paragraphs[:i] + (merged,) + self.paragraphs[j + 1 :])

    def insert(self, offset: int, text: str, style: InlineStyle = PLAIN) -> "RichText":
        """Insert *text* at *offset*; each ``"\\n"`` starts a new paragraph."""
        if not text:
            return self
        i, a = self.locate(offset)
        paragraph = self.paragraphs[i]
        head, tail = paragraph.slice(0, a), paragraph.slice(a, len(paragraph))
        pieces = text.split("\n")
        if len(pieces) == 1:
            new: Tuple[Paragraph, ...] = (head.concat(Paragraph.plain(pieces[0], style)).concat(tail),)
        else:
            first = head.concat(Paragraph.plain(pieces[0], style))
            middle = tuple(Paragraph.plain(piece, style, paragraph.align) for piece in pieces[1:-1])
            last = Paragraph.plain(pieces[-1], style, paragraph.align).concat(tail)
            new = (first,) + middle + (last,)
        return RichText(self.paragraphs[:i] + new + self.paragraphs[i + 1 :])

    def restyle(self, start: int, end: int, fn: Callable[[InlineStyle], InlineStyle]) -> "RichText":
        start, end = self.clamp(start), self.clamp(end)
        paragraphs = list(self.paragraphs)
        for index in self.paragraph_span(start, end):
            base = self.offset_of(index)
            local_start = max(start - base, 0)
            local_end = min(end - base, len(paragraphs[index]))
            if local_start < local_end:
                paragraphs[index] = paragraphs[index].restyle(local_start, local_end, fn)
        return RichText(tuple(paragraphs))

    def realign(self, start: int, end: int, align: Optional[str]) -> "RichText":
        span = self.paragraph_span(start, end)
        return RichText(
            tuple(p.with_align(align) if index in span else p for index, p in enumerate(self.paragraphs))
        )

    def styles_in(self, start: int, end: int) -> List[InlineStyle]:
        start, end = self.clamp(start), self.clamp(end)
        out: List[InlineStyle] = []
        for index in self.paragraph_span(start, end):
            base = self.offset_of(index)
            paragraph = self.paragraphs[index]
            out.extend(paragraph.styles[max(start - base, 0) : max(min(end - base, len(paragraph)), 0)])
        return out

    def style_at(self, offset: int) -> InlineStyle:
        """Style new text typed at *offset* picks up."""
        index, local = self.locate(offset)
        paragraph = self.paragraphs[index]
        if local > 0:
            return paragraph.styles[local - 1]
        if paragraph.styles:
            return paragraph.styles[0]
        return PLAIN

    def alignments_in(self, start: int, end: int) -> List[str]:
        return [self.paragraphs[i].align or DEFAULT_ALIGNMENT for i in self.paragraph_span(start, end)]


EMPTY = RichText()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_BOLD_TAGS = {"strong", "b"}
_ITALIC_TAGS = {"em", "i"}
_UNDERLINE_TAGS = {"u"}
_PARAGRAPH_TAGS = {"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre"}
_VOID_TAGS = {"br", "hr", "img", "input", "meta", "link", "wbr"}
_WHITESPACE = re.compile(r"[ \t\n\r\f]+")


def _parse_css(style: Optional[str]) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for chunk in (style or "").split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        declarations[prop.strip().lower()] = value.strip().strip("'\"")
    return declarations


def _css_alignment(style: Optional[str]) -> Optional[str]:
    value = _parse_css(style).get("text-align", "").lower()
    if value in ALIGNMENTS and value != DEFAULT_ALIGNMENT:
        return value
    return None


def _css_text_style(style: Optional[str]) -> Dict[str, str]:
    css = _parse_css(style)
    out: Dict[str, str] = {}
    family = css.get("font-family", "").lower()
    if family in FONT_FAMILY_VALUES:
        out["font_family"] = family
    size = css.get("font-size", "").lower()
    if size.endswith("px"):
        size = size[:-2].strip()
    if size in FONT_SIZE_VALUES:
        out["font_size"] = size
    return out


class _MarkupParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.paragraphs: List[Paragraph] = []
        self._text: List[str] = []
        self._styles: List[InlineStyle] = []
        self._align: Optional[str] = None
        self._open = False
        self._frames: List[Tuple[str, Dict[str, object]]] = []

    # -- paragraph bookkeeping

    def _flush(self, force: bool = False) -> None:
        if self._open or force or self._text:
            self.paragraphs.append(_normalize(Paragraph("".join(self._text), tuple(self._styles), self._align)))
        self._text, self._styles, self._align, self._open = [], [], None, False

    def _current_style(self) -> InlineStyle:
        style = PLAIN
        for _, changes in self._frames:
            style = replace(style, **changes)
        return style

    # -- HTMLParser hooks

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        attributes = dict(attrs)
        if tag in _PARAGRAPH_TAGS:
            if self._open or self._text:
                self._flush()
            self._open = True
            self._align = _css_alignment(attributes.get("style"))
            return
        if tag == "br":
            self._flush(force=True)
            self._open = True
            return
        if tag in _VOID_TAGS:
            return
        changes: Dict[str, object] = {}
        if tag in _BOLD_TAGS:
            changes["bold"] = True
        elif tag in _ITALIC_TAGS:
            changes["italic"] = True
        elif tag in _UNDERLINE_TAGS:
            changes["underline"] = True
        elif tag == "span":
            changes.update(_css_text_style(attributes.get("style")))
        self._frames.append((tag, changes))

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if tag == "br":
            self._flush(force=True)
            self._open = True
        elif tag in _PARAGRAPH_TAGS:
            self._flush()
            self.paragraphs.append(Paragraph())

    def handle_endtag(self, tag: str) -> None:
        if tag in _PARAGRAPH_TAGS:
            if self._open or self._text:
                self._flush(force=True)
            return
        for index in range(len(self._frames) - 1, -1, -1):
            if self._frames[index][0] == tag:
                del self._frames[index:]
                return

    def handle_data(self, data: str) -> None:
        if not data:
            return
        style = self._current_style()
        self._text.append(data)
        self._styles.extend([style] * len(data))

    def result(self) -> RichText:
        self.close()
        if self._open or self._text:
            self._flush()
        if not self.paragraphs:
            return EMPTY
        return RichText(tuple(self.paragraphs))


def _normalize(paragraph: Paragraph) -> Paragraph:
    """Collapse whitespace runs to one space and trim paragraph edges."""
    text: List[str] = []
    styles: List[InlineStyle] = []
    for ch, style in zip(paragraph.text, paragraph.styles):
        if _WHITESPACE.match(ch):
            if not text or text[-1] == " ":
                continue
            ch = " "
        text.append(ch)
        styles.append(style)
    while text and text[-1] == " ":
        text.pop()
        styles.pop()
    return Paragraph("".join(text), tuple(styles), paragraph.align)


def parse_markup(markup: Optional[str]) -> RichText:
    """Parse *markup* into a :class:`RichText`. Never raises."""
    if not markup:
        return EMPTY
    parser = _MarkupParser()
    try:
        parser.feed(markup)
        return parser.result()
    except (AssertionError, ValueError):
        # html.parser rejects some declarations outright; keep the raw text
        return RichText((_normalize(Paragraph.plain(markup)),))


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _render_run(text: str, style: InlineStyle) -> str:
    out = html.escape(text, quote=False)
    if style.underline:
        out = f"<u>{out}</u>"
    if style.italic:
        out = f"<em>{out}</em>"
    if style.bold:
        out = f"<strong>{out}</strong>"
    css = style.css()
    if css:
        out = f'<span style="{css}">{out}</span>'
    return out


def serialize_markup(document: RichText) -> str:
    """Canonical markup for *document*; an empty document is ``""``."""
    if document.is_empty:
        return ""
    parts = []
    for paragraph in document.paragraphs:
        attr = f' style="text-align: {paragraph.align}"' if paragraph.align else ""
        inner = "".join(_render_run(text, style) for text, style in paragraph.runs())
        parts.append(f"<p{attr}>{inner}</p>")
    return "".join(parts)


def canonical_markup(markup: Optional[str]) -> str:
    """Round-trip *markup* through the content model."""
    return serialize_markup(parse_markup(markup))


def markup_to_text(markup: Optional[str]) -> str:
    """Plain text of *markup*, paragraphs separated by newlines."""
    return parse_markup(markup).text
