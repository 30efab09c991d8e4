"""Read-only terminal preview of a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .domain.codec import HEADING_KEYS
from .domain.markup import parse_markup
from .domain.record import DocumentRecord, SkillEntry
from .domain.styles import CONTACT_FIELDS, LEVEL_BARS, LEVEL_COLORS, StyleVariant, contact_field, default_variant
from .sections.view_state import SectionViewState


@dataclass(frozen=True)
class ContactRow:
    key: str
    label: str
    icon: str
    value: str
    removable: bool


def contact_rows(record: DocumentRecord) -> List[ContactRow]:
    """One row per present contact field; absent fields have no row."""
    present = record.contact_info.fields()
    catalog = [field.key for field in CONTACT_FIELDS]
    keys = [key for key in catalog if key in present] + [key for key in present if key not in catalog]
    rows = []
    for key in keys:
        field = contact_field(key)
        rows.append(ContactRow(key, field.label, field.icon, present[key], removable=key != "name"))
    return rows


def markup_text(markup: Optional[str]) -> Text:
    """Convert field markup to styled rich text."""
    document = parse_markup(markup)
    text = Text()
    for index, paragraph in enumerate(document.paragraphs):
        if index:
            text.append("\n")
        for chunk, style in paragraph.runs():
            parts = [name for name in ("bold", "italic", "underline") if style.has(name)]
            text.append(chunk, style=" ".join(parts) or None)
    return text


def _variant(section: str, view_states: Mapping[str, SectionViewState]) -> Optional[StyleVariant]:
    state = view_states.get(section)
    return state.variant if state is not None else default_variant(section)


def _flag(view_states: Mapping[str, SectionViewState], section: str, index: int, name: str) -> bool:
    state = view_states.get(section)
    return state.flag(index, name) if state is not None else True


def _arrange(items: List[RenderableType], variant: Optional[StyleVariant]) -> RenderableType:
    container = variant.container if variant else "stack"
    if container in ("grid", "row"):
        return Columns(items, equal=container == "grid", expand=False)
    return Group(*items)


def _box(body: RenderableType, variant: Optional[StyleVariant]) -> RenderableType:
    if variant and variant.item == "card":
        return Panel(body, expand=False)
    return body


def _skill(entry: SkillEntry, variant: Optional[StyleVariant]) -> RenderableType:
    color = LEVEL_COLORS[entry.level]
    name = markup_text(entry.name)
    if variant and variant.item == "bar":
        filled = LEVEL_BARS[entry.level] // 10
        bar = Text("█" * filled + "░" * (10 - filled), style=color)
        return Group(name, bar)
    return Text.assemble(name, " ", (entry.level.value, color))


def _section(record: DocumentRecord, section: str, body: RenderableType) -> Panel:
    return Panel(body, title=record.heading(HEADING_KEYS[section]), title_align="left")


def render_document(
    record: DocumentRecord, view_states: Optional[Mapping[str, SectionViewState]] = None
) -> RenderableType:
    """Build a rich renderable for the whole document."""
    states: Dict[str, SectionViewState] = dict(view_states or {})
    parts: List[RenderableType] = []

    # Contact
    rows = contact_rows(record)
    header = Text.assemble(markup_text(record.contact_info.name), style="bold")
    details = [Text.assemble((f"{row.label}: ", "dim"), markup_text(row.value)) for row in rows if row.key != "name"]
    parts.append(_section(record, "contactInfo", Group(header, _arrange(details, _variant("contactInfo", states)))))

    # Summary
    summary_variant = _variant("summary", states)
    if summary_variant and summary_variant.layout != "single":
        segments = [s for s in record.summary.split("\n\n") if s.strip()]
        bullet = "• " if summary_variant.layout == "bullets" else ""
        summary: RenderableType = Group(*[Text.assemble(bullet, markup_text(s)) for s in segments])
    else:
        summary = markup_text(record.summary)
    parts.append(_section(record, "summary", summary))

    # Experience
    variant = _variant("experiences", states)
    items: List[RenderableType] = []
    for index, exp in enumerate(record.experiences):
        lines: List[RenderableType] = [
            Text.assemble(markup_text(exp.position), style="bold"),
            Text.assemble(markup_text(exp.company), " · ", exp.start_date, " – ", exp.end_date or "Present"),
        ]
        if _flag(states, "experiences", index, "show_bullets"):
            lines.extend(Text.assemble("  • ", markup_text(item)) for item in exp.responsibilities)
        if _flag(states, "experiences", index, "show_skills") and exp.technologies:
            lines.append(Text(", ".join(parse_markup(t).text for t in exp.technologies), style="cyan"))
        items.append(_box(Group(*lines), variant))
    parts.append(_section(record, "experiences", _arrange(items, variant)))

    # Education
    variant = _variant("education", states)
    items = []
    for index, edu in enumerate(record.education):
        lines = [
            Text.assemble(markup_text(edu.institution), style="bold"),
            Text.assemble(markup_text(edu.degree), " in ", markup_text(edu.major), " · ", edu.graduation_year),
        ]
        if edu.gpa and _flag(states, "education", index, "show_gpa"):
            lines.append(Text(f"GPA: {edu.gpa}", style="dim"))
        if edu.activities and _flag(states, "education", index, "show_activities"):
            lines.extend(Text.assemble("  • ", markup_text(item)) for item in edu.activities)
        items.append(_box(Group(*lines), variant))
    parts.append(_section(record, "education", _arrange(items, variant)))

    # Skills
    variant = _variant("skills", states)
    parts.append(_section(record, "skills", _arrange([_skill(s, variant) for s in record.skills], variant)))

    # Certificates and courses
    table = Table.grid(padding=(0, 2))
    for cert in record.certificates:
        table.add_row(markup_text(cert.name), markup_text(cert.issuer), cert.date)
    parts.append(_section(record, "certificates", table))

    table = Table.grid(padding=(0, 2))
    for course in record.courses:
        table.add_row(markup_text(course.name), markup_text(course.platform), course.completion_date)
    parts.append(_section(record, "courses", table))

    return Group(*parts)
