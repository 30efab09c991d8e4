"""Typographic input rules applied while typing.

Each rule matches the text that ends at the cursor right after a keystroke.
When a rule has a capture group only that group is replaced, so leading or
trailing context characters survive. Pasted text is not rewritten.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class InputRule:
    name: str
    pattern: re.Pattern
    replacement: str


def _rule(name: str, pattern: str, replacement: str) -> InputRule:
    return InputRule(name=name, pattern=re.compile(pattern + r"$"), replacement=replacement)


#: Characters after which a quote opens rather than closes.
_OPENERS = r"(?:^|[\s{\[(<'\"‘“])"

INPUT_RULES: Tuple[InputRule, ...] = (
    _rule("emDash", r"--", "—"),
    _rule("ellipsis", r"\.\.\.", "…"),
    _rule("openDoubleQuote", _OPENERS + r'(")', "“"),
    _rule("closeDoubleQuote", r'(")', "”"),
    _rule("openSingleQuote", _OPENERS + r"(')", "‘"),
    _rule("closeSingleQuote", r"(')", "’"),
    _rule("leftArrow", r"<-", "←"),
    _rule("rightArrow", r"->", "→"),
    _rule("copyright", r"\(c\)", "©"),
    _rule("trademark", r"\(tm\)", "™"),
    _rule("servicemark", r"\(sm\)", "℠"),
    _rule("registeredTrademark", r"\(r\)", "®"),
    _rule("oneHalf", r"(?:^|\s)(1/2)\s", "½"),
    _rule("oneQuarter", r"(?:^|\s)(1/4)\s", "¼"),
    _rule("threeQuarters", r"(?:^|\s)(3/4)\s", "¾"),
    _rule("plusMinus", r"\+/-", "±"),
    _rule("notEqual", r"!=", "≠"),
    _rule("laquo", r"<<", "«"),
    _rule("raquo", r">>", "»"),
    _rule("superscriptTwo", r"\^2", "²"),
    _rule("superscriptThree", r"\^3", "³"),
)


def match_input_rule(text_before: str) -> Optional[Tuple[int, int, str]]:
    """Find the first rule matching the end of *text_before*.

    Returns ``(start, end, replacement)`` with *start*/*end* indexing into
    *text_before*, or ``None`` when no rule applies.
    """
    for rule in INPUT_RULES:
        match = rule.pattern.search(text_before)
        if not match:
            continue
        if match.groups():
            return match.start(1), match.end(1), rule.replacement
        return match.start(), match.end(), rule.replacement
    return None


def apply_typography(text: str) -> str:
    """Run the input rules as if *text* were typed one character at a time."""
    out = ""
    for ch in text:
        out += ch
        hit = match_input_rule(out)
        if hit:
            start, end, replacement = hit
            out = out[:start] + replacement + out[end:]
    return out
