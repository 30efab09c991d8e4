"""Tests for typographic input rules."""

import pytest

from cv_editor.domain.typography import apply_typography, match_input_rule


class TestInputRules:
    @pytest.mark.parametrize(
        "typed, expected",
        [
            ("a--", "a—"),
            ("wait...", "wait…"),
            ("x -> y", "x → y"),
            ("x <- y", "x ← y"),
            ("(c) 2024", "© 2024"),
            ("Brand(tm)", "Brand™"),
            ("(r)", "®"),
            ("+/-5", "±5"),
            ("a != b", "a ≠ b"),
            ("<<quote>>", "«quote»"),
            ("m^2", "m²"),
            ("1/2 cup", "½ cup"),
        ],
    )
    def test_substitutions(self, typed, expected):
        assert apply_typography(typed) == expected

    def test_smart_double_quotes(self):
        assert apply_typography('say "hi"') == "say “hi”"

    def test_smart_single_quotes(self):
        assert apply_typography("it's 'fine'") == "it’s ‘fine’"

    def test_fraction_needs_word_boundary(self):
        assert apply_typography("11/2 ") == "11/2 "

    def test_no_match(self):
        assert match_input_rule("plain text") is None

    def test_match_offsets_replace_group_only(self):
        start, end, replacement = match_input_rule('say "')
        assert (start, end, replacement) == (4, 5, "“")
