"""Tests for the rich-text content model and its markup."""

import pytest

from cv_editor.domain.markup import (
    FONT_FAMILIES,
    FONT_SIZES,
    PLAIN,
    InlineStyle,
    Paragraph,
    RichText,
    canonical_markup,
    markup_to_text,
    parse_markup,
    serialize_markup,
)

BOLD = InlineStyle(bold=True)


class TestCatalogs:
    def test_ten_families(self):
        assert [f.value for f in FONT_FAMILIES] == [
            "inter",
            "roboto",
            "poppins",
            "montserrat",
            "opensans",
            "playfair",
            "lato",
            "source",
            "ubuntu",
            "merriweather",
        ]

    def test_eight_sizes(self):
        assert [s.value for s in FONT_SIZES] == ["12", "14", "16", "18", "20", "24", "30", "36"]
        assert FONT_SIZES[0].label == "Extra Small"
        assert FONT_SIZES[-1].label == "4XL"


class TestParse:
    def test_plain_text(self):
        doc = parse_markup("John Doe")
        assert doc.text == "John Doe"
        assert doc.paragraphs[0].styles == (PLAIN,) * 8

    def test_empty(self):
        assert parse_markup("").is_empty
        assert parse_markup(None).is_empty
        assert parse_markup("<p></p>").is_empty

    def test_marks(self):
        doc = parse_markup("<p>a <strong>b</strong> <em>c</em> <u>d</u></p>")
        styles = doc.paragraphs[0].styles
        assert styles[2].bold and not styles[0].bold
        assert styles[4].italic
        assert styles[6].underline

    def test_b_and_i_aliases(self):
        doc = parse_markup("<b>x</b><i>y</i>")
        assert doc.paragraphs[0].styles[0].bold
        assert doc.paragraphs[0].styles[1].italic

    def test_text_style_span(self):
        doc = parse_markup('<p><span style="font-family: roboto; font-size: 18px">Hi</span></p>')
        style = doc.paragraphs[0].styles[0]
        assert style.font_family == "roboto"
        assert style.font_size == "18"

    def test_unknown_style_values_dropped(self):
        doc = parse_markup('<span style="font-family: comic; font-size: 13px; color: red">Hi</span>')
        assert doc.paragraphs[0].styles[0] == PLAIN

    def test_alignment(self):
        doc = parse_markup('<p style="text-align: center">A</p><p style="text-align: left">B</p>')
        assert doc.paragraphs[0].align == "center"
        assert doc.paragraphs[1].align is None

    def test_unknown_tags_keep_text(self):
        doc = parse_markup("<p>Hello <blink>world</blink><img src=x></p>")
        assert doc.text == "Hello world"

    @pytest.mark.parametrize(
        "markup",
        [
            "<p><strong>unclosed",
            "</em>stray</p>",
            "<<>>",
            "<p <p>",
            "a & b < c",
            "<script>x</script",
            "<![foo[bar]]>",
            "x <![foo[bar]]> y",
        ],
    )
    def test_malformed_never_raises(self, markup):
        parse_markup(markup)

    def test_rejected_declaration_keeps_surrounding_text(self):
        text = parse_markup("x <![foo[bar]]> y").text
        assert text.startswith("x ")
        assert text.endswith(" y")

    def test_entities_decoded(self):
        assert markup_to_text("<p>R&amp;D &lt;3</p>") == "R&D <3"

    def test_whitespace_collapsed(self):
        assert markup_to_text("<p>  a \n  b  </p>") == "a b"

    def test_paragraphs(self):
        assert markup_to_text("<p>one</p><p>two</p>") == "one\ntwo"

    def test_br_splits_paragraph(self):
        assert markup_to_text("a<br>b") == "a\nb"


class TestSerialize:
    def test_empty_is_empty_string(self):
        assert serialize_markup(RichText()) == ""

    def test_plain_paragraph(self):
        assert canonical_markup("John Doe") == "<p>John Doe</p>"

    def test_canonical_nesting(self):
        markup = '<u><em><strong><span style="font-size: 16px; font-family: inter">x</span></strong></em></u>'
        assert canonical_markup(markup) == (
            '<p><span style="font-family: inter; font-size: 16px"><strong><em><u>x</u></em></strong></span></p>'
        )

    def test_escapes_text(self):
        assert canonical_markup("<p>a &lt; b</p>") == "<p>a &lt; b</p>"

    def test_alignment_attribute(self):
        assert canonical_markup('<p style="text-align:right">x</p>') == '<p style="text-align: right">x</p>'

    def test_canonical_is_fixed_point(self):
        markup = '<p style="text-align: center">a <strong>b</strong></p><p><em>c</em></p>'
        assert canonical_markup(canonical_markup(markup)) == canonical_markup(markup)

    def test_adjacent_runs_merge(self):
        assert canonical_markup("<strong>a</strong><strong>b</strong>") == "<p><strong>ab</strong></p>"


class TestRichTextEditing:
    def _doc(self):
        return RichText((Paragraph.plain("hello"), Paragraph.plain("world")))

    def test_offsets(self):
        doc = self._doc()
        assert doc.length == 11
        assert doc.locate(5) == (0, 5)
        assert doc.locate(6) == (1, 0)
        assert doc.offset_of(1) == 6

    def test_insert_newline_splits(self):
        doc = RichText((Paragraph.plain("ab", align="center"),)).insert(1, "\n")
        assert [p.text for p in doc.paragraphs] == ["a", "b"]
        assert doc.paragraphs[1].align == "center"

    def test_delete_across_boundary_joins(self):
        doc = self._doc().delete(4, 7)
        assert doc.text == "hellorld"
        assert len(doc.paragraphs) == 1

    def test_restyle_range(self):
        doc = self._doc().restyle(3, 8, lambda s: BOLD)
        assert [s.bold for s in doc.paragraphs[0].styles] == [False, False, False, True, True]
        assert [s.bold for s in doc.paragraphs[1].styles] == [True, True, False, False, False]

    def test_style_at_follows_previous_char(self):
        doc = RichText((Paragraph("ab", (PLAIN, BOLD)),))
        assert doc.style_at(2) == BOLD
        assert doc.style_at(1) == PLAIN

    def test_paragraph_length_mismatch_rejected(self):
        with pytest.raises(ValueError):
            Paragraph("ab", (PLAIN,))
