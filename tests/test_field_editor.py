"""Tests for the rich-text field engine and its command surface."""

import pytest

from cv_editor.editor.commands import CommandSurface
from cv_editor.editor.field import RichTextField, Selection


@pytest.fixture
def changes():
    return []


class TestFieldState:
    def test_initial_markup(self):
        field = RichTextField("John Doe")
        assert field.markup == "<p>John Doe</p>"
        assert field.text == "John Doe"
        assert field.change_count == 0
        assert field.selection == Selection.cursor(8)

    @pytest.mark.parametrize("content", ["", None, "<p></p>"])
    def test_empty_shows_placeholder(self, content):
        field = RichTextField(content)
        assert field.markup == ""
        assert field.is_empty
        assert field.display_text == "Click to edit..."

    def test_unparseable_markup_loads(self):
        field = RichTextField("Use <![foo[bar]]> syntax")
        assert field.text.startswith("Use ")
        assert field.change_count == 0

    def test_custom_placeholder(self):
        assert RichTextField("", placeholder="Company").display_text == "Company"

    def test_select_text(self):
        field = RichTextField("John Doe")
        assert field.select_text("Doe")
        assert field.selected_text == "Doe"
        assert not field.select_text("Smith")

    def test_set_content_does_not_emit(self, changes):
        field = RichTextField("a", on_change=changes.append)
        field.set_content("<p>New</p>")
        assert changes == []
        assert field.markup == "<p>New</p>"
        assert field.reload_count == 1

    def test_set_content_clamps_selection(self):
        field = RichTextField("Hello world")
        field.set_content("Hi")
        assert field.selection == Selection.cursor(2)

    def test_set_content_can_emit(self, changes):
        field = RichTextField("a", on_change=changes.append)
        field.set_content("b", emit=True)
        assert changes == ["<p>b</p>"]


class TestTyping:
    def test_each_keystroke_emits(self, changes):
        field = RichTextField("Jo", on_change=changes.append)
        field.type_text("hn")
        assert changes == ["<p>Joh</p>", "<p>John</p>"]

    def test_input_rule_applies(self):
        field = RichTextField("")
        field.type_text("a--b")
        assert field.text == "a—b"
        assert field.selection == Selection.cursor(3)

    def test_smart_quotes_while_typing(self):
        field = RichTextField("")
        field.type_text('"hi"')
        assert field.text == "“hi”"

    def test_paste_skips_input_rules(self, changes):
        field = RichTextField("", on_change=changes.append)
        field.insert_text("a--b")
        assert field.text == "a--b"
        assert len(changes) == 1

    def test_typing_replaces_selection(self):
        field = RichTextField("John Doe")
        field.select_text("Doe")
        field.type_text("Roe")
        assert field.markup == "<p>John Roe</p>"

    def test_typed_text_continues_previous_style(self):
        field = RichTextField("<strong>ab</strong>")
        field.type_text("c")
        assert field.markup == "<p><strong>abc</strong></p>"

    def test_newline_splits_paragraph(self):
        field = RichTextField("ab")
        field.move_cursor(1)
        field.type_text("\n")
        assert field.markup == "<p>a</p><p>b</p>"

    def test_delete_backward(self):
        field = RichTextField("abc")
        assert field.delete_backward()
        assert field.text == "ab"
        field.move_cursor(0)
        assert not field.delete_backward()

    def test_delete_backward_joins_paragraphs(self):
        field = RichTextField("<p>a</p><p>b</p>")
        field.move_cursor(2)
        field.delete_backward()
        assert field.markup == "<p>ab</p>"

    def test_delete_forward(self):
        field = RichTextField("abc")
        assert not field.delete_forward()
        field.move_cursor(0)
        assert field.delete_forward()
        assert field.text == "bc"

    def test_clear(self, changes):
        field = RichTextField("abc", on_change=changes.append)
        field.clear()
        assert changes == [""]
        assert field.is_empty

    def test_read_only_field(self, changes):
        field = RichTextField("abc", on_change=changes.append, editable=False)
        assert not field.type_text("x")
        assert not field.delete_backward()
        assert not field.toggle_bold()
        assert field.markup == "<p>abc</p>"
        assert changes == []


class TestFormatting:
    def test_toggle_bold_on_selection(self):
        field = RichTextField("John Doe")
        field.select_text("Doe")
        field.toggle_bold()
        assert field.markup == "<p>John <strong>Doe</strong></p>"
        assert field.is_active("bold")
        field.toggle_bold()
        assert field.markup == "<p>John Doe</p>"

    def test_mixed_selection_turns_mark_on(self):
        field = RichTextField("<p>a<strong>b</strong></p>")
        field.select_all()
        field.toggle_bold()
        assert field.markup == "<p><strong>ab</strong></p>"

    def test_italic_and_underline_nest(self):
        field = RichTextField("x")
        field.select_all()
        field.toggle_underline()
        field.toggle_italic()
        field.toggle_bold()
        assert field.markup == "<p><strong><em><u>x</u></em></strong></p>"

    def test_pending_style_for_next_typing(self, changes):
        field = RichTextField("", on_change=changes.append)
        assert field.toggle_bold()
        assert changes == []
        field.type_text("Hi")
        assert field.markup == "<p><strong>Hi</strong></p>"

    def test_selection_change_drops_pending_style(self):
        field = RichTextField("a")
        field.toggle_bold()
        field.move_to_end()
        field.type_text("b")
        assert field.markup == "<p>ab</p>"

    def test_text_align(self):
        field = RichTextField("x")
        assert field.is_active("textAlign", "left")
        field.set_text_align("center")
        assert field.markup == '<p style="text-align: center">x</p>'
        assert field.is_active("textAlign", "center")
        field.set_text_align("left")
        assert field.markup == "<p>x</p>"
        assert not field.set_text_align("justify")

    def test_default_alignment_does_not_emit(self, changes):
        field = RichTextField("x", on_change=changes.append)
        assert field.set_text_align("left")
        assert changes == []

    def test_font_family(self):
        field = RichTextField("Hi")
        field.select_all()
        assert field.set_font_family("roboto")
        assert field.markup == '<p><span style="font-family: roboto">Hi</span></p>'
        assert field.is_active("fontFamily", "roboto")
        field.unset_font_family()
        assert field.markup == "<p>Hi</p>"

    def test_unknown_font_family_rejected(self):
        field = RichTextField("Hi")
        field.select_all()
        assert not field.set_font_family("comic")
        assert field.markup == "<p>Hi</p>"

    @pytest.mark.parametrize("size", ["18", "18px", 18])
    def test_font_size(self, size):
        field = RichTextField("Hi")
        field.select_all()
        assert field.set_font_size(size)
        assert field.markup == '<p><span style="font-size: 18px">Hi</span></p>'

    def test_unknown_font_size_rejected(self):
        field = RichTextField("Hi")
        field.select_all()
        assert not field.set_font_size("13")


class TestCommandSurface:
    def test_hidden_without_selection(self):
        field = RichTextField("John")
        surface = CommandSurface(field)
        assert not surface.visible
        assert surface.buttons() == []
        assert not surface.run("bold")
        assert field.markup == "<p>John</p>"

    def test_hidden_for_read_only_field(self):
        field = RichTextField("John", editable=False)
        field.select_all()
        assert not CommandSurface(field).visible

    def test_buttons(self):
        field = RichTextField("John")
        field.select_all()
        buttons = CommandSurface(field).buttons()
        assert [b.command for b in buttons] == [
            "bold",
            "italic",
            "underline",
            "textAlign:left",
            "textAlign:center",
            "textAlign:right",
        ]
        assert [b.command for b in buttons if b.active] == ["textAlign:left"]

    def test_run_commands(self):
        field = RichTextField("John")
        field.select_all()
        surface = CommandSurface(field)
        assert surface.run("bold")
        assert surface.run("textAlign:center")
        assert surface.run("fontSize", "24")
        assert field.markup == (
            '<p style="text-align: center"><span style="font-size: 24px"><strong>John</strong></span></p>'
        )
        active = [b.command for b in surface.buttons() if b.active]
        assert active == ["bold", "textAlign:center"]

    def test_unknown_command(self):
        surface = CommandSurface(RichTextField("John"))
        with pytest.raises(ValueError):
            surface.run("strike")

    def test_catalogs(self):
        surface = CommandSurface(RichTextField(""))
        assert len(surface.font_families) == 10
        assert len(surface.font_sizes) == 8
        assert "unsetFontFamily" in surface.commands
