"""CLI - Interactive shell for editing a CV document."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, Iterable, Optional

from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import FileHistory
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .config import DEFAULT_CONFIG_PATH, config_from_dict, load_raw_config
from .config_validator import Severity, has_errors, validate_config
from .domain.codec import SECTION_IDS, SECTIONS
from .domain.paths import format_path, parse_path
from .domain.styles import variants_for
from .errors import CVEditorError
from .render import render_document
from .sections.controllers import NestedListController
from .session import EditorSession

console = Console()

TextReader = Callable[[str, str], Optional[str]]


class EditorCompleter(Completer):
    COMMANDS = [
        "/help",
        "/show",
        "/sections",
        "/raw",
        "/edit-raw",
        "/set",
        "/format",
        "/add",
        "/remove",
        "/cycle",
        "/heading",
        "/variant",
        "/dump",
        "/events",
        "/quit",
        "/exit",
    ]

    _SECTION_COMMANDS = {"/raw", "/edit-raw", "/add", "/remove", "/heading", "/variant"}

    @staticmethod
    def _yield_options(options: Iterable[str], current: str):
        start_position = -len(current)
        current_lower = current.lower()
        for option in options:
            if not current or option.lower().startswith(current_lower):
                yield Completion(option, start_position=start_position)

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        parts = text.split()
        if text.endswith(" "):
            parts.append("")
        if not parts:
            return

        if len(parts) == 1:
            yield from self._yield_options(self.COMMANDS, parts[0])
            return

        command = parts[0].lower()
        current = parts[-1]
        if command in self._SECTION_COMMANDS and len(parts) == 2:
            yield from self._yield_options(SECTION_IDS, current)
        elif command == "/variant" and len(parts) == 3:
            yield from self._yield_options([v.id for v in variants_for(parts[1])], current)


def print_banner():
    """Print welcome banner."""
    banner = """
╔═══════════════════════════════════════════════════════════╗
║                       CV Editor                           ║
║        Structured CV editing with raw-text views          ║
╠═══════════════════════════════════════════════════════════╣
║  Quick Commands:                                          ║
║    /show     - Preview the document                       ║
║    /raw      - Show a section as raw text                 ║
║    /edit-raw - Edit a section's raw text                  ║
║    /help     - Show all commands                          ║
║    /quit     - Exit the editor                            ║
╚═══════════════════════════════════════════════════════════╝
"""
    console.print(banner, style="cyan")


def print_help():
    """Print help message."""
    help_text = """
## Available Commands

| Command | Description |
|---------|-------------|
| `/help` | Show this help message |
| `/show` | Preview the whole document |
| `/sections` | List raw-text sections and whether their buffer was edited |
| `/raw <section>` | Show a section's raw-text buffer |
| `/edit-raw <section>` | Edit a section's raw text (kept even when invalid) |
| `/set <path> <value>` | Set a text field, e.g. `/set experiences.0.company Acme` |
| `/format <path> <text or *> <command> [value]` | Format text in a field, e.g. `/format summary * bold` |
| `/add <section> [args]` | Append an entry, a nested item or a contact field |
| `/remove <section> <args>` | Remove an entry, a nested item or a contact field |
| `/cycle <index>` | Advance a skill's level |
| `/heading <section> [text]` | Set a custom heading; no text restores the default |
| `/variant <section> <id>` | Choose a presentation variant |
| `/dump` | Print the whole document as raw text |
| `/events` | Show the session's event summary |
| `/quit` or `/exit` | Exit the editor |

### Examples

```bash
/add experiences                        # new default experience
/add experiences 0 responsibilities     # new bullet under experience #0
/remove experiences 0 responsibilities 2
/add contactInfo website
/remove contactInfo phone
/variant summary bullet-points
/format contactInfo.title Senior fontSize 18
```
"""
    console.print(Markdown(help_text))


def _prompt_multiline(section: str, current: str) -> Optional[str]:
    prompt = PromptSession()
    console.print(f"Editing {SECTIONS[section]} (Esc then Enter to finish)", style="dim")
    return prompt.prompt("", default=current, multiline=True)


def _print_result(result, success: str) -> None:
    if result.changed:
        console.print(f"✓ {success}", style="green")
    else:
        console.print(f"⚠️ Nothing changed ({result.reason})", style="yellow")


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None


def _handle_add(session: EditorSession, args: list) -> None:
    section = args[0]
    if section == "contactInfo":
        if len(args) < 2:
            available = ", ".join(f.key for f in session.contact.available_fields()) or "none"
            console.print(f"Available fields: {available}", style="dim")
            return
        _print_result(session.contact.add_field(args[1]), f"Added contact field {args[1]}")
        return
    if section == "summary":
        _print_result(session.summary.add_segment(), "Added summary paragraph")
        return
    controller = session.list_controller(section)
    if len(args) >= 3 and isinstance(controller, NestedListController):
        index = _parse_int(args[1])
        if index is None:
            console.print("❌ Entry index must be a number", style="red")
            return
        _print_result(controller.append_item(index, args[2]), f"Added {args[2]} item")
        return
    _print_result(controller.append(), f"Added {section} entry")


def _handle_remove(session: EditorSession, args: list) -> None:
    section = args[0]
    if len(args) < 2:
        console.print("❌ Usage: /remove <section> <index|field> [list item]", style="red")
        return
    if section == "contactInfo":
        _print_result(session.contact.remove_field(args[1]), f"Removed contact field {args[1]}")
        return
    index = _parse_int(args[1])
    if index is None:
        console.print("❌ Index must be a number", style="red")
        return
    if section == "summary":
        _print_result(session.summary.remove_segment(index), "Removed summary paragraph")
        return
    controller = session.list_controller(section)
    if len(args) >= 4 and isinstance(controller, NestedListController):
        item_index = _parse_int(args[3])
        if item_index is None:
            console.print("❌ Item index must be a number", style="red")
            return
        _print_result(controller.remove_item(index, args[2], item_index), f"Removed {args[2]} item")
        return
    _print_result(controller.remove_at(index), f"Removed {section} entry {index}")


def _handle_format(session: EditorSession, args: list) -> None:
    bound = session.field(args[0])
    needle, command = args[1], args[2]
    value = args[3] if len(args) > 3 else None
    if command not in bound.commands.commands and command.split(":", 1)[0] not in bound.commands.commands:
        console.print(f"❌ Unknown format command: {command}", style="red")
        return
    if needle == "*":
        bound.field.select_all()
    elif not bound.field.select_text(needle):
        console.print(f"⚠️ '{needle}' not found in {format_path(bound.path)}", style="yellow")
        return
    bound.last_result = None
    if not bound.commands.run(command, value) or bound.last_result is None:
        console.print(f"⚠️ {command} not applied", style="yellow")
        return
    _print_result(bound.last_result, f"{format_path(bound.path)}: {bound.field.markup}")


def handle_command(command: str, session: EditorSession, read_text: Optional[TextReader] = None) -> bool:
    """Handle special commands. Returns True if should continue, False to exit."""
    command_text = command.strip()
    parts = command_text.split()
    if not parts:
        return True
    cmd = parts[0].lower()
    args = parts[1:]

    if cmd in ["/quit", "/exit", "/q"]:
        console.print("\n👋 Goodbye!", style="yellow")
        return False

    try:
        if cmd == "/help":
            print_help()

        elif cmd == "/show":
            console.print(render_document(session.snapshot, session.view_states))

        elif cmd == "/sections":
            table = Table(title="Raw-text sections")
            table.add_column("Id", style="cyan")
            table.add_column("Label")
            table.add_column("Buffer")
            for section in SECTION_IDS:
                state = "edited" if session.raw_text.is_touched(section) else "live"
                marker = " *" if section == session.raw_text.active_section else ""
                table.add_row(section + marker, SECTIONS[section], state)
            console.print(table)

        elif cmd == "/raw":
            section = session.raw_text.select_section(args[0]) if args else session.raw_text.active_section
            console.print(
                Panel(Syntax(session.raw_text.buffer_text(section), "json"), title=SECTIONS[section])
            )

        elif cmd == "/edit-raw":
            section = session.raw_text.select_section(args[0]) if args else session.raw_text.active_section
            reader = read_text or _prompt_multiline
            text = reader(section, session.raw_text.buffer_text(section))
            if text is None:
                return True
            outcome = session.raw_text.on_buffer_change(section, text)
            if outcome.applied:
                console.print(f"✓ {SECTIONS[section]} updated", style="green")
            else:
                console.print("Draft kept; the document is unchanged until the text is valid.", style="dim")

        elif cmd == "/set":
            if len(args) < 2:
                console.print("❌ Usage: /set <path> <value>", style="red")
                return True
            path = parse_path(args[0])
            value = command_text.split(None, 2)[2]
            _print_result(session.store.set_field(path, value), f"Set {format_path(path)}")

        elif cmd == "/format":
            if len(args) < 3:
                console.print("❌ Usage: /format <path> <text or *> <command> [value]", style="red")
                return True
            _handle_format(session, args)

        elif cmd == "/add":
            if not args:
                console.print("❌ Usage: /add <section> [args]", style="red")
                return True
            _handle_add(session, args)

        elif cmd == "/remove":
            if not args:
                console.print("❌ Usage: /remove <section> <args>", style="red")
                return True
            _handle_remove(session, args)

        elif cmd == "/cycle":
            index = _parse_int(args[0]) if args else None
            if index is None:
                console.print("❌ Usage: /cycle <index>", style="red")
                return True
            _print_result(session.skills.cycle_level(index), f"Skill {index} level changed")

        elif cmd == "/heading":
            if not args:
                console.print("❌ Usage: /heading <section> [text]", style="red")
                return True
            text = command_text.split(None, 2)[2] if len(args) > 1 else ""
            if text:
                _print_result(session.headings.set_heading(args[0], text), f"Heading set to {text}")
            else:
                _print_result(session.headings.clear_heading(args[0]), "Heading restored")

        elif cmd == "/variant":
            if len(args) < 2:
                console.print("❌ Usage: /variant <section> <id>", style="red")
                return True
            section, variant_id = args[0], args[1]
            if section == "summary":
                _print_result(session.summary.change_layout(variant_id), f"Summary layout: {variant_id}")
            elif section in session.view_states and session.view_states[section].select_variant(variant_id):
                console.print(f"✓ {section} variant: {variant_id}", style="green")
            else:
                console.print(f"⚠️ Unknown variant '{variant_id}' for {section}", style="yellow")

        elif cmd == "/dump":
            console.print(Syntax(session.export_document(), "json"))

        elif cmd == "/events":
            session.observer.print_session_summary(console)

        else:
            console.print(f"❓ Unknown command: {cmd}. Type /help for available commands.", style="yellow")

    except (CVEditorError, KeyError) as e:
        console.print(f"❌ {e}", style="red")

    return True


def run_interactive(session: EditorSession):
    """Run the interactive command loop."""
    history_file = Path.home() / ".cv_editor_history"
    prompt = PromptSession(
        history=FileHistory(str(history_file)),
        completer=EditorCompleter(),
        complete_while_typing=False,
    )

    print_banner()

    while True:
        try:
            user_input = prompt.prompt("\n✏️  cv> ").strip()
            if not user_input:
                continue
            if not user_input.startswith("/"):
                console.print("Commands start with '/'. Type /help for the list.", style="dim")
                continue
            if not handle_command(user_input, session):
                break
        except KeyboardInterrupt:
            console.print("\n\n👋 Goodbye!", style="yellow")
            break
        except EOFError:
            console.print("\n👋 Goodbye!", style="yellow")
            break

    session.close()
    if session.config.verbose:
        session.observer.print_session_summary(console)


def main():
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="CV Editor - structured CV editing with raw-text views")
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--seed",
        help="Seed document (raw-text JSON) to start from instead of the bundled sample",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Verbose output (log store updates and print a session summary)",
    )
    args = parser.parse_args()

    try:
        raw_config = load_raw_config(args.config)
    except FileNotFoundError:
        console.print(f"⚠️ Config file not found: {args.config}", style="yellow")
        console.print("Using default configuration.", style="dim")
        raw_config = {}

    issues = validate_config(raw_config)
    if issues:
        for issue in issues:
            icon = "❌" if issue.severity == Severity.ERROR else "⚠️"
            style = "red" if issue.severity == Severity.ERROR else "yellow"
            console.print(f"  {icon} [{issue.field}] {issue.message}", style=style)
        if has_errors(issues):
            console.print("\n💡 Fix the errors above, then try again.", style="dim")
            return

    config = config_from_dict(raw_config)
    if args.seed:
        config.seed_path = args.seed
    if args.verbose:
        config.verbose = True
    if config.seed_path and not Path(config.seed_path).is_file():
        config.seed_path = None

    try:
        session = EditorSession.from_config(config)
    except (OSError, CVEditorError) as e:
        console.print(f"❌ Cannot load seed document: {e}", style="red")
        return

    run_interactive(session)


if __name__ == "__main__":
    main()
