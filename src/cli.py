"""Command-line interface loop for tasklog.

Every mutation is persisted by the collections as it happens, so leaving
the loop (exit, Ctrl-C, EOF) needs no final save.
"""
from typing import List, Optional
import click
from controller import Controller
from display import LOGS, TASKS
from theme import color, WARNING_COLOR


def _clear_screen() -> None:
    # ESC[3J (scrollback) first, then home / clear screen / home
    click.echo("\033[3J\033[H\033[2J\033[H", nl=False)


def _enter_alt_screen() -> None:
    click.echo("\033[?1049h", nl=False)


def _leave_alt_screen() -> None:
    click.echo("\033[?1049l", nl=False)


HELP_LINES = (
    "Commands:",
    "  add                 Add a task (prompts for the text)",
    "  add <text...>       Shorthand add with inline text (e.g., add buy milk)",
    "  rm <n>              Delete task row n",
    "  rml <n>             Delete log row n (alias: rmlog)",
    "  help                Show this help (press Enter to return)",
    "  exit                Quit (everything is already saved)",
)


class CLI:
    def __init__(self, controller: Controller, alt_screen: bool = True):
        self.controller = controller
        self.surface = controller.surface
        self.alt_screen = alt_screen

    def run(self) -> None:
        """Main REPL loop; the board is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self._draw()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    click.echo('\n'.join(HELP_LINES))
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self._handle_command(line)
                self._show_alerts()
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                click.echo(exit_message)

    def _draw(self) -> None:
        _clear_screen()
        click.echo("Task list:")
        click.echo('\n'.join(self.surface.render()))

    def _show_alerts(self) -> None:
        alerts = self.surface.take_alerts()
        if not alerts:
            return
        self._draw()
        for message in alerts:
            click.echo('\n' + color(message, WARNING_COLOR))
        input("Press Enter to continue...")

    # -------------------- command dispatch --------------------
    def _handle_command(self, line: str) -> None:
        tokens = line.split()
        cmd = tokens[0].lower()
        if cmd == 'add':
            self._cmd_add(line)
        elif cmd == 'rm':
            self._cmd_delete(tokens, TASKS)
        elif cmd in ('rml', 'rmlog'):
            self._cmd_delete(tokens, LOGS)
        else:
            self._draw()
            click.echo("\nUnknown command. Type 'help' for instructions.")
            input("Press Enter to continue...")

    # ---- individual command helpers ----
    def _cmd_add(self, line: str) -> None:
        text = line[3:]
        if not text.strip():
            text = input("Enter task: ")
        self.surface.set_entry(text)
        self.surface.submit()

    def _cmd_delete(self, tokens: List[str], list_name: str) -> None:
        if len(tokens) != 2:
            self._notice(f"Usage: {tokens[0].lower()} <n>")
            return
        raw = tokens[1].rstrip('.')
        if not raw.isdigit():
            self._notice("Invalid row number.")
            return
        if not self.surface.delete_row(list_name, int(raw)):
            self._notice(f"No row #{raw} in {'tasks' if list_name == TASKS else 'log'}.")

    def _notice(self, message: str) -> None:
        self._draw()
        click.echo("\n" + message)
        input("Press Enter to continue...")
