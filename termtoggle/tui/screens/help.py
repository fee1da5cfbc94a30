"""Help modal showing key mappings and slash commands."""

from __future__ import annotations

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from termtoggle.shared.commands import COMMAND_HELP


def help_text(mapping: str | None) -> str:
    """Rich-markup body of the help screen."""
    mapping = mapping or "(disabled)"
    commands = "\n".join(
        f"- `/{name}`: {escape(text)}" for name, text in COMMAND_HELP.items()
    )
    return (
        "[bold]Terminals[/bold]\n"
        f"- `{mapping}`: open terminal 1, or hide the highest-numbered visible terminal\n"
        f"- `3` then `{mapping}`: toggle terminal 3\n"
        "- Type in a terminal's input line and press `Enter` to send it\n\n"
        "[bold]Keyboard shortcuts[/bold]\n"
        "- `F1`: open help\n"
        "- `Ctrl+W`: close the focused window\n"
        "- `/`: open the command bar\n"
        "- `Ctrl+Q`: quit\n"
        "- `Esc`: blur\n\n"
        "[bold]Slash commands[/bold]\n"
        f"{commands}"
    )


class HelpScreen(ModalScreen[None]):
    """Display usage instructions and keyboard shortcuts."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    #help-dialog {
        width: 72;
        height: auto;
        padding: 1 2;
        border: thick $primary;
        background: $surface;
    }
    #help-close {
        margin-top: 1;
    }
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("f1", "close", "Close"),
    ]

    def __init__(self, mapping: str | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._mapping = mapping

    def compose(self) -> ComposeResult:
        with Vertical(id="help-dialog"):
            yield Static(
                "[bold $primary]termtoggle Help[/bold $primary]",
                id="help-title",
                markup=True,
            )
            yield Static(
                help_text(self._mapping),
                id="help-body",
                markup=True,
            )
            yield Button("Close", id="help-close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
