# =============================================================================
# Command Line Screen
# =============================================================================
# Vim-style ":" command line shown at the bottom of the inbox.
#
# Known commands are listed in COMMANDS; the inbox decides what they do.
# Anything else simply closes the command line.
# =============================================================================

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Input

# Commands understood by the inbox
COMMANDS = frozenset({"help", "q", "quit"})


def parse_command(text: str) -> str | None:
    """
    Normalize a command line entry.

    Returns:
        The command name, or None if it is not a known command.
    """
    command = text.strip().lstrip(":").strip()
    if command in COMMANDS:
        return command
    return None


class CommandScreen(ModalScreen[str | None]):
    """
    Modal one-line command prompt.

    Returns:
        A known command name, or None if cancelled or unknown.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    CommandScreen {
        align: left bottom;
    }

    #command-input {
        width: 100%;
        border: none;
        height: 1;
        padding: 0 1;
        background: $surface;
    }
    """

    def compose(self) -> ComposeResult:
        yield Input(placeholder=":", id="command-input")

    def on_mount(self) -> None:
        """Focus the command input when mounted."""
        self.query_one("#command-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter in the command input."""
        self.dismiss(parse_command(event.value))

    def action_cancel(self) -> None:
        """Cancel and return None."""
        self.dismiss(None)
