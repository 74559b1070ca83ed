# =============================================================================
# Help Screen
# =============================================================================
# Lists the inbox and compose keybindings. Escape or q closes it.
# =============================================================================

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Static
from textual.containers import Vertical

HELP_TEXT = """\
Inbox
  j / Down     move down
  k / Up       move up
  g / G        first / last message
  Enter        open selected email
  d            delete selected email
  n            compose new email
  :help        show this help
  Ctrl+R       reload inbox
  q            quit

Compose (Normal mode)
  h j k l      move (j/k switch fields outside the body)
  w / b        next / previous word
  0 / $        line start / end
  i a A I o O  enter Insert mode
  x            delete character
  d            clear the field
  > / <        indent / unindent body
  v            Visual mode (d/x deletes the selection)
  : or Z       send
  q / Esc      discard"""


class HelpScreen(ModalScreen[None]):
    """Modal keybinding reference."""

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-dialog {
        width: 64;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $primary;
    }

    #help-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical(id="help-dialog"):
            yield Static("Keybindings", id="help-title")
            yield Static(HELP_TEXT, id="help-text", markup=False)

    def action_close(self) -> None:
        self.dismiss(None)
