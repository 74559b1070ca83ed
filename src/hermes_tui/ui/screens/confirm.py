# =============================================================================
# Delete Confirmation Screen
# =============================================================================
# A modal dialog asking whether the selected message should really be
# deleted. Y confirms; N or Escape cancels.
# =============================================================================

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Static, Button
from textual.containers import Vertical, Horizontal

from hermes_tui.core import EmailSummary


class ConfirmDeleteScreen(ModalScreen[bool]):
    """
    Modal screen confirming a delete.

    Returns:
        True to delete, False to keep the message.
    """

    BINDINGS = [
        Binding("y", "confirm", "Delete"),
        Binding("Y", "confirm", "Delete", show=False),
        Binding("n", "cancel", "Keep"),
        Binding("N", "cancel", "Keep", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    CSS = """
    ConfirmDeleteScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface;
        border: thick $error;
    }

    #confirm-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #confirm-info {
        margin-bottom: 1;
        color: $text-muted;
    }

    #confirm-buttons {
        align: center middle;
        height: auto;
    }

    #confirm-buttons Button {
        margin: 0 1;
    }
    """

    def __init__(self, email: EmailSummary) -> None:
        """
        Initialize the confirmation dialog.

        Args:
            email: The message that is about to be deleted.
        """
        super().__init__()
        self._email = email

    def compose(self) -> ComposeResult:
        """Compose the confirmation dialog."""
        with Vertical(id="confirm-dialog"):
            yield Static("Delete this email?", id="confirm-title")
            # Stored headers are shown verbatim, never parsed as markup
            info = Text()
            info.append("From: ")
            info.append(self._email.sender)
            info.append("\nSubject: ")
            info.append(self._email.display_subject)
            yield Static(info, id="confirm-info")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete (y)", id="confirm-btn", variant="error")
                yield Button("Cancel (n)", id="cancel-btn")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "confirm-btn":
            self.action_confirm()
        elif event.button.id == "cancel-btn":
            self.action_cancel()

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
