# =============================================================================
# Message Viewer Screen
# =============================================================================
# Shows a single message: From and Subject headers, then the body in a
# scrollable area. j/k scroll; q, Escape or Enter close the viewer.
# =============================================================================

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static
from textual.containers import VerticalScroll

from hermes_tui.core import EmailSummary


class ViewerScreen(Screen[None]):
    """Full-screen reader for one message."""

    BINDINGS = [
        Binding("j", "scroll_down", "Down", show=False),
        Binding("down", "scroll_down", "Down", show=False),
        Binding("k", "scroll_up", "Up", show=False),
        Binding("up", "scroll_up", "Up", show=False),
        Binding("q", "close", "Close"),
        Binding("escape", "close", "Close", show=False),
        Binding("enter", "close", "Close", show=False),
    ]

    CSS = """
    #viewer-headers {
        height: auto;
        padding: 0 1;
        border-bottom: solid $primary;
    }

    #viewer-scroll {
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, email: EmailSummary) -> None:
        super().__init__()
        self._email = email

    def compose(self) -> ComposeResult:
        yield Header()

        headers = Text()
        headers.append("From: ", style="bold")
        headers.append(self._email.sender)
        headers.append("\nSubject: ", style="bold")
        headers.append(self._email.display_subject)
        yield Static(headers, id="viewer-headers")

        with VerticalScroll(id="viewer-scroll"):
            yield Static(Text(self._email.body or "(No body)"), id="viewer-body")

        yield Footer()

    def action_scroll_down(self) -> None:
        self.query_one("#viewer-scroll", VerticalScroll).scroll_down(animate=False)

    def action_scroll_up(self) -> None:
        self.query_one("#viewer-scroll", VerticalScroll).scroll_up(animate=False)

    def action_close(self) -> None:
        self.dismiss(None)
