# =============================================================================
# Inbox Screen
# =============================================================================
# The default view: a list of stored messages.
#
# From here the user can open a message, delete it (with confirmation),
# start composing, or open the ":" command line. All mail store access
# goes through the application's backend; failures are reported with a
# notification and never leave the screen in a half-updated state.
# =============================================================================

import logging

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from hermes_tui.core import EmailSummary
from hermes_tui.storage import StorageError
from hermes_tui.ui.screens.command import CommandScreen
from hermes_tui.ui.screens.compose import ComposeScreen
from hermes_tui.ui.screens.confirm import ConfirmDeleteScreen
from hermes_tui.ui.screens.help import HelpScreen
from hermes_tui.ui.screens.viewer import ViewerScreen
from hermes_tui.ui.widgets import MessageList

logger = logging.getLogger(__name__)


class InboxScreen(Screen):
    """
    The inbox list.

    Keybindings:
        - j/k, Down/Up: Move through messages
        - g/G: First/last message
        - Enter: Open the selected message
        - d: Delete the selected message
        - n: Compose a new message
        - ":": Command line (":help")
        - ?: Help
        - Ctrl+R: Reload the inbox
        - q: Quit
    """

    BINDINGS = [
        Binding("j", "cursor_down", "Next", show=False),
        Binding("k", "cursor_up", "Previous", show=False),
        Binding("down", "cursor_down", "Next", show=False),
        Binding("up", "cursor_up", "Previous", show=False),
        Binding("g", "cursor_first", "First", show=False),
        Binding("G", "cursor_last", "Last", show=False),
        Binding("d", "delete", "Delete"),
        Binding("n", "compose", "Compose"),
        Binding("colon", "command", "Command", show=False),
        Binding("question_mark", "help", "Help"),
        Binding("ctrl+r", "reload", "Reload"),
        Binding("q", "quit", "Quit"),
    ]

    CSS = """
    #message-list {
        height: 1fr;
    }

    #status-line {
        height: 1;
        background: $surface-darken-2;
        color: $text-muted;
        padding: 0 1;
    }
    """

    def compose(self) -> ComposeResult:
        """
        Compose the inbox layout.

        +--------------------------------------------------+
        |                    Header                         |
        +--------------------------------------------------+
        |                  Message List                     |
        +--------------------------------------------------+
        | Status                                            |
        +--------------------------------------------------+
        |                    Footer                         |
        +--------------------------------------------------+
        """
        yield Header()
        yield MessageList(id="message-list")
        yield Static("Ready", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Inbox"
        self._load_inbox()
        self.query_one("#message-list", MessageList).focus()

    def update_status(self, text: str) -> None:
        """Update the status line text."""
        self.query_one("#status-line", Static).update(text)

    def _load_inbox(self) -> None:
        """(Re)load messages from the mail store."""
        message_list = self.query_one("#message-list", MessageList)
        try:
            messages = self.app.backend.fetch_inbox()
        except StorageError as e:
            logger.error(f"Could not load inbox: {e}")
            self.notify(f"Could not load inbox: {escape(str(e))}", severity="error")
            self.update_status("Inbox unavailable")
            return

        message_list.load_messages(messages)
        count = len(messages)
        self.update_status(f"{count} message{'s' if count != 1 else ''}")

    def _selected(self) -> EmailSummary | None:
        message = self.query_one("#message-list", MessageList).get_selected_message()
        if message is None:
            self.notify("No message selected", severity="warning")
        return message

    # -------------------------------------------------------------------------
    # Action Handlers
    # -------------------------------------------------------------------------

    def action_cursor_down(self) -> None:
        self.query_one("#message-list", MessageList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#message-list", MessageList).action_cursor_up()

    def action_cursor_first(self) -> None:
        self.query_one("#message-list", MessageList).cursor_first()

    def action_cursor_last(self) -> None:
        self.query_one("#message-list", MessageList).cursor_last()

    def action_view_message(self) -> None:
        """Open the selected message."""
        message = self._selected()
        if message:
            self.app.push_screen(ViewerScreen(message))

    def on_data_table_row_selected(self, event: MessageList.RowSelected) -> None:
        """Enter on a row opens the message."""
        self.action_view_message()

    def action_compose(self) -> None:
        """Open the compose screen; reload the inbox if a message was sent."""

        def on_close(sent: bool | None) -> None:
            if sent:
                self._load_inbox()

        self.app.push_screen(ComposeScreen(self.app.backend), on_close)

    def action_delete(self) -> None:
        """Delete the selected message, asking first if configured to."""
        message = self._selected()
        if message is None:
            return

        if not self.app.config.ui.confirm_delete:
            self._delete(message)
            return

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self._delete(message)

        self.app.push_screen(ConfirmDeleteScreen(message), on_confirm)

    def _delete(self, message: EmailSummary) -> None:
        try:
            self.app.backend.delete_email(message)
        except StorageError as e:
            self.notify(f"Delete failed: {escape(str(e))}", severity="error")
            return

        self.notify(f"Deleted: {escape(message.display_subject[:30])}")
        self._load_inbox()

    def action_command(self) -> None:
        """Open the ":" command line."""

        def on_command(command: str | None) -> None:
            if command == "help":
                self.action_help()
            elif command in ("q", "quit"):
                self.app.exit()

        self.app.push_screen(CommandScreen(), on_command)

    def action_help(self) -> None:
        self.app.push_screen(HelpScreen())

    def action_reload(self) -> None:
        self._load_inbox()
        self.notify("Inbox reloaded", timeout=2)

    def action_quit(self) -> None:
        self.app.exit()
