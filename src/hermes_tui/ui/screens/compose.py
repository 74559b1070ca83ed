# =============================================================================
# Compose Screen
# =============================================================================
# Screen for writing new emails with vim-style modal editing.
#
# Every key press goes through hermes_tui.compose.keymap.dispatch(), which
# runs the matching ComposeEngine operation. The screen only:
#   - redraws the three fields and the mode line afterwards
#   - handles the session actions (send / cancel) the key map hands back
#
# A failed send keeps the screen and its draft intact so the user can retry.
# =============================================================================

import logging

from rich.markup import escape
from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Header, Static

from hermes_tui.compose import CANCEL, SEND, ComposeEngine, ComposeField, KeyPress, dispatch
from hermes_tui.storage import EmailBackend, StorageError
from hermes_tui.ui.widgets import ComposeView
from hermes_tui.ui.widgets.compose_view import MODE_HINTS, status_text

logger = logging.getLogger(__name__)


class ComposeScreen(Screen[bool], inherit_bindings=False):
    """
    Screen for composing a new email.

    The screen has no key bindings of its own: all keys are routed to the
    compose engine so that typing in Insert mode is never intercepted.

    Returns:
        True if the message was sent, False if it was discarded.
    """

    CSS = """
    #compose-container {
        padding: 1 2;
    }

    #compose-body {
        height: 1fr;
        min-height: 8;
    }

    #compose-status {
        height: 1;
        margin-top: 1;
        text-style: bold;
    }

    #compose-hint {
        height: 1;
        color: $text-muted;
    }
    """

    def __init__(self, backend: EmailBackend) -> None:
        """
        Initialize the compose screen.

        Args:
            backend: Mail store the finished message is saved to.
        """
        super().__init__()
        self._backend = backend
        self._engine = ComposeEngine()
        self._engine.start()

    @property
    def engine(self) -> ComposeEngine:
        return self._engine

    def compose(self) -> ComposeResult:
        """
        Compose the compose screen layout.

        ┌─────────────────────────────────────────────┐
        │                   Header                     │
        ├─────────────────────────────────────────────┤
        │ ╭ To ─────────────────────────────────────╮ │
        │ ╭ Subject ────────────────────────────────╮ │
        │ ╭ Body ───────────────────────────────────╮ │
        │ │                                          │ │
        │ ╰──────────────────────────────────────────╯ │
        │ -- NORMAL --  To                             │
        │ [j/k] Navigate  [i/a/o] Insert ...           │
        └─────────────────────────────────────────────┘
        """
        yield Header()

        with Vertical(id="compose-container"):
            yield ComposeView(ComposeField.TO, id="compose-to")
            yield ComposeView(ComposeField.SUBJECT, id="compose-subject")
            yield ComposeView(ComposeField.BODY, id="compose-body")
            yield Static("", id="compose-status")
            yield Static("", id="compose-hint")

    def on_mount(self) -> None:
        self.sub_title = "New Email"
        self._refresh_views()

    def _refresh_views(self) -> None:
        """Redraw every field and the mode line from the engine."""
        for view in self.query(ComposeView):
            view.show(self._engine)
        self.query_one("#compose-status", Static).update(status_text(self._engine))
        self.query_one("#compose-hint", Static).update(MODE_HINTS[self._engine.mode])

    def on_key(self, event: events.Key) -> None:
        """Route every key to the compose engine."""
        event.prevent_default()
        event.stop()

        action = dispatch(self._engine, KeyPress.from_event(event))
        if action == SEND:
            self.action_send()
        elif action == CANCEL:
            self.action_cancel()

        self._refresh_views()

    def action_send(self) -> None:
        """Validate and store the message."""
        draft = self._engine.draft()

        if not draft.is_sendable:
            missing = "recipient" if not draft.to else "subject"
            self.notify(f"Please enter a {missing}", severity="error")
            return

        try:
            self._backend.send_email(draft.to, draft.subject, draft.body)
        except StorageError as e:
            # Keep the draft so the user can try again
            logger.error(f"Send failed: {e}")
            self.notify(f"Failed to send: {escape(str(e))}", severity="error")
            return

        self.notify(f"Email sent to {escape(draft.to)}", timeout=3)
        self.dismiss(True)

    def action_cancel(self) -> None:
        """Discard the message and return to the inbox."""
        self._engine.start()
        self.dismiss(False)
