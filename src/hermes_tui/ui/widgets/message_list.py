# =============================================================================
# Message List Widget
# =============================================================================
# A table view of the inbox.
#
# Features:
#   - Columns: From, Subject
#   - Keyboard navigation (j/k, g/G via the inbox screen)
#   - Keeps the cursor on a sensible row after deletions
# =============================================================================

from rich.text import Text
from textual.widgets import DataTable
from textual.widgets.data_table import RowKey
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hermes_tui.core import EmailSummary


class MessageList(DataTable):
    """
    A table widget displaying the inbox.

    Usage:
        >>> message_list = MessageList()
        >>> message_list.load_messages(backend.fetch_inbox())
    """

    # Column configuration
    COLUMNS = [
        ("From", 30),   # Sender
        ("Subject", 0), # Subject (flexible width)
    ]

    def __init__(self, **kwargs) -> None:
        """
        Initialize the message list.

        Args:
            **kwargs: Additional arguments passed to DataTable.
        """
        super().__init__(**kwargs)
        self._messages: dict[RowKey, "EmailSummary"] = {}

        # Configure table
        self.cursor_type = "row"
        self.zebra_stripes = True

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        for label, width in self.COLUMNS:
            if width > 0:
                self.add_column(label, width=width)
            else:
                self.add_column(label)  # Flexible width

    def load_messages(self, messages: list["EmailSummary"]) -> None:
        """
        Replace the table contents.

        The cursor stays on the same row index where possible.
        """
        previous_row = self.cursor_row
        self.clear()
        self._messages.clear()

        for message in messages:
            sender = message.sender
            if len(sender) > 30:
                sender = sender[:27] + "..."
            row_key = self.add_row(Text(sender), Text(message.display_subject))
            self._messages[row_key] = message

        if messages:
            self.move_cursor(row=min(previous_row, len(messages) - 1))

    def get_selected_message(self) -> "EmailSummary | None":
        """
        Get the message under the cursor.

        Returns:
            Selected EmailSummary or None for an empty inbox.
        """
        row_index = self.cursor_row
        try:
            row_key = list(self._messages.keys())[row_index]
        except IndexError:
            return None
        return self._messages.get(row_key)

    def cursor_first(self) -> None:
        """Jump to the first message."""
        if self._messages:
            self.move_cursor(row=0)

    def cursor_last(self) -> None:
        """Jump to the last message."""
        if self._messages:
            self.move_cursor(row=len(self._messages) - 1)
