# =============================================================================
# Modal Compose Engine
# =============================================================================
# Vim-flavoured editing for the compose screen.
#
# States:
#
#   Normal --i/a/A/I/o/O--> Insert --Esc--> Normal
#   Normal --v--> Visual (anchor := cursor)
#   Visual --Esc--> Normal (anchor cleared)
#   Visual --d/x--> Normal (selection deleted, anchor cleared)
#
# The engine never renders, never performs I/O and never raises for bad
# input: every motion saturates at the edges of the text, every edit clamps
# the cursor back onto a valid code-point boundary.
#
# The byte cursor is the only stored position. For the body, (line, col) is
# recomputed from it on demand, so the two views cannot drift apart.
# =============================================================================

import logging
from enum import Enum

from hermes_tui.compose.cursor import (
    clamp_cursor,
    cursor_to_line_col,
    line_col_to_cursor,
    line_length,
    split_lines,
)
from hermes_tui.compose.fields import ComposeField, Draft, FieldBuffers
from hermes_tui.compose.text import (
    byte_len,
    byte_offset,
    char_index,
    insert_at,
    next_boundary,
    prev_boundary,
    remove_range,
)

logger = logging.getLogger(__name__)

# Prefix added / removed by the indent commands
INDENT = "  "


class ComposeMode(Enum):
    """Editing modes of the compose engine."""
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"


class ComposeEngine:
    """
    State machine behind the compose screen.

    The engine exposes one method per editing operation. Something else
    (see hermes_tui.compose.keymap) decides which key triggers which
    method; the engine knows nothing about keys.

    Attributes:
        buffers: The three compose fields.
        mode: Current editing mode.
        anchor: Start of the visual selection, None outside Visual mode.

    Usage:
        >>> engine = ComposeEngine()
        >>> engine.enter_insert()
        >>> for ch in "bob@example.com":
        ...     engine.insert_char(ch)
        >>> engine.exit_insert()
        >>> engine.draft().to
        'bob@example.com'
    """

    def __init__(self) -> None:
        self.buffers = FieldBuffers()
        self.mode = ComposeMode.NORMAL
        self.anchor: int | None = None
        self._cursor = 0

    def start(self) -> None:
        """Reset every buffer and all cursor state for a new message."""
        self.buffers.clear()
        self.mode = ComposeMode.NORMAL
        self.anchor = None
        self._cursor = 0
        logger.debug("Compose session started")

    def draft(self) -> Draft:
        """Return the three field contents as a read-only draft."""
        return self.buffers.draft()

    # -------------------------------------------------------------------------
    # State Views
    # -------------------------------------------------------------------------

    @property
    def field(self) -> ComposeField:
        """The active field."""
        return self.buffers.active

    @property
    def text(self) -> str:
        """Text of the active field."""
        return self.buffers.text

    @property
    def cursor(self) -> int:
        """Byte offset of the cursor inside the active field."""
        return self._cursor

    @cursor.setter
    def cursor(self, value: int) -> None:
        self._cursor = clamp_cursor(self.buffers.text, value)

    @property
    def line(self) -> int:
        """Zero-based cursor line (always 0 outside the body)."""
        return self.line_col[0]

    @property
    def col(self) -> int:
        """Byte column of the cursor within its line."""
        return self.line_col[1]

    @property
    def line_col(self) -> tuple[int, int]:
        if not self._in_body:
            return 0, self._cursor
        return cursor_to_line_col(self.buffers.text, self._cursor)

    @property
    def selection(self) -> tuple[int, int] | None:
        """The visual selection as a [start, end) byte range, if any."""
        if self.anchor is None:
            return None
        return min(self.anchor, self._cursor), max(self.anchor, self._cursor)

    @property
    def _in_body(self) -> bool:
        return self.buffers.active is ComposeField.BODY

    def _replace_text(self, text: str, cursor: int) -> None:
        """Swap in new field text and re-clamp the cursor against it."""
        self.buffers.text = text
        self.cursor = cursor

    # -------------------------------------------------------------------------
    # Mode Transitions
    # -------------------------------------------------------------------------

    def _set_mode(self, mode: ComposeMode) -> None:
        if mode is not self.mode:
            logger.debug(f"Compose mode {self.mode.value} -> {mode.value}")
        self.mode = mode

    def enter_insert(self) -> None:
        self._set_mode(ComposeMode.INSERT)
        self.anchor = None

    def exit_insert(self) -> None:
        """Leave Insert mode; the cursor stays where it is."""
        self._set_mode(ComposeMode.NORMAL)

    def enter_visual(self) -> None:
        """Start a selection anchored at the cursor."""
        self._set_mode(ComposeMode.VISUAL)
        self.anchor = self._cursor

    def exit_visual(self) -> None:
        self._set_mode(ComposeMode.NORMAL)
        self.anchor = None

    # -------------------------------------------------------------------------
    # Field Switching
    # -------------------------------------------------------------------------

    def next_field(self) -> None:
        """Cycle To -> Subject -> Body -> To. Not available in Insert mode."""
        self._switch_field(self.buffers.active.next)

    def prev_field(self) -> None:
        """Cycle To -> Body -> Subject -> To. Not available in Insert mode."""
        self._switch_field(self.buffers.active.previous)

    def _switch_field(self, field: ComposeField) -> None:
        if self.mode is ComposeMode.INSERT:
            return

        logger.debug(f"Compose field {self.buffers.active.value} -> {field.value}")
        self.buffers.active = field
        self.cursor = 0

        # A selection never spans fields
        if self.mode is ComposeMode.VISUAL:
            self.anchor = self._cursor

    # -------------------------------------------------------------------------
    # Character Motions
    # -------------------------------------------------------------------------

    def move_left(self) -> None:
        """
        Move one code point left.

        In the body, column 0 moves onto the end of the previous line (the
        code point before the cursor is that line's newline).
        """
        if self._cursor > 0:
            self.cursor = prev_boundary(self.buffers.text, self._cursor)

    def move_right(self) -> None:
        """
        Move one code point right.

        In the body, the end of a line moves to the start of the next one.
        """
        text = self.buffers.text
        if self._cursor < byte_len(text):
            self.cursor = next_boundary(text, self._cursor)

    # -------------------------------------------------------------------------
    # Vertical Motions (body only)
    # -------------------------------------------------------------------------

    def move_up(self) -> None:
        """
        Move to the previous body line, keeping the column where possible.

        From the first line this switches to the previous field instead.
        """
        if not self._in_body:
            return

        line, col = self.line_col
        if line > 0:
            self.cursor = line_col_to_cursor(self.buffers.text, line - 1, col)
        else:
            self.prev_field()

    def move_down(self) -> None:
        """Move to the next body line; a no-op on the last line."""
        if not self._in_body:
            return

        text = self.buffers.text
        line, col = self.line_col
        if line + 1 < len(split_lines(text)):
            self.cursor = line_col_to_cursor(text, line + 1, col)

    def field_down(self) -> None:
        """Move down a body line, or to the next field from To/Subject."""
        if self._in_body:
            self.move_down()
        else:
            self.next_field()

    def field_up(self) -> None:
        """Move up a body line, or to the previous field from To/Subject."""
        if self._in_body:
            self.move_up()
        else:
            self.prev_field()

    # -------------------------------------------------------------------------
    # Word and Line Motions
    # -------------------------------------------------------------------------

    def move_word_forward(self) -> None:
        """Skip the rest of the current word and the whitespace after it."""
        text = self.buffers.text
        pos = char_index(text, self._cursor)

        while pos < len(text) and not text[pos].isspace():
            pos += 1
        while pos < len(text) and text[pos].isspace():
            pos += 1

        self.cursor = byte_offset(text, pos)

    def move_word_backward(self) -> None:
        """Move to the start of the current or previous word."""
        if self._cursor == 0:
            return

        text = self.buffers.text
        pos = char_index(text, self._cursor) - 1

        while pos > 0 and text[pos].isspace():
            pos -= 1
        while pos > 0 and not text[pos - 1].isspace():
            pos -= 1

        self.cursor = byte_offset(text, pos)

    def move_line_start(self) -> None:
        if self._in_body:
            self.cursor = line_col_to_cursor(self.buffers.text, self.line, 0)
        else:
            self.cursor = 0

    def move_line_end(self) -> None:
        text = self.buffers.text
        if self._in_body:
            line = self.line
            self.cursor = line_col_to_cursor(text, line, line_length(text, line))
        else:
            self.cursor = byte_len(text)

    # -------------------------------------------------------------------------
    # Entering Insert Mode
    # -------------------------------------------------------------------------

    def append(self) -> None:
        """Vim 'a': step right, then insert."""
        self.move_right()
        self.enter_insert()

    def append_end(self) -> None:
        """Vim 'A': insert at the end of the line."""
        self.move_line_end()
        self.enter_insert()

    def insert_start(self) -> None:
        """Vim 'I': insert at the start of the line."""
        self.move_line_start()
        self.enter_insert()

    def open_below(self) -> None:
        """Vim 'o': open an empty body line below the cursor line."""
        if not self._in_body:
            return

        self.move_line_end()
        self._replace_text(insert_at(self.buffers.text, self._cursor, "\n"), self._cursor + 1)
        self.enter_insert()

    def open_above(self) -> None:
        """Vim 'O': open an empty body line above the cursor line."""
        if not self._in_body:
            return

        self.move_line_start()
        # The cursor stays put, which is now the start of the new empty line
        self._replace_text(insert_at(self.buffers.text, self._cursor, "\n"), self._cursor)
        self.enter_insert()

    # -------------------------------------------------------------------------
    # Normal Mode Edits
    # -------------------------------------------------------------------------

    def delete_char(self) -> None:
        """Vim 'x': delete the code point under the cursor."""
        text = self.buffers.text
        if self._cursor < byte_len(text):
            end = next_boundary(text, self._cursor)
            self._replace_text(remove_range(text, self._cursor, end), self._cursor)

    def delete_line(self) -> None:
        """
        Clear the whole active field.

        This is the compose screen's 'dd'. It empties the field rather than
        the current line only.
        """
        self._replace_text("", 0)

    def indent_right(self) -> None:
        """Prefix the body with two spaces (whole buffer, not per line)."""
        if not self._in_body:
            return
        self._replace_text(INDENT + self.buffers.text, self._cursor + len(INDENT))

    def indent_left(self) -> None:
        """Strip a leading two-space prefix from the body, if present."""
        if not self._in_body:
            return

        text = self.buffers.text
        if text.startswith(INDENT):
            self._replace_text(text[len(INDENT):], max(0, self._cursor - len(INDENT)))

    # -------------------------------------------------------------------------
    # Insert Mode Edits
    # -------------------------------------------------------------------------

    def insert_char(self, ch: str) -> None:
        """
        Insert a single code point at the cursor and step past it.

        Newlines are only accepted by the body; anything that is not
        exactly one code point is ignored.
        """
        if len(ch) != 1:
            return
        if ch == "\n" and not self._in_body:
            return

        text = insert_at(self.buffers.text, self._cursor, ch)
        self._replace_text(text, self._cursor + byte_len(ch))

    def insert_newline(self) -> None:
        if self._in_body:
            self.insert_char("\n")

    def backspace(self) -> None:
        """Delete the code point before the cursor."""
        if self._cursor == 0:
            return

        text = self.buffers.text
        start = prev_boundary(text, self._cursor)
        self._replace_text(remove_range(text, start, self._cursor), start)

    # -------------------------------------------------------------------------
    # Visual Mode Edits
    # -------------------------------------------------------------------------

    def delete_visual(self) -> None:
        """Delete [min(anchor, cursor), max(anchor, cursor)) and return to Normal."""
        selection = self.selection
        if selection is not None:
            text = self.buffers.text
            length = byte_len(text)
            begin = clamp_cursor(text, min(selection[0], length))
            end = clamp_cursor(text, min(selection[1], length))
            self._replace_text(remove_range(text, begin, end), begin)

        self.exit_visual()
