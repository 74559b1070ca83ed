# =============================================================================
# Cursor / Position Model
# =============================================================================
# The byte cursor is the single source of truth. For the multi-line body we
# also need a (line, column) view so the renderer can place a caret and the
# vertical motions know where to go.
#
# Lines are the "\n"-separated segments of the body:
#
#   "ab\ncde\nf"  ->  ["ab", "cde", "f"]
#   "ab\n"        ->  ["ab", ""]        (cursor 3 sits on the empty line 1)
#   ""            ->  [""]
#
# With this definition cursor -> (line, col) -> cursor is an identity for
# every code-point boundary in the text.
# =============================================================================

from hermes_tui.compose.text import byte_len, floor_boundary


def split_lines(text: str) -> list[str]:
    """Split body text into its newline-delimited segments."""
    return text.split("\n")


def clamp_cursor(text: str, cursor: int) -> int:
    """
    Clamp a cursor into [0, byte_len(text)] and onto a code-point boundary.

    This is applied after every edit so the cursor can never point past the
    end of the field or into the middle of a multi-byte character.
    """
    return floor_boundary(text, cursor)


def cursor_to_line_col(text: str, cursor: int) -> tuple[int, int]:
    """
    Project a byte cursor onto (line, column).

    Walks the segments accumulating their byte length (+1 per newline) and
    stops at the first segment whose end reaches the cursor. A cursor sitting
    right after a newline therefore lands on column 0 of the following line.

    Args:
        text: Body text.
        cursor: Byte offset (clamped if out of range).

    Returns:
        Zero-based (line, col), col measured in bytes.
    """
    cursor = clamp_cursor(text, cursor)
    lines = split_lines(text)
    pos = 0

    for line_no, line in enumerate(lines):
        length = byte_len(line)
        if pos + length >= cursor:
            return line_no, cursor - pos
        pos += length + 1  # +1 for the newline

    # Not reached: the last segment always ends at byte_len(text)
    return len(lines) - 1, byte_len(lines[-1])


def line_col_to_cursor(text: str, line: int, col: int) -> int:
    """
    Convert (line, column) back into a byte cursor.

    Out-of-range lines clamp to the last line; the column clamps to the
    target line's length and then onto a code-point boundary of that line.
    An empty body always yields 0.
    """
    lines = split_lines(text)
    line = max(0, min(line, len(lines) - 1))

    pos = sum(byte_len(prior) + 1 for prior in lines[:line])
    target = lines[line]
    col = floor_boundary(target, min(max(col, 0), byte_len(target)))

    return pos + col


def line_length(text: str, line: int) -> int:
    """Byte length of a given line (0 if the line does not exist)."""
    lines = split_lines(text)
    if 0 <= line < len(lines):
        return byte_len(lines[line])
    return 0
