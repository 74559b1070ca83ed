# =============================================================================
# Byte Addressing Helpers
# =============================================================================
# The compose engine addresses text by UTF-8 byte offset, while Python strings
# index by code point. These helpers translate between the two views.
#
# Every offset handed back by this module lies on a code-point boundary:
#   - floor_boundary() walks backwards until it finds one
#   - next_boundary() / prev_boundary() step over exactly one code point
# =============================================================================

ENCODING = "utf-8"


def byte_len(text: str) -> int:
    """Return the length of text in UTF-8 bytes."""
    return len(text.encode(ENCODING))


def is_char_boundary(text: str, offset: int) -> bool:
    """
    Check whether a byte offset falls between two code points.

    Offsets 0 and byte_len(text) are always boundaries. Anything outside
    that range is not.
    """
    data = text.encode(ENCODING)
    if offset == 0 or offset == len(data):
        return True
    if offset < 0 or offset > len(data):
        return False
    # UTF-8 continuation bytes look like 0b10xxxxxx
    return (data[offset] & 0xC0) != 0x80


def floor_boundary(text: str, offset: int) -> int:
    """
    Clamp offset into [0, byte_len(text)] and walk it back onto a boundary.

    Example:
        >>> floor_boundary("héllo", 2)   # lands inside "é"
        1
    """
    data = text.encode(ENCODING)
    offset = max(0, min(offset, len(data)))
    while offset > 0 and offset < len(data) and (data[offset] & 0xC0) == 0x80:
        offset -= 1
    return offset


def char_index(text: str, offset: int) -> int:
    """Convert a byte offset into a code-point index."""
    offset = floor_boundary(text, offset)
    return len(text.encode(ENCODING)[:offset].decode(ENCODING))


def byte_offset(text: str, index: int) -> int:
    """Convert a code-point index into a byte offset."""
    index = max(0, min(index, len(text)))
    return byte_len(text[:index])


def next_boundary(text: str, offset: int) -> int:
    """Return the boundary one code point after offset (saturating)."""
    index = char_index(text, offset)
    if index >= len(text):
        return byte_len(text)
    return byte_offset(text, index) + byte_len(text[index])


def prev_boundary(text: str, offset: int) -> int:
    """Return the boundary one code point before offset (saturating)."""
    index = char_index(text, offset)
    if index == 0:
        return 0
    return byte_offset(text, index - 1)


def insert_at(text: str, offset: int, fragment: str) -> str:
    """Insert fragment at a byte offset."""
    index = char_index(text, offset)
    return text[:index] + fragment + text[index:]


def remove_range(text: str, start: int, end: int) -> str:
    """Remove the byte range [start, end) from text."""
    first = char_index(text, start)
    last = char_index(text, end)
    return text[:first] + text[last:]
