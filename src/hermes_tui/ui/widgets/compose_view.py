# =============================================================================
# Compose Field View
# =============================================================================
# Displays one compose field (To, Subject or Body) with a block caret and,
# in Visual mode, the highlighted selection.
#
# The engine works in UTF-8 byte offsets; Rich works in code points. The
# conversion happens here, at the edge, and nowhere else in the UI.
# =============================================================================

from rich.text import Text
from textual.widgets import Static

from hermes_tui.compose import ComposeEngine, ComposeField, ComposeMode
from hermes_tui.compose.text import char_index

CARET_STYLE = "reverse"
SELECTION_STYLE = "on dark_cyan"

MODE_LABELS = {
    ComposeMode.NORMAL: "-- NORMAL --",
    ComposeMode.INSERT: "-- INSERT --",
    ComposeMode.VISUAL: "-- VISUAL --",
}

MODE_HINTS = {
    ComposeMode.NORMAL: (
        "[j/k] Navigate  [i/a/o] Insert  [v] Visual  [x/d] Delete  [>/<] Indent  [:] Send  [q] Discard"
    ),
    ComposeMode.INSERT: "[Esc] Normal  [Arrows] Move",
    ComposeMode.VISUAL: "[h/j/k/l] Move  [d/x] Delete  [Esc] Exit",
}


def render_field_text(
    text: str,
    cursor: int | None = None,
    selection: tuple[int, int] | None = None,
) -> Text:
    """
    Render field text with an optional caret and selection.

    Args:
        text: Field contents.
        cursor: Byte offset of the caret, or None for an inactive field.
        selection: [start, end) byte range to highlight.

    Returns:
        A Rich Text ready for display.
    """
    index = char_index(text, cursor) if cursor is not None else None

    # The caret needs a cell to sit on at the end of a line
    padded = index is not None and (index >= len(text) or text[index] == "\n")
    display = text[:index] + " " + text[index:] if padded else text

    def shift(pos: int) -> int:
        return pos + 1 if padded and pos > index else pos

    rendered = Text(display)
    if selection is not None:
        start, end = (char_index(text, offset) for offset in selection)
        rendered.stylize(SELECTION_STYLE, shift(start), shift(end))
    if index is not None:
        rendered.stylize(CARET_STYLE, index, index + 1)

    return rendered


def status_text(engine: ComposeEngine) -> str:
    """Mode indicator plus the caret position."""
    label = MODE_LABELS[engine.mode]
    if engine.field is ComposeField.BODY:
        return f"{label}  {engine.field.label}  {engine.line + 1}:{engine.col + 1}"
    return f"{label}  {engine.field.label}"


class ComposeView(Static):
    """
    Read-only view of a single compose field.

    The field label is shown as the border title; the active field gets the
    "-active" class so the stylesheet can highlight it.
    """

    DEFAULT_CSS = """
    ComposeView {
        border: round $panel;
        padding: 0 1;
        height: auto;
    }

    ComposeView.-active {
        border: round $accent;
    }
    """

    def __init__(self, field: ComposeField, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.field = field
        self.border_title = field.label

    def show(self, engine: ComposeEngine) -> None:
        """Redraw from the engine's current state."""
        active = engine.field is self.field
        self.set_class(active, "-active")
        self.update(render_field_text(
            engine.buffers.get(self.field),
            engine.cursor if active else None,
            engine.selection if active else None,
        ))
