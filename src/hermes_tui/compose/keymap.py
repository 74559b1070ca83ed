# =============================================================================
# Compose Key Map
# =============================================================================
# Translates key presses into compose engine operations.
#
# Each editing mode has its own table mapping a key name to the name of a
# ComposeEngine method. A few keys do not edit anything but end the compose
# session; those come back to the caller as session actions ("send",
# "cancel") instead of being run on the engine.
#
# Key names are either the printed character ("w", "$", "A") or Textual's
# name for a non-printing key ("escape", "left", "shift+tab").
# =============================================================================

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hermes_tui.compose.engine import ComposeEngine, ComposeMode

if TYPE_CHECKING:
    from textual import events

# Session actions handed back to whoever owns the compose session
SEND = "send"
CANCEL = "cancel"
SESSION_ACTIONS = frozenset({SEND, CANCEL})


@dataclass(frozen=True)
class KeyPress:
    """
    A single key press, independent of the terminal library.

    Attributes:
        key: Named key ("escape", "enter", "left", "ctrl+s", "a", ...).
        character: The printable character produced, if any.
        ctrl: Control modifier was held.
        shift: Shift modifier was held (for named keys).
    """
    key: str
    character: str | None = None
    ctrl: bool = False
    shift: bool = False

    @classmethod
    def from_event(cls, event: "events.Key") -> "KeyPress":
        """Build a KeyPress from a Textual key event."""
        character = event.character if event.is_printable else None
        return cls(
            key=event.key,
            character=character,
            ctrl="ctrl+" in event.key,
            shift="shift+" in event.key,
        )

    @property
    def name(self) -> str:
        """The name used to look the key up in a mode table."""
        if self.character and len(self.character) == 1 and not self.ctrl:
            return self.character
        return self.key

    @property
    def is_text(self) -> bool:
        """True for plain typing (no control modifier)."""
        return (
            not self.ctrl
            and self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


_MOTIONS = {
    "h": "move_left",
    "left": "move_left",
    "l": "move_right",
    "right": "move_right",
    "w": "move_word_forward",
    "b": "move_word_backward",
    "0": "move_line_start",
    "$": "move_line_end",
}

NORMAL_KEYS: dict[str, str] = {
    **_MOTIONS,
    # Body lines, or field to field outside the body
    "j": "field_down",
    "down": "field_down",
    "k": "field_up",
    "up": "field_up",
    "tab": "next_field",
    "shift+tab": "prev_field",
    # Into Insert mode
    "i": "enter_insert",
    "a": "append",
    "A": "append_end",
    "I": "insert_start",
    "o": "open_below",
    "O": "open_above",
    # Edits
    "x": "delete_char",
    "d": "delete_line",
    ">": "indent_right",
    "<": "indent_left",
    "v": "enter_visual",
    # Session
    ":": SEND,
    "Z": SEND,
    "escape": CANCEL,
    "q": CANCEL,
}

INSERT_KEYS: dict[str, str] = {
    "escape": "exit_insert",
    "backspace": "backspace",
    "enter": "insert_newline",
    "left": "move_left",
    "right": "move_right",
    "up": "move_up",
    "down": "move_down",
}

VISUAL_KEYS: dict[str, str] = {
    **_MOTIONS,
    "j": "move_down",
    "down": "move_down",
    "k": "move_up",
    "up": "move_up",
    "d": "delete_visual",
    "x": "delete_visual",
    "escape": "exit_visual",
}

KEYMAP: dict[ComposeMode, dict[str, str]] = {
    ComposeMode.NORMAL: NORMAL_KEYS,
    ComposeMode.INSERT: INSERT_KEYS,
    ComposeMode.VISUAL: VISUAL_KEYS,
}


def lookup(mode: ComposeMode, press: KeyPress) -> str | None:
    """Return the operation bound to a key in the given mode, if any."""
    if press.ctrl:
        return None
    table = KEYMAP[mode]
    return table.get(press.name, table.get(press.key))


def dispatch(engine: ComposeEngine, press: KeyPress) -> str | None:
    """
    Apply one key press to the engine.

    In Insert mode, printable keys without a binding are typed into the
    active field. Control-modified keys are ignored.

    Returns:
        A session action (SEND or CANCEL) for the caller to handle, or
        None when the key was consumed by the engine (or ignored).
    """
    operation = lookup(engine.mode, press)

    if operation is None:
        if engine.mode is ComposeMode.INSERT and press.is_text:
            engine.insert_char(press.character)
        return None

    if operation in SESSION_ACTIONS:
        return operation

    getattr(engine, operation)()
    return None
