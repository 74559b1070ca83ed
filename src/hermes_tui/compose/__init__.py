# =============================================================================
# Hermes Compose Module
# =============================================================================
# The modal text-editing engine used to write a message.
#
#   - text:    UTF-8 byte addressing over Python strings
#   - cursor:  byte cursor <-> (line, column) projection for the body
#   - fields:  the To / Subject / Body buffers and the finished Draft
#   - engine:  Normal / Insert / Visual modes and every edit operation
#   - keymap:  which key runs which engine operation in each mode
#
# Nothing in here touches the terminal or the mail store.
# =============================================================================

from hermes_tui.compose.engine import ComposeEngine, ComposeMode
from hermes_tui.compose.fields import ComposeField, Draft, FieldBuffers
from hermes_tui.compose.keymap import CANCEL, SEND, KeyPress, dispatch

__all__ = [
    "ComposeEngine",
    "ComposeMode",
    "ComposeField",
    "Draft",
    "FieldBuffers",
    "KeyPress",
    "dispatch",
    "SEND",
    "CANCEL",
]
