# =============================================================================
# UI Module
# =============================================================================
# Textual-based user interface for Hermes.
#
# Structure:
#   - screens/: Full-screen views and modal dialogs
#   - widgets/: Reusable UI components (inbox table, compose field view)
#
# The UI owns no mail logic of its own: editing lives in hermes_tui.compose
# and persistence in hermes_tui.storage.
# =============================================================================

from hermes_tui.ui.screens.inbox import InboxScreen
from hermes_tui.ui.screens.compose import ComposeScreen

from hermes_tui.ui.widgets.message_list import MessageList
from hermes_tui.ui.widgets.compose_view import ComposeView

__all__ = [
    "InboxScreen",
    "ComposeScreen",
    "MessageList",
    "ComposeView",
]
