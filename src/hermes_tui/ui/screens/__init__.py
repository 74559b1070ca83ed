# =============================================================================
# UI Screens
# =============================================================================
# Full-screen views and dialogs for the application.
#
#   - InboxScreen: The default view, a list of stored messages
#   - ViewerScreen: Reading a single message
#   - ComposeScreen: Writing a message with modal editing
#   - ConfirmDeleteScreen / CommandScreen / HelpScreen: Modal dialogs
# =============================================================================

from hermes_tui.ui.screens.inbox import InboxScreen
from hermes_tui.ui.screens.viewer import ViewerScreen
from hermes_tui.ui.screens.compose import ComposeScreen
from hermes_tui.ui.screens.confirm import ConfirmDeleteScreen
from hermes_tui.ui.screens.command import CommandScreen
from hermes_tui.ui.screens.help import HelpScreen

__all__ = [
    "InboxScreen",
    "ViewerScreen",
    "ComposeScreen",
    "ConfirmDeleteScreen",
    "CommandScreen",
    "HelpScreen",
]
