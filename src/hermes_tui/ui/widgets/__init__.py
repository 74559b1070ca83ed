# =============================================================================
# UI Widgets
# =============================================================================
# Reusable UI components for Hermes:
#   - MessageList: The inbox table
#   - ComposeView: One compose field with caret and selection
# =============================================================================

from hermes_tui.ui.widgets.compose_view import ComposeView
from hermes_tui.ui.widgets.message_list import MessageList

__all__ = ["ComposeView", "MessageList"]
