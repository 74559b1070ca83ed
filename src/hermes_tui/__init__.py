# =============================================================================
# Hermes: A Terminal Email Client
# =============================================================================
#
# Hermes is a small terminal mail client built around a vim-style compose
# editor: write the recipient, subject and body with Normal, Insert and
# Visual modes, then send to a plain text mail store.
#
# Features:
#   - Inbox list, message viewer, delete confirmation, ":" command line
#   - Modal compose editor (word/line motions, visual delete, indent)
#   - File-backed mail store (one file per message, or a single mailbox)
#   - Scriptable send / delete / sync subcommands
#   - XDG Base Directory compliant
#
# =============================================================================

__version__ = "0.1.0"
__app_name__ = "hermes"

# Main entry point - this is what gets called by the 'hermes' command
from hermes_tui.app import main

__all__ = ["main", "__version__", "__app_name__"]
