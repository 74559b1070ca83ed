# =============================================================================
# Hermes Core Module
# =============================================================================
# Core domain models. Plain dataclasses with no dependencies on the UI or
# the storage layer, so they can be imported from anywhere.
# =============================================================================

from hermes_tui.core.message import EmailSummary

__all__ = ["EmailSummary"]
