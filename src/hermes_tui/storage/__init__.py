# =============================================================================
# Storage Module
# =============================================================================
# Where messages live between sessions. The only store is the plain text
# FileBackend; anything with the same three methods (see EmailBackend) can
# stand in for it.
# =============================================================================

from hermes_tui.storage.backend import (
    EmailBackend,
    FileBackend,
    StorageError,
    FetchError,
    SendError,
    DeleteError,
)

__all__ = [
    "EmailBackend",
    "FileBackend",
    "StorageError",
    "FetchError",
    "SendError",
    "DeleteError",
]
