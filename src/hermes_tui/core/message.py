# =============================================================================
# Message Model
# =============================================================================
# The inbox works with a deliberately small view of a message: who it is
# from, who it was sent to, a subject and a plain text body.
#
# Messages read from a mail directory remember the file they came from so
# they can be deleted later. Records from a single-file mailbox have no
# file of their own (file_path is None).
# =============================================================================

from dataclasses import dataclass
from pathlib import Path


@dataclass
class EmailSummary:
    """
    Represents one stored email message.

    Attributes:
        sender: Contents of the FROM: header.
        subject: Contents of the SUBJECT: header.
        body: Body text, lines joined with "\\n".
        recipient: Contents of the TO: header (may be empty in old records).
        file_path: The message file, for messages stored one per file.

    Example:
        >>> EmailSummary(sender="me@hermes.local", subject="Hi", body="Hello")
    """
    sender: str
    subject: str
    body: str = ""
    recipient: str = ""
    file_path: Path | None = None

    @property
    def display_subject(self) -> str:
        """Subject for list views, with a placeholder when empty."""
        return self.subject or "(no subject)"

    def __str__(self) -> str:
        return f"{self.sender}: {self.display_subject}"
