# =============================================================================
# File-Backed Mail Store
# =============================================================================
# Messages are plain text records:
#
#   FROM: me@hermes.local
#   TO: alice@example.com
#   SUBJECT: Lunch?
#   BODY:
#   Are you free at noon?
#
# Two layouts are supported:
#   - A directory with one record per "*.txt" file (the default)
#   - A single mailbox file holding many records, each followed by a line
#     containing only "---" (older layout)
#
# Every I/O failure surfaces as a StorageError subclass. Callers must treat
# a failed send as "nothing happened" so the draft can be retried.
# =============================================================================

import logging
import time
from pathlib import Path
from typing import Protocol

from hermes_tui.core import EmailSummary

logger = logging.getLogger(__name__)

# Separator between records in a single-file mailbox
RECORD_SEPARATOR = "---"

# Extension of message files in a mail directory
MESSAGE_SUFFIX = ".txt"


class EmailBackend(Protocol):
    """What the application needs from a mail store."""

    def fetch_inbox(self) -> list[EmailSummary]:
        ...

    def send_email(self, to: str, subject: str, body: str) -> None:
        ...

    def delete_email(self, email: EmailSummary) -> None:
        ...


class FileBackend:
    """
    Mail store backed by the local filesystem.

    Usage:
        >>> backend = FileBackend(Path("~/mail").expanduser(), "me@hermes.local")
        >>> backend.send_email("alice@example.com", "Lunch?", "Noon?")
        >>> [m.subject for m in backend.fetch_inbox()]
        ['Lunch?']

    Attributes:
        path: Mail directory, or mailbox file for the single-file layout.
        user_email: Address written into the FROM: header of sent mail.
    """

    def __init__(self, path: Path, user_email: str) -> None:
        """
        Initialize the backend.

        Args:
            path: Mail directory or mailbox file. A path that does not exist
                  yet is treated as a mailbox file.
            user_email: Sender address for outgoing messages.
        """
        self.path = Path(path)
        self.user_email = user_email

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def fetch_inbox(self) -> list[EmailSummary]:
        """
        Load every stored message.

        Returns:
            Messages in file-name order (directory layout) or file order
            (mailbox layout). An empty list if nothing is stored yet.

        Raises:
            FetchError: If the store exists but cannot be read.
        """
        if not self.path.exists():
            return []

        if self.path.is_dir():
            return self._fetch_directory()

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Cannot read mailbox {self.path}: {e}") from e

        return parse_mailbox(content)

    def _fetch_directory(self) -> list[EmailSummary]:
        try:
            paths = sorted(
                p for p in self.path.iterdir()
                if p.is_file() and p.suffix == MESSAGE_SUFFIX
            )
        except OSError as e:
            raise FetchError(f"Cannot list mail directory {self.path}: {e}") from e

        inbox = []
        for message_path in paths:
            try:
                content = message_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                # One broken file should not hide the rest of the inbox
                logger.warning(f"Skipping unreadable message {message_path}: {e}")
                continue

            email = parse_message(content)
            email.file_path = message_path
            inbox.append(email)

        logger.debug(f"Loaded {len(inbox)} messages from {self.path}")
        return inbox

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def send_email(self, to: str, subject: str, body: str) -> None:
        """
        Store an outgoing message.

        Raises:
            SendError: If the message could not be written.
        """
        record = format_record(self.user_email, to, subject, body)

        try:
            if self.path.is_dir():
                target = self._new_message_path()
                # "x" mode: never overwrite an existing message
                with open(target, "x", encoding="utf-8") as f:
                    f.write(record)
            else:
                target = self.path
                with open(target, "a", encoding="utf-8") as f:
                    f.write(record)
                    f.write(f"{RECORD_SEPARATOR}\n")
        except OSError as e:
            logger.error(f"Failed to store message to {to}: {e}")
            raise SendError(f"Could not save message: {e}") from e

        logger.info(f"Stored message to {to} in {target}")

    def _new_message_path(self) -> Path:
        """Pick a fresh email_<timestamp>.txt name in the mail directory."""
        stem = f"email_{int(time.time())}"
        candidate = self.path / f"{stem}{MESSAGE_SUFFIX}"
        counter = 1
        while candidate.exists():
            candidate = self.path / f"{stem}_{counter}{MESSAGE_SUFFIX}"
            counter += 1
        return candidate

    def delete_email(self, email: EmailSummary) -> None:
        """
        Remove a message from the store.

        Messages with their own file have that file removed. Records in a
        mailbox file are removed by rewriting the mailbox without the first
        record that matches.

        Raises:
            DeleteError: If the store could not be updated.
        """
        if email.file_path is not None:
            try:
                email.file_path.unlink()
            except OSError as e:
                raise DeleteError(f"Could not delete {email.file_path}: {e}") from e
            logger.info(f"Deleted {email.file_path}")
            return

        if not self.path.is_file():
            return

        records = self.fetch_inbox()
        for index, record in enumerate(records):
            if _same_message(record, email):
                del records[index]
                break
        else:
            logger.warning(f"Message not found in mailbox: {email}")
            return

        content = "".join(
            format_record(r.sender, r.recipient, r.subject, r.body) + f"{RECORD_SEPARATOR}\n"
            for r in records
        )
        try:
            self.path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise DeleteError(f"Could not rewrite mailbox {self.path}: {e}") from e

        logger.info(f"Deleted '{email.subject}' from {self.path}")


# =============================================================================
# Record Format
# =============================================================================

def format_record(sender: str, to: str, subject: str, body: str) -> str:
    """Render one message record (without the mailbox separator)."""
    return (
        f"FROM: {sender}\n"
        f"TO: {to}\n"
        f"SUBJECT: {subject}\n"
        f"BODY:\n"
        f"{body}\n"
    )


def parse_message(content: str) -> EmailSummary:
    """
    Parse a single message file.

    Blank lines at the start and end of the body are dropped.
    """
    sender = recipient = subject = ""
    body_lines: list[str] = []
    in_body = False

    for line in content.splitlines():
        if in_body:
            body_lines.append(line)
        elif line.startswith("FROM: "):
            sender = line[len("FROM: "):]
        elif line.startswith("TO: "):
            recipient = line[len("TO: "):]
        elif line.startswith("SUBJECT: "):
            subject = line[len("SUBJECT: "):]
        elif line == "BODY:":
            in_body = True

    while body_lines and not body_lines[0].strip():
        body_lines.pop(0)
    while body_lines and not body_lines[-1].strip():
        body_lines.pop()

    return EmailSummary(
        sender=sender,
        subject=subject,
        body="\n".join(body_lines),
        recipient=recipient,
    )


def parse_mailbox(content: str) -> list[EmailSummary]:
    """
    Parse a mailbox file of "---"-separated records.

    A trailing record without a separator is still returned.
    """
    inbox = []
    sender = recipient = subject = ""
    body_lines: list[str] = []
    in_body = False

    for line in content.splitlines():
        if line == RECORD_SEPARATOR:
            inbox.append(EmailSummary(
                sender=sender,
                subject=subject,
                body="\n".join(body_lines),
                recipient=recipient,
            ))
            sender = recipient = subject = ""
            body_lines = []
            in_body = False
        elif line.startswith("FROM: "):
            sender = line[len("FROM: "):]
            body_lines = []
            in_body = False
        elif line.startswith("TO: ") and not in_body:
            recipient = line[len("TO: "):]
        elif line.startswith("SUBJECT: "):
            subject = line[len("SUBJECT: "):]
            in_body = False
        elif line == "BODY:":
            body_lines = []
            in_body = True
        elif in_body:
            body_lines.append(line)

    if sender or subject or body_lines:
        inbox.append(EmailSummary(
            sender=sender,
            subject=subject,
            body="\n".join(body_lines),
            recipient=recipient,
        ))

    return inbox


def _same_message(a: EmailSummary, b: EmailSummary) -> bool:
    return (a.sender, a.subject, a.body) == (b.sender, b.subject, b.body)


# =============================================================================
# Exceptions
# =============================================================================

class StorageError(Exception):
    """Base exception for mail store operations."""
    pass


class FetchError(StorageError):
    """Raised when stored messages cannot be read."""
    pass


class SendError(StorageError):
    """Raised when an outgoing message cannot be stored."""
    pass


class DeleteError(StorageError):
    """Raised when a message cannot be removed."""
    pass
