# =============================================================================
# Field Buffer Set
# =============================================================================
# A message being composed has three independently editable text fields:
#
#   To -> Subject -> Body -> To ...   (circular)
#
# Only one field is active at a time. The engine edits the active field
# through FieldBuffers; the finished result is handed out as a Draft.
# =============================================================================

from dataclasses import dataclass
from enum import Enum


class ComposeField(Enum):
    """The editable fields of a message, in cycling order."""
    TO = "to"
    SUBJECT = "subject"
    BODY = "body"

    @property
    def next(self) -> "ComposeField":
        """The field after this one (Body wraps around to To)."""
        order = list(ComposeField)
        return order[(order.index(self) + 1) % len(order)]

    @property
    def previous(self) -> "ComposeField":
        """The field before this one (To wraps around to Body)."""
        order = list(ComposeField)
        return order[(order.index(self) - 1) % len(order)]

    @property
    def is_multiline(self) -> bool:
        """Only the body spans several lines."""
        return self is ComposeField.BODY

    @property
    def label(self) -> str:
        return {
            ComposeField.TO: "To",
            ComposeField.SUBJECT: "Subject",
            ComposeField.BODY: "Body",
        }[self]


@dataclass(frozen=True)
class Draft:
    """
    Read-only snapshot of a finished composition.

    The engine performs no validation; callers decide whether the draft is
    sendable (see is_sendable).

    Attributes:
        to: Recipient address as typed.
        subject: Subject line.
        body: Multi-line body text.
    """
    to: str = ""
    subject: str = ""
    body: str = ""

    @property
    def is_sendable(self) -> bool:
        """A draft needs both a recipient and a subject to be sent."""
        return bool(self.to) and bool(self.subject)


class FieldBuffers:
    """
    Owns the text of every compose field and tracks the active one.

    Usage:
        >>> buffers = FieldBuffers()
        >>> buffers.text = "alice@example.com"
        >>> buffers.active = buffers.active.next
        >>> buffers.text
        ''
    """

    def __init__(self) -> None:
        self._texts: dict[ComposeField, str] = {}
        self.active = ComposeField.TO
        self.clear()

    def clear(self) -> None:
        """Empty every field and make To active again."""
        self._texts = {field: "" for field in ComposeField}
        self.active = ComposeField.TO

    @property
    def text(self) -> str:
        """Text of the active field."""
        return self._texts[self.active]

    @text.setter
    def text(self, value: str) -> None:
        self._texts[self.active] = value

    def get(self, field: ComposeField) -> str:
        return self._texts[field]

    def set(self, field: ComposeField, value: str) -> None:
        self._texts[field] = value

    def draft(self) -> Draft:
        """Snapshot all three fields."""
        return Draft(
            to=self._texts[ComposeField.TO],
            subject=self._texts[ComposeField.SUBJECT],
            body=self._texts[ComposeField.BODY],
        )
