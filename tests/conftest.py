# =============================================================================
# Pytest Configuration and Fixtures
# =============================================================================
# Shared fixtures for the Hermes test suite.
# =============================================================================

import pytest
import tempfile
from pathlib import Path

from hermes_tui.compose import ComposeEngine, ComposeField
from hermes_tui.core import EmailSummary
from hermes_tui.storage import FileBackend


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def xdg_home(temp_dir, monkeypatch):
    """Point every XDG directory into the temporary directory."""
    for name in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.setenv(name, str(temp_dir / name.lower()))
    return temp_dir


@pytest.fixture
def engine():
    """A freshly started compose engine."""
    engine = ComposeEngine()
    engine.start()
    return engine


@pytest.fixture
def body_engine(engine):
    """Factory: an engine on the Body field holding the given text."""

    def make(text: str, cursor: int = 0) -> ComposeEngine:
        engine.buffers.active = ComposeField.BODY
        engine.buffers.text = text
        engine.cursor = cursor
        return engine

    return make


@pytest.fixture
def mail_dir(temp_dir):
    """An empty mail directory."""
    path = temp_dir / "mail"
    path.mkdir()
    return path


@pytest.fixture
def dir_backend(mail_dir):
    """A backend storing one message per file."""
    return FileBackend(mail_dir, "me@hermes.local")


@pytest.fixture
def mailbox_backend(temp_dir):
    """A backend using a single mailbox file."""
    return FileBackend(temp_dir / "mailbox.txt", "me@hermes.local")


@pytest.fixture
def sample_email():
    """Create a sample EmailSummary for testing."""
    return EmailSummary(
        sender="alice@example.com",
        subject="Quarterly report",
        body="Hi,\n\nThe report is attached.\n\nAlice",
        recipient="me@hermes.local",
    )


@pytest.fixture
def sample_mailbox_text():
    """Two records in the single-file mailbox layout."""
    return (
        "FROM: alice@example.com\n"
        "TO: me@hermes.local\n"
        "SUBJECT: Lunch?\n"
        "BODY:\n"
        "Are you free at noon?\n"
        "---\n"
        "FROM: bob@example.com\n"
        "TO: me@hermes.local\n"
        "SUBJECT: Re: Lunch?\n"
        "BODY:\n"
        "Sure.\n"
        "See you there.\n"
        "---\n"
    )
