"""Tests for the command-line entry point."""

import pytest

from hermes_tui.app import HermesApp, main, make_backend, parse_args, run_command
from hermes_tui.compose import Draft
from hermes_tui.config import Config, StoreConfig
from hermes_tui.storage import FileBackend, StorageError
from hermes_tui.ui.screens import ComposeScreen, ConfirmDeleteScreen, InboxScreen
from hermes_tui.ui.widgets import MessageList


class TestParseArgs:

    def test_no_subcommand_starts_tui(self):
        args = parse_args([])
        assert args.command is None
        assert args.debug is False

    def test_send(self):
        args = parse_args(["send", "-t", "a@b", "-s", "Hi", "-b", "Body"])
        assert (args.command, args.to, args.subject, args.body) == ("send", "a@b", "Hi", "Body")

    def test_send_requires_recipient(self):
        with pytest.raises(SystemExit):
            parse_args(["send", "-s", "Hi", "-b", "Body"])

    def test_delete(self):
        args = parse_args(["delete", "--subject", "Hi"])
        assert args.command == "delete"
        assert args.subject == "Hi"


class TestRunCommand:

    def test_send_then_sync(self, dir_backend, capsys):
        assert run_command(parse_args(["send", "-t", "a@b", "-s", "Hi", "-b", "Yo"]), dir_backend) == 0
        assert run_command(parse_args(["sync"]), dir_backend) == 0

        out = capsys.readouterr().out
        assert "Email sent successfully" in out
        assert "Fetched 1 emails" in out

    def test_delete_by_subject(self, dir_backend, capsys):
        dir_backend.send_email("a@b", "Remove me", "body")
        assert run_command(parse_args(["delete", "-s", "Remove me"]), dir_backend) == 0
        assert dir_backend.fetch_inbox() == []
        assert "Email deleted: Remove me" in capsys.readouterr().out

    def test_delete_unknown_subject(self, dir_backend, capsys):
        assert run_command(parse_args(["delete", "-s", "Nope"]), dir_backend) == 0
        assert "Email not found: Nope" in capsys.readouterr().out

    def test_storage_failure_exits_nonzero(self, temp_dir, capsys):
        backend = FileBackend(temp_dir / "missing" / "mailbox.txt", "me@hermes.local")
        args = parse_args(["send", "-t", "a@b", "-s", "Hi", "-b", "Yo"])
        assert run_command(args, backend) == 1
        assert "Error:" in capsys.readouterr().err


class TestMain:

    def test_paths(self, xdg_home, capsys):
        assert main(["--paths"]) == 0
        assert "hermes-tui" in capsys.readouterr().out

    def test_send_uses_configured_store(self, xdg_home, temp_dir):
        mailbox = temp_dir / "mailbox.txt"
        config = Config(user_email="alice@example.com", store=StoreConfig(path=mailbox))
        config_path = temp_dir / "config.toml"
        config.save(config_path)

        assert main(["--config", str(config_path), "send", "-t", "bob@b", "-s", "Hi", "-b", "Yo"]) == 0

        inbox = FileBackend(mailbox, "x").fetch_inbox()
        assert len(inbox) == 1
        assert inbox[0].sender == "alice@example.com"

    def test_missing_config_file_fails(self, xdg_home, temp_dir, capsys):
        assert main(["--config", str(temp_dir / "absent.toml"), "sync"]) == 1
        assert "Config error" in capsys.readouterr().err

    def test_default_store_is_created(self, xdg_home):
        backend = make_backend(Config())
        assert backend.path == Config.default_mail_dir()
        assert backend.path.is_dir()


class TestCommandLine:

    @pytest.mark.parametrize("text,expected", [
        ("help", "help"),
        (":help", "help"),
        ("  q ", "q"),
        (":quit", "quit"),
        ("wq", None),
        ("", None),
    ])
    def test_parse_command(self, text, expected):
        from hermes_tui.ui.screens.command import parse_command
        assert parse_command(text) == expected


class TestStoreSetupFailures:

    def test_make_backend_reports_uncreatable_directory(self, temp_dir, monkeypatch):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        monkeypatch.setenv("XDG_DATA_HOME", str(blocker))
        with pytest.raises(StorageError):
            make_backend(Config())

    def test_main_exits_cleanly(self, xdg_home, temp_dir, monkeypatch, capsys):
        blocker = temp_dir / "blocker"
        blocker.write_text("")
        monkeypatch.setenv("XDG_DATA_HOME", str(blocker))
        assert main(["sync"]) == 1
        assert "error" in capsys.readouterr().err.lower()


# =============================================================================
# Interactive Screens
# =============================================================================

def make_app(backend) -> HermesApp:
    return HermesApp(config=Config(), backend=backend)


async def write_message(pilot, to: str, subject: str, body_lines: list[str]) -> None:
    """Open the compose screen and fill in all three fields."""
    await pilot.press("n")
    await pilot.pause()

    await pilot.press("i", *to, "escape", "tab")
    if subject:
        await pilot.press("i", *subject, "escape")
    await pilot.press("tab", "i")
    for index, line in enumerate(body_lines):
        if index:
            await pilot.press("enter")
        await pilot.press(*line)
    await pilot.press("escape")
    await pilot.pause()


class TestInboxScreen:

    @pytest.mark.asyncio
    async def test_bracketed_headers_are_shown_verbatim(self, xdg_home, dir_backend):
        dir_backend.user_email = "[b]me"
        dir_backend.send_email("bob", "[/x] oops", "body")

        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, InboxScreen)

            message_list = app.screen.query_one("#message-list", MessageList)
            assert message_list.row_count == 1
            sender, subject = message_list.get_row_at(0)
            assert sender.plain == "[b]me"
            assert subject.plain == "[/x] oops"

    @pytest.mark.asyncio
    async def test_delete_after_confirmation(self, xdg_home, dir_backend):
        dir_backend.send_email("bob", "[red]Remove me", "body")

        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("d")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmDeleteScreen)

            await pilot.press("y")
            await pilot.pause()
            assert isinstance(app.screen, InboxScreen)
            assert app.screen.query_one("#message-list", MessageList).row_count == 0

        assert dir_backend.fetch_inbox() == []

    @pytest.mark.asyncio
    async def test_declined_delete_keeps_message(self, xdg_home, dir_backend):
        dir_backend.send_email("bob", "Keep me", "body")

        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("d")
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, InboxScreen)

        assert [e.subject for e in dir_backend.fetch_inbox()] == ["Keep me"]


class TestComposeScreen:

    @pytest.mark.asyncio
    async def test_send_stores_message_and_reloads_inbox(self, xdg_home, dir_backend):
        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await write_message(pilot, "bob", "hi", ["x", "y"])
            assert isinstance(app.screen, ComposeScreen)

            await pilot.press("Z")
            await pilot.pause()
            assert isinstance(app.screen, InboxScreen)
            assert app.screen.query_one("#message-list", MessageList).row_count == 1

        inbox = dir_backend.fetch_inbox()
        assert len(inbox) == 1
        assert (inbox[0].recipient, inbox[0].subject, inbox[0].body) == ("bob", "hi", "x\ny")

    @pytest.mark.asyncio
    async def test_send_without_subject_stays_on_screen(self, xdg_home, dir_backend):
        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await write_message(pilot, "bob", "", ["x"])

            await pilot.press("Z")
            await pilot.pause()
            assert isinstance(app.screen, ComposeScreen)
            assert app.screen.engine.draft() == Draft(to="bob", subject="", body="x")

        assert dir_backend.fetch_inbox() == []

    @pytest.mark.asyncio
    async def test_failed_send_keeps_draft(self, xdg_home, temp_dir):
        backend = FileBackend(temp_dir / "missing" / "mailbox.txt", "me@hermes.local")

        app = make_app(backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await write_message(pilot, "bob", "hi", ["x", "y"])

            await pilot.press("Z")
            await pilot.pause()
            assert isinstance(app.screen, ComposeScreen)
            assert app.screen.engine.draft() == Draft(to="bob", subject="hi", body="x\ny")

    @pytest.mark.asyncio
    async def test_cancel_discards_draft(self, xdg_home, dir_backend):
        app = make_app(dir_backend)
        async with app.run_test() as pilot:
            await pilot.pause()
            await write_message(pilot, "bob", "hi", ["x"])

            await pilot.press("q")
            await pilot.pause()
            assert isinstance(app.screen, InboxScreen)

        assert dir_backend.fetch_inbox() == []
