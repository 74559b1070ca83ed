# =============================================================================
# Hermes Main Application
# =============================================================================
# This is the main Textual application class plus the command-line entry
# point.
#
# Run without a subcommand, Hermes opens the TUI:
#   - InboxScreen: the message list (default screen)
#   - ViewerScreen / ComposeScreen: pushed on top of the inbox
#
# Subcommands work without the TUI, for scripting:
#   hermes send -t alice@example.com -s "Lunch?" -b "Noon?"
#   hermes delete -s "Lunch?"
#   hermes sync
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from rich.markup import escape
from textual.app import App
from textual.logging import TextualHandler

from hermes_tui import __version__, __app_name__
from hermes_tui.config import Config, ConfigError, print_paths
from hermes_tui.storage import EmailBackend, FileBackend, StorageError
from hermes_tui.ui.screens.inbox import InboxScreen

logger = logging.getLogger(__name__)


def make_backend(config: Config) -> FileBackend:
    """
    Build the mail store described by the configuration.

    The default mail directory is created on first use; a configured path
    is used as-is (a missing path becomes a single-file mailbox).

    Raises:
        StorageError: If the default mail directory cannot be created.
    """
    path = config.store.resolve()
    if config.store.path is None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create mail directory {path}: {e}") from e
    return FileBackend(path, config.user_email)


class HermesApp(App):
    """
    The main Hermes application.

    Attributes:
        config: The loaded application configuration.
        backend: Mail store used by every screen.
    """

    TITLE = "Hermes"
    SUB_TITLE = "Terminal Mail"

    SCREENS = {"inbox": InboxScreen}

    def __init__(
        self,
        config: Config | None = None,
        *,
        backend: EmailBackend | None = None,
    ) -> None:
        """
        Initialize the Hermes application.

        Args:
            config: Optional pre-loaded configuration. If not provided,
                    configuration will be loaded from the default location.
            backend: Optional mail store; built from the config if omitted.
        """
        super().__init__()

        self._config_error: str | None = None

        if config is None:
            try:
                self.config = Config.load()
            except ConfigError as e:
                self.config = Config()
                self._config_error = str(e)
        else:
            self.config = config

        self.backend = backend or make_backend(self.config)

    def on_mount(self) -> None:
        """Called when the application is mounted and ready."""
        if self.config.ui.theme == "light":
            self.theme = "textual-light"

        if self._config_error:
            self.notify(
                f"Config error: {escape(self._config_error)}",
                severity="error",
                timeout=10,
            )

        self.push_screen("inbox")


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Hermes: a terminal email client with vim-style editing",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    subparsers = parser.add_subparsers(dest="command")

    send = subparsers.add_parser("send", help="Send an email (non-interactive)")
    send.add_argument("-t", "--to", required=True)
    send.add_argument("-s", "--subject", required=True)
    send.add_argument("-b", "--body", required=True)

    delete = subparsers.add_parser("delete", help="Delete an email by subject")
    delete.add_argument("-s", "--subject", required=True)

    subparsers.add_parser("sync", help="Reload the mail store and report its size")

    return parser.parse_args(argv)


def configure_logging(*, debug: bool, interactive: bool) -> None:
    """
    Set up logging for the TUI or for a one-shot subcommand.

    The TUI owns the terminal, so its records go to Textual's devtools
    console (and, with --debug, to a log file). Subcommands log to stderr.
    """
    level = logging.DEBUG if debug else logging.WARNING

    if not interactive:
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return

    handlers: list[logging.Handler] = [TextualHandler()]
    if debug:
        log_path = Config.log_file_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def run_command(args: argparse.Namespace, backend: EmailBackend) -> int:
    """
    Run a non-interactive subcommand.

    Returns:
        Exit code (0 for success, 1 for failures).
    """
    try:
        if args.command == "send":
            backend.send_email(args.to, args.subject, args.body)
            print("Email sent successfully")

        elif args.command == "delete":
            email = next(
                (e for e in backend.fetch_inbox() if e.subject == args.subject),
                None,
            )
            if email is None:
                print(f"Email not found: {args.subject}")
            else:
                backend.delete_email(email)
                print(f"Email deleted: {args.subject}")

        elif args.command == "sync":
            inbox = backend.fetch_inbox()
            print(f"Fetched {len(inbox)} emails")

    except StorageError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Hermes.

    This function:
        1. Parses command-line arguments
        2. Handles special commands (--paths, --version)
        3. Loads configuration
        4. Runs a subcommand, or starts the Textual application

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    if args.paths:
        print_paths()
        return 0

    configure_logging(debug=args.debug, interactive=args.command is None)

    try:
        config = Config.load(args.config)
    except ConfigError as e:
        if args.config is not None or args.command is not None:
            print(f"Config error: {e}", file=sys.stderr)
            return 1
        # The TUI reports a broken default config itself and runs on defaults
        config = None

    try:
        backend = make_backend(config if config is not None else Config())
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command is not None:
        return run_command(args, backend)

    app = HermesApp(config=config, backend=backend)
    app.run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
