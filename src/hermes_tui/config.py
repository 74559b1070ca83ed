# =============================================================================
# Configuration Management
# =============================================================================
# Handles loading, saving, and validating Hermes configuration.
#
# XDG Base Directory Compliance (https://specifications.freedesktop.org/basedir-spec/):
#   - Config:  $XDG_CONFIG_HOME/hermes-tui/  (default: ~/.config/hermes-tui/)
#   - Data:    $XDG_DATA_HOME/hermes-tui/    (default: ~/.local/share/hermes-tui/)
#   - State:   $XDG_STATE_HOME/hermes-tui/   (default: ~/.local/state/hermes-tui/)
#
# Files:
#   - config.toml: User configuration (identity, mail store, preferences)
#   - mail/: Default mail directory, one message per file (in data directory)
#   - hermes.log: Debug log (in state directory, only with --debug)
# =============================================================================

import os
import tomllib  # Built into Python 3.11+
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w  # For writing TOML (tomllib is read-only)


# =============================================================================
# XDG Directory Management
# =============================================================================

# Application identifier used in all XDG paths
APP_NAME = "hermes-tui"

# Sender address used until the user configures one
DEFAULT_USER_EMAIL = "me@hermes.local"


def get_xdg_config_home() -> Path:
    """
    Returns the XDG config directory for Hermes.

    Respects $XDG_CONFIG_HOME if set, otherwise uses ~/.config/hermes-tui/
    """
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        base = Path(xdg_config)
    else:
        base = Path.home() / ".config"
    return base / APP_NAME


def get_xdg_data_home() -> Path:
    """
    Returns the XDG data directory for Hermes.

    Respects $XDG_DATA_HOME if set, otherwise uses ~/.local/share/hermes-tui/
    This is where the default mail directory lives.
    """
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        base = Path(xdg_data)
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


def get_xdg_state_home() -> Path:
    """
    Returns the XDG state directory for Hermes.

    Respects $XDG_STATE_HOME if set, otherwise uses ~/.local/state/hermes-tui/
    """
    xdg_state = os.environ.get("XDG_STATE_HOME")
    if xdg_state:
        base = Path(xdg_state)
    else:
        base = Path.home() / ".local" / "state"
    return base / APP_NAME


def ensure_directories() -> dict[str, Path]:
    """
    Creates all required XDG directories if they don't exist.

    Returns:
        Dictionary mapping directory type to path.
    """
    dirs = {
        "config": get_xdg_config_home(),
        "data": get_xdg_data_home(),
        "state": get_xdg_state_home(),
    }

    for dir_path in dirs.values():
        dir_path.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Configuration Data Structures
# =============================================================================

@dataclass
class StoreConfig:
    """
    Configuration for the mail store.

    Attributes:
        path: Mail directory (one message per file) or an existing mailbox
              file (records separated by "---"). None means the default
              directory under the XDG data home.
    """
    path: Path | None = None

    def resolve(self) -> Path:
        """The effective store location, with ~ expanded."""
        if self.path is None:
            return Config.default_mail_dir()
        return Path(self.path).expanduser()


@dataclass
class UIConfig:
    """
    Configuration for the user interface.

    Attributes:
        theme: Color theme ("dark" or "light").
        confirm_delete: Ask before deleting messages.
    """
    theme: str = "dark"
    confirm_delete: bool = True


@dataclass
class Config:
    """
    Main configuration container for Hermes.

    Attributes:
        user_email: Address written into the FROM: header of sent mail.
        store: Mail store configuration.
        ui: User interface configuration.

    Usage:
        >>> config = Config.load()
        >>> config.store.resolve()
        PosixPath('/home/user/.local/share/hermes-tui/mail')
    """
    user_email: str = DEFAULT_USER_EMAIL
    store: StoreConfig = field(default_factory=StoreConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # -------------------------------------------------------------------------
    # File Paths
    # -------------------------------------------------------------------------

    @staticmethod
    def config_file_path() -> Path:
        """Returns the path to the main config file."""
        return get_xdg_config_home() / "config.toml"

    @staticmethod
    def default_mail_dir() -> Path:
        """Returns the default mail directory."""
        return get_xdg_data_home() / "mail"

    @staticmethod
    def log_file_path() -> Path:
        """Returns the path to the debug log."""
        return get_xdg_state_home() / "hermes.log"

    # -------------------------------------------------------------------------
    # Loading and Saving
    # -------------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from the config file.

        If the config file doesn't exist, returns default configuration.
        Creates necessary directories if they don't exist.

        Args:
            path: Alternative config file. Defaults to the XDG location.

        Returns:
            Loaded Config object.

        Raises:
            ConfigError: If the config file exists but is invalid, or the
                         XDG directories cannot be created.
        """
        try:
            ensure_directories()
        except OSError as e:
            raise ConfigError(f"Cannot create application directories: {e}") from e

        config_path = path or cls.config_file_path()

        if not config_path.exists():
            if path is not None:
                raise ConfigError(f"Config file not found: {config_path}")
            # No config file yet - return defaults
            return cls()

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file: {e}") from e

        return cls._from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """
        Save configuration to the config file.

        Creates the config directory if it doesn't exist.
        """
        config_path = path or self.config_file_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(self._to_dict(), f)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create a Config object from parsed TOML."""
        config = cls()

        general = _section(data, "general")
        config.user_email = general.get("user_email", DEFAULT_USER_EMAIL)

        store = _section(data, "store")
        store_path = store.get("path")
        if store_path is not None and not isinstance(store_path, str):
            raise ConfigError(f"store.path must be a string, got {store_path!r}")
        config.store = StoreConfig(path=Path(store_path) if store_path else None)

        ui = _section(data, "ui")
        config.ui = UIConfig(
            theme=ui.get("theme", "dark"),
            confirm_delete=ui.get("confirm_delete", True),
        )

        return config

    def _to_dict(self) -> dict[str, Any]:
        """Convert Config to a dictionary for TOML serialization."""
        data: dict[str, Any] = {
            "general": {"user_email": self.user_email},
            "store": {},
            "ui": {
                "theme": self.ui.theme,
                "confirm_delete": self.ui.confirm_delete,
            },
        }

        # TOML has no null, so an unset path is simply left out
        if self.store.path is not None:
            data["store"]["path"] = str(self.store.path)

        return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a top-level table, or an empty one if it is absent."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


# =============================================================================
# Exceptions
# =============================================================================

class ConfigError(Exception):
    """Raised when there's an error loading or parsing configuration."""
    pass


# =============================================================================
# Utility Functions
# =============================================================================

def print_paths() -> None:
    """
    Print all XDG paths for debugging.
    Useful for users wondering where their config/data is stored.
    """
    print(f"Config:  {get_xdg_config_home()}")
    print(f"Data:    {get_xdg_data_home()}")
    print(f"State:   {get_xdg_state_home()}")
    print()
    print(f"Config file:  {Config.config_file_path()}")
    print(f"Mail store:   {Config.default_mail_dir()}")
    print(f"Debug log:    {Config.log_file_path()}")
