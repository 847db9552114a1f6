# scramble/config/paths.py
import os
from pathlib import Path

def _get_app_name() -> str:
    return "scramble"

def get_user_data_dir() -> Path:
    """Get the user data directory: $SCRAMBLE_HOME, else $XDG_CONFIG_HOME/scramble, else ~/.config/scramble."""
    override = os.environ.get("SCRAMBLE_HOME")
    if override:
        path = Path(override)
    else:
        config_home = os.environ.get("XDG_CONFIG_HOME")
        base = Path(config_home) if config_home else Path.home() / ".config"
        path = base / _get_app_name()

    path.mkdir(parents=True, exist_ok=True)
    return path

def get_user_config_file() -> Path:
    """Get the path to the user's config.json file."""
    return get_user_data_dir() / "config.json"

def get_user_log_dir() -> Path:
    """Get the path to the user's log directory."""
    path = get_user_data_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path
