# projectshelf/config/paths.py
import os
from pathlib import Path

def _get_app_name() -> str:
    # Centralize the app name
    return "ProjectShelf"

def get_user_data_dir() -> Path:
    """
    Get the per-user application data directory.

    PROJECTSHELF_HOME wins when set; otherwise %APPDATA% on Windows and the XDG
    config directory elsewhere.
    """
    override = os.environ.get("PROJECTSHELF_HOME")
    appdata_path = os.environ.get("APPDATA")
    if override:
        path = Path(override)
    elif appdata_path:
        path = Path(appdata_path) / _get_app_name()
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg_config) if xdg_config else Path.home() / ".config"
        path = base / _get_app_name().lower()

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
