"""
CMS Data Paths

Manages the data directory and database location.
Auto-detects Docker environment for appropriate path selection.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".cms"


def get_data_path() -> Path:
    """Get the CMS data directory path.

    Resolution order:
    - CMS_DATA_PATH env var
    - Docker: /app/cms_data (when /app exists and is writable)
    - Host: ~/.cms

    Returns:
        Path to the data directory
    """
    data_path = os.environ.get("CMS_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    if os.path.exists("/app") and os.access("/app", os.W_OK):
        return Path("/app/cms_data")
    return DEFAULT_DATA_PATH


def ensure_data_dir() -> Path:
    """Ensure the data directory exists and return it."""
    data_path = get_data_path()
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_default_db_path() -> str:
    """Get the SQLite database path, expanding ~ to home directory."""
    env_path = os.environ.get("CMS_DATABASE_PATH")
    if env_path:
        return os.path.expanduser(env_path)
    return str(get_data_path() / "cms.sqlite3")
