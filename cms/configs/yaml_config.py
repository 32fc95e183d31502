"""
CMS YAML Configuration

Loading, saving, and defaults for ~/.cms/config.yaml.
"""

from pathlib import Path

import yaml

from cms.configs.paths import ensure_data_dir, get_data_path

# --- Default Config Template ---

DEFAULT_CONFIG_YAML = """\
# CMS Configuration
# Edit this file to customize the content backend.
# Environment variables always win over values set here.

# HTTP server
http_port: 5000

# Enable debug logging
debug: false

# Origins allowed by CORS
allowed_origins:
  - "http://localhost:3000"
  - "http://localhost:5000"

# Object storage (Supabase Storage)
storage:
  # url: "https://<project>.supabase.co"   (SUPABASE_URL)
  # Service role key is read from SUPABASE_SERVICE_ROLE_KEY only
  bucket: "resources-images"

  # Serialize image reconciliation per record (off = every request
  # runs its own list/diff/delete independently)
  serialize_syncs: false

# Editor authentication
auth:
  # Secret is read from JWT_SECRET only
  token_expire: "7d"
"""


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config() -> dict:
    """
    Load configuration from ~/.cms/config.yaml.

    Returns:
        Configuration dictionary (empty if file doesn't exist or is unreadable)
    """
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        return yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}


def save_yaml_config(config: dict) -> bool:
    """
    Save configuration to ~/.cms/config.yaml.

    Args:
        config: Configuration dictionary to save

    Returns:
        True if successful
    """
    config_path = get_config_path()
    ensure_data_dir()

    try:
        content = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
        config_path.write_text(content)
        return True
    except OSError:
        return False


def create_default_config() -> Path:
    """Write DEFAULT_CONFIG_YAML if no config file exists yet."""
    config_path = get_config_path()
    if not config_path.exists():
        ensure_data_dir()
        config_path.write_text(DEFAULT_CONFIG_YAML)
    return config_path
