"""
CMS Runtime Configuration

Runtime defaults and configuration merging logic.
Combines defaults, YAML config, and environment variables.
"""

import os

from cms.configs.constants import DEFAULT_BUCKET, DEFAULT_JWT_EXPIRE
from cms.configs.paths import get_default_db_path
from cms.configs.yaml_config import load_yaml_config

# --- Default Runtime Configuration ---

DEFAULT_CONFIG = {
    "http_port": 5000,
    "debug": False,
    "allowed_origins": [
        "http://localhost:3000",
        "http://localhost:5000",
        "https://ophotech.com",
    ],
    "database_path": None,  # Resolved via get_default_db_path()
    "supabase_url": None,
    "supabase_service_key": None,
    "storage_bucket": DEFAULT_BUCKET,
    "serialize_syncs": False,
    "jwt_secret": None,
    "jwt_expire": DEFAULT_JWT_EXPIRE,
}


def _env_bool(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None or value == "":
        return None
    return value.lower() in ("true", "1", "yes")


def get_full_config() -> dict:
    """
    Get full configuration merged from defaults, YAML, and environment.

    Priority (highest wins):
    1. Environment variables
    2. YAML config file
    3. DEFAULT_CONFIG

    Secrets (service role key, JWT secret) are only read from the
    environment.

    Returns:
        Merged configuration dictionary
    """
    config = dict(DEFAULT_CONFIG)
    config["allowed_origins"] = list(DEFAULT_CONFIG["allowed_origins"])

    yaml_config = load_yaml_config()

    for key in ("http_port", "debug", "allowed_origins"):
        if key in yaml_config:
            config[key] = yaml_config[key]

    storage = yaml_config.get("storage") or {}
    if storage.get("url"):
        config["supabase_url"] = storage["url"]
    if storage.get("bucket"):
        config["storage_bucket"] = storage["bucket"]
    if "serialize_syncs" in storage:
        config["serialize_syncs"] = bool(storage["serialize_syncs"])

    auth = yaml_config.get("auth") or {}
    if auth.get("token_expire"):
        config["jwt_expire"] = str(auth["token_expire"])

    # Environment overrides
    if os.environ.get("API_PORT"):
        try:
            config["http_port"] = int(os.environ["API_PORT"])
        except ValueError:
            pass

    debug = _env_bool("CMS_DEBUG")
    if debug is not None:
        config["debug"] = debug

    if os.environ.get("ALLOWED_ORIGINS"):
        config["allowed_origins"] = [
            origin.strip() for origin in os.environ["ALLOWED_ORIGINS"].split(",") if origin.strip()
        ]

    config["database_path"] = get_default_db_path()

    if os.environ.get("SUPABASE_URL"):
        config["supabase_url"] = os.environ["SUPABASE_URL"]
    config["supabase_service_key"] = os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or None
    if os.environ.get("STORAGE_BUCKET"):
        config["storage_bucket"] = os.environ["STORAGE_BUCKET"]

    serialize = _env_bool("CMS_SERIALIZE_SYNCS")
    if serialize is not None:
        config["serialize_syncs"] = serialize

    config["jwt_secret"] = os.environ.get("JWT_SECRET") or None
    if os.environ.get("JWT_EXPIRE"):
        config["jwt_expire"] = os.environ["JWT_EXPIRE"]

    return config
