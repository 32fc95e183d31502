"""
CMS Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from cms.configs.logging import get_logger, setup_logging

# Paths
from cms.configs.paths import ensure_data_dir, get_data_path, get_default_db_path

# Constants
from cms.configs.constants import (
    DELETE_BATCH_SIZE,
    LIST_PAGE_SIZE,
    MAX_UPLOAD_SIZE,
    TIMEOUTS,
    get_timeout,
)

# YAML config
from cms.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
    save_yaml_config,
)

# Runtime
from cms.configs.runtime import DEFAULT_CONFIG, get_full_config

# Note: services.py is NOT imported here to avoid circular imports.
# Services should be imported directly: from cms.configs.services import ...

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    "ensure_data_dir",
    "get_default_db_path",
    # Constants
    "LIST_PAGE_SIZE",
    "DELETE_BATCH_SIZE",
    "MAX_UPLOAD_SIZE",
    "TIMEOUTS",
    "get_timeout",
    # YAML config
    "DEFAULT_CONFIG_YAML",
    "get_config_path",
    "load_yaml_config",
    "save_yaml_config",
    "create_default_config",
    # Runtime
    "DEFAULT_CONFIG",
    "get_full_config",
]
