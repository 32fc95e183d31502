"""
CMS Constants

Static configuration values that rarely change: storage paging limits,
upload limits, credential parameters and timeout configuration.
"""

# --- Object Storage ---

# Entries requested per list page; a shorter page ends the listing
LIST_PAGE_SIZE = 1000

# Providers cap bulk-delete requests, so removals are chunked
DELETE_BATCH_SIZE = 1000

DEFAULT_BUCKET = "resources-images"

# Seconds, sent as cache-control on upload
UPLOAD_CACHE_CONTROL = "3600"

# --- Uploads ---

MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5MB

DEFAULT_IMAGE_EXTENSION = "jpg"

# --- Credentials ---

PASSWORD_MIN_LENGTH = 6
PASSWORD_HASH_ITERATIONS = 390_000
PASSWORD_SALT_BYTES = 16

JWT_ALGORITHM = "HS256"
DEFAULT_JWT_EXPIRE = "7d"

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    "http_default": 10,
    "storage_list": 15,
    "storage_remove": 30,
    "storage_upload": 60,
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS.get("http_default", 10)
    return TIMEOUTS.get(key, default)
