"""
Password Hashing

Salted PBKDF2-HMAC-SHA256 via ``cryptography``. Hashes are stored as
``pbkdf2_sha256$<iterations>$<salt_b64>$<hash_b64>`` so the iteration
count can be raised without invalidating existing users.
"""

import base64
import hmac
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from cms.configs.constants import PASSWORD_HASH_ITERATIONS, PASSWORD_SALT_BYTES

ALGORITHM = "pbkdf2_sha256"
KEY_LENGTH = 32


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))


def hash_password(password: str, iterations: int = PASSWORD_HASH_ITERATIONS) -> str:
    """Hash a password with a fresh random salt."""
    salt = os.urandom(PASSWORD_SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return "$".join([
        ALGORITHM,
        str(iterations),
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(digest).decode("ascii"),
    ])


def verify_password(password: str, encoded: str) -> bool:
    """Compare a plain password with a stored hash. Unparseable hashes never match."""
    try:
        algorithm, iterations, salt_b64, digest_b64 = encoded.split("$")
        if algorithm != ALGORITHM:
            return False
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(digest_b64)
        actual = _derive(password, salt, int(iterations))
    except (ValueError, TypeError):
        return False
    return hmac.compare_digest(actual, expected)
