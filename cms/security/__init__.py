"""
Editor authentication primitives: password hashing and access tokens.
"""

from cms.security.passwords import hash_password, verify_password
from cms.security.tokens import (
    TokenPayload,
    extract_token_from_header,
    generate_token,
    parse_duration,
    verify_token,
)

__all__ = [
    "hash_password",
    "verify_password",
    "TokenPayload",
    "generate_token",
    "verify_token",
    "extract_token_from_header",
    "parse_duration",
]
