"""
Editor Access Tokens

HS256 JWTs carrying the editor's id, email and role.
"""

import re
import time
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError as PydanticValidationError

from cms.configs import get_logger
from cms.configs.constants import DEFAULT_JWT_EXPIRE, JWT_ALGORITHM
from cms.exceptions import ConfigurationError, MissingConfigError

logger = get_logger("security.tokens")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


class TokenPayload(BaseModel):
    userId: str
    email: str
    role: str


def parse_duration(value: str | int) -> int:
    """
    Parse an expiry like "7d", "12h", "30m", "45s" or a plain number of seconds.

    Raises:
        ConfigurationError: value is not a recognised duration
    """
    if isinstance(value, int):
        return value
    match = _DURATION_RE.match(value)
    if not match:
        raise ConfigurationError(f"Invalid token expiry: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


def _require_secret(secret: Optional[str]) -> str:
    if not secret:
        raise MissingConfigError("JWT_SECRET is not defined in environment variables")
    return secret


def generate_token(
    payload: TokenPayload,
    secret: Optional[str],
    expires_in: str | int = DEFAULT_JWT_EXPIRE,
) -> str:
    """Sign a token for ``payload`` valid for ``expires_in``."""
    secret = _require_secret(secret)
    now = int(time.time())
    claims = {
        **payload.model_dump(),
        "iat": now,
        "exp": now + parse_duration(expires_in),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: Optional[str]) -> Optional[TokenPayload]:
    """Decode and validate a token. Returns None if invalid or expired."""
    secret = _require_secret(secret)
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        return TokenPayload.model_validate(claims)
    except jwt.PyJWTError as e:
        logger.debug(f"Token verification failed: {e}")
        return None
    except PydanticValidationError:
        logger.debug("Token verification failed: missing claims")
        return None


def extract_token_from_header(auth_header: Optional[str]) -> Optional[str]:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        return None
    return parts[1]
