"""
Request Dependencies

FastAPI dependencies resolving shared services and the calling editor.
"""

from typing import Optional

from fastapi import Depends, Header

from cms.configs.services import get_config, get_database
from cms.exceptions import InvalidTokenError
from cms.security import TokenPayload, extract_token_from_header, verify_token
from cms.storage import Database


def database() -> Database:
    return get_database()


def current_user(authorization: Optional[str] = Header(default=None)) -> TokenPayload:
    """
    Resolve the editor from ``Authorization: Bearer <token>``.

    Raises:
        InvalidTokenError: header missing, malformed, or token invalid/expired
    """
    token = extract_token_from_header(authorization)
    if not token:
        raise InvalidTokenError("Access token required")

    payload = verify_token(token, get_config().get("jwt_secret"))
    if payload is None:
        raise InvalidTokenError("Invalid or expired token")
    return payload


CurrentUser = Depends(current_user)
