"""
Auth Endpoints

Editor registration, login and "who am I".
"""

from typing import Any

from fastapi import APIRouter, Depends

from cms.configs import get_logger
from cms.configs.constants import PASSWORD_MIN_LENGTH
from cms.configs.services import get_config
from cms.exceptions import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from cms.http.dependencies import CurrentUser, database
from cms.http.models import LoginRequest, RegisterRequest
from cms.security import TokenPayload, generate_token, hash_password, verify_password
from cms.storage import Database
from cms.storage.database import ROLE_ADMIN, ROLE_EDITOR

logger = get_logger("http.auth")

router = APIRouter()


def _public_user(user: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": user["id"],
        "email": user["email"],
        "username": user["username"],
        "role": user["role"],
    }


def _issue_token(user: dict[str, Any]) -> str:
    config = get_config()
    return generate_token(
        TokenPayload(userId=user["id"], email=user["email"], role=user["role"]),
        config.get("jwt_secret"),
        config.get("jwt_expire"),
    )


@router.post("/register", status_code=201)
def register(request: RegisterRequest, db: Database = Depends(database)) -> dict[str, Any]:
    """
    Register an editor.

    The first account created becomes an admin; later accounts are editors.
    """
    if not request.email or not request.username or not request.password:
        raise ValidationError("Email, username, and password are required")
    if request.password != request.confirmPassword:
        raise ValidationError("Passwords do not match")
    if len(request.password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    if db.get_user_by_email(request.email):
        raise ConflictError("Email already registered")
    if db.get_user_by_username(request.username):
        raise ConflictError("Username already taken")

    role = ROLE_ADMIN if db.count_users() == 0 else ROLE_EDITOR
    user = db.create_user(
        request.email,
        request.username,
        hash_password(request.password),
        role=role,
    )

    logger.info(f"Registered {user['username']} as {role}")
    return {"success": True, "user": _public_user(user), "token": _issue_token(user)}


@router.post("/login")
def login(request: LoginRequest, db: Database = Depends(database)) -> dict[str, Any]:
    """Exchange email and password for an access token."""
    if not request.email or not request.password:
        raise ValidationError("Email and password are required")

    user = db.get_user_by_email(request.email)
    if user is None or not verify_password(request.password, user["password"]):
        logger.info(f"Failed login for {request.email}")
        raise InvalidCredentialsError("Invalid email or password")

    return {"success": True, "user": _public_user(user), "token": _issue_token(user)}


@router.get("/me")
def me(user: TokenPayload = CurrentUser, db: Database = Depends(database)) -> dict[str, Any]:
    """Current editor's profile."""
    record = db.get_user(user.userId)
    if record is None:
        raise NotFoundError("User not found")
    profile = _public_user(record)
    profile["createdAt"] = record["createdAt"]
    return {"success": True, "user": profile}
