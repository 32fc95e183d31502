"""
Request Models

Pydantic bodies for the auth and content endpoints. Field names follow
the editor UI's JSON (camelCase).
"""

from typing import Any, Optional

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    """Request body for editor registration."""
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for login."""
    email: Optional[str] = None
    password: Optional[str] = None


class ContentCreateRequest(BaseModel):
    """Request body for publishing a new record."""
    title: Optional[str] = None
    subtitle: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None
    content: Any = None


class ContentUpdateRequest(BaseModel):
    """
    Request body for updating a record.

    Omitted fields are left unchanged; use ``model_fields_set`` to tell
    an omitted field from an explicit null.
    """
    title: Optional[str] = None
    subtitle: Optional[str] = None
    date: Optional[str] = None
    category: Optional[str] = None
    content: Any = None
    status: Optional[str] = None


class ImageDeleteRequest(BaseModel):
    """Request body for deleting one uploaded image."""
    filePath: Optional[str] = None
