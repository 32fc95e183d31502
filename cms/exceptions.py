"""
CMS Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All CMS-specific exceptions inherit from CmsError.

Usage:
    from cms.exceptions import CmsError, StorageError, StorageListError

    try:
        await sync_storage_with_content(client, kind, record_id, content)
    except StorageError as e:
        logger.error(f"Image sync failed: {e}")
"""


class CmsError(Exception):
    """Base exception for all CMS errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CmsError):
    """Error in CMS configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


class UnknownContentKindError(CmsError):
    """Content kind is not one of the registered kinds."""

    def __init__(self, kind: object):
        super().__init__(f"Unknown content kind: {kind!r}", {"kind": str(kind)})
        self.kind = kind


# =============================================================================
# Storage Errors
# =============================================================================


class StorageError(CmsError):
    """Base class for object storage errors."""

    def __init__(self, message: str, provider_message: str | None = None, details: dict | None = None):
        details = dict(details or {})
        if provider_message:
            details["provider_message"] = provider_message
        super().__init__(message, details)
        self.provider_message = provider_message


class StorageListError(StorageError):
    """A list page request failed; the whole listing is aborted."""

    def __init__(self, prefix: str, provider_message: str, offset: int | None = None):
        details = {"prefix": prefix}
        if offset is not None:
            details["offset"] = offset
        super().__init__(f"Storage list failed: {provider_message}", provider_message, details)
        self.prefix = prefix
        self.offset = offset


class StorageDeleteError(StorageError):
    """A delete batch failed; remaining batches were not attempted."""

    def __init__(
        self,
        provider_message: str,
        batch_index: int | None = None,
        batch_size: int | None = None,
        deleted_before_failure: int = 0,
    ):
        details: dict = {"deleted_before_failure": deleted_before_failure}
        if batch_index is not None:
            details["batch_index"] = batch_index
        if batch_size is not None:
            details["batch_size"] = batch_size
        super().__init__(f"Storage delete failed: {provider_message}", provider_message, details)
        self.batch_index = batch_index
        self.batch_size = batch_size
        self.deleted_before_failure = deleted_before_failure


class StorageUploadError(StorageError):
    """Uploading an object failed."""

    def __init__(self, path: str, provider_message: str):
        super().__init__(f"Upload failed: {provider_message}", provider_message, {"path": path})
        self.path = path


class DatabaseError(CmsError):
    """Error in the relational store."""

    pass


# =============================================================================
# Auth Errors
# =============================================================================


class AuthError(CmsError):
    """Base class for authentication errors."""

    pass


class InvalidTokenError(AuthError):
    """Bearer token is missing, malformed or expired."""

    pass


class InvalidCredentialsError(AuthError):
    """Email/password combination did not match."""

    pass


# =============================================================================
# Request Errors
# =============================================================================


class ValidationError(CmsError):
    """Input validation failed."""

    pass


class NotFoundError(CmsError):
    """Requested record does not exist (or is not visible)."""

    pass


class PermissionDeniedError(CmsError):
    """Caller is authenticated but not allowed to act on the record."""

    pass


class ConflictError(CmsError):
    """Unique constraint would be violated."""

    pass
