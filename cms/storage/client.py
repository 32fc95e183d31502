"""
Object Storage Client

Async client for the bucket that holds inline content images.

Only list/remove are used by reconciliation; upload/get_public_url
serve the image upload endpoints.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from cms.configs import get_logger, get_timeout
from cms.configs.constants import UPLOAD_CACHE_CONTROL
from cms.exceptions import StorageError, StorageUploadError

logger = get_logger("storage.client")


class StorageEntry(BaseModel):
    """One entry returned by a folder listing."""

    name: str
    id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class StorageClient(ABC):
    """Interface of the remote object store used by the CMS."""

    @abstractmethod
    async def list(self, prefix: str, limit: int, offset: int) -> list[StorageEntry]:
        """List one page of entries directly under ``prefix``.

        Raises:
            StorageError: the provider rejected the request
        """

    @abstractmethod
    async def remove(self, paths: list[str]) -> None:
        """Delete the given object paths in a single request.

        Raises:
            StorageError: the provider rejected the request
        """

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        """Store ``data`` at ``path`` (no overwrite) and return the stored path.

        Raises:
            StorageUploadError: the provider rejected the upload
        """

    @abstractmethod
    def get_public_url(self, path: str) -> Optional[str]:
        """Public URL for ``path``, or None if the bucket has none."""


class SupabaseStorageClient(StorageClient):
    """
    Supabase Storage REST client.

    Usage:
        client = SupabaseStorageClient(url, service_key, bucket="resources-images")
        entries = await client.list("blogs/42", limit=1000, offset=0)
    """

    def __init__(
        self,
        url: str,
        service_key: str,
        bucket: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = url.rstrip("/")
        self.bucket = bucket
        self._service_key = service_key
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
        }

    def _object_url(self, path: str = "") -> str:
        url = f"{self.base_url}/storage/v1/object/{quote(self.bucket)}"
        if path:
            url = f"{url}/{quote(path)}"
        return url

    async def _request(
        self,
        method: str,
        url: str,
        timeout_key: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Make a request and map transport failures to StorageError."""
        headers = {**self._headers(), **kwargs.pop("headers", {})}
        try:
            async with httpx.AsyncClient(
                timeout=get_timeout(timeout_key),
                transport=self._transport,
            ) as client:
                response = await client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            raise StorageError(f"Storage request timed out: {method} {url}", str(e)) from e
        except httpx.HTTPError as e:
            raise StorageError(f"Storage request failed: {method} {url}", str(e)) from e

        if response.is_error:
            message = _provider_message(response)
            raise StorageError(
                f"Storage returned HTTP {response.status_code}",
                message,
                {"status_code": response.status_code},
            )
        return response

    async def list(self, prefix: str, limit: int, offset: int) -> list[StorageEntry]:
        response = await self._request(
            "POST",
            f"{self.base_url}/storage/v1/object/list/{quote(self.bucket)}",
            "storage_list",
            json={
                "prefix": prefix,
                "limit": limit,
                "offset": offset,
                "sortBy": {"column": "name", "order": "asc"},
            },
        )
        try:
            data = response.json()
        except ValueError as e:
            raise StorageError(
                "Storage list returned a non-JSON body",
                response.text[:200] or str(e),
                {"status_code": response.status_code},
            ) from e
        if not isinstance(data, list):
            raise StorageError(
                "Storage list returned an unexpected body",
                f"expected a JSON array, got {type(data).__name__}",
                {"status_code": response.status_code},
            )
        try:
            return [StorageEntry.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise StorageError("Storage list returned a malformed entry", str(e)) from e

    async def remove(self, paths: list[str]) -> None:
        await self._request(
            "DELETE",
            self._object_url(),
            "storage_remove",
            json={"prefixes": paths},
        )
        logger.debug(f"Removed {len(paths)} objects from bucket {self.bucket}")

    async def upload(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        headers = {
            "cache-control": f"max-age={UPLOAD_CACHE_CONTROL}",
            "x-upsert": "false",
        }
        if content_type:
            headers["content-type"] = content_type
        try:
            await self._request(
                "POST",
                self._object_url(path),
                "storage_upload",
                content=data,
                headers=headers,
            )
        except StorageError as e:
            raise StorageUploadError(path, e.provider_message or e.message) from e
        logger.info(f"Uploaded {path} ({len(data)} bytes)")
        return path

    def get_public_url(self, path: str) -> Optional[str]:
        if not path:
            return None
        return f"{self.base_url}/storage/v1/object/public/{quote(self.bucket)}/{quote(path)}"


def _provider_message(response: httpx.Response) -> str:
    """Pull the human-readable error out of a storage error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "error"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"HTTP {response.status_code}"
