"""
Folder Listing

Paginated enumeration of every object under a record's folder prefix.
"""

from cms.configs import LIST_PAGE_SIZE, get_logger
from cms.exceptions import StorageError, StorageListError
from cms.storage.client import StorageClient

logger = get_logger("storage.gc.listing")


async def list_all_files_in_folder(
    client: StorageClient,
    folder_prefix: str,
    page_size: int = LIST_PAGE_SIZE,
) -> list[str]:
    """
    List the full paths of all objects under a folder.

    Pages are requested from offset 0 in steps of ``page_size`` until a
    page comes back shorter than ``page_size``.

    Args:
        client: Object storage client
        folder_prefix: Folder to list, e.g. "blogs/42"
        page_size: Entries requested per page

    Returns:
        Paths of the form "<folder_prefix>/<name>"

    Raises:
        StorageListError: any page request failed (no partial result)
    """
    paths: list[str] = []
    offset = 0

    while True:
        try:
            entries = await client.list(folder_prefix, limit=page_size, offset=offset)
        except StorageError as e:
            raise StorageListError(folder_prefix, e.provider_message or e.message, offset) from e

        for entry in entries:
            if entry.name:
                paths.append(f"{folder_prefix}/{entry.name}")

        if len(entries) < page_size:
            break
        offset += page_size

    logger.debug(f"Listed {len(paths)} objects under {folder_prefix}")
    return paths
