"""
Purge Operations

Unconditional deletion of a record's image folder, and single-object
deletion for the explicit "remove this image" endpoint.
"""

from cms.configs import get_logger
from cms.content_kinds import ContentKind, get_folder_prefix
from cms.exceptions import StorageDeleteError, StorageError
from cms.storage.client import StorageClient
from cms.storage.gc.listing import list_all_files_in_folder
from cms.storage.gc.sync import remove_files

logger = get_logger("storage.gc.purge")


async def delete_all_content_images(
    client: StorageClient,
    kind: ContentKind | str,
    record_id: str,
) -> int:
    """
    Delete every object under ``<folder>/<record_id>/``.

    Used only when the record itself is being deleted.

    Args:
        client: Object storage client
        kind: Content kind owning the record
        record_id: Record id

    Returns:
        Number of objects deleted

    Raises:
        StorageListError: listing the folder failed
        StorageDeleteError: a delete batch failed
    """
    folder_prefix = get_folder_prefix(kind, record_id)
    all_files = await list_all_files_in_folder(client, folder_prefix)

    if all_files:
        await remove_files(client, all_files)
        logger.info(f"Purged {len(all_files)} images under {folder_prefix}")

    return len(all_files)


async def delete_file(client: StorageClient, path: str) -> None:
    """
    Delete a single object.

    Raises:
        StorageDeleteError: the delete request failed
    """
    try:
        await client.remove([path])
    except StorageError as e:
        raise StorageDeleteError(e.provider_message or e.message, batch_index=0, batch_size=1) from e
    logger.info(f"Deleted image {path}")
