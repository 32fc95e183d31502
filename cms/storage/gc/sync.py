"""
Image Reconciliation

Deletes objects under a record's folder that its document no longer
references. Only ``filePath`` attrs count as references; display URLs
are ignored.

Not transactional with the record write: a failure here leaves extra
objects behind, never missing ones. Callers log and continue.
"""

from typing import Any

from cms.configs import DELETE_BATCH_SIZE, get_logger
from cms.content_kinds import ContentKind, get_folder_prefix
from cms.documents import collect_image_file_paths
from cms.exceptions import StorageDeleteError, StorageError
from cms.storage.client import StorageClient
from cms.storage.gc.listing import list_all_files_in_folder

logger = get_logger("storage.gc.sync")


async def remove_files(
    client: StorageClient,
    paths: list[str],
    batch_size: int = DELETE_BATCH_SIZE,
) -> int:
    """
    Delete paths in sequential batches of at most ``batch_size``.

    Args:
        client: Object storage client
        paths: Object paths to delete
        batch_size: Maximum paths per delete request

    Returns:
        Number of paths deleted

    Raises:
        StorageDeleteError: a batch failed; later batches are not sent and
            earlier ones are not rolled back
    """
    deleted = 0
    for batch_index, start in enumerate(range(0, len(paths), batch_size)):
        batch = paths[start:start + batch_size]
        try:
            await client.remove(batch)
        except StorageError as e:
            raise StorageDeleteError(
                e.provider_message or e.message,
                batch_index=batch_index,
                batch_size=len(batch),
                deleted_before_failure=deleted,
            ) from e
        deleted += len(batch)
    return deleted


async def sync_storage_with_content(
    client: StorageClient,
    kind: ContentKind | str,
    record_id: str,
    content: Any,
) -> dict[str, int]:
    """
    Delete any objects under ``<folder>/<record_id>/`` not referenced by the document.

    Args:
        client: Object storage client
        kind: Content kind owning the record
        record_id: Record id
        content: Parsed TipTap document (malformed = references nothing)

    Returns:
        Dict with deleted count

    Raises:
        StorageListError: listing the folder failed
        StorageDeleteError: a delete batch failed
    """
    folder_prefix = get_folder_prefix(kind, record_id)

    referenced = collect_image_file_paths(content)
    all_files = await list_all_files_in_folder(client, folder_prefix)

    to_delete = [path for path in all_files if path not in referenced]

    if to_delete:
        await remove_files(client, to_delete)
        logger.info(
            f"Deleted {len(to_delete)} orphaned images under {folder_prefix} "
            f"({len(referenced)} referenced)"
        )

    return {"deleted": len(to_delete)}
