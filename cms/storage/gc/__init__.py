"""
Garbage Collection

Cleanup operations for the image bucket:
- Paginated folder listing
- Orphaned image cleanup after a document save
- Full folder purge when a record is deleted
- Single image deletion
"""

from cms.storage.gc.listing import list_all_files_in_folder
from cms.storage.gc.locks import RecordLocks
from cms.storage.gc.purge import delete_all_content_images, delete_file
from cms.storage.gc.sync import remove_files, sync_storage_with_content

__all__ = [
    # Listing
    "list_all_files_in_folder",
    # Orphan cleanup
    "sync_storage_with_content",
    "remove_files",
    # Purge operations
    "delete_all_content_images",
    "delete_file",
    # Serialization
    "RecordLocks",
]
