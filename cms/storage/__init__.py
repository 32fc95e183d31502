"""
CMS Storage Layer

Object storage client, image garbage collection and the relational store.
"""

from cms.storage.client import StorageClient, StorageEntry, SupabaseStorageClient
from cms.storage.database import Database
from cms.storage.gc import (
    RecordLocks,
    delete_all_content_images,
    delete_file,
    list_all_files_in_folder,
    remove_files,
    sync_storage_with_content,
)

__all__ = [
    # Clients
    "StorageClient",
    "StorageEntry",
    "SupabaseStorageClient",
    "Database",
    # Garbage collection
    "list_all_files_in_folder",
    "sync_storage_with_content",
    "remove_files",
    "delete_all_content_images",
    "delete_file",
    "RecordLocks",
]
