"""
Image Upload Helpers

Validation and object-path generation for inline editor images.
"""

import uuid
from typing import Optional

from cms.configs import MAX_UPLOAD_SIZE
from cms.configs.constants import DEFAULT_IMAGE_EXTENSION
from cms.content_kinds import ContentKind, get_folder_prefix
from cms.exceptions import ValidationError


def validate_image_file(content_type: Optional[str], size: int) -> None:
    """
    Reject anything that is not an image of at most 5MB.

    Raises:
        ValidationError: not an image, or too large
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("File must be an image")
    if size > MAX_UPLOAD_SIZE:
        raise ValidationError("File size must be under 5MB")


def generate_file_path(kind: ContentKind | str, record_id: str, original_filename: str) -> str:
    """Unique object path ``<folder>/<id>/<uuid>.<ext>`` for an upload."""
    ext = DEFAULT_IMAGE_EXTENSION
    if original_filename and "." in original_filename:
        candidate = original_filename.rsplit(".", 1)[1]
        if candidate:
            ext = candidate
    return f"{get_folder_prefix(kind, record_id)}/{uuid.uuid4()}.{ext}"
