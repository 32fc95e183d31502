"""
Content Endpoints

One router per ContentKind (newsletters, blogs, case studies) built by
``build_content_router``. All three kinds share the same record shape
and rules:

- Public reads only see PUBLISHED records
- Writes require a token; updates and deletes require the author or an admin
- After a content change, orphaned images are removed from storage
- Storage reconciliation is best-effort and never fails the request
"""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from cms.configs import get_logger
from cms.configs.services import get_record_locks, get_storage
from cms.content_kinds import ContentKind, get_folder_prefix
from cms.documents import extract_plain_text_from_tiptap, find_first_image_attrs
from cms.exceptions import (
    CmsError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from cms.http.dependencies import CurrentUser, database
from cms.http.models import ContentCreateRequest, ContentUpdateRequest, ImageDeleteRequest
from cms.security import TokenPayload
from cms.storage import Database, delete_all_content_images, delete_file, sync_storage_with_content
from cms.storage.database import PUBLISH_STATUSES, ROLE_ADMIN, STATUS_DRAFT, STATUS_PUBLISHED
from cms.uploads import generate_file_path, validate_image_file

logger = get_logger("http.content")


# --- Helpers ---


def with_image_url(record: dict[str, Any]) -> dict[str, Any]:
    """Attach ``imageUrl``: the display src of the first image, if any."""
    attrs = find_first_image_attrs(record.get("content"))
    return {**record, "imageUrl": attrs.src if attrs else None}


def parse_date(value: Optional[str]) -> Optional[str]:
    """ISO-normalise a client date; None if missing or unparseable."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.isoformat()


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Trim; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_publishable(title: Optional[str], content: Any) -> None:
    """
    Publishing needs a non-blank title and content with visible text.

    Raises:
        ValidationError: first failing rule
    """
    if title is None:
        raise ValidationError("Title is required")
    if not title.strip():
        raise ValidationError("Title cannot be empty")
    if content is None:
        raise ValidationError("Content is required")
    if not extract_plain_text_from_tiptap(content).strip():
        raise ValidationError("Content cannot be empty")


async def sync_images(kind: ContentKind, record_id: str, content: Any) -> Optional[int]:
    """Remove orphaned images for a record; log and continue on failure."""
    try:
        async with get_record_locks().hold(kind, record_id):
            result = await sync_storage_with_content(get_storage(), kind, record_id, content)
    except CmsError as e:
        logger.error(f"{kind.label} image sync error for {record_id}: {e}")
        return None
    except Exception:
        logger.exception(f"Unexpected {kind.label.lower()} image sync failure for {record_id}")
        return None
    return result["deleted"]


async def purge_images(kind: ContentKind, record_id: str) -> Optional[int]:
    """Remove a record's whole image folder; log and continue on failure."""
    try:
        async with get_record_locks().hold(kind, record_id):
            return await delete_all_content_images(get_storage(), kind, record_id)
    except CmsError as e:
        logger.error(f"Delete {kind.label.lower()} folder images error for {record_id}: {e}")
        return None
    except Exception:
        logger.exception(f"Unexpected {kind.label.lower()} folder purge failure for {record_id}")
        return None


# --- Router factory ---


def build_content_router(kind: ContentKind) -> APIRouter:
    """Build the CRUD + image router for one content kind."""
    router = APIRouter()
    label = kind.label
    plural = kind.route.replace("-", " ")

    def load_owned(db: Database, record_id: str, user: TokenPayload, action: str) -> dict[str, Any]:
        record = db.get_content(kind, record_id)
        if record is None:
            raise NotFoundError(f"{label} not found")
        if record["authorId"] != user.userId and user.role != ROLE_ADMIN:
            raise PermissionDeniedError(f"You can only {action} your own {plural}")
        return record

    @router.get("")
    def list_published(db: Database = Depends(database)) -> dict[str, Any]:
        """Published records, newest first."""
        records = [with_image_url(r) for r in db.list_content(kind, published_only=True)]
        return {"success": True, "count": len(records), "data": records}

    @router.get("/admin")
    def list_all(user: TokenPayload = CurrentUser, db: Database = Depends(database)) -> dict[str, Any]:
        """All records including drafts (dashboard)."""
        records = [with_image_url(r) for r in db.list_content(kind, published_only=False)]
        return {"success": True, "count": len(records), "data": records}

    @router.get("/{record_id}")
    def get_published(record_id: str, db: Database = Depends(database)) -> dict[str, Any]:
        record = db.get_content(kind, record_id)
        if record is None or record["status"] != STATUS_PUBLISHED:
            raise NotFoundError(f"{label} not found")
        return {"success": True, "data": with_image_url(record)}

    @router.post("/draft", status_code=201)
    def create_draft(user: TokenPayload = CurrentUser, db: Database = Depends(database)) -> dict[str, Any]:
        """Create an empty draft so the editor has an id to upload images under."""
        record = db.create_content(kind, user.userId, status=STATUS_DRAFT)
        logger.info(f"Created {kind.value} draft {record['id']}")
        return {
            "success": True,
            "message": "Draft created successfully",
            "data": {**record, "imageUrl": None},
        }

    @router.post("", status_code=201)
    async def create(
        request: ContentCreateRequest,
        user: TokenPayload = CurrentUser,
        db: Database = Depends(database),
    ) -> dict[str, Any]:
        """Create and publish a record."""
        require_publishable(request.title, request.content)

        record = db.create_content(
            kind,
            user.userId,
            title=request.title.strip(),
            subtitle=clean_optional_text(request.subtitle),
            category=clean_optional_text(request.category),
            content=request.content,
            status=STATUS_PUBLISHED,
            date=parse_date(request.date),
        )
        logger.info(f"Published {kind.value} {record['id']}")

        await sync_images(kind, record["id"], request.content)

        return {
            "success": True,
            "message": f"{label} created successfully",
            "data": with_image_url(record),
        }

    @router.put("/{record_id}")
    async def update(
        record_id: str,
        request: ContentUpdateRequest,
        user: TokenPayload = CurrentUser,
        db: Database = Depends(database),
    ) -> dict[str, Any]:
        """
        Update a record.

        PUBLISHED (requested or current) requires a title and visible text.
        Drafts may be saved half-written, but an explicitly blank title or
        null content is still rejected.
        """
        provided = request.model_fields_set
        record = load_owned(db, record_id, user, "edit")

        new_status = request.status if request.status in PUBLISH_STATUSES else None
        next_status = new_status or record["status"]

        if next_status == STATUS_PUBLISHED:
            require_publishable(request.title, request.content)
        else:
            if "title" in provided and (request.title is None or not request.title.strip()):
                raise ValidationError("Title cannot be empty")
            if "content" in provided and request.content is None:
                raise ValidationError("Content is required")

        fields: dict[str, Any] = {}
        if request.title is not None:
            fields["title"] = request.title.strip()
        if "subtitle" in provided:
            fields["subtitle"] = clean_optional_text(request.subtitle)
        if request.category is not None:
            fields["category"] = clean_optional_text(request.category)
        if "content" in provided:
            fields["content"] = request.content
        date = parse_date(request.date)
        if date is not None:
            fields["date"] = date
        if new_status is not None:
            fields["status"] = new_status

        updated = db.update_content(kind, record_id, fields)
        if updated is None:
            raise NotFoundError(f"{label} not found")

        if "content" in provided:
            await sync_images(kind, record_id, request.content)

        return {
            "success": True,
            "message": f"{label} updated successfully",
            "data": with_image_url(updated),
        }

    @router.delete("/{record_id}")
    async def delete(
        record_id: str,
        user: TokenPayload = CurrentUser,
        db: Database = Depends(database),
    ) -> dict[str, Any]:
        """Delete a record and every image under its folder."""
        load_owned(db, record_id, user, "delete")

        await purge_images(kind, record_id)
        db.delete_content(kind, record_id)
        logger.info(f"Deleted {kind.value} {record_id}")

        return {"success": True, "message": f"{label} deleted successfully"}

    @router.post("/{record_id}/image")
    async def upload_image(
        record_id: str,
        file: Optional[UploadFile] = File(default=None),
        user: TokenPayload = CurrentUser,
        db: Database = Depends(database),
    ) -> dict[str, Any]:
        """Upload an inline image; the editor stores the returned filePath in the node."""
        if file is None:
            raise ValidationError("No file uploaded")
        data = await file.read()
        validate_image_file(file.content_type, len(data))

        load_owned(db, record_id, user, "edit")

        file_path = generate_file_path(kind, record_id, file.filename or "")
        client = get_storage()
        try:
            await client.upload(file_path, data, file.content_type)
        except StorageError as e:
            logger.error(f"Upload {kind.value} image error: {e}")
            raise ValidationError(e.message) from e

        url = client.get_public_url(file_path)
        if not url:
            raise CmsError("Failed to generate image URL")

        return {
            "success": True,
            "message": "Image uploaded successfully",
            "data": {"url": url, "filePath": file_path},
        }

    @router.delete("/{record_id}/image")
    async def delete_image(
        record_id: str,
        request: ImageDeleteRequest,
        user: TokenPayload = CurrentUser,
        db: Database = Depends(database),
    ) -> dict[str, Any]:
        """Delete one uploaded image from this record's folder."""
        load_owned(db, record_id, user, "delete")

        file_path = request.filePath
        if not file_path:
            raise ValidationError(
                "filePath is required. Inline images are controlled by the editor; "
                "orphaned images are purged on save."
            )
        if not file_path.startswith(f"{get_folder_prefix(kind, record_id)}/"):
            raise ValidationError(f"Invalid filePath for this {label.lower()}")

        await delete_file(get_storage(), file_path)

        return {
            "success": True,
            "message": "Image deleted successfully",
            "data": {"filePath": file_path},
        }

    return router
