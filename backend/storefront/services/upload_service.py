"""
Storefront Backend — Upload Validation & Blob Storage Service
===============================================================

What:  Validates multipart image uploads and writes them to the upload directory.
Who:   Called by CatalogService (product images) and AssetService (single images).
When:  Before any metadata is written for the uploaded files.

Validation Model:
    1. Count check:        more files than the field allows → 400, nothing written
    2. Extension check:    .jpeg / .jpg / .png only
    3. Content-type check: declared type must also be jpeg / jpg / png
    4. Size check:         per-file limit (settings.max_file_size) → file_too_large

    Every file of a request is validated before the first one is written, so a
    single bad file means no file of that request reaches the disk.

Naming:
    <epoch-milliseconds>-<original basename>, e.g. 1722500000000-aviator.png
    Only the basename of the client filename is kept (no directory parts).
    If the name is already taken the timestamp is bumped until it is free.
    Files are created exclusively, so concurrent uploads never share a name.
"""

import logging
import time
from pathlib import Path
from typing import List, NamedTuple, Optional

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from storefront.config import settings
from storefront.exceptions import FileStorageError, FileTooLargeError, ValidationError

logger = logging.getLogger(__name__)

# ── Allowed File Types ────────────────────────────────────────────────────
ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
}

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png"}

TYPE_ERROR_MESSAGE = "Only images (jpeg, jpg, png) are allowed!"


class StagedUpload(NamedTuple):
    """A validated upload held in memory, not yet written."""
    original_name: str
    content: bytes


class StoredFile(NamedTuple):
    """A file written to the blob store."""
    filename: str
    path: str
    size: int


class UploadService:
    """
    Validates image uploads and manages files in the upload directory.

    Directory Structure:
        uploads/
        ├── 1722500000000-aviator-front.jpg
        ├── 1722500000001-aviator-side.jpg
        └── 1722500012345-blog-cover.png
    """

    def __init__(self, upload_dir: Optional[str] = None):
        """
        Args:
            upload_dir: Override the configured upload directory (used in tests).
        """
        self.upload_dir = Path(upload_dir or settings.upload_dir)

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str, field: str = "image") -> str:
        """Returns the normalized extension or raises ValidationError."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=TYPE_ERROR_MESSAGE,
                field=field,
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_content_type(self, content_type: Optional[str], field: str = "image") -> str:
        """Checks the content type declared by the client for this part."""
        declared = (content_type or "").split(";")[0].strip().lower()
        if declared not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                message=TYPE_ERROR_MESSAGE,
                field=field,
                context={"content_type": declared, "allowed": sorted(ALLOWED_CONTENT_TYPES)},
            )
        return declared

    def validate_size(
        self,
        content_length: Optional[int],
        actual_size: int,
        field: str = "image",
    ) -> None:
        """
        Reject files above settings.max_file_size.

        content_length is the size reported for the part (may be None);
        actual_size is the number of bytes actually received.
        """
        limit = settings.max_file_size
        if content_length and content_length > limit:
            raise FileTooLargeError(
                max_size=limit,
                field=field,
                context={"reported_size": content_length},
            )
        if actual_size > limit:
            logger.warning(
                "File too large: %s - Size: %d bytes, Limit: %d bytes",
                field,
                actual_size,
                limit,
            )
            raise FileTooLargeError(
                max_size=limit,
                field=field,
                context={"actual_size": actual_size},
            )

    async def stage(self, upload: UploadFile, field: str = "image") -> StagedUpload:
        """Validate one upload and read its bytes into memory."""
        original_name = Path(upload.filename or "").name
        self.validate_extension(original_name, field)
        self.validate_content_type(upload.content_type, field)
        self.validate_size(upload.size, 0, field)

        content = await upload.read()
        self.validate_size(None, len(content), field)
        return StagedUpload(original_name=original_name, content=content)

    # ── Storage ───────────────────────────────────────────────────────────

    def _ensure_upload_dir(self) -> None:
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create upload directory %s: %s", self.upload_dir, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(self.upload_dir), "os_error": str(e)},
            )

    def generate_filename(self, original_name: str) -> str:
        """Timestamp-prefixed name that is not yet present in the upload directory."""
        stamp = int(time.time() * 1000)
        candidate = f"{stamp}-{original_name}"
        while (self.upload_dir / candidate).exists():
            stamp += 1
            candidate = f"{stamp}-{original_name}"
        return candidate

    async def store(self, staged: StagedUpload) -> StoredFile:
        """
        Write a staged upload to disk under a generated filename.

        The file is created with mode "xb", so a name claimed by a concurrent
        request between generate_filename() and open() is never overwritten;
        the next free name is tried instead.
        """
        self._ensure_upload_dir()
        filename = self.generate_filename(staged.original_name)
        path = self.upload_dir / filename

        try:
            while True:
                try:
                    f = await aiofiles.open(path, "xb")
                    break
                except FileExistsError:
                    filename = self.generate_filename(staged.original_name)
                    path = self.upload_dir / filename
            try:
                await f.write(staged.content)
            finally:
                await f.close()
        except OSError as e:
            logger.error("Failed to store file at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            )

        logger.info("File stored: %s (%d bytes)", filename, len(staged.content))
        return StoredFile(filename=filename, path=str(path), size=len(staged.content))

    async def store_files(
        self,
        uploads: List[UploadFile],
        field: str,
        max_count: int,
    ) -> List[StoredFile]:
        """
        Validate every upload of a multi-file field, then store them in order.

        Raises:
            ValidationError: more than max_count files, or a disallowed type
            FileTooLargeError: a file above the size limit
        """
        if len(uploads) > max_count:
            raise ValidationError(
                message=f"Too many files. Maximum is {max_count} for field '{field}'.",
                field=field,
                context={"received": len(uploads), "max_count": max_count},
            )

        staged = [await self.stage(upload, field) for upload in uploads]
        return [await self.store(item) for item in staged]

    async def store_single(self, upload: Optional[UploadFile], field: str = "image") -> StoredFile:
        """Validate and store the single file of `field`; 400 when it is missing."""
        if upload is None or not upload.filename:
            raise ValidationError(message="No file uploaded", field=field)
        staged = await self.stage(upload, field)
        return await self.store(staged)

    async def delete_file(self, path: str) -> None:
        """
        Remove a stored file.

        Unlike a cleanup helper, failures are raised: the caller reports them.

        Raises:
            FileStorageError: the file is missing or cannot be removed
        """
        try:
            await aiofiles.os.remove(path)
            logger.info("Deleted file: %s", path)
        except OSError as e:
            logger.error("Failed to delete file %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to delete file",
                context={"path": path, "os_error": str(e)},
            )


upload_service = UploadService()
