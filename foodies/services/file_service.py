"""
Foodies Backend — Image Storage Service
=========================================

What:  Validates uploaded meal images and writes them to the public images directory.
Why:   Keeps every filesystem operation of the share workflow in one place.
How:   Checks presence, extension, declared content type and size, then writes
       the bytes under a generated filename with aiofiles.
Who:   Called by MealService.share_meal (step 4 of the mutation flow).

Filename scheme:
    <slug>-<8 hex chars><ext>      e.g. big-burger-1a2b3c4d.jpg

    The slug keeps files recognizable on disk; the random suffix means a
    rejected duplicate-slug submission can never overwrite the image of the
    meal that already owns that slug.

Public path:
    The value stored in the `image` column is "<images_url_prefix>/<filename>",
    which is exactly the URL the /images static mount serves it under.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional, Tuple

import aiofiles

from foodies.config import settings
from foodies.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


class ImageService:
    """
    Manages validation and storage of uploaded meal images.

    Lifecycle of an uploaded image:
        1. validate_upload(): present, allowed extension, image/* type, size
        2. store_image(): written as images_dir/<slug>-<hex><ext>
        3. On a later failure (duplicate slug): cleanup_file() removes it again
    """

    def __init__(
        self,
        images_dir: Optional[str] = None,
        url_prefix: Optional[str] = None,
        max_size: Optional[int] = None,
    ):
        """
        Args:
            images_dir: Override settings.images_dir (used in tests).
            url_prefix: Override settings.images_url_prefix.
            max_size:   Override settings.max_image_size (bytes).
        """
        self.images_dir = Path(images_dir or settings.images_dir).resolve()
        self.url_prefix = (url_prefix or settings.images_url_prefix).rstrip("/")
        self.max_size = max_size or settings.max_image_size
        self.images_dir.mkdir(parents=True, exist_ok=True)
        logger.info("ImageService initialized with images_dir=%s", self.images_dir)

    def validate_extension(self, filename: Optional[str]) -> str:
        """
        Returns the normalized extension (lowercase with dot).
        Raises ValidationError if the extension is not an allowed image type.
        """
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"Invalid input: image type '{ext or 'none'}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="image",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_content_type(self, content_type: Optional[str]) -> None:
        # Browsers always send one for file inputs; absent means a scripted client
        if content_type and not content_type.startswith("image/"):
            raise ValidationError(
                message=f"Invalid input: '{content_type}' is not an image.",
                field="image",
                context={"content_type": content_type},
            )

    def validate_size(self, size: int) -> None:
        """
        Rejects empty uploads (a form submitted without choosing a file still
        sends an empty file part) and uploads above max_size.
        """
        if size == 0:
            raise ValidationError(
                message="Invalid input: an image is required.",
                field="image",
            )
        if size > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise ValidationError(
                message=(
                    f"Invalid input: image size ({size / (1024 * 1024):.1f}MB) "
                    f"exceeds the maximum of {max_mb:.1f}MB."
                ),
                field="image",
                context={"max_size": self.max_size, "actual_size": size},
            )

    def validate_upload(
        self,
        filename: Optional[str],
        content: Optional[bytes],
        content_type: Optional[str] = None,
    ) -> str:
        """
        Full image validation. Returns the extension to store the file with.

        Order: cheapest check first. A missing image is reported before its
        type, so an empty file input yields "an image is required".
        """
        if content is None:
            raise ValidationError(message="Invalid input: an image is required.", field="image")
        self.validate_size(len(content))
        ext = self.validate_extension(filename)
        self.validate_content_type(content_type)
        return ext

    def _generate_storage_path(self, slug: str, extension: str) -> Tuple[Path, str]:
        """Returns (absolute_path, public_path) for a new image of `slug`."""
        filename = f"{slug}-{uuid.uuid4().hex[:8]}{extension}"
        return self.images_dir / filename, f"{self.url_prefix}/{filename}"

    async def store_image(self, content: bytes, slug: str, extension: str) -> Tuple[str, str]:
        """
        Write validated image bytes to disk.

        Returns:
            (absolute_path, public_path). The public path goes into the
            `image` column; the absolute path is kept for cleanup.

        Raises:
            FileStorageError if the directory or file cannot be written.
        """
        absolute_path, public_path = self._generate_storage_path(slug, extension)

        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store image at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save the uploaded image. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            )

        logger.info("Image stored: %s (%d bytes)", public_path, len(content))
        return str(absolute_path), public_path

    async def cleanup_file(self, file_path: str) -> None:
        """
        Remove an image that no meal row refers to.

        Best-effort: a missing file is fine, any other failure is logged and
        swallowed so the user still gets the real error (the duplicate slug).
        """
        try:
            path = Path(file_path)
            if path.exists():
                os.remove(path)
                logger.info("Cleaned up image: %s", path.name)
            else:
                logger.debug("Cleanup: image already gone: %s", path.name)
        except OSError as e:
            logger.warning("Failed to clean up image %s: %s", file_path, str(e))


# ── Singleton Instance ────────────────────────────────────────────────────
image_service = ImageService()
