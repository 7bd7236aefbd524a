"""
Foodies Backend — Image Service Unit Tests
============================================

What:  Tests for ImageService validation, storage and cleanup.
How:   Real writes into a per-test temporary directory.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from foodies.exceptions import FileStorageError, ValidationError
from foodies.services.file_service import ImageService


class TestImageValidation:
    """Tests for validate_upload and its parts."""

    @pytest.mark.parametrize("filename", ["meal.jpg", "meal.JPEG", "meal.png", "meal.gif", "meal.webp"])
    def test_allowed_extensions(self, image_service, filename):
        assert image_service.validate_extension(filename) == "." + filename.rsplit(".", 1)[1].lower()

    @pytest.mark.parametrize("filename", ["recipe.pdf", "malware.exe", "noextension", "", None])
    def test_rejected_extensions(self, image_service, filename):
        with pytest.raises(ValidationError, match="not supported") as exc_info:
            image_service.validate_extension(filename)
        assert exc_info.value.field == "image"

    def test_missing_image_rejected(self, image_service):
        with pytest.raises(ValidationError, match="image is required"):
            image_service.validate_upload("meal.jpg", None)

    def test_empty_image_rejected(self, image_service):
        """A form submitted without choosing a file sends an empty part."""
        with pytest.raises(ValidationError, match="image is required"):
            image_service.validate_upload("", b"")

    def test_oversized_image_rejected(self, images_dir):
        service = ImageService(images_dir=str(images_dir), max_size=1024)
        with pytest.raises(ValidationError, match="exceeds the maximum"):
            service.validate_upload("meal.jpg", b"x" * 1025)

    def test_image_at_limit_accepted(self, images_dir):
        service = ImageService(images_dir=str(images_dir), max_size=1024)
        assert service.validate_upload("meal.jpg", b"x" * 1024) == ".jpg"

    def test_non_image_content_type_rejected(self, image_service, sample_image_bytes):
        with pytest.raises(ValidationError, match="not an image"):
            image_service.validate_upload("meal.jpg", sample_image_bytes, "application/pdf")

    def test_missing_content_type_accepted(self, image_service, sample_image_bytes):
        assert image_service.validate_upload("meal.png", sample_image_bytes, None) == ".png"


class TestImageStorage:
    """Tests for store_image and cleanup_file."""

    @pytest.mark.asyncio
    async def test_store_image_writes_file(self, image_service, images_dir, sample_image_bytes):
        absolute_path, public_path = await image_service.store_image(
            sample_image_bytes, "big-burger", ".jpg"
        )

        assert public_path.startswith("/images/big-burger-")
        assert public_path.endswith(".jpg")
        stored = images_dir / public_path.rsplit("/", 1)[1]
        assert stored.read_bytes() == sample_image_bytes
        assert Path(absolute_path).name == stored.name

    @pytest.mark.asyncio
    async def test_same_slug_never_overwrites(self, image_service, images_dir, sample_image_bytes):
        _, first = await image_service.store_image(sample_image_bytes, "big-burger", ".jpg")
        _, second = await image_service.store_image(b"other", "big-burger", ".jpg")

        assert first != second
        assert len(list(images_dir.iterdir())) == 2

    @pytest.mark.asyncio
    async def test_store_image_os_error_raises_file_storage_error(self, image_service, sample_image_bytes):
        with patch("foodies.services.file_service.aiofiles.open", side_effect=OSError("disk full")):
            with pytest.raises(FileStorageError):
                await image_service.store_image(sample_image_bytes, "big-burger", ".jpg")

    @pytest.mark.asyncio
    async def test_cleanup_file_removes_file(self, tmp_path):
        service = ImageService(images_dir=str(tmp_path))
        test_file = tmp_path / "test.jpg"
        test_file.write_bytes(b"test content")

        await service.cleanup_file(str(test_file))
        assert not test_file.exists()

    @pytest.mark.asyncio
    async def test_cleanup_file_nonexistent(self, image_service, tmp_path):
        # Should not raise
        await image_service.cleanup_file(str(tmp_path / "nonexistent.jpg"))
