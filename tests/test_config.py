"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from foodies.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ["DATABASE_URL", "IMAGES_DIR", "LOG_LEVEL", "RATE_LIMIT_REQUESTS"]:
            monkeypatch.delenv(name, raising=False)

        s = Settings(_env_file=None)

        assert s.database_url == "sqlite+aiosqlite:///./meals.db"
        assert s.images_dir == "./public/images"
        assert s.images_url_prefix == "/images"
        assert s.max_image_size == 5 * 1024 * 1024
        assert s.listing_cache_ttl == 0

    def test_log_level_is_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_image_size_bounds(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_image_size=10)

    def test_url_prefix_trailing_slash_stripped(self):
        assert Settings(_env_file=None, images_url_prefix="/images/").images_url_prefix == "/images"

    def test_cors_origins_list(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_production_check_passes_for_defaults(self):
        Settings(_env_file=None).validate_required_for_production()

    def test_production_check_collects_all_errors(self):
        s = Settings(
            _env_file=None,
            database_url="sqlite:///./meals.db",
            images_url_prefix="images",
        )
        with pytest.raises(ValueError) as exc_info:
            s.validate_required_for_production()

        assert "DATABASE_URL" in str(exc_info.value)
        assert "IMAGES_URL_PREFIX" in str(exc_info.value)
