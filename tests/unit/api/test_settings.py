"""Tests for api/settings module."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from api.settings import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.pocketbase_url == ""
        assert settings.seed_default_layout is True
        assert "http://localhost:5173" in settings.allowed_origins

    def test_log_level_is_normalized(self):
        with patch.dict("os.environ", {"LOG_LEVEL": "trace"}, clear=True):
            assert Settings(_env_file=None).log_level == "TRACE"

    def test_invalid_log_level_rejected(self):
        with patch.dict("os.environ", {"LOG_LEVEL": "verbose"}, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    def test_allowed_origins_parsing(self):
        """Comma-separated origins are split and blanks dropped."""
        with patch.dict("os.environ", {"ALLOWED_ORIGINS": "https://a.example, https://b.example,,"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.allowed_origins == ["https://a.example", "https://b.example"]
