# tests/core/test_config.py
import pytest
from pydantic import ValidationError

from chariot.core.config import Settings


def test_defaults():
    config = Settings(_env_file=None)
    assert config.API_V1_STR == "/api/v1"
    assert config.DEFAULT_PAGE_SIZE == 10
    assert config.MAX_PAGE_SIZE == 100


def test_default_locale_must_be_language_code():
    assert Settings(_env_file=None, DEFAULT_LOCALE="fr").DEFAULT_LOCALE == "fr"
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DEFAULT_LOCALE="French")


def test_cors_origins_parsing():
    config = Settings(_env_file=None, BACKEND_CORS_ORIGINS="http://localhost:3000, http://example.com")
    assert [str(origin).rstrip("/") for origin in config.BACKEND_CORS_ORIGINS] == [
        "http://localhost:3000",
        "http://example.com",
    ]

    config = Settings(_env_file=None, BACKEND_CORS_ORIGINS='["http://localhost:3000"]')
    assert len(config.BACKEND_CORS_ORIGINS) == 1


def test_page_sizes_are_clamped():
    config = Settings(_env_file=None, DEFAULT_PAGE_SIZE=0, MAX_PAGE_SIZE=5000)
    assert config.DEFAULT_PAGE_SIZE == 1
    assert config.MAX_PAGE_SIZE == 1000


def test_unknown_log_level_falls_back_to_info():
    assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    assert Settings(_env_file=None, LOG_LEVEL="chatty").LOG_LEVEL == "INFO"
