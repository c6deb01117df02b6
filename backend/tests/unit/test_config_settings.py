"""Unit tests for application settings configuration."""

from pathlib import Path

from blog_cms.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_listing_defaults(monkeypatch):
    for name in ("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "FEATURED_LIMIT", "POPULAR_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.default_page_size == 10
    assert settings.max_page_size == 100
    assert settings.featured_limit == 5
    assert settings.popular_limit == 5
    assert settings.max_image_size_mb == 5


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MAX_PAGE_SIZE", "25")
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://blog.example.com")
    settings = Settings(_env_file=None)
    assert settings.max_page_size == 25
    assert settings.public_base_url == "https://blog.example.com"
