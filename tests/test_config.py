"""
Configuration tests: env file discovery and settings validation.
"""

import os

import pytest
from pydantic import ValidationError

from dentalvoice.core import config
from dentalvoice.core.config import (
    DatabaseSettings,
    ExtractionSettings,
    Settings,
    WebhookSettings,
    get_settings,
    reset_settings,
)

ENV_KEYS = ("MONGO_URI", "MONGO_DB_NAME", "WEBHOOK_URL", "N8N_WEBHOOK_URL", "EXTRACTION_WINDOW_RADIUS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    # values written by load_dotenv bypass monkeypatch
    for key in ENV_KEYS:
        os.environ.pop(key, None)
    reset_settings()


def test_env_local_is_preferred_over_env(monkeypatch, tmp_path):
    """.env.local wins over .env when both sit in the same directory."""
    (tmp_path / ".env").write_text("MONGO_URI=mongodb://from-env-file:27017/test\nMONGO_DB_NAME=from_env\n")
    (tmp_path / ".env.local").write_text("MONGO_URI=mongodb://from-env-local:27017/test\n")
    monkeypatch.chdir(tmp_path)

    config._load_env_file_if_available()

    assert os.getenv("MONGO_URI") == "mongodb://from-env-local:27017/test"
    # .env still fills what .env.local does not set
    assert os.getenv("MONGO_DB_NAME") == "from_env"


def test_env_file_found_in_parent_directory(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("MONGO_DB_NAME=from_parent\n")
    child = tmp_path / "nested" / "deeper"
    child.mkdir(parents=True)
    monkeypatch.chdir(child)

    config._load_env_file_if_available()

    assert os.getenv("MONGO_DB_NAME") == "from_parent"


def test_already_set_env_vars_take_precedence(monkeypatch, tmp_path):
    monkeypatch.setenv("MONGO_URI", "mongodb://already-set:27017/test")
    (tmp_path / ".env").write_text("MONGO_URI=mongodb://from-env-file:27017/test\n")
    monkeypatch.chdir(tmp_path)

    config._load_env_file_if_available()

    assert os.getenv("MONGO_URI") == "mongodb://already-set:27017/test"


def test_no_env_files_no_crash(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config._load_env_file_if_available()


def test_defaults_disable_optional_collaborators(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = get_settings()
    assert settings.database.enabled is False
    assert settings.webhook.enabled is False
    assert settings.extraction.window_radius == 100
    assert settings.extraction.keyword_confidence == 25
    assert get_settings() is settings


def test_legacy_webhook_variable(monkeypatch):
    monkeypatch.setenv("N8N_WEBHOOK_URL", "https://automation.example.com/hook")
    assert Settings().webhook.url == "https://automation.example.com/hook"


def test_webhook_url_wins_over_legacy(monkeypatch):
    monkeypatch.setenv("WEBHOOK_URL", "https://primary.example.com/hook")
    monkeypatch.setenv("N8N_WEBHOOK_URL", "https://legacy.example.com/hook")
    assert Settings().webhook.url == "https://primary.example.com/hook"


def test_extraction_settings_from_env(monkeypatch):
    monkeypatch.setenv("EXTRACTION_WINDOW_RADIUS", "150")
    assert ExtractionSettings().window_radius == 150


@pytest.mark.parametrize(
    "factory",
    [
        lambda: DatabaseSettings(uri="postgres://localhost/db"),
        lambda: WebhookSettings(url="ftp://example.com"),
        lambda: ExtractionSettings(window_radius=5),
        lambda: ExtractionSettings(analysis_timeout_seconds=0),
        lambda: ExtractionSettings(keyword_confidence=101),
    ],
)
def test_invalid_values_are_rejected(factory):
    with pytest.raises(ValidationError):
        factory()
