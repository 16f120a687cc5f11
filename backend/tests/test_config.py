"""Settings — env mapping, DSN normalization and OAuth validation.

Invariants:
    - postgres:// and postgresql:// DSNs gain the asyncpg driver prefix
    - Empty cookie name/path and non-positive max-age fall back to defaults
    - Enabled Google OAuth without credentials is a startup error
    - Nested keys map from "__"-delimited environment variables and config.yaml;
      the environment wins over the file
"""

import pytest
from pydantic import ValidationError

from petstore.config import GoogleOAuthSettings, Settings, StateCookieSettings
from petstore.core.domain_types import StorageBackend


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


@pytest.mark.parametrize("url", [
    "postgres://u:p@db:5432/pets",
    "postgresql://u:p@db:5432/pets",
    "postgresql+asyncpg://u:p@db:5432/pets",
])
def test_database_url_gets_asyncpg_driver(url):
    settings = Settings(database_url=url)
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/pets"


def test_sqlite_url_untouched():
    url = "sqlite+aiosqlite:///pets.db"
    assert Settings(database_url=url).database_url == url


def test_defaults():
    settings = Settings(storage_backend="database")
    assert settings.storage_backend is StorageBackend.DATABASE
    assert settings.server.address == ":8080"
    assert settings.server.shutdown_grace_seconds == 5
    cookie = settings.google_oauth.state_cookie
    assert (cookie.name, cookie.path, cookie.max_age, cookie.secure) == (
        "oauth_state", "/", 600, False,
    )


@pytest.mark.parametrize("max_age", [0, -5, None])
def test_non_positive_cookie_max_age_falls_back(max_age):
    assert StateCookieSettings(max_age=max_age).max_age == 600


def test_empty_cookie_name_and_path_fall_back():
    cookie = StateCookieSettings(name="", path="")
    assert (cookie.name, cookie.path) == ("oauth_state", "/")


def test_invalid_storage_backend_rejected():
    with pytest.raises(ValidationError):
        Settings(storage_backend="redis")


# ─── Google OAuth ────────────────────────────────────────────────

def test_disabled_oauth_needs_no_credentials():
    assert GoogleOAuthSettings(enabled=False).client_id == ""


@pytest.mark.parametrize("missing,message", [
    ("client_id", "client id"),
    ("client_secret", "client secret"),
    ("redirect_url", "redirect url"),
])
def test_enabled_oauth_requires_credentials(missing, message):
    values = {
        "enabled": True,
        "client_id": "id",
        "client_secret": "secret",
        "redirect_url": "http://localhost/cb",
    }
    values[missing] = "   " if missing == "redirect_url" else ""
    with pytest.raises(ValidationError, match=message):
        GoogleOAuthSettings(**values)


@pytest.mark.parametrize("raw", ["openid,email", "openid email", " openid , email "])
def test_scopes_split_from_string(raw):
    assert GoogleOAuthSettings(scopes=raw).scopes == ["openid", "email"]


def test_empty_scopes_use_defaults():
    assert GoogleOAuthSettings(scopes=[]).scopes == ["openid", "profile", "email"]


# ─── Environment mapping ─────────────────────────────────────────

def test_nested_settings_from_env(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("SERVER__ADDRESS", "127.0.0.1:9000")
    monkeypatch.setenv("GOOGLE_OAUTH__ENABLED", "true")
    monkeypatch.setenv("GOOGLE_OAUTH__CLIENT_ID", "env-id")
    monkeypatch.setenv("GOOGLE_OAUTH__CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("GOOGLE_OAUTH__STATE_COOKIE__MAX_AGE", "120")

    settings = Settings()
    assert settings.storage_backend is StorageBackend.MEMORY
    assert settings.server.address == "127.0.0.1:9000"
    assert settings.google_oauth.enabled
    assert settings.google_oauth.client_id == "env-id"
    assert settings.google_oauth.state_cookie.max_age == 120


# ─── config.yaml ─────────────────────────────────────────────────

_YAML = """\
server:
  address: "127.0.0.1:9090"
storage_backend: database
google_oauth:
  scopes: [openid, email]
  state_cookie:
    name: yaml_state
    max_age: 300
    secure: true
"""


def test_settings_from_config_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text(_YAML)
    settings = Settings()
    assert settings.server.address == "127.0.0.1:9090"
    assert settings.google_oauth.scopes == ["openid", "email"]
    cookie = settings.google_oauth.state_cookie
    assert (cookie.name, cookie.max_age, cookie.secure, cookie.path) == (
        "yaml_state", 300, True, "/",
    )


def test_settings_from_config_directory(tmp_path):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.yaml").write_text(_YAML)
    assert Settings().google_oauth.state_cookie.name == "yaml_state"


def test_environment_overrides_config_yaml(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text(_YAML)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("GOOGLE_OAUTH__STATE_COOKIE__MAX_AGE", "45")

    settings = Settings()
    assert settings.storage_backend is StorageBackend.MEMORY
    assert settings.google_oauth.state_cookie.max_age == 45
    assert settings.google_oauth.state_cookie.name == "yaml_state"


def test_missing_config_yaml_uses_defaults():
    assert Settings().google_oauth.state_cookie.name == "oauth_state"
