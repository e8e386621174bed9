"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from anchorsnap.settings import DecodingSettings, OutputSettings, get_settings
from anchorsnap.settings.main import _Settings, _reload_settings

_ENV_VARS = (
    "PROGRAM_ID",
    "SCHEMA_PATH",
    "LOG_LEVEL",
    "MAX_WORKERS",
    "DECODING_ALLOWED_ACCOUNT_TYPES",
    "DECODING_STRICT_TRAILING_BYTES",
    "DECODING_MAX_DEPTH",
    "OUTPUT_SNAPSHOT_PATH",
    "OUTPUT_INDENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the process environment and any local .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    get_settings.cache_clear()


class TestDefaults:

    def test_defaults(self):
        settings = _Settings()

        assert settings.program_id is None
        assert settings.schema_path is None
        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.max_workers == 1
        assert settings.decoding.get_allowed_account_types() is None
        assert settings.decoding.strict_trailing_bytes is False
        assert settings.decoding.max_depth == 32
        assert settings.output.snapshot_path == Path("snapshots/snapshot.json")
        assert settings.output.indent == 2


class TestEnvironment:
    """Test values loaded from environment variables."""

    def test_top_level(self, monkeypatch):
        monkeypatch.setenv("PROGRAM_ID", "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB")
        monkeypatch.setenv("SCHEMA_PATH", "idl/amm.json")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_JSON", "false")
        monkeypatch.setenv("MAX_WORKERS", "8")

        settings = _Settings()

        assert settings.program_id == "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB"
        assert settings.schema_path == Path("idl/amm.json")
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False
        assert settings.max_workers == 8

    def test_decoding(self, monkeypatch):
        monkeypatch.setenv("DECODING_ALLOWED_ACCOUNT_TYPES", " Pool , LockEscrow,,")
        monkeypatch.setenv("DECODING_STRICT_TRAILING_BYTES", "true")
        monkeypatch.setenv("DECODING_MAX_DEPTH", "4")

        decoding = DecodingSettings()

        assert decoding.allowed_account_types == "Pool,LockEscrow"
        assert decoding.get_allowed_account_types() == ["Pool", "LockEscrow"]
        assert decoding.strict_trailing_bytes is True
        assert decoding.max_depth == 4

    def test_output(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OUTPUT_SNAPSHOT_PATH", str(tmp_path / "pools.json"))
        monkeypatch.setenv("OUTPUT_INDENT", "4")

        output = OutputSettings()

        assert output.snapshot_path == tmp_path / "pools.json"
        assert output.indent == 4

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("PROGRAM_ID=from-dotenv\n", encoding="utf-8")

        assert _Settings().program_id == "from-dotenv"


class TestValidation:

    @pytest.mark.parametrize("name, value", [
        ("LOG_LEVEL", "verbose"),
        ("MAX_WORKERS", "0"),
        ("MAX_WORKERS", "65"),
    ])
    def test_rejects_invalid_top_level(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            _Settings()

    @pytest.mark.parametrize("name, value", [
        ("DECODING_ALLOWED_ACCOUNT_TYPES", "Pool,Lock-Escrow"),
        ("DECODING_MAX_DEPTH", "0"),
    ])
    def test_rejects_invalid_decoding(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValidationError):
            DecodingSettings()


class TestSingleton:

    def test_cached(self):
        get_settings.cache_clear()

        assert get_settings() is get_settings()

    def test_reload(self, monkeypatch):
        get_settings.cache_clear()
        first = get_settings()
        monkeypatch.setenv("MAX_WORKERS", "3")

        reloaded = _reload_settings()

        assert reloaded is not first
        assert reloaded.max_workers == 3
