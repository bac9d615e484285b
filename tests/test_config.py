"""Tests for environment-based settings."""

from rulesync.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        for var in ("RULESYNC_MIMIR_ADDRESS", "RULESYNC_MIMIR_RULES_PATH", "RULESYNC_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.mimir_address is None
        assert settings.mimir_rules_path == "/prometheus/config/v1/rules"
        assert settings.http_timeout == 30.0
        assert settings.log_level == "WARNING"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("RULESYNC_MIMIR_ADDRESS", "https://mimir.example.com")
        monkeypatch.setenv("RULESYNC_MIMIR_TENANT_ID", "team-a")
        monkeypatch.setenv("RULESYNC_HTTP_TIMEOUT", "5")

        settings = Settings(_env_file=None)

        assert settings.mimir_address == "https://mimir.example.com"
        assert settings.mimir_tenant_id == "team-a"
        assert settings.http_timeout == 5.0

    def test_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("RULESYNC_MIMIR_ADDRESS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("RULESYNC_MIMIR_ADDRESS=https://from-file\n")

        settings = Settings(_env_file=env_file)

        assert settings.mimir_address == "https://from-file"

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()
