"""
Unit Tests for Settings
=======================
"""

import pytest
from pydantic import ValidationError

from quality_range.config.logging import get_logging_config
from quality_range.config.settings import Settings, get_settings, reload_settings


class TestSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("QUALITY_RANGE_PROCESS_SERVICE_URL", "http://process.local:8080/")
        monkeypatch.setenv("QUALITY_RANGE_HASH_ID_MIN_LENGTH", "12")

        settings = Settings()

        assert settings.process_service_url == "http://process.local:8080"
        assert settings.hash_id_min_length == 12

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="staging")

    def test_log_level_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_comma_separated_lists(self):
        settings = Settings(allowed_hosts="a.example, b.example", codecc_atom_codes="X,Y")

        assert settings.allowed_hosts == ["a.example", "b.example"]
        assert settings.codecc_atom_codes == ["X", "Y"]

    def test_json_list(self):
        assert Settings(codecc_atom_codes='["X", "Y"]').codecc_atom_codes == ["X", "Y"]

    def test_reload_replaces_global(self, monkeypatch):
        original = get_settings()
        monkeypatch.setenv("QUALITY_RANGE_APP_VERSION", "9.9.9")
        try:
            assert reload_settings().app_version == "9.9.9"
            assert get_settings().app_version == "9.9.9"
        finally:
            monkeypatch.delenv("QUALITY_RANGE_APP_VERSION")
            reload_settings()
        assert get_settings() is not original


class TestLoggingConfig:
    def test_console_only_without_log_file(self):
        config = get_logging_config(Settings(environment="testing"))

        assert config["loggers"][""]["handlers"] == ["console"]
        assert config["handlers"]["console"]["formatter"] == "standard"

    def test_production_file_logging(self, tmp_path):
        log_file = str(tmp_path / "range.log")
        config = get_logging_config(Settings(environment="production", log_file=log_file))

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["handlers"]["file"]["filename"] == log_file
        assert config["loggers"][""]["handlers"] == ["console", "file"]
