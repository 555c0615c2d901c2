"""
Tests for configuration loading.
"""

from datetime import time

import pytest
from pydantic import ValidationError

from clinicslots.config import AppConfig, DefaultsConfig


class TestDefaultsConfig:

    def test_defaults(self):
        defaults = DefaultsConfig()

        assert defaults.duration_minutes == 30
        assert defaults.get_start_time() == time(7, 0)
        assert defaults.get_end_time() == time(20, 0)

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValidationError):
            DefaultsConfig(duration_minutes=0)

    def test_hour_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="Hour must be between 0 and 23"):
            DefaultsConfig(start_hour=24)

    def test_closing_before_opening_rejected(self):
        with pytest.raises(ValidationError, match="end_hour must be later"):
            DefaultsConfig(start_hour=18, end_hour=9)


class TestAppConfig:

    def test_closed_weekdays_deduplicated(self):
        config = AppConfig(closed_weekdays=[6, 5, 6])

        assert config.closed_weekdays == [6, 5]

    def test_invalid_weekday_rejected(self):
        with pytest.raises(ValidationError):
            AppConfig(closed_weekdays=[7])

    def test_log_level_normalised(self):
        assert AppConfig(log_level="debug").log_level == "DEBUG"

        with pytest.raises(ValidationError):
            AppConfig(log_level="chatty")

    def test_working_hours(self):
        config = AppConfig(
            defaults={"start_hour": 8, "end_hour": 18},
            closed_weekdays=[5, 6],
            timezone="America/Recife",
        )

        working_hours = config.working_hours()

        assert working_hours.start_time == time(8, 0)
        assert working_hours.end_time == time(18, 0)
        assert working_hours.closed_weekdays == [5, 6]
        assert working_hours.timezone == "America/Recife"

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            "api_base_url: https://clinic.example.com\n"
            "api_token: secret\n"
            "defaults:\n"
            "  duration_minutes: 45\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.api_base_url == "https://clinic.example.com"
        assert config.api_token == "secret"
        assert config.defaults.duration_minutes == 45
        assert config.timezone == "America/Sao_Paulo"

    def test_load_empty_yaml_uses_defaults(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("", encoding="utf-8")

        assert AppConfig.load_from_yaml(config_path) == AppConfig()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("defaults: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_load_non_mapping_root(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping at the root"):
            AppConfig.load_from_yaml(config_path)
