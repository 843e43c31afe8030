"""Tests for application configuration loading."""

import logging

import pytest

from src.config import AppConfig, ENV_VARS, configure_logging
from src.scoring.exercise_similarity import ScoringWeights


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from real environment variables and any local settings file."""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig.load()
        assert config.usda_api_key is None
        assert config.http_timeout == 10.0
        assert config.log_level == "INFO"
        assert config.alternatives_pool_size == 200
        assert config.scoring == ScoringWeights()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "usda_api_key: yaml-key\n"
            "http_timeout: 5\n"
            "alternatives_pool_size: 50\n"
            "scoring:\n"
            "  relevance_threshold: 10\n"
        )
        config = AppConfig.load(str(path))
        assert config.usda_api_key == "yaml-key"
        assert config.http_timeout == 5.0
        assert config.alternatives_pool_size == 50
        assert config.scoring.relevance_threshold == 10.0
        assert config.scoring.muscle_weight == 50.0

    def test_default_path_picked_up(self, tmp_path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "settings.yaml").write_text("log_level: DEBUG\n")
        assert AppConfig.load().log_level == "DEBUG"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.yaml"
        path.write_text("usda_api_key: yaml-key\n")
        monkeypatch.setenv("USDA_API_KEY", "env-key")
        monkeypatch.setenv("NUTRITION_HTTP_TIMEOUT", "2.5")

        config = AppConfig.load(str(path))
        assert config.usda_api_key == "env-key"
        assert config.http_timeout == 2.5

    def test_explicit_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load(str(tmp_path / "nope.yaml"))

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("something_else: 1\n")
        assert AppConfig.load(str(path)).log_level == "INFO"

    def test_negative_weight_rejected(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("scoring:\n  muscle_weight: -5\n")
        with pytest.raises(ValueError):
            AppConfig.load(str(path))


class TestConfigureLogging:
    def test_sets_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging("debug")
        assert calls["level"] == logging.DEBUG
        assert "%(name)s" in calls["format"]
