"""Tests for mizan.core.config."""

import json
import os

import pytest
import yaml

from mizan.core.config import Config, get_config, reset_config


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.get("obligations.school") is None
        assert config.get("obligations.threshold_standard") == "gold"
        assert config.get("pricing.gold_per_gram") == 85.2
        assert config.get("pricing.silver_per_gram") == 1.0
        assert config.get("logging.level") == "WARNING"

    def test_custom_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_OBLIGATIONS__SCHOOL", "maliki")
        config = Config(env_prefix="MYAPP_")
        assert config.get("obligations.school") == "maliki"

    def test_yaml_config_file(self, tmp_config_file):
        config = Config(config_file=tmp_config_file)
        assert config.get("obligations.school") == "Shafi'i"
        assert config.get("pricing.gold_per_gram") == 75
        # untouched defaults survive the merge
        assert config.get("obligations.include_retirement") is False

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"obligations": {"school": "hanbali"}}, f)

        config = Config(config_file=config_path)
        assert config.get("obligations.school") == "hanbali"

    def test_missing_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "nope.yaml"))
        assert config.get("obligations.threshold_standard") == "gold"

    def test_env_overrides_file(self, tmp_dir, monkeypatch):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"obligations": {"school": "hanafi"}}, f)

        monkeypatch.setenv("MIZAN_OBLIGATIONS__SCHOOL", "jafari")
        config = Config(config_file=config_path)
        assert config.get("obligations.school") == "jafari"

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self):
        config = Config()
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_extra_defaults(self):
        config = Config(defaults={"custom": {"key": "value"}})
        assert config.get("custom.key") == "value"


class TestGetConfig:
    def test_singleton(self, tmp_config_file):
        c1 = get_config(config_file=tmp_config_file)
        c2 = get_config()
        assert c1 is c2

    def test_reset_clears_singleton(self):
        c1 = get_config()
        reset_config()
        c2 = get_config()
        assert c1 is not c2


@pytest.mark.smoke
def test_env_values_are_validated(monkeypatch):
    monkeypatch.setenv("MIZAN_OBLIGATIONS__INCLUDE_JEWELRY", "true")
    monkeypatch.setenv("MIZAN_PRICING__GOLD_PER_GRAM", "70.5")
    cfg = Config().validated()
    assert cfg.obligations.include_jewelry is True
    assert cfg.pricing.gold_per_gram == 70.5
