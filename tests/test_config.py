"""Tests for the configuration."""

import json

from soupxpath.utils.config import DEFAULT_CONFIG, Config


class TestConfig:

    def test_defaults_without_file(self, tmp_path):
        config = Config(str(tmp_path / "missing" / "config.json"))
        assert config.config == DEFAULT_CONFIG
        assert config.config is not DEFAULT_CONFIG
        assert not (tmp_path / "missing").exists()

    def test_dotted_keys(self, tmp_path):
        config = Config(str(tmp_path / "config.json"))
        assert config.get('network.timeout') == 30
        assert config.get('network') == DEFAULT_CONFIG['network']
        assert config.get('network.nothing', 'fallback') == 'fallback'
        assert config.get('network.timeout.deeper', 'fallback') == 'fallback'

    def test_stored_values_merge_over_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": {"timeout": 5}, "custom": {"value": 1}}))
        config = Config(str(path))
        assert config.get('network.timeout') == 5
        assert config.get('network.retries') == 3
        assert config.get('parser.features') == "html5lib"
        assert config.get('custom.value') == 1

    def test_overrides_apply_over_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": {"timeout": 5, "retries": 1}}))
        config = Config(str(path), {'network': {'timeout': 9}})
        assert config.get('network.timeout') == 9
        assert config.get('network.retries') == 1
        assert DEFAULT_CONFIG['network']['timeout'] == 30

    def test_invalid_files_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert Config(str(path)).config == DEFAULT_CONFIG

        path.write_text("[1, 2]")
        assert Config(str(path)).config == DEFAULT_CONFIG

    def test_default_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        config = Config()
        assert config.config_path == str(tmp_path / ".soupxpath" / "config.json")
