"""Tests for configuration loading and validation."""

import json
from pathlib import Path

import pytest

from media_manager.exceptions import ConfigurationError
from media_manager.models.config import (
    DEFAULT_PROMPT,
    Config,
    load_config,
    save_config,
    validate_config_json,
)


class TestConfig:

    def test_defaults(self):
        config = Config.default()
        assert config.prompt == DEFAULT_PROMPT
        assert config.default_data_file is None
        assert config.log_level == "WARNING"
        assert config.restore_on_start is False
        assert config.encoding == "utf-8"

    def test_from_dict_converts_data_file(self):
        config = Config.from_dict({"default_data_file": "media.txt", "restore_on_start": True})
        assert config.default_data_file == Path("media.txt")
        assert config.restore_on_start is True

    @pytest.mark.parametrize("data", [
        {"log_level": "LOUD"},
        {"restore_on_start": "yes"},
        {"unknown": 1},
        {"default_data_file": ""},
        [],
    ])
    def test_from_dict_rejects_invalid(self, data):
        with pytest.raises(ConfigurationError):
            Config.from_dict(data)

    def test_validate_reports_path(self):
        errors = validate_config_json({"log_level": 3})
        assert len(errors) == 1
        assert "log_level" in errors[0]

    def test_validate_valid(self):
        assert validate_config_json({"prompt": "> ", "encoding": "latin-1"}) == []


class TestLoadSave:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.json"
        config = Config(prompt="> ", default_data_file=Path("data.txt"), log_level="DEBUG")
        save_config(config, path)

        assert json.loads(path.read_text(encoding="utf-8"))["default_data_file"] == "data.txt"
        assert load_config(path) == config

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="JSON parsing error"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Error reading"):
            load_config(tmp_path / "absent.json")
