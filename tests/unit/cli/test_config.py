"""Unit tests for cli.config module."""

import os

import pytest
import yaml

from src.cli.config import ConfigLoader, EditorConfig
from src.cli.errors import ConfigError, ConfigFilesystemError


def write_config(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestLoad:
    """Test cases for ConfigLoader.load."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert ConfigLoader.load(str(tmp_path / "missing.yaml")) == EditorConfig()

    def test_empty_file_gives_defaults(self, tmp_path):
        assert ConfigLoader.load(write_config(tmp_path, "\n")) == EditorConfig()

    def test_comment_only_file_gives_defaults(self, tmp_path):
        assert ConfigLoader.load(write_config(tmp_path, "# nothing here\n")) == EditorConfig()

    def test_all_fields(self, tmp_path):
        path = write_config(tmp_path, (
            "debounce_seconds: 2\n"
            "load_delay_seconds: 0.5\n"
            "io_workers: 8\n"
            "computation_workers: 1\n"
            "store_path: ' drafts/pages.yaml '\n"
            "api_url: https://telegraph.example.com/\n"
        ))

        config = ConfigLoader.load(path)

        assert config == EditorConfig(
            debounce_seconds=2.0,
            load_delay_seconds=0.5,
            io_workers=8,
            computation_workers=1,
            store_path="drafts/pages.yaml",
            api_url="https://telegraph.example.com",
        )
        assert isinstance(config.debounce_seconds, float)

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config(tmp_path, "io_workers: [1,"))
        assert "Invalid YAML syntax" in str(exc_info.value)

    def test_not_a_dictionary(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config(tmp_path, "- 1\n- 2\n"))
        assert "got list" in str(exc_info.value)

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(ConfigFilesystemError) as exc_info:
            ConfigLoader.load(str(tmp_path))
        assert exc_info.value.operation == "read"


class TestValidation:
    """Test cases for field validation."""

    @pytest.mark.parametrize("content,field", [
        ("unknown: 1\n", None),
        ("debounce_seconds: -0.5\n", "debounce_seconds"),
        ("load_delay_seconds: soon\n", "load_delay_seconds"),
        ("debounce_seconds: true\n", "debounce_seconds"),
        ("io_workers: 0\n", "io_workers"),
        ("computation_workers: 1.5\n", "computation_workers"),
        ("store_path: ''\n", "store_path"),
        ("store_path: 3\n", "store_path"),
        ("api_url: ftp://telegraph.example.com\n", "api_url"),
    ])
    def test_invalid_values(self, tmp_path, content, field):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config(tmp_path, content))
        assert exc_info.value.config_field == field

    def test_unknown_fields_are_listed(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(write_config(tmp_path, "zeta: 1\nalpha: 2\n"))
        assert "alpha, zeta" in str(exc_info.value)

    def test_zero_delays_allowed(self, tmp_path):
        config = ConfigLoader.load(write_config(tmp_path, "debounce_seconds: 0\nload_delay_seconds: 0\n"))
        assert config.debounce_seconds == 0.0
        assert config.load_delay_seconds == 0.0


class TestSave:
    """Test cases for ConfigLoader.save."""

    def test_save_and_load(self, tmp_path):
        path = str(tmp_path / ".telex-editor" / "config.yaml")
        config = EditorConfig(debounce_seconds=0.5, api_url="https://telegraph.example.com")

        ConfigLoader.save(path, config)

        assert os.path.exists(path)
        assert ConfigLoader.load(path) == config
        with open(path, encoding="utf-8") as f:
            assert list(yaml.safe_load(f))[0] == "debounce_seconds"

    def test_save_to_unwritable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")

        with pytest.raises(ConfigFilesystemError) as exc_info:
            ConfigLoader.save(str(blocker / "config.yaml"), EditorConfig())

        assert exc_info.value.operation == "create_directory"
