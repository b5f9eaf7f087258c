"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- load_config() precedence: defaults < YAML < env vars < kwargs
- ConfigError mapping for missing files, bad YAML and invalid values
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from covmodel.config.loader import GLOBAL_CONFIG_PATH, _load_yaml, load_config
from covmodel.config.models import ParserConfig
from covmodel.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path) -> Iterator[None]:
    """Drop COVMODEL__ env vars and point the global config at a missing file."""
    env = {k: v for k, v in os.environ.items() if not k.upper().startswith("COVMODEL__")}
    with (
        patch.dict(os.environ, env, clear=True),
        patch("covmodel.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
    ):
        yield


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("parser:\n  max_workers: 2\n")

        assert _load_yaml(yaml_file) == {"parser": {"max_workers": 2}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("filters:\n  classes:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestLoadConfig:
    """Tests for load_config function."""

    def test_returns_default_config_when_no_files(self) -> None:
        config = load_config()
        assert config.logging.level == "INFO"
        assert config.parser.max_workers is None
        assert config.parser.verbosity == "INFO"
        assert config.filters.classes == []

    def test_loads_explicit_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covmodel.yaml"
        config_file.write_text(
            "parser:\n"
            "  max_workers: 3\n"
            "  verbosity: VERBOSE\n"
            "filters:\n"
            "  classes:\n"
            "    - '+com/example/*'\n"
            "    - '-*Test'\n"
        )

        config = load_config(config_file)

        assert config.parser.max_workers == 3
        assert config.parser.verbosity == "VERBOSE"
        assert config.filters.classes == ["+com/example/*", "-*Test"]

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "absent.yaml")
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covmodel.yaml"
        config_file.write_text("parser:\n  max_workers: 2\n")

        with patch.dict(os.environ, {"COVMODEL__PARSER__MAX_WORKERS": "5"}):
            config = load_config(config_file)

        assert config.parser.max_workers == 5

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covmodel.yaml"
        config_file.write_text("parser:\n  max_workers: 2\n")

        with patch.dict(os.environ, {"COVMODEL__PARSER__MAX_WORKERS": "5"}):
            config = load_config(config_file, parser=ParserConfig(max_workers=7))

        assert config.parser.max_workers == 7

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "covmodel.yaml"
        config_file.write_text("parser:\n  max_workers: 0\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(config_file)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"].startswith("parser")


class TestGlobalConfigPath:
    """Tests for GLOBAL_CONFIG_PATH constant."""

    def test_is_path_object(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)

    def test_is_in_user_config(self) -> None:
        assert ".config/covmodel" in str(GLOBAL_CONFIG_PATH)
