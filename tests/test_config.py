"""Tests for LifeConfig defaults and environment overrides."""

from pathlib import Path

import pytest
from lifeboard.config import LifeConfig


class TestDefaults:

    def test_board_limits(self):
        config = LifeConfig()
        assert config.max_width == 100
        assert config.max_height == 100
        assert config.min_population == 1
        assert config.max_population == 1000
        assert config.default_max_attempts == 1000
        assert config.max_generations == 10000
        assert config.storage_dir is None
        assert config.log_level == "INFO"

    def test_log_level_normalized(self):
        assert LifeConfig(log_level="debug").log_level == "DEBUG"

    def test_storage_dir_becomes_path(self):
        assert LifeConfig(storage_dir="boards").storage_dir == Path("boards")

    @pytest.mark.parametrize("kwargs", [
        {"max_width": 0},
        {"max_height": -5},
        {"min_population": 10, "max_population": 5},
        {"default_max_attempts": -1},
        {"default_max_attempts": 500, "max_generations": 100},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            LifeConfig(**kwargs)


class TestFromEnv:

    def test_empty_environment_gives_defaults(self):
        assert LifeConfig.from_env({}) == LifeConfig()

    def test_overrides(self, tmp_path):
        config = LifeConfig.from_env({
            "LIFEBOARD_MAX_WIDTH": "50",
            "LIFEBOARD_MAX_POPULATION": "200",
            "LIFEBOARD_DEFAULT_MAX_ATTEMPTS": "25",
            "LIFEBOARD_MAX_GENERATIONS": "300",
            "LIFEBOARD_STORAGE_DIR": str(tmp_path),
            "LIFEBOARD_LOG_LEVEL": "warning",
            "UNRELATED": "ignored",
        })
        assert config.max_width == 50
        assert config.max_height == 100
        assert config.max_population == 200
        assert config.default_max_attempts == 25
        assert config.max_generations == 300
        assert config.storage_dir == tmp_path
        assert config.log_level == "WARNING"

    def test_blank_values_ignored(self):
        assert LifeConfig.from_env({"LIFEBOARD_MAX_WIDTH": ""}).max_width == 100

    def test_bad_integer_names_variable(self):
        with pytest.raises(ValueError, match="LIFEBOARD_MAX_HEIGHT must be an integer"):
            LifeConfig.from_env({"LIFEBOARD_MAX_HEIGHT": "tall"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("LIFEBOARD_MIN_POPULATION", "3")
        assert LifeConfig.from_env().min_population == 3
