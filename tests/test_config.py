"""Tests for romswap.config — romswap.yaml parsing."""

from __future__ import annotations

import pytest

from romswap.config import (
    DEFAULT_CHUNK_SIZE,
    RomSwapConfig,
    find_config,
    load_config,
    save_config,
)
from romswap.types import ConfigError, RomType


class TestRomSwapConfig:
    def test_defaults(self):
        cfg = RomSwapConfig()
        assert cfg.default_type is RomType.BIG_ENDIAN
        assert cfg.force is False
        assert cfg.chunk_size == DEFAULT_CHUNK_SIZE
        cfg.validate()

    @pytest.mark.parametrize("size", [0, -4, 6, True])
    def test_invalid_chunk_size(self, size):
        with pytest.raises(ConfigError, match="chunk_size"):
            RomSwapConfig(chunk_size=size).validate()


class TestLoadConfig:
    def test_load_full_config(self, config_yaml):
        cfg = load_config(config_yaml)
        assert cfg.default_type is RomType.LITTLE_ENDIAN
        assert cfg.force is True
        assert cfg.chunk_size == 8

    def test_suffix_as_default_type(self, tmp_path):
        p = tmp_path / "cfg.yaml"
        p.write_text("default_type: v64\n")
        assert load_config(p).default_type is RomType.BYTE_SWAPPED

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nonexistent.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("[ invalid: yaml: {")
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_config(bad)

    def test_load_non_dict(self, tmp_path):
        bad = tmp_path / "list.yaml"
        bad.write_text("- item1\n- item2\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_config(bad)

    def test_load_empty_file(self, tmp_path):
        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        assert load_config(empty) == RomSwapConfig()

    def test_bad_default_type(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("default_type: middle-endian\n")
        with pytest.raises(ConfigError, match="default_type"):
            load_config(bad)

    def test_quoted_force_rejected(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text('force: "false"\n')
        with pytest.raises(ConfigError, match="force must be true or false"):
            load_config(bad)

    def test_bad_chunk_size(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("chunk_size: 10\n")
        with pytest.raises(ConfigError, match="multiple of 4"):
            load_config(bad)


class TestFindConfig:
    def test_defaults_without_file(self):
        assert find_config() == RomSwapConfig()

    def test_picks_up_cwd_file(self, config_yaml):
        # the autouse fixture runs every test from tmp_path
        assert find_config().default_type is RomType.LITTLE_ENDIAN

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            find_config(tmp_path / "missing.yaml")


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        cfg = RomSwapConfig(default_type=RomType.BYTE_SWAPPED, force=True, chunk_size=4096)
        path = tmp_path / "sub" / "romswap.yaml"
        save_config(cfg, path)
        assert load_config(path) == cfg
