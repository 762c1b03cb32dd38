"""Tests for utils/paths.py."""

from pathlib import Path

from utils.paths import get_config_path, get_tmp_root, random_suffix, synthetic_dir_path


class TestTmpRoot:
    def test_explicit_dir_wins(self, monkeypatch):
        monkeypatch.setenv("TMPDIR", "/from/env")
        assert get_tmp_root("/explicit") == Path("/explicit")

    def test_tmpdir_env(self, monkeypatch):
        monkeypatch.setenv("TMPDIR", "/from/env")
        assert get_tmp_root() == Path("/from/env")

    def test_falls_back_to_tmp(self, monkeypatch):
        monkeypatch.delenv("TMPDIR", raising=False)
        assert get_tmp_root() == Path("/tmp")


class TestNaming:
    def test_suffix_is_six_alphanumerics(self):
        suffix = random_suffix()
        assert len(suffix) == 6
        assert suffix.isalnum()

    def test_suffixes_vary(self):
        assert len({random_suffix() for _ in range(20)}) > 1

    def test_synthetic_dir_path(self):
        path = synthetic_dir_path(Path("/tmp"), "pipeview")
        assert path.parent == Path("/tmp")
        assert path.name.startswith("pipeview.")
        assert len(path.name) == len("pipeview.") + 6


class TestConfigPath:
    def test_xdg_config_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "pipeview" / "config.json"

    def test_home_fallback(self, monkeypatch, tmp_path):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_config_path() == tmp_path / ".config" / "pipeview" / "config.json"
