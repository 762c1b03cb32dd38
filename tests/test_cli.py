"""CLI tests — fake stdin, real bridge, argparse routing."""

import io
import os
import sys
from unittest.mock import patch

import orjson
import pytest

from pipeview import cli


def _pipe_stdin(monkeypatch, data: bytes):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


class _TtyStdin(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


class TestMain:
    def test_tty_stdin_shows_usage(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", _TtyStdin())
        assert cli.main([]) == 2
        assert "usage: pipeview" in capsys.readouterr().err

    def test_lists_links(self, monkeypatch, capsys, home, tmp_root):
        _pipe_stdin(monkeypatch, b"notes.md\nmissing\n")
        assert cli.main(["--tmp-dir", str(tmp_root)]) == 0

        out = capsys.readouterr().out
        assert f"notes.md -> {home}/notes.md" in out
        assert "missing" not in out
        # Removed on exit
        assert list(tmp_root.iterdir()) == []

    def test_json_report(self, monkeypatch, capsys, home, tmp_root):
        _pipe_stdin(monkeypatch, b"relative.txt\n")
        assert cli.main(["--json", "--tmp-dir", str(tmp_root)]) == 0

        report = orjson.loads(capsys.readouterr().out)
        assert report["status"] == "switched"
        assert report["manifest"]["links"] == {"relative.txt": f"{home}/relative.txt"}

    def test_keep_prints_directory(self, monkeypatch, capsys, home, tmp_root):
        _pipe_stdin(monkeypatch, b"notes.md\n")
        assert cli.main(["--keep", "--no-list", "--tmp-dir", str(tmp_root)]) == 0

        last_line = capsys.readouterr().out.strip().splitlines()[-1]
        assert os.path.dirname(last_line) == str(tmp_root)
        assert os.path.islink(os.path.join(last_line, "notes.md"))

    def test_empty_input_exits_zero(self, monkeypatch, capsys, home, tmp_root):
        _pipe_stdin(monkeypatch, b"")
        assert cli.main(["--tmp-dir", str(tmp_root)]) == 0
        assert capsys.readouterr().out == ""

    def test_directory_failure_exits_one(self, monkeypatch, home, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        _pipe_stdin(monkeypatch, b"notes.md\n")
        assert cli.main(["--tmp-dir", str(blocker)]) == 1

    def test_shell_runs_in_directory(self, monkeypatch, home, tmp_root):
        _pipe_stdin(monkeypatch, b"notes.md\n")

        with patch.object(cli, "run_shell", return_value=0) as mock_shell:
            assert cli.main(["--shell", "--no-list", "--tmp-dir", str(tmp_root)]) == 0
            directory = mock_shell.call_args[0][0]
            assert os.path.dirname(directory) == str(tmp_root)


class TestRunShell:
    def test_no_terminal(self, monkeypatch):
        monkeypatch.setattr(cli, "reattach_tty", lambda: False)
        assert cli.run_shell("/tmp") == 1

    def test_uses_shell_env(self, monkeypatch):
        monkeypatch.setattr(cli, "reattach_tty", lambda: True)
        monkeypatch.setenv("SHELL", "/bin/zsh")
        with patch.object(cli.subprocess, "call", return_value=0) as mock_call:
            assert cli.run_shell("/tmp/pipeview.abc123") == 0
            mock_call.assert_called_once_with(["/bin/zsh"], cwd="/tmp/pipeview.abc123")


class TestLastPath:
    def test_empty_input_saves_start_directory(self, monkeypatch, home, tmp_root, tmp_path):
        last = tmp_path / "state" / ".last"
        monkeypatch.setenv("PIPEVIEW_LAST_PATH_FILE", str(last))
        _pipe_stdin(monkeypatch, b"")

        assert cli.main(["--tmp-dir", str(tmp_root)]) == 0
        assert last.read_text() == f"*0:{home}\n"

    def test_synthetic_directory_not_saved(self, monkeypatch, home, tmp_root, tmp_path):
        last = tmp_path / ".last"
        monkeypatch.setenv("PIPEVIEW_LAST_PATH_FILE", str(last))
        _pipe_stdin(monkeypatch, b"notes.md\n")

        assert cli.main(["--no-list", "--tmp-dir", str(tmp_root)]) == 0
        assert not last.exists()
