import pytest

from pipeview.config import PipeviewConfig
from pipeview.session import Session


@pytest.fixture
def home(tmp_path, monkeypatch):
    """A working directory with a few files; the process is chdir'd into it."""
    d = tmp_path / "home"
    d.mkdir()
    (d / "relative.txt").write_text("relative\n", encoding="utf-8")
    (d / "notes.md").write_text("# notes\n", encoding="utf-8")

    sub = d / "sub"
    sub.mkdir()
    (sub / "inner.py").write_text("print('hi')\n", encoding="utf-8")

    # Dangling symlink: exists for lstat, not for stat
    (d / "dangling").symlink_to(d / "missing-target")

    monkeypatch.chdir(d)
    return d


@pytest.fixture
def tmp_root(tmp_path):
    root = tmp_path / "tmproot"
    root.mkdir()
    return root


@pytest.fixture
def config(tmp_root):
    """Small chunks so the ceiling is easy to reach in tests."""
    return PipeviewConfig(chunk_size=64, max_chunks=4, tmp_dir=str(tmp_root))


@pytest.fixture
def session(home):
    s = Session(str(home))
    yield s
    s.teardown()
