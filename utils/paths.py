"""
Centralized path resolution for pipeview.

All internal code uses these functions. No ad-hoc path logic elsewhere.

Structure:
    <tmp-root>/
    └── <program-tag>.<XXXXXX>/   # Synthetic directory (one symlink per record)

    $XDG_CONFIG_HOME/pipeview/
    └── config.json                # Optional configuration file
"""
import os
import secrets
import string
from pathlib import Path

DEFAULT_TMP_ROOT = "/tmp"

SUFFIX_LENGTH = 6
_SUFFIX_ALPHABET = string.ascii_letters + string.digits


def get_config_dir() -> Path:
    """Get the configuration directory."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "pipeview"
    return Path.home() / ".config" / "pipeview"


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / "config.json"


def get_tmp_root(tmp_dir: str | None = None) -> Path:
    """Get the root under which synthetic directories are created.

    Uses *tmp_dir* if given, then ``$TMPDIR``, then ``/tmp``.
    """
    return Path(tmp_dir or os.environ.get("TMPDIR") or DEFAULT_TMP_ROOT)


def random_suffix(length: int = SUFFIX_LENGTH) -> str:
    """Return a random alphanumeric suffix."""
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def synthetic_dir_path(tmp_root: Path, program_tag: str) -> Path:
    """Get a fresh candidate path: ``<tmp_root>/<program_tag>.<suffix>``."""
    return tmp_root / f"{program_tag}.{random_suffix()}"
