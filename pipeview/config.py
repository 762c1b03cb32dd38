"""Pipeview configuration — loads from file, env vars, or direct construction."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from utils.paths import get_config_path


_TRUE_VALUES = {"1", "true", "yes", "on"}


def _to_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return bool(value)


@dataclass
class PipeviewConfig:
    """Configuration for the stdin bridge."""

    chunk_size: int = 512 * 1024
    max_chunks: int = 512
    tmp_dir: str | None = None
    program_tag: str = "pipeview"
    read_timeout: float | None = None
    cd_lists_on_the_fly: bool = True
    last_path_file: str | None = None

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_chunks <= 0:
            raise ValueError(f"max_chunks must be positive, got {self.max_chunks}")

    @property
    def max_input_bytes(self) -> int:
        """Hard ceiling on the number of bytes read from the input stream."""
        return self.chunk_size * self.max_chunks

    @classmethod
    def load(cls, path: str | Path | None = None) -> PipeviewConfig:
        """Load config from a JSON file, falling back to env vars and defaults.

        Lookup order for each field:
        1. Environment variable (PIPEVIEW_CHUNK_SIZE, PIPEVIEW_TMP_DIR, etc.)
        2. JSON file value (if file exists)
        3. Dataclass default
        """
        data: dict = {}

        if path is None:
            path = get_config_path()
        else:
            path = Path(path)

        if path.is_file():
            with open(path) as f:
                data = json.load(f)

        # Overlay env vars (env takes precedence over file)
        env_map = {
            "chunk_size": "PIPEVIEW_CHUNK_SIZE",
            "max_chunks": "PIPEVIEW_MAX_CHUNKS",
            "tmp_dir": "PIPEVIEW_TMP_DIR",
            "program_tag": "PIPEVIEW_PROGRAM_TAG",
            "read_timeout": "PIPEVIEW_READ_TIMEOUT",
            "cd_lists_on_the_fly": "PIPEVIEW_CD_LISTS_ON_THE_FLY",
            "last_path_file": "PIPEVIEW_LAST_PATH_FILE",
        }

        for field_name, env_key in env_map.items():
            env_val = os.environ.get(env_key)
            if env_val is not None:
                data[field_name] = env_val

        # Coerce types
        for int_field in ("chunk_size", "max_chunks"):
            if int_field in data:
                data[int_field] = int(data[int_field])
        if data.get("read_timeout") in ("", None):
            data.pop("read_timeout", None)
        elif "read_timeout" in data:
            data["read_timeout"] = float(data["read_timeout"])
        if "cd_lists_on_the_fly" in data:
            data["cd_lists_on_the_fly"] = _to_bool(data["cd_lists_on_the_fly"])

        # Filter to known fields only
        known = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known}

        return cls(**filtered)
