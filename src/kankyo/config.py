"""Optional project configuration for kankyo.

Settings live in the `[tool.kankyo]` table of `pyproject.toml`. Every key is
optional; a project without the table (or without `pyproject.toml` next to the
given root) gets the defaults, which match `kankyo.load()`.
"""

from __future__ import annotations

import codecs
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kankyo.errors import KankyoConfigError

logger = logging.getLogger("kankyo.config")


@dataclass(frozen=True)
class DotenvConfig:
    path: str = ".env"
    overwrite: bool = True
    encoding: str = "utf-8"


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `pyproject.toml`."""

    cur = start.resolve()
    if not cur.is_dir():
        cur = cur.parent
    while True:
        if (cur / "pyproject.toml").is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise KankyoConfigError("Could not find pyproject.toml by walking upward from start path.")


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise KankyoConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_bool(value: Any, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise KankyoConfigError(f"Expected {name} to be a boolean.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise KankyoConfigError(f"Expected {name} to be a string.")
    return value


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> DotenvConfig:
    """Load and validate `[tool.kankyo]`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    A missing `pyproject.toml` under `root` yields the defaults; a missing
    explicit `config_path` is an error.
    """

    explicit = config_path is not None
    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / "pyproject.toml"

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        if explicit:
            raise KankyoConfigError(f"Missing config file at: {config_path}") from e
        logger.debug("No %s; using defaults", config_path)
        return DotenvConfig()
    except OSError as e:
        raise KankyoConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise KankyoConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise KankyoConfigError(f"Invalid TOML in {config_path}: {e}") from e

    tool_tbl = _as_table(data.get("tool"), name="tool")
    tbl = _as_table(tool_tbl.get("kankyo"), name="tool.kankyo")
    defaults = DotenvConfig()

    if "path" in tbl:
        path = _as_str(tbl["path"], name="tool.kankyo.path")
    else:
        path = defaults.path

    if "overwrite" in tbl:
        overwrite = _as_bool(tbl["overwrite"], name="tool.kankyo.overwrite")
    else:
        overwrite = defaults.overwrite

    if "encoding" in tbl:
        encoding = _as_str(tbl["encoding"], name="tool.kankyo.encoding")
    else:
        encoding = defaults.encoding

    # Validation
    if not path.strip():
        raise KankyoConfigError("Invalid config: tool.kankyo.path must not be empty.")

    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise KankyoConfigError(f"Invalid config: unknown encoding {encoding!r}.") from e

    return DotenvConfig(path=path, overwrite=overwrite, encoding=encoding)
