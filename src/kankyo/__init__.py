"""Load `.env` files (or any reader) into, and unload them from, the environment.

A `.env` file holds `=`-delimited key-value lines:

    DEBUG=info
    DB_HOST=127.0.0.1 # This is a comment, not part of the value.

    # Empty lines are ignored, as are lines that are only a comment.

Typical use is a single call at start-up:

    import kankyo

    kankyo.load()

Every function takes an optional `environ` table (see `kankyo.environ`); the
default is the process environment.
"""

from __future__ import annotations

import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import IO, Any

from kankyo import utils
from kankyo.environ import EnvironmentTable, MemoryEnvironment, ProcessEnvironment, resolve
from kankyo.errors import KankyoConfigError, KankyoError, KankyoIOError
from kankyo.internal import read_to_string

logger = logging.getLogger("kankyo.load")

DEFAULT_PATH = ".env"


def key(name: str, *, environ: EnvironmentTable | None = None) -> str | None:
    """Return the value of `name`, or None if it is unset or not valid text."""

    raw = resolve(environ).get(name)
    if raw is None:
        return None
    parsed = utils.parse_kv((name, raw))
    return parsed[1] if parsed is not None else None


def load_from_reader(
    reader: IO[Any],
    *,
    overwrite: bool = True,
    encoding: str = "utf-8",
    environ: EnvironmentTable | None = None,
) -> None:
    """Read all of `reader` and set its `.env` lines in the environment.

    Raises `KankyoIOError` if reading or decoding fails; nothing is set then.
    """

    content = read_to_string(reader, encoding)
    utils.set_variables(utils.parse_lines(content), overwrite, environ=environ)


def unload_from_reader(
    reader: IO[Any],
    *,
    encoding: str = "utf-8",
    environ: EnvironmentTable | None = None,
) -> None:
    """Read all of `reader` and remove the keys of its `.env` lines from the environment.

    To unload a known list of keys, use `kankyo.utils.unload` instead.
    """

    content = read_to_string(reader, encoding)
    utils.unload_from_parsed_lines(utils.parse_lines(content), environ=environ)


def _open(path: str | os.PathLike[str]) -> IO[bytes]:
    try:
        return open(path, "rb")
    except OSError as e:
        raise KankyoIOError(e) from e


def load(
    path: str | os.PathLike[str] = DEFAULT_PATH,
    *,
    overwrite: bool = True,
    encoding: str = "utf-8",
    environ: EnvironmentTable | None = None,
) -> None:
    """Load the `.env` file at `path` (default `./.env`) into the environment.

    Raises `KankyoIOError` if the file cannot be opened or read.
    """

    logger.debug("Loading %s", path)
    with _open(path) as f:
        load_from_reader(f, overwrite=overwrite, encoding=encoding, environ=environ)


def unload(
    path: str | os.PathLike[str] = DEFAULT_PATH,
    *,
    encoding: str = "utf-8",
    environ: EnvironmentTable | None = None,
) -> None:
    """Remove every key listed in the `.env` file at `path` (default `./.env`)."""

    logger.debug("Unloading %s", path)
    with _open(path) as f:
        unload_from_reader(f, encoding=encoding, environ=environ)


def load_configured(
    root: Path | None = None, *, environ: EnvironmentTable | None = None
) -> None:
    """Load the `.env` file named by `[tool.kankyo]` in the project's `pyproject.toml`.

    The project root is found by walking upward from the current directory
    when `root` is not given; a relative `path` is resolved against it.
    """

    from kankyo.config import find_project_root, load_config

    if root is None:
        root = find_project_root(Path.cwd())
    cfg = load_config(root=root)
    load(root / cfg.path, overwrite=cfg.overwrite, encoding=cfg.encoding, environ=environ)


def snapshot(*, environ: EnvironmentTable | None = None) -> dict[str, str]:
    """Return a copy of the environment's entries whose key and value are valid text.

    Entries that are not valid UTF-8 are left out.
    """

    out: dict[str, str] = {}
    for pair in resolve(environ).items():
        parsed = utils.parse_kv(pair)
        if parsed is not None:
            out[parsed[0]] = parsed[1]
    return out


def _package_version() -> str:
    try:
        return version("kankyo")
    except PackageNotFoundError:
        # Running from a source checkout, or otherwise not installed.
        return "0.0.0"


__version__ = _package_version()

__all__ = [
    "DEFAULT_PATH",
    "EnvironmentTable",
    "KankyoConfigError",
    "KankyoError",
    "KankyoIOError",
    "MemoryEnvironment",
    "ProcessEnvironment",
    "__version__",
    "key",
    "load",
    "load_configured",
    "load_from_reader",
    "snapshot",
    "unload",
    "unload_from_reader",
    "utils",
]
