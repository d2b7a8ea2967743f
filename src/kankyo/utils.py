"""Lower-level functions for parsing `.env` text and applying it to an environment.

Most callers want the functions re-exported from the package root (`kankyo.load`,
`kankyo.unload`, ...). These are the building blocks those functions use.

Every applier accepts an optional `environ` table; it defaults to the process
environment.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from kankyo.environ import EnvironmentTable, RawEntry, resolve

logger = logging.getLogger("kankyo.utils")

# (key, value) of one `.env` line, both stripped. "FOO=bar" -> ("FOO", "bar").
ParsedLine = tuple[str, str]


def parse_line(line: str) -> ParsedLine | None:
    """Parse one `.env` line into `(key, value)`, or None if it is not an assignment.

    The key is everything before the first `=`; the value runs to the first `#`
    (or the end of the line). A `#` before the first `=` makes the whole line a
    comment. An empty value is valid.

    >>> parse_line("HELLO =world # greeting")
    ('HELLO', 'world')
    >>> parse_line("HELLO=")
    ('HELLO', '')
    >>> parse_line("# HELLO=world") is None
    True
    """

    equals = line.find("=")
    comment = line.find("#")

    if equals == -1:
        return None
    if comment != -1 and comment < equals:
        return None

    key = line[:equals]
    value = line[equals + 1 : comment] if comment != -1 else line[equals + 1 :]
    return key.strip(), value.strip()


def _split_lines(buf: str) -> list[str]:
    # Only "\n" (optionally preceded by "\r") ends a line; other Unicode line
    # boundaries such as form feed stay part of the value.
    lines = buf.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_lines(buf: str) -> list[ParsedLine]:
    """Parse every line of `buf`, keeping the assignments in their original order."""

    lines = [parsed for parsed in map(parse_line, _split_lines(buf)) if parsed is not None]
    logger.debug("Parsed %d assignment(s)", len(lines))
    return lines


def only_keys(lines: Iterable[ParsedLine], keys: list[str] | None = None) -> list[str]:
    """Append the key of each parsed line to `keys` and return it.

    Passing an existing list lets a caller reuse it; a new list is created
    otherwise.
    """

    if keys is None:
        keys = []
    keys.extend(key for key, _ in lines)
    return keys


def _as_text(part: str | bytes) -> str | None:
    if isinstance(part, bytes):
        try:
            return part.decode("utf-8")
        except UnicodeDecodeError:
            return None
    try:
        # Undecodable OS bytes surface as lone surrogates (surrogateescape).
        part.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return part


def parse_kv(pair: RawEntry) -> tuple[str, str] | None:
    """Convert a raw environment entry to text, or None if either half is not valid UTF-8."""

    key, value = _as_text(pair[0]), _as_text(pair[1])
    if key is None or value is None:
        return None
    return key, value


def set_variables(
    lines: Iterable[ParsedLine],
    overwrite: bool = True,
    *,
    environ: EnvironmentTable | None = None,
) -> None:
    """Set each parsed line in the environment, in order.

    With `overwrite=False`, keys that are already set keep their value. Pairs
    the environment cannot store (empty key, NUL bytes) are skipped.
    """

    table = resolve(environ)
    applied = 0
    for key, value in lines:
        if not overwrite and key in table:
            logger.debug("Keeping existing value for %s", key)
            continue
        try:
            table.set(key, value)
        except ValueError as e:
            logger.debug("Skipping %r: %s", key, e)
            continue
        applied += 1
    logger.debug("Set %d variable(s)", applied)


def unload(keys: Iterable[str], *, environ: EnvironmentTable | None = None) -> None:
    """Remove each key from the environment; keys that are not set are ignored."""

    table = resolve(environ)
    for key in keys:
        table.remove(key)


def unload_from_parsed_lines(
    lines: Iterable[ParsedLine], *, environ: EnvironmentTable | None = None
) -> None:
    """Remove the key of every parsed line from the environment."""

    table = resolve(environ)
    for key, _ in lines:
        table.remove(key)
