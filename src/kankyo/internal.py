from __future__ import annotations

from typing import IO, Any

from kankyo.errors import KankyoIOError


def read_to_string(reader: IO[Any], encoding: str = "utf-8") -> str:
    """Read everything from `reader` as text.

    Binary streams are decoded strictly; read and decode failures are raised as
    `KankyoIOError`. The reader is left open.
    """

    try:
        data = reader.read()
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data).decode(encoding)
        return data
    except (OSError, UnicodeDecodeError) as e:
        raise KankyoIOError(e) from e
