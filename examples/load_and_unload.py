"""Load variables from a reader, then unload them again.

Run from the repository root:

    python examples/load_and_unload.py
"""

from __future__ import annotations

import io
import os

import kankyo


def main() -> None:
    # Load as early as possible; normally the reader is an open `.env` file.
    cursor = io.BytesIO(b"FOO=bar\nBAR=baz # not part of the value\n")

    print(f"FOO doesn't exist: {'FOO' not in os.environ}")

    kankyo.load_from_reader(cursor)
    print(f"FOO exists: {kankyo.key('FOO') == 'bar'}")
    print(f"BAR is {kankyo.key('BAR')!r}")

    cursor.seek(0)
    kankyo.unload_from_reader(cursor)
    print(f"FOO doesn't exist: {'FOO' not in os.environ}")


if __name__ == "__main__":
    main()
