"""Environment table capability.

Every applier function in `kankyo.utils` works against an `EnvironmentTable`
rather than `os.environ` directly, so the core can run against the real process
environment or an isolated in-memory table.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

RawEntry = tuple[str | bytes, str | bytes]


def check_assignable(key: str, value: str) -> None:
    """Raise `ValueError` for a pair the OS environment would refuse."""

    if not key or "=" in key:
        raise ValueError(f"illegal environment variable name: {key!r}")
    if "\0" in key or "\0" in value:
        raise ValueError("embedded null byte")


class EnvironmentTable(ABC):
    """Minimal get/set/remove/enumerate view of an environment."""

    @abstractmethod
    def get(self, key: str) -> str | bytes | None:
        """Return the raw value for `key`, or None when it is not set."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or replace `key`. Raises `ValueError` if the pair is not storable."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove `key`; removing an absent key does nothing."""

    @abstractmethod
    def items(self) -> Iterable[RawEntry]:
        """Return the raw entries; parts may be bytes the caller must decode."""

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class ProcessEnvironment(EnvironmentTable):
    """The environment of the running process (`os.environ`)."""

    def get(self, key: str) -> str | None:
        try:
            return os.environ.get(key)
        except UnicodeEncodeError:
            # A name with lone surrogates cannot be encoded, so it cannot be set.
            return None

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value

    def remove(self, key: str) -> None:
        if self.get(key) is not None:
            del os.environ[key]

    def items(self) -> list[RawEntry]:
        # `os.environb` exposes the undecoded bytes on POSIX; Windows only has
        # the str view, whose entries are always valid text.
        environb = getattr(os, "environb", None)
        if environb is not None:
            return list(environb.items())
        return list(os.environ.items())

    def __repr__(self) -> str:
        return "ProcessEnvironment()"


class MemoryEnvironment(EnvironmentTable):
    """A dict-backed table that never touches the process environment.

    `initial` is copied. It may contain bytes entries, standing in for OS
    entries that are not valid text.
    """

    def __init__(self, initial: Mapping[str | bytes, str | bytes] | None = None) -> None:
        self._vars: dict[str | bytes, str | bytes] = dict(initial) if initial else {}

    def get(self, key: str) -> str | bytes | None:
        return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        check_assignable(key, value)
        self._vars[key] = value

    def remove(self, key: str) -> None:
        self._vars.pop(key, None)

    def items(self) -> list[RawEntry]:
        return list(self._vars.items())

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"MemoryEnvironment({len(self._vars)} entries)"


_process_environment = ProcessEnvironment()


def resolve(environ: EnvironmentTable | None) -> EnvironmentTable:
    """Return `environ`, or the process environment when it is None."""

    return _process_environment if environ is None else environ
