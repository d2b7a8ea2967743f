from __future__ import annotations

from collections.abc import Callable

import pytest


@pytest.fixture
def scrub_env(monkeypatch) -> Callable[..., None]:
    """Unset process variables and have them removed again after the test."""

    def scrub(*names: str) -> None:
        for name in names:
            # setenv records the prior state, so undo also drops values set later.
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)

    return scrub
