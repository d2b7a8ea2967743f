from __future__ import annotations

import os

import pytest

from kankyo.environ import (
    MemoryEnvironment,
    ProcessEnvironment,
    check_assignable,
    resolve,
)


def test_memory_environment_copies_initial_mapping() -> None:
    initial = {"A": "1"}
    env = MemoryEnvironment(initial)
    env.set("B", "2")

    assert initial == {"A": "1"}
    assert len(env) == 2
    assert "B" in env
    assert "C" not in env


def test_memory_environment_remove_is_idempotent() -> None:
    env = MemoryEnvironment({"A": "1"})
    env.remove("A")
    env.remove("A")

    assert env.get("A") is None
    assert len(env) == 0


@pytest.mark.parametrize(("key", "value"), [("", "x"), ("A=B", "x"), ("A\0", "x"), ("A", "x\0")])
def test_check_assignable_rejects_what_the_os_rejects(key: str, value: str) -> None:
    with pytest.raises(ValueError):
        check_assignable(key, value)


def test_resolve_defaults_to_process_environment() -> None:
    assert isinstance(resolve(None), ProcessEnvironment)

    env = MemoryEnvironment()
    assert resolve(env) is env


def test_process_environment_round_trip(scrub_env) -> None:
    scrub_env("KANKYO_T_PROC")
    env = ProcessEnvironment()

    env.set("KANKYO_T_PROC", "value")
    assert os.environ["KANKYO_T_PROC"] == "value"
    assert env.get("KANKYO_T_PROC") == "value"
    assert "KANKYO_T_PROC" in env

    env.remove("KANKYO_T_PROC")
    env.remove("KANKYO_T_PROC")
    assert env.get("KANKYO_T_PROC") is None


def test_process_environment_rejects_illegal_names() -> None:
    with pytest.raises(ValueError):
        ProcessEnvironment().set("", "x")


def test_process_environment_items_reflect_os_environ(scrub_env) -> None:
    scrub_env("KANKYO_T_ITEMS")
    os.environ["KANKYO_T_ITEMS"] = "here"

    keys = {k.decode() if isinstance(k, bytes) else k for k, _ in ProcessEnvironment().items()}
    assert "KANKYO_T_ITEMS" in keys
