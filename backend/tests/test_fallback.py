import asyncio

import pytest

from app.fallback import AllAttemptsFailed, AttemptFailed, first_success  # type: ignore


def test_first_success_short_circuits():
    tried = []

    async def attempt(option):
        tried.append(option)
        if option == "a":
            raise AttemptFailed("nope")
        return option.upper()

    assert asyncio.run(first_success(["a", "b", "c"], attempt)) == ("b", "B")
    assert tried == ["a", "b"]


def test_all_attempts_failed_keeps_failures_in_order():
    async def attempt(option):
        raise AttemptFailed(f"{option} down")

    with pytest.raises(AllAttemptsFailed) as info:
        asyncio.run(first_success(["x", "y"], attempt))
    assert [o for o, _ in info.value.failures] == ["x", "y"]
    assert str(info.value.failures[1][1]) == "y down"


def test_empty_options_fail():
    async def attempt(option):
        return option

    with pytest.raises(AllAttemptsFailed):
        asyncio.run(first_success([], attempt))


def test_other_exceptions_propagate():
    async def attempt(option):
        raise ValueError("bug")

    with pytest.raises(ValueError):
        asyncio.run(first_success(["x"], attempt))
