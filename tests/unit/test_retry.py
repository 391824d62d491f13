import asyncio

import pytest

from llm_gateway.retry import RetryPolicy, linear_backoff, retry_async


class Flaky(Exception):
    pass


def _recorder():
    waits = []

    async def fake_sleep(seconds):
        waits.append(seconds)

    return waits, fake_sleep


def test_linear_backoff_grows_with_attempt():
    delay = linear_backoff(1.5)
    assert [delay(n) for n in (1, 2, 3)] == [1.5, 3.0, 4.5]


def test_policy_requires_an_attempt():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0, delay=linear_backoff(1))


def test_retries_until_success():
    waits, fake_sleep = _recorder()
    calls = {"n": 0}

    async def fn():
        calls["n"] += 1
        if calls["n"] < 3:
            raise Flaky("busy")
        return "done"

    outcome = asyncio.run(
        retry_async(
            fn,
            policy=RetryPolicy(max_attempts=3, delay=linear_backoff(1.0)),
            should_retry=lambda exc: isinstance(exc, Flaky),
            sleep=fake_sleep,
        )
    )
    assert outcome.ok
    assert outcome.value == "done"
    assert outcome.attempts == 3
    assert waits == [1.0, 2.0]


def test_exhausted_attempts_return_last_error():
    waits, fake_sleep = _recorder()

    async def fn():
        raise Flaky("still busy")

    outcome = asyncio.run(
        retry_async(
            fn,
            policy=RetryPolicy(max_attempts=2, delay=linear_backoff(0.5)),
            should_retry=lambda exc: True,
            sleep=fake_sleep,
        )
    )
    assert not outcome.ok
    assert isinstance(outcome.error, Flaky)
    assert outcome.attempts == 2
    assert waits == [0.5]


def test_non_retryable_error_stops_immediately():
    waits, fake_sleep = _recorder()

    async def fn():
        raise KeyError("nope")

    outcome = asyncio.run(
        retry_async(
            fn,
            policy=RetryPolicy(max_attempts=5, delay=linear_backoff(1.0)),
            should_retry=lambda exc: isinstance(exc, Flaky),
            sleep=fake_sleep,
        )
    )
    assert outcome.attempts == 1
    assert isinstance(outcome.error, KeyError)
    assert waits == []
