"""Tests for the failed-attempt rate limiter."""

from datetime import timedelta

import pytest

from src.modules.admin_auth.domain.entities import RateLimitRecord

pytestmark = pytest.mark.anyio

FP = "1a2b3c"


async def _fail(rate_limiter, times: int) -> int:
    attempts = 0
    for _ in range(times):
        attempts = await rate_limiter.record_failed_attempt(FP)
    return attempts


async def test_unknown_fingerprint_is_allowed(rate_limiter) -> None:
    result = await rate_limiter.check(FP)
    assert result.allowed is True
    assert result.attempts == 0
    assert result.time_remaining == 0


async def test_record_failed_attempt_counts_from_one(rate_limiter) -> None:
    assert await rate_limiter.record_failed_attempt(FP) == 1
    assert await rate_limiter.record_failed_attempt(FP) == 2


async def test_three_failures_still_allowed(rate_limiter) -> None:
    await _fail(rate_limiter, 3)
    result = await rate_limiter.check(FP)
    assert result.allowed is True
    assert result.attempts == 3


async def test_fourth_failure_blocks_on_next_check(rate_limiter, clock) -> None:
    await _fail(rate_limiter, 4)

    # recording alone does not block
    record = await rate_limiter.store.get(FP)
    assert record.is_blocked is False

    result = await rate_limiter.check(FP)
    assert result.allowed is False
    assert result.is_blocked is True
    assert result.attempts == 4
    assert result.time_remaining == 1800

    record = await rate_limiter.store.get(FP)
    assert record.is_blocked is True
    assert record.block_until == clock.now + rate_limiter.lockout


async def test_block_counts_down(rate_limiter, clock) -> None:
    await _fail(rate_limiter, 4)
    await rate_limiter.check(FP)

    clock.advance(600)
    result = await rate_limiter.check(FP)
    assert result.allowed is False
    assert result.time_remaining == 1200


async def test_block_holds_until_block_until_inclusive(rate_limiter, clock) -> None:
    await _fail(rate_limiter, 4)
    await rate_limiter.check(FP)

    clock.advance(1800)
    result = await rate_limiter.check(FP)
    assert result.allowed is False
    assert result.time_remaining == 0


async def test_block_lifts_after_window(rate_limiter, clock) -> None:
    await _fail(rate_limiter, 4)
    await rate_limiter.check(FP)

    clock.advance(1801)
    result = await rate_limiter.check(FP)
    assert result.allowed is True
    assert await rate_limiter.store.get(FP) is None

    # counting starts over
    assert await rate_limiter.record_failed_attempt(FP) == 1


async def test_clear_drops_record(rate_limiter) -> None:
    await _fail(rate_limiter, 3)
    await rate_limiter.clear(FP)
    assert await rate_limiter.store.get(FP) is None
    assert await rate_limiter.record_failed_attempt(FP) == 1


async def test_fingerprints_are_independent(rate_limiter) -> None:
    await _fail(rate_limiter, 4)
    await rate_limiter.check(FP)
    result = await rate_limiter.check("other")
    assert result.allowed is True


async def test_status_is_read_only(rate_limiter) -> None:
    await _fail(rate_limiter, 4)

    status = await rate_limiter.status(FP)
    assert status.is_blocked is True
    assert status.attempts == 4
    assert status.time_remaining == 1800

    record = await rate_limiter.store.get(FP)
    assert record.is_blocked is False


async def test_status_below_threshold(rate_limiter) -> None:
    await _fail(rate_limiter, 2)
    status = await rate_limiter.status(FP)
    assert status.is_blocked is False
    assert status.attempts == 2
    assert status.time_remaining == 0


async def test_status_after_expired_block(rate_limiter, clock) -> None:
    await _fail(rate_limiter, 4)
    await rate_limiter.check(FP)
    clock.advance(1801)

    status = await rate_limiter.status(FP)
    assert status.is_blocked is False
    assert status.attempts == 0
    # status leaves cleanup to check
    assert await rate_limiter.store.get(FP) is not None


def test_record_seconds_remaining_rounds_up(clock) -> None:
    record = RateLimitRecord(fingerprint=FP, attempts=4, last_attempt=clock.now)
    record.block(clock.now, timedelta(seconds=10))
    clock.advance(0.5)
    assert record.seconds_remaining(clock.now) == 10
    assert record.block_expired(clock.now) is False
