"""Tests for the outbound token bucket."""

from __future__ import annotations

import pytest

from nickguard.adapters.throttle import TokenBucket


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestTokenBucket:
    def test_burst_up_to_capacity(self):
        bucket = TokenBucket(capacity=3, rate=1.0, clock=FakeClock())

        assert [bucket.try_take() for _ in range(4)] == [True, True, True, False]

    def test_delay_zero_when_available(self):
        bucket = TokenBucket(capacity=1, rate=1.0, clock=FakeClock())

        assert bucket.delay() == 0.0

    def test_delay_positive_when_empty(self):
        bucket = TokenBucket(capacity=1, rate=2.0, clock=FakeClock())
        bucket.try_take()

        assert bucket.delay() == pytest.approx(0.5)

    def test_refills_over_time(self):
        clock = FakeClock()
        bucket = TokenBucket(capacity=2, rate=1.0, clock=clock)
        bucket.try_take()
        bucket.try_take()

        clock.now = 1.0

        assert bucket.tokens == pytest.approx(1.0)
        assert bucket.try_take()

    def test_never_exceeds_capacity(self):
        clock = FakeClock()
        bucket = TokenBucket(capacity=2, rate=1.0, clock=clock)

        clock.now = 100.0

        assert bucket.tokens == 2

    @pytest.mark.parametrize("capacity,rate", [(0, 1.0), (1, 0.0)])
    def test_rejects_invalid_arguments(self, capacity, rate):
        with pytest.raises(ValueError):
            TokenBucket(capacity=capacity, rate=rate)

    @pytest.mark.asyncio
    async def test_take_sleeps_until_token(self, monkeypatch):
        clock = FakeClock()
        bucket = TokenBucket(capacity=1, rate=2.0, clock=clock)
        sleeps: list[float] = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)
            clock.now += seconds

        monkeypatch.setattr("nickguard.adapters.throttle.asyncio.sleep", fake_sleep)

        await bucket.take()
        await bucket.take()

        assert sleeps == [pytest.approx(0.5)]
