"""Tests for fauxapi.delay — delay resolution and the engine's response delay."""

import random
import time

import pytest

from fauxapi.delay import apply_delay, resolve_delay
from fauxapi.mock import Mock


class TestResolveDelay:
    def test_none(self) -> None:
        assert resolve_delay(None) == 0.0

    def test_fixed_milliseconds(self) -> None:
        assert resolve_delay(250) == pytest.approx(0.25)

    def test_negative_is_clamped(self) -> None:
        assert resolve_delay(-50) == 0.0

    def test_degenerate_range(self) -> None:
        assert resolve_delay((100, 100)) == pytest.approx(0.1)

    def test_range_is_within_bounds(self) -> None:
        rng = random.Random(7)
        for _ in range(50):
            assert 0.05 <= resolve_delay((50, 200), rng=rng) <= 0.2

    def test_reversed_range_is_swapped(self) -> None:
        rng = random.Random(3)
        for _ in range(50):
            assert 0.05 <= resolve_delay((200, 50), rng=rng) <= 0.2

    def test_negative_range_is_clamped(self) -> None:
        assert resolve_delay((-20, -10), rng=random.Random(1)) == 0.0


class TestApplyDelay:
    async def test_zero_does_not_sleep(self) -> None:
        assert await apply_delay(None) == 0.0

    async def test_sleeps(self) -> None:
        started = time.perf_counter()
        waited = await apply_delay(20)
        assert waited == pytest.approx(0.02)
        assert time.perf_counter() - started >= 0.015


class TestEngineDelay:
    async def test_successful_response_is_delayed(self) -> None:
        mock = Mock(delay=[100, 100])
        mock("GET /slow", {"ok": True})

        started = time.perf_counter()
        response = await mock.handle("GET", "/slow")

        assert response.status == 200
        assert time.perf_counter() - started >= 0.09

    async def test_not_found_is_delayed(self) -> None:
        mock = Mock(delay=[100, 100])
        started = time.perf_counter()
        response = await mock.handle("GET", "/missing")
        assert response.status == 404
        assert time.perf_counter() - started >= 0.09

    async def test_failure_is_delayed(self) -> None:
        mock = Mock(delay=100)
        mock("GET /boom", lambda ctx: 1 / 0)
        started = time.perf_counter()
        response = await mock.handle("GET", "/boom")
        assert response.status == 500
        assert time.perf_counter() - started >= 0.09
