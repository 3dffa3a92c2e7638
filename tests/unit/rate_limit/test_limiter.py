"""Tests for the sliding-window rate limiter."""

import asyncio
from datetime import timedelta

import pytest

from tictactoe.core.modules.rate_limit.limiter import RateLimiter
from tictactoe.core.modules.rate_limit.models import Allowed, Denied, RateLimitRule

WINDOW = timedelta(seconds=60)


@pytest.fixture
def limiter(clock):
    return RateLimiter({"login_code": RateLimitRule(limit=3, window=WINDOW)}, clock=clock)


class TestCheck:
    """Tests for RateLimiter.check."""

    @pytest.mark.asyncio
    async def test_allows_up_to_limit(self, limiter):
        """Test that the first N attempts pass."""
        for _ in range(3):
            assert await limiter.check("login_code", "10.0.0.1") == Allowed()

    @pytest.mark.asyncio
    async def test_denies_over_limit(self, limiter, clock):
        """Test that attempt N+1 is denied with a retry time in the future."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")

        decision = await limiter.check("login_code", "10.0.0.1")

        assert isinstance(decision, Denied)
        assert decision.limiter_type == "login_code"
        assert decision.retry_after > clock()
        assert decision.retry_after == clock() + WINDOW

    @pytest.mark.asyncio
    async def test_retry_after_non_decreasing_while_denied(self, limiter, clock):
        """Test that repeated denied attempts never move retry_after backwards."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")
            clock.advance(1)

        previous = None
        for _ in range(10):
            decision = await limiter.check("login_code", "10.0.0.1")
            assert isinstance(decision, Denied)
            if previous is not None:
                assert decision.retry_after >= previous
            previous = decision.retry_after
            clock.advance(5)

    @pytest.mark.asyncio
    async def test_allowed_after_retry_after(self, limiter, clock):
        """Test that waiting until retry_after lets the caller back in."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")
        denied = await limiter.check("login_code", "10.0.0.1")

        clock.current = denied.retry_after
        assert await limiter.check("login_code", "10.0.0.1") == Allowed()

    @pytest.mark.asyncio
    async def test_window_resets_fully(self, limiter, clock):
        """Test that after a full window the caller gets the whole budget again."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")
        clock.advance(61)
        for _ in range(3):
            assert await limiter.check("login_code", "10.0.0.1") == Allowed()

    @pytest.mark.asyncio
    async def test_sliding_window(self, limiter, clock):
        """Test that slots free up one by one as old attempts age out."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")
            clock.advance(10)
        # Attempts at t=0, 10, 20; now t=30
        assert isinstance(await limiter.check("login_code", "10.0.0.1"), Denied)

        clock.advance(30)  # t=60, the t=0 attempt leaves the window
        assert await limiter.check("login_code", "10.0.0.1") == Allowed()
        denied = await limiter.check("login_code", "10.0.0.1")
        assert isinstance(denied, Denied)
        assert denied.retry_after == clock() + timedelta(seconds=10)

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, limiter):
        """Test that one caller's attempts do not count against another."""
        for _ in range(3):
            await limiter.check("login_code", "10.0.0.1")
        assert isinstance(await limiter.check("login_code", "10.0.0.1"), Denied)
        assert await limiter.check("login_code", "10.0.0.2") == Allowed()

    @pytest.mark.asyncio
    async def test_limiter_types_are_independent(self, clock):
        """Test that the same caller is tracked separately per limiter type."""
        limiter = RateLimiter(
            {
                "login_code": RateLimitRule(limit=1, window=WINDOW),
                "register": RateLimitRule(limit=1, window=WINDOW),
            },
            clock=clock,
        )
        assert await limiter.check("login_code", "10.0.0.1") == Allowed()
        assert await limiter.check("register", "10.0.0.1") == Allowed()
        decision = await limiter.check("register", "10.0.0.1")
        assert isinstance(decision, Denied)
        assert decision.limiter_type == "register"

    @pytest.mark.asyncio
    async def test_unknown_limiter_type(self, limiter):
        """Test that asking for an unconfigured limiter is a programming error."""
        with pytest.raises(ValueError, match="Unknown rate limiter type"):
            await limiter.check("nope", "10.0.0.1")

    @pytest.mark.asyncio
    async def test_concurrent_checks_respect_limit(self, limiter):
        """Test that simultaneous checks never admit more than the limit."""
        decisions = await asyncio.gather(*(limiter.check("login_code", "10.0.0.1") for _ in range(20)))
        assert sum(isinstance(d, Allowed) for d in decisions) == 3


class TestPrune:
    """Tests for RateLimiter.prune."""

    @pytest.mark.asyncio
    async def test_prune_drops_idle_keys(self, limiter, clock):
        """Test that keys with no attempts in their window are forgotten."""
        await limiter.check("login_code", "10.0.0.1")
        clock.advance(30)
        await limiter.check("login_code", "10.0.0.2")
        clock.advance(31)

        assert await limiter.prune() == 1
        assert await limiter.tracked_keys() == 1

    @pytest.mark.asyncio
    async def test_prune_keeps_active_keys(self, limiter):
        await limiter.check("login_code", "10.0.0.1")
        assert await limiter.prune() == 0
        assert await limiter.tracked_keys() == 1
