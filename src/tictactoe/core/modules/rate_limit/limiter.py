import asyncio
from collections import deque
from collections.abc import Callable, Mapping
from datetime import datetime

from tictactoe.core.modules.rate_limit.models import Allowed, Denied, RateLimitDecision, RateLimitRule
from tictactoe.utils import now


class RateLimiter:
    """Sliding-window attempt counter keyed by (limiter type, caller identity).

    Denied attempts are not recorded, so retry_after stays fixed while a caller
    keeps hammering and moves only once the oldest counted attempt leaves the window.
    """

    def __init__(self, rules: Mapping[str, RateLimitRule], clock: Callable[[], datetime] = now) -> None:
        self._rules = dict(rules)
        self._clock = clock
        self._hits: dict[tuple[str, str], deque[datetime]] = {}
        self._lock = asyncio.Lock()

    async def check(self, limiter_type: str, identity: str) -> RateLimitDecision:
        """Record an attempt if allowed, otherwise tell the caller when to come back."""
        rule = self._get_rule(limiter_type)
        key = (limiter_type, identity)
        async with self._lock:
            current = self._clock()
            hits = self._hits.get(key)
            if hits is None:
                hits = self._hits[key] = deque()
            self._drop_expired(hits, current - rule.window)
            if len(hits) >= rule.limit:
                return Denied(retry_after=hits[0] + rule.window, limiter_type=limiter_type)
            hits.append(current)
            return Allowed()

    async def prune(self) -> int:
        """Forget keys with no attempts left in their window. Returns the number of dropped keys."""
        async with self._lock:
            current = self._clock()
            stale = []
            for key, hits in self._hits.items():
                self._drop_expired(hits, current - self._rules[key[0]].window)
                if not hits:
                    stale.append(key)
            for key in stale:
                del self._hits[key]
            return len(stale)

    async def tracked_keys(self) -> int:
        async with self._lock:
            return len(self._hits)

    def _get_rule(self, limiter_type: str) -> RateLimitRule:
        if limiter_type not in self._rules:
            raise ValueError(f"Unknown rate limiter type '{limiter_type}'")
        return self._rules[limiter_type]

    @staticmethod
    def _drop_expired(hits: deque[datetime], cutoff: datetime) -> None:
        while hits and hits[0] <= cutoff:
            hits.popleft()
