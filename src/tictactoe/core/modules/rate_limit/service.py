import asyncio
import contextlib
from datetime import timedelta

import structlog

from tictactoe.core.core import Service
from tictactoe.core.modules.rate_limit.limiter import RateLimiter
from tictactoe.core.modules.rate_limit.models import LOGIN_CODE_LIMITER, RateLimitDecision, RateLimitRule
from tictactoe.core.store import PersistentStore

logger = structlog.get_logger(__name__)


class RateLimitService(Service):
    """Owns the rate limiter and periodically forgets idle callers."""

    def __init__(self, store: PersistentStore) -> None:
        super().__init__(store)
        self._limiter: RateLimiter | None = None
        self._prune_task: asyncio.Task[None] | None = None

    @property
    def limiter(self) -> RateLimiter:
        if self._limiter is None:
            config = self.core.config
            self._limiter = RateLimiter(
                {
                    LOGIN_CODE_LIMITER: RateLimitRule(
                        limit=config.login_rate_limit, window=timedelta(seconds=config.login_rate_window_seconds)
                    ),
                }
            )
        return self._limiter

    async def check(self, limiter_type: str, identity: str) -> RateLimitDecision:
        decision = await self.limiter.check(limiter_type, identity)
        if not decision.allowed:
            logger.info("rate_limited", limiter_type=limiter_type, identity=identity)
        return decision

    async def on_start(self) -> None:
        """Start periodic pruning of idle keys."""
        self._prune_task = asyncio.create_task(self._prune_loop(self.core.config.rate_limit_prune_interval_seconds))

    async def on_stop(self) -> None:
        """Cancel periodic pruning."""
        if self._prune_task is not None:
            self._prune_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._prune_task
            self._prune_task = None

    async def _prune_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                dropped = await self.limiter.prune()
            except Exception:
                logger.exception("rate_limit_prune_failed")
            else:
                if dropped:
                    logger.debug("rate_limit_pruned", dropped=dropped)
