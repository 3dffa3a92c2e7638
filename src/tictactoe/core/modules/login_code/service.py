import asyncio
import contextlib
from datetime import timedelta

import structlog

from tictactoe.core.core import Service
from tictactoe.core.modules.login_code.models import IssuedCode
from tictactoe.core.modules.login_code.registry import LoginCodeRegistry
from tictactoe.core.store import PersistentStore

logger = structlog.get_logger(__name__)


class LoginCodeService(Service):
    """Owns the login code registry and the background sweep that expires codes."""

    def __init__(self, store: PersistentStore) -> None:
        super().__init__(store)
        self._registry: LoginCodeRegistry | None = None
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def registry(self) -> LoginCodeRegistry:
        if self._registry is None:
            config = self.core.config
            self._registry = LoginCodeRegistry(
                reserve_window=timedelta(seconds=config.login_code_reserve_seconds),
                max_attempts=config.login_code_max_attempts,
            )
        return self._registry

    async def issue_code(self, user_id: str) -> IssuedCode:
        """Issue a code for user_id with the configured validity."""
        validity = timedelta(seconds=self.core.config.login_code_validity_seconds)
        return await self.registry.issue(user_id, validity)

    async def redeem_code(self, code: str) -> str | None:
        """Redeem a code, returning the bound user id if it was valid."""
        return await self.registry.redeem(code)

    async def on_start(self) -> None:
        """Start the periodic sweep."""
        self._sweep_task = asyncio.create_task(self._sweep_loop(self.core.config.login_code_sweep_interval_seconds))

    async def on_stop(self) -> None:
        """Cancel the periodic sweep."""
        if self._sweep_task is not None:
            self._sweep_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweep_task
            self._sweep_task = None

    async def _sweep_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await self.registry.sweep()
            except Exception:
                logger.exception("login_code_sweep_failed")
