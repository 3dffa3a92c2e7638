import asyncio
import random
from collections.abc import Callable
from datetime import datetime, timedelta

import structlog

from tictactoe.core.modules.login_code.models import CodeEntry, IssuedCode, ReservedCode, ValidCode
from tictactoe.core.modules.login_code.patterns import CODE_LENGTH, is_banned_code
from tictactoe.errors import CodeSpaceExhaustedError
from tictactoe.utils import now

logger = structlog.get_logger(__name__)

DEFAULT_RESERVE_WINDOW = timedelta(seconds=5)


class LoginCodeRegistry:
    """In-memory table of one-time login codes.

    Each code string moves through absent -> valid -> reserved -> absent.
    Every read and write of the table happens under one lock, shared by
    issue(), redeem() and sweep().
    """

    def __init__(
        self,
        reserve_window: timedelta = DEFAULT_RESERVE_WINDOW,
        clock: Callable[[], datetime] = now,
        rng: random.Random | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self._reserve_window = reserve_window
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts
        self._codes: dict[str, CodeEntry] = {}
        self._lock = asyncio.Lock()

    async def issue(self, user_id: str, validity: timedelta) -> IssuedCode:
        """Mint a fresh code for user_id, valid for the given duration.

        Raises:
            CodeSpaceExhaustedError: If max_attempts is set and no free code was drawn
        """
        async with self._lock:
            code = self._draw_code()
            issue_date = self._clock()
            expiration_date = issue_date + validity
            self._codes[code] = ValidCode(user_id=user_id, expiration_date=expiration_date)
        logger.debug("login_code_issued", user_id=user_id, expiration_date=expiration_date.isoformat())
        return IssuedCode(code=code, issue_date=issue_date, expiration_date=expiration_date)

    async def redeem(self, code: str) -> str | None:
        """Consume a valid code and return its user id, or None if it is not redeemable."""
        async with self._lock:
            match self._codes.get(code):
                case ValidCode(user_id=user_id, expiration_date=expiration_date):
                    self._reserve(code)
                    if expiration_date < self._clock():
                        return None
                    return user_id
                case ReservedCode() | None:
                    return None

    async def sweep(self) -> None:
        """Move expired valid codes to reserved and drop reservations that ran out."""
        async with self._lock:
            current = self._clock()
            for code, entry in list(self._codes.items()):
                if entry.expiration_date >= current:
                    continue
                match entry:
                    case ValidCode():
                        self._reserve(code)
                    case ReservedCode():
                        del self._codes[code]

    async def lookup(self, code: str) -> CodeEntry | None:
        """Get the current entry for a code string."""
        async with self._lock:
            return self._codes.get(code)

    async def count(self) -> int:
        async with self._lock:
            return len(self._codes)

    def _reserve(self, code: str) -> None:
        self._codes[code] = ReservedCode(expiration_date=self._clock() + self._reserve_window)

    def _draw_code(self) -> str:
        attempts = 0
        while self._max_attempts is None or attempts < self._max_attempts:
            attempts += 1
            candidate = str(self._rng.randint(1, 9999)).zfill(CODE_LENGTH)
            if is_banned_code(candidate) or candidate in self._codes:
                continue
            return candidate
        raise CodeSpaceExhaustedError(f"No free login code found in {attempts} attempts")
