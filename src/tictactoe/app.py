from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog

from tictactoe.config import Config
from tictactoe.core.core import Core
from tictactoe.core.modules.game.models import Game
from tictactoe.core.modules.login_code.models import IssuedCode
from tictactoe.core.modules.login_code.patterns import is_code_format
from tictactoe.core.modules.rate_limit.models import LOGIN_CODE_LIMITER, Denied
from tictactoe.core.modules.user.models import User, UserView
from tictactoe.errors import AuthenticationError, RateLimitedError, ValidationError
from tictactoe.utils import NICK_RE

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, checks ownership before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def get_nick_regex(self) -> str:
        """Get the pattern nicknames must match."""
        return NICK_RE.pattern

    async def list_games(self) -> list[Game]:
        return await self._core.services.game.get_all_games()

    async def get_game(self, game_id: str) -> Game:
        return await self._core.services.game.get_game(game_id)

    async def create_game(self, game: Game) -> Game:
        return await self._core.services.game.create_game(game)

    async def update_game(self, game_id: str, changes: dict[str, Any]) -> Game:
        """Merge changes into an existing game."""
        return await self._core.services.game.update_game(game_id, changes)

    async def list_users(self) -> list[UserView]:
        """Get all users without their secrets."""
        users = await self._core.services.user.get_all_users()
        return [UserView.from_domain(user) for user in users]

    async def get_user(self, user_id: str) -> UserView:
        user = await self._core.services.user.get_user(user_id)
        return UserView.from_domain(user)

    async def register_user(self, nickname: str) -> User:
        """Register a new user. The returned user carries its secret."""
        return await self._core.services.user.register(nickname)

    async def create_login_code(self, user_id: str, secret: str | None) -> IssuedCode:
        """Issue a login code for a second device (owner only)."""
        await self._core.services.access.ensure_owner(user_id, secret)
        return await self._core.services.login_code.issue_code(user_id)

    async def login_with_code(self, code: str, identity: str) -> User:
        """Exchange a login code for the full user record, secret included."""
        decision = await self._core.services.rate_limit.check(LOGIN_CODE_LIMITER, identity)
        if isinstance(decision, Denied):
            raise RateLimitedError(decision.retry_after, decision.limiter_type)

        if not is_code_format(code):
            raise ValidationError("Invalid code - bad format")

        user_id = await self._core.services.login_code.redeem_code(code)
        if user_id is None:
            raise AuthenticationError("Code doesn't exist")

        user = await self._core.services.user.get_user(user_id)
        logger.info("login_code_redeemed", user_id=user.id)
        return user

    async def add_friend(self, user_id: str, secret: str | None, friend_id: str) -> UserView:
        """Add a friend to the user's list (owner only)."""
        await self._core.services.access.ensure_owner(user_id, secret)
        user = await self._core.services.user.add_friend(user_id, friend_id)
        return UserView.from_domain(user)

    async def remove_friend(self, user_id: str, secret: str | None, friend_id: str) -> UserView:
        """Remove a friend from the user's list (owner only)."""
        await self._core.services.access.ensure_owner(user_id, secret)
        user = await self._core.services.user.remove_friend(user_id, friend_id)
        return UserView.from_domain(user)
