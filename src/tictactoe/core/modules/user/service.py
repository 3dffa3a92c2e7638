import structlog

from tictactoe.core.core import Service
from tictactoe.core.modules.user.models import User
from tictactoe.core.store import Database
from tictactoe.errors import ConflictError, NotFoundError, ValidationError
from tictactoe.utils import NICK_RE, is_nickname

logger = structlog.get_logger(__name__)


def _find_user(db: Database, user_id: str) -> User:
    user = next((u for u in db.users if u.id == user_id), None)
    if user is None:
        raise NotFoundError(f"User with ID {user_id} not found")
    return user


class UserService(Service):
    """Manages users stored in the document store."""

    async def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        db = await self.store.load()
        return _find_user(db, user_id)

    async def get_all_users(self) -> list[User]:
        """Get all users."""
        db = await self.store.load()
        return db.users

    async def register(self, nickname: str) -> User:
        """Create a user with a fresh id and secret.

        The nickname check and the insert run in the same exclusive section,
        so two concurrent registrations cannot claim one nickname.
        """
        if not is_nickname(nickname):
            raise ValidationError(
                "Invalid nickname; only English letters, digits, dash - and underscore _ allowed; "
                f"only letters first! Pattern: {NICK_RE.pattern}"
            )

        def insert(db: Database) -> User:
            if any(u.nickname == nickname for u in db.users):
                raise ConflictError(f"Nickname {nickname} is already used")
            user = User(nickname=nickname)
            db.users.append(user)
            return user

        user = await self.store.with_store(insert)
        logger.info("user_registered", user_id=user.id, nickname=nickname)
        return user

    async def add_friend(self, user_id: str, friend_id: str) -> User:
        """Add friend_id to the user's friends. Adding an existing friend is a no-op."""
        if user_id == friend_id:
            raise ValidationError("Cannot befriend yourself")

        def add(db: Database) -> User:
            user = _find_user(db, user_id)
            _find_user(db, friend_id)
            if friend_id not in user.friends:
                user.friends.append(friend_id)
            return user

        return await self.store.with_store(add)

    async def remove_friend(self, user_id: str, friend_id: str) -> User:
        """Remove friend_id from the user's friends."""

        def remove(db: Database) -> User:
            user = _find_user(db, user_id)
            if friend_id not in user.friends:
                raise NotFoundError(f"User {friend_id} is not a friend")
            user.friends.remove(friend_id)
            return user

        return await self.store.with_store(remove)
