import secrets

from tictactoe.core.core import Service
from tictactoe.core.modules.user.models import User
from tictactoe.errors import AuthenticationError


class AccessService(Service):
    async def ensure_owner(self, user_id: str, secret: str | None) -> User:
        """Ensure the caller holds the secret of user_id."""
        user = await self.core.services.user.get_user(user_id)
        if secret is None or not secrets.compare_digest(user.secret.encode(), secret.encode()):
            raise AuthenticationError("Invalid secret")
        return user
