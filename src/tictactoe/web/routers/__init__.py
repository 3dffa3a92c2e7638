from tictactoe.web.routers.games import router as games_router
from tictactoe.web.routers.login import router as login_router
from tictactoe.web.routers.meta import router as meta_router
from tictactoe.web.routers.users import router as users_router

__all__ = [
    "games_router",
    "login_router",
    "meta_router",
    "users_router",
]
