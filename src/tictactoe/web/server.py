import asyncio
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tictactoe.app import App
from tictactoe.config import Config
from tictactoe.errors import UserError
from tictactoe.web.error_handlers import general_exception_handler, user_error_handler
from tictactoe.web.routers import games_router, login_router, meta_router, users_router

SLOW_MODE_DEFAULT_MS = 3000


async def slow_mode_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Delay the request by X-Slow-Mode milliseconds to let clients test loading states."""
    header = request.headers.get("X-Slow-Mode")
    if header:
        delay_ms = int(header) if header.isdigit() and int(header) > 0 else SLOW_MODE_DEFAULT_MS
        await asyncio.sleep(delay_ms / 1000)
    return await call_next(request)


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="TicTacToe API", lifespan=lifespan)

    if config.debug:
        app.middleware("http")(slow_mode_middleware)

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(meta_router, prefix="/api")
    app.include_router(games_router, prefix="/api")
    app.include_router(login_router, prefix="/api")
    app.include_router(users_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Web client, mounted last so API routes take precedence
    if config.static_path and Path(config.static_path).is_dir():
        app.mount("/", StaticFiles(directory=config.static_path, html=True), name="static")

    return app
