from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import cast

import structlog

from tictactoe.config import Config
from tictactoe.core.store import DB_FILE_NAME, PersistentStore

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with access to the document store."""

    def __init__(self, store: PersistentStore) -> None:
        self.store = store
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from tictactoe.core.modules.access.service import AccessService  # noqa: PLC0415
    from tictactoe.core.modules.game.service import GameService  # noqa: PLC0415
    from tictactoe.core.modules.login_code.service import LoginCodeService  # noqa: PLC0415
    from tictactoe.core.modules.rate_limit.service import RateLimitService  # noqa: PLC0415
    from tictactoe.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    game: GameService
    access: AccessService
    login_code: LoginCodeService
    rate_limit: RateLimitService

    def __init__(self, store: PersistentStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._store = store

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "tictactoe.core.modules.user.service", "UserService"),
            ("game", "tictactoe.core.modules.game.service", "GameService"),
            ("access", "tictactoe.core.modules.access.service", "AccessService"),
            ("login_code", "tictactoe.core.modules.login_code.service", "LoginCodeService"),
            ("rate_limit", "tictactoe.core.modules.rate_limit.service", "RateLimitService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(store)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse start order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, the document store, and all service instances."""

    config: Config
    store: PersistentStore
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, the store file, and auto-register services."""
        self.config = config
        self.store = PersistentStore(Path(config.data_dir) / DB_FILE_NAME)
        self.services = Services(self.store)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Upgrade the store file, then start all services."""
        await self.store.upgrade()
        await self.services.start_all()
        logger.info("core_started", store_path=str(self.store.path))

    async def on_stop(self) -> None:
        """Stop services on shutdown."""
        await self.services.stop_all()
