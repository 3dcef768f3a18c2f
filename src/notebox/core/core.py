from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from notebox.config import Config

if TYPE_CHECKING:
    from notebox.core.modules.access.service import AccessService
    from notebox.core.modules.auth.service import AuthService
    from notebox.core.modules.note.service import NoteService
    from notebox.core.modules.session.service import SessionService
    from notebox.core.modules.user.service import UserService

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
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
    """Service registry that instantiates every service against one database."""

    user: UserService
    session: SessionService
    auth: AuthService
    note: NoteService
    access: AccessService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self._services: list[Service] = []

        # (attribute_name, module_path, class_name), started in this order
        service_configs = [
            ("user", "notebox.core.modules.user.service", "UserService"),
            ("session", "notebox.core.modules.session.service", "SessionService"),
            ("auth", "notebox.core.modules.auth.service", "AuthService"),
            ("note", "notebox.core.modules.note.service", "NoteService"),
            ("access", "notebox.core.modules.access.service", "AccessService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, all service instances and background jobs."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        """Initialize core with config and MongoDB, unless a database is supplied by the caller."""
        from notebox.core.modules.session.sweeper import SessionSweeper  # noqa: PLC0415

        self.config = config
        if database is None:
            self.mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        else:
            self.mongo_client = None
        self.database = database
        self.services = Services(self.database)
        self.services.set_core(self)
        self.session_sweeper = SessionSweeper(self.services.session, config.session_cleanup_interval)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services, then the expired-session sweep."""
        await self.services.start_all()
        self.session_sweeper.start()
        logger.info("core_started", environment=self.config.environment)

    async def on_stop(self) -> None:
        """Stop the sweep and services, then close the MongoDB connection."""
        await self.session_sweeper.stop()
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
