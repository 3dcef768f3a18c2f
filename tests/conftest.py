"""Shared pytest fixtures."""

from collections.abc import AsyncGenerator, Iterator

import pytest
from fastapi.testclient import TestClient

from notebox.config import Config
from notebox.core.core import Core
from notebox.core.modules.user.models import User
from notebox.core.modules.user.password import hash_password
from tests.fakes import FakeDatabase
from tests.helpers import make_client, make_config

TEST_PASSWORD = "TestPass123"


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
async def core(config: Config, database: FakeDatabase) -> AsyncGenerator[Core]:
    """Started core backed by the in-memory database."""
    core = Core(config, database)  # type: ignore[arg-type]
    async with core.lifespan():
        yield core


@pytest.fixture
async def user(core: Core) -> User:
    return await core.services.user.create_user("alice@example.com", hash_password(TEST_PASSWORD), "Alice")


@pytest.fixture
async def other_user(core: Core) -> User:
    return await core.services.user.create_user("bob@example.com", hash_password(TEST_PASSWORD), "Bob")


@pytest.fixture
def client(config: Config, database: FakeDatabase) -> Iterator[TestClient]:
    with make_client(config, database) as test_client:
        yield test_client
