"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path

import pytest

from genesis_tracker.db import init_db
from genesis_tracker.services.auth import User
from genesis_tracker.storage.local import LocalStore, MemoryBackend
from genesis_tracker.storage.remote import RemoteStore


class StaticAuth:
    """Auth provider with a fixed (or no) current user."""

    def __init__(self, user: User | None = None):
        self.user = user

    async def get_current_user(self) -> User | None:
        return self.user


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def db_path(temp_db_path):
    """A temporary database with the schema created."""
    asyncio.run(init_db(temp_db_path))
    return temp_db_path


@pytest.fixture
def local_store():
    """Memory-backed local store."""
    return LocalStore(MemoryBackend())


@pytest.fixture
def user():
    return User(id="user-1", email="athlete@example.com")


@pytest.fixture
def signed_in(user):
    """Auth provider reporting a signed-in user."""
    return StaticAuth(user)


@pytest.fixture
def signed_out():
    """Auth provider with no current user."""
    return StaticAuth()


@pytest.fixture
def remote_store(db_path, signed_in):
    """Remote store for the signed-in user."""
    return RemoteStore(signed_in, db_path)


@pytest.fixture
def static_auth():
    """Factory for auth providers with a fixed user."""
    return StaticAuth
