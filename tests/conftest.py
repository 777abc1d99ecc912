"""Pytest fixtures for the API tests.

The app is used without its lifespan (no `with TestClient(...)`), so no
Postgres pool is opened. Identity and the per-request store are swapped
through `app.dependency_overrides`; the store is the in-memory fake from
`fake_store.py`.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import main
from auth import dependencies as auth_dependencies
from auth.schemas import Identity
from fake_store import USER_A, FakeDatabase


class Acting:
    """Mutable holder for the user the next request is made as."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def acting() -> Acting:
    return Acting(USER_A)


@pytest.fixture
def client(database: FakeDatabase, acting: Acting):
    async def _current_user() -> Identity:
        return Identity(
            user_id=acting.user_id,
            token="test-token",
            claims={"sub": acting.user_id, "role": "authenticated"},
        )

    async def _store():
        return database.store_for(acting.user_id)

    main.app.dependency_overrides[auth_dependencies.get_current_user] = _current_user
    main.app.dependency_overrides[auth_dependencies.get_store] = _store
    try:
        yield TestClient(main.app, raise_server_exceptions=False)
    finally:
        main.app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client():
    main.app.dependency_overrides.clear()
    return TestClient(main.app, raise_server_exceptions=False)
