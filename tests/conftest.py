"""Shared test fixtures."""

import pytest

from src.bm_app.context import AppContext, build_app_context
from src.bm_store.application.session import StaticSession
from src.bm_store.infrastructure.memory_store import InMemoryEntityStore


@pytest.fixture
def memory_store() -> InMemoryEntityStore:
    """In-process ledger; patch its methods to simulate remote failures."""
    return InMemoryEntityStore()


@pytest.fixture
def session() -> StaticSession:
    return StaticSession(active=True)


@pytest.fixture
def ctx(memory_store: InMemoryEntityStore, session: StaticSession) -> AppContext:
    return build_app_context(memory_store, session=session)
