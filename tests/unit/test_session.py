"""Tests for the session gate in front of the entity store."""

from unittest.mock import AsyncMock

import pytest

from src.bm_common.errors import SessionRequiredError
from src.bm_store.application.session import SessionGatedStore, StaticSession


class TestSessionGatedStore:
    async def test_forwards_with_session(self) -> None:
        inner = AsyncMock()
        inner.get_all_products.return_value = []
        gated = SessionGatedStore(inner, StaticSession(active=True))

        assert await gated.get_all_products() == []
        inner.get_all_products.assert_awaited_once()

    async def test_no_call_without_session(self) -> None:
        inner = AsyncMock()
        gated = SessionGatedStore(inner, StaticSession(active=False))

        with pytest.raises(SessionRequiredError) as exc_info:
            await gated.create_customer("Ali", "")

        assert exc_info.value.operation == "create_customer"
        inner.create_customer.assert_not_awaited()

    async def test_checks_session_per_call(self) -> None:
        inner = AsyncMock()
        session = StaticSession(active=True)
        gated = SessionGatedStore(inner, session)
        await gated.get_settings()

        session.sign_out()

        with pytest.raises(SessionRequiredError):
            await gated.get_settings()
        assert inner.get_settings.await_count == 1
