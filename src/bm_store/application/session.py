"""Session gate in front of the entity store.

Identity/login is an external collaborator; the core only asks whether a
session exists. Without one, no ledger call is issued at all: every store
method raises SessionRequiredError before touching the transport.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.bm_common.errors import SessionRequiredError
from src.bm_store.domain.client import EntityStoreProtocol

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    def has_session(self) -> bool: ...


class StaticSession:
    """Session flag toggled by the host application (and by tests)."""

    def __init__(self, active: bool = True) -> None:
        self._active = active

    def has_session(self) -> bool:
        return self._active

    def sign_in(self) -> None:
        self._active = True

    def sign_out(self) -> None:
        self._active = False


class SessionGatedStore:
    """Wraps an EntityStoreProtocol; forwards calls only while a session exists."""

    def __init__(self, inner: EntityStoreProtocol, session: SessionProvider) -> None:
        self._inner = inner
        self._session = session

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        target = getattr(self._inner, name)
        if name.startswith("_") or not callable(target):
            return target

        @functools.wraps(target)
        async def gated(*args: Any, **kwargs: Any) -> Any:
            if not self._session.has_session():
                logger.debug("Blocked %s: no session", name)
                raise SessionRequiredError(name)
            return await target(*args, **kwargs)

        return gated
