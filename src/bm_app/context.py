"""AppContext: everything a screen needs, built once at startup and passed down.

Replaces module-level UI state: preferences, session, cache and services are
fields of one explicit object rather than globals.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar
from zoneinfo import ZoneInfo

from config.settings import Settings
from config.settings import settings as default_settings
from src.bm_app.notifications import NotificationCenter
from src.bm_app.preferences import InMemoryPreferenceStore, PreferenceStore, UiPreferences
from src.bm_cache.application.queries import LedgerQueries
from src.bm_cache.engine.query_cache import QueryCache
from src.bm_common.errors import AppError
from src.bm_invoice.application.orchestrator import InvoiceTransactionOrchestrator
from src.bm_mutation.application.commands import LedgerCommands
from src.bm_mutation.application.coordinator import MutationCoordinator
from src.bm_reports.application.service import ReportService
from src.bm_store.application.session import SessionGatedStore, SessionProvider, StaticSession
from src.bm_store.domain.client import EntityStoreProtocol

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AppContext:
    settings: Settings
    preferences: UiPreferences
    session: SessionProvider
    store: EntityStoreProtocol
    cache: QueryCache
    coordinator: MutationCoordinator
    queries: LedgerQueries
    commands: LedgerCommands
    orchestrator: InvoiceTransactionOrchestrator
    reports: ReportService
    notifications: NotificationCenter

    async def run_intent(
        self,
        action: Callable[[], Awaitable[T]],
        success: str | None = None,
    ) -> T | None:
        """Run one user intent; report the outcome as a notice.

        AppErrors become error notices and yield None; cached data is left
        as it was. Anything else is a bug and propagates.
        """
        try:
            result = await action()
        except AppError as exc:
            logger.info("Intent failed: [%d] %s", exc.code, exc.message)
            self.notifications.error(exc)
            return None
        if success:
            self.notifications.success(success)
        return result

    def end_session(self) -> None:
        """Drop every cached read; called after the identity provider signs out."""
        self.cache.clear()


def build_app_context(
    store: EntityStoreProtocol,
    session: SessionProvider | None = None,
    preference_store: PreferenceStore | None = None,
    config: Settings | None = None,
) -> AppContext:
    cfg = config or default_settings
    session = session or StaticSession()
    gated: EntityStoreProtocol = SessionGatedStore(store, session)  # type: ignore[assignment]
    cache = QueryCache(stale_after=cfg.CACHE_STALE_AFTER_SECONDS)
    coordinator = MutationCoordinator(cache)
    queries = LedgerQueries(cache, gated, session)
    commands = LedgerCommands(gated, coordinator)
    return AppContext(
        settings=cfg,
        preferences=UiPreferences(preference_store or InMemoryPreferenceStore()),
        session=session,
        store=gated,
        cache=cache,
        coordinator=coordinator,
        queries=queries,
        commands=commands,
        orchestrator=InvoiceTransactionOrchestrator(commands),
        reports=ReportService(queries, tz=ZoneInfo(cfg.TIMEZONE)),
        notifications=NotificationCenter(),
    )
