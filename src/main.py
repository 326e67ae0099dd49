"""Application entry point.

Run with: python -m src.main

Builds the AppContext against the configured ledger (LEDGER_URL, or the
in-process ledger when unset) and prints the dashboard.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvloop

from config.settings import settings
from src.bm_app.context import AppContext, build_app_context
from src.bm_store.application.session import SessionProvider
from src.bm_store.infrastructure.http_client import HttpEntityStore, build_http_client
from src.bm_store.infrastructure.memory_store import InMemoryEntityStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_app_context(
    session: SessionProvider | None = None,
) -> AsyncGenerator[AppContext, None]:
    """Startup: pick the ledger transport. Shutdown: wait for refetches, close transport."""
    http_store: HttpEntityStore | None = None
    if settings.LEDGER_URL:
        http_store = HttpEntityStore(build_http_client())
        ctx = build_app_context(http_store, session=session)
        logger.info("Using ledger at %s", settings.LEDGER_URL)
    else:
        ctx = build_app_context(InMemoryEntityStore(), session=session)
        logger.info("LEDGER_URL not set; using the in-process ledger")
    try:
        yield ctx
    finally:
        await ctx.cache.wait_for_pending()
        if http_store is not None:
            await http_store.aclose()


async def _show_dashboard() -> None:
    async with open_app_context() as ctx:
        view = await ctx.run_intent(ctx.reports.dashboard)
        if view is None:
            for notice in ctx.notifications.history:
                print(f"[{notice.level.value}] {notice.message}")
            return
        print(settings.APP_NAME)
        for card in view.cards:
            print(f"  {card.label}: {card.value}")
        print(f"  Low stock: {len(view.low_stock)} items")
        print(f"  Customers with dues: {len(view.due_customers)}")


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvloop.run(_show_dashboard())


if __name__ == "__main__":
    main()
