"""QueryCache — keyed store of ledger reads with stale-while-revalidate.

Guarantees:
  - at most one fetch per key is issued at a time; concurrent readers of a
    key with nothing cached share one pending task and observe the same
    value (or the same error)
  - invalidation marks a key stale but keeps its last value; the next read
    returns that value at once and refetches in the background
  - a key only becomes fresh from a fetch that started after its latest
    invalidation; fetches for the same key are serialized by a per-key lock,
    so a response issued before a write can never overwrite a newer one
  - a failed fetch never discards the last successful value, and a key is
    never left LOADING once its fetch has ended
  - a removed key is gone: a fetch in flight for it does not bring it back

All state is touched from the event loop thread only; the only suspension
points are the fetcher awaits.
"""

import asyncio
import functools
import logging
import time
from collections import Counter, defaultdict
from collections.abc import Awaitable, Callable
from typing import Any

from src.bm_cache.domain.keys import QueryKey
from src.bm_cache.domain.state import CacheEntry, QueryState
from src.bm_common.errors import AppError, RemoteError

logger = logging.getLogger(__name__)

Fetcher = Callable[[QueryKey], Awaitable[Any]]
Listener = Callable[[QueryKey, QueryState], None]


class QueryCache:
    def __init__(
        self,
        stale_after: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._stale_after = stale_after
        self._clock = clock
        self._fetchers: dict[str, Fetcher] = {}
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, asyncio.Task[Any]] = {}
        self._locks: dict[QueryKey, asyncio.Lock] = defaultdict(asyncio.Lock)
        # Fetches holding or waiting on each lock; a lock is dropped at zero.
        self._lock_users: Counter[QueryKey] = Counter()
        self._listeners: dict[QueryKey, list[Listener]] = defaultdict(list)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, collection: str, fetcher: Fetcher) -> None:
        self._fetchers[collection] = fetcher

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_or_cached(self, key: QueryKey) -> Any:
        """Return the cached value for key, fetching only when nothing is cached.

        A stale value is returned immediately and a background refetch is
        started (or joined, if one is already running).
        """
        self._check_concrete(key)
        entry = self._entries.get(key)
        if entry is not None and entry.has_data:
            if entry.is_stale(self._clock(), self._stale_after):
                logger.debug("Serving stale %s while revalidating", key)
                self._start_fetch(key)
            return entry.data
        return await asyncio.shield(self._start_fetch(key))

    async def refetch(self, key: QueryKey) -> Any:
        """Fetch key now, even if fresh, and wait for the result."""
        self._check_concrete(key)
        return await asyncio.shield(self._start_fetch(key))

    def get_state(self, key: QueryKey) -> QueryState:
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry()
        return entry.snapshot(
            is_stale=entry.is_stale(self._clock(), self._stale_after),
            is_fetching=key in self._inflight,
        )

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def invalidate(self, key: QueryKey) -> int:
        """Mark every cached key matching ``key`` stale. Returns how many matched.

        Keys that have subscribers are refetched in the background right away.
        """
        matched = [k for k in self._entries if key.matches(k)]
        for k in matched:
            self._entries[k].invalidate()
            # The running fetch (if any) predates this invalidation; the next
            # fetch must be a new one, queued behind it on the key lock.
            self._inflight.pop(k, None)
            logger.debug("Invalidated %s", k)
            if self._listeners.get(k):
                self._start_fetch(k)
        return len(matched)

    def remove(self, key: QueryKey) -> int:
        """Drop every cached key matching ``key`` without refetching. Returns how many matched.

        Used for records the ledger has confirmed deleted; subscribers see IDLE
        and a fetch still in flight for the key is discarded.
        """
        matched = [k for k in self._entries if key.matches(k)]
        for k in matched:
            del self._entries[k]
            self._inflight.pop(k, None)
            logger.debug("Removed %s", k)
            self._notify(k)
        return len(matched)

    def clear(self) -> None:
        """Forget every cached value (e.g. on sign-out). Subscribers see IDLE."""
        keys = list(self._entries)
        self._entries.clear()
        self._inflight.clear()
        for k in keys:
            self._notify(k)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, key: QueryKey, listener: Listener) -> Callable[[], None]:
        """Call listener(key, state) on every state change of key. Returns an unsubscribe callable."""
        self._check_concrete(key)
        self._listeners[key].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(key)
            if listeners and listener in listeners:
                listeners.remove(listener)
                if not listeners:
                    del self._listeners[key]

        return unsubscribe

    async def wait_for_pending(self) -> None:
        """Wait until no fetch is in flight, including ones started meanwhile."""
        while self._inflight:
            await asyncio.gather(*self._inflight.values(), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_concrete(key: QueryKey) -> None:
        if key.is_pattern:
            raise ValueError(f"{key} is a pattern; reads need a concrete key")

    def _start_fetch(self, key: QueryKey) -> asyncio.Task[Any]:
        task = self._inflight.get(key)
        if task is not None:
            return task
        if key.collection not in self._fetchers:
            raise KeyError(f"No fetcher registered for collection {key.collection!r}")
        self._entries.setdefault(key, CacheEntry())
        task = asyncio.get_running_loop().create_task(self._run_fetch(key))
        self._inflight[key] = task
        task.add_done_callback(functools.partial(self._on_fetch_done, key))
        return task

    async def _run_fetch(self, key: QueryKey) -> Any:
        lock = self._locks[key]
        self._lock_users[key] += 1
        try:
            async with lock:
                return await self._fetch_locked(key)
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                self._locks.pop(key, None)

    async def _fetch_locked(self, key: QueryKey) -> Any:
        fetcher = self._fetchers[key.collection]
        entry = self._entries.setdefault(key, CacheEntry())
        generation = entry.generation
        entry.mark_loading()
        self._notify(key)
        logger.debug("Fetching %s", key)
        try:
            value = await fetcher(key)
        except AppError as exc:
            self._fail(key, entry, exc)
            raise
        except asyncio.CancelledError:
            self._fail(key, entry, RemoteError(str(key), "fetch was cancelled"))
            raise
        except Exception as exc:
            logger.exception("Fetcher for %s raised", key)
            wrapped = RemoteError(str(key), repr(exc))
            wrapped.__cause__ = exc
            self._fail(key, entry, wrapped)
            raise
        if self._entries.get(key) is not entry:
            # Entry was cleared or removed while this fetch was in flight.
            return value
        fresh = entry.generation == generation
        entry.mark_success(value, fresh=fresh, now=self._clock())
        self._notify(key)
        return value

    def _fail(self, key: QueryKey, entry: CacheEntry, error: AppError) -> None:
        if self._entries.get(key) is entry:
            entry.mark_error(error)
            self._notify(key)

    def _on_fetch_done(self, key: QueryKey, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.debug("Fetch of %s failed: %s", key, exc)

    def _notify(self, key: QueryKey) -> None:
        listeners = self._listeners.get(key)
        if not listeners:
            return
        state = self.get_state(key)
        for listener in list(listeners):
            try:
                listener(key, state)
            except Exception:
                logger.exception("Listener for %s raised", key)

    def __len__(self) -> int:
        return len(self._entries)
