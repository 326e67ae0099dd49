"""Per-key cache state.

CacheEntry is the cache's mutable bookkeeping; QueryState is the immutable
snapshot handed to readers and listeners.

Status machine: IDLE -> LOADING -> SUCCESS | ERROR. A revalidation enters
LOADING again but keeps ``data``; only a successful fetch replaces it.
"""

from dataclasses import dataclass
from typing import Any

from src.bm_common.enums import QueryStatus
from src.bm_common.errors import AppError


@dataclass(frozen=True)
class QueryState:
    status: QueryStatus
    data: Any
    has_data: bool
    error: AppError | None
    is_stale: bool
    is_fetching: bool


@dataclass
class CacheEntry:
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    has_data: bool = False
    error: AppError | None = None
    stale: bool = False
    # Bumped on every invalidation; a fetch that started under an older
    # generation may store its value but cannot mark the key fresh.
    generation: int = 0
    updated_at: float | None = None

    def mark_loading(self) -> None:
        self.status = QueryStatus.LOADING

    def mark_success(self, data: Any, fresh: bool, now: float) -> None:
        self.status = QueryStatus.SUCCESS
        self.data = data
        self.has_data = True
        self.error = None
        self.stale = not fresh
        self.updated_at = now

    def mark_error(self, error: AppError) -> None:
        self.status = QueryStatus.ERROR
        self.error = error

    def invalidate(self) -> None:
        self.stale = True
        self.generation += 1

    def is_stale(self, now: float, stale_after: float | None) -> bool:
        if self.stale:
            return True
        if stale_after is None or self.updated_at is None:
            return False
        return now - self.updated_at >= stale_after

    def snapshot(self, is_stale: bool, is_fetching: bool) -> QueryState:
        return QueryState(
            status=self.status,
            data=self.data,
            has_data=self.has_data,
            error=self.error,
            is_stale=is_stale,
            is_fetching=is_fetching,
        )
