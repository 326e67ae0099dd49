"""MutationCoordinator — one ledger write, then (only on success) invalidation.

There is no optimistic local update: if the write fails the cache is left
exactly as it was, so nothing visible ever reflects an unconfirmed write.
"""

import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from src.bm_cache.domain.keys import QueryKey
from src.bm_cache.engine.query_cache import QueryCache
from src.bm_common.enums import WriteOp
from src.bm_common.errors import AppError
from src.bm_mutation.domain.invalidation import evictions_for, invalidations_for

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MutationCoordinator:
    def __init__(self, cache: QueryCache) -> None:
        self._cache = cache
        self._pending: Counter[WriteOp] = Counter()

    def is_pending(self, *ops: WriteOp) -> bool:
        """True while any of the given writes is awaiting the ledger."""
        return any(self._pending[op] > 0 for op in ops)

    async def execute(
        self,
        op: WriteOp,
        write: Callable[[], Awaitable[T]],
        entity_id: int | None = None,
        invalidates: Iterable[QueryKey] | None = None,
    ) -> T:
        """Run ``write``; on success invalidate op's declared reads (or ``invalidates``).

        Deletes also drop the deleted record's own key from the cache.
        """
        targets = tuple(invalidates) if invalidates is not None else invalidations_for(op, entity_id)
        self._pending[op] += 1
        try:
            result = await write()
        except AppError as exc:
            logger.warning("%s failed, cache left untouched: %s", op.value, exc.message)
            raise
        finally:
            self._pending[op] -= 1

        removed = sum(self._cache.remove(key) for key in evictions_for(op, entity_id))
        touched = sum(self._cache.invalidate(key) for key in targets)
        logger.debug(
            "%s succeeded; %d cached reads invalidated, %d removed", op.value, touched, removed
        )
        return result
