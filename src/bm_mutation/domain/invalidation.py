"""Invalidation graph: which cached reads each ledger write makes stale.

Collection-wide entries (``QueryKey.all``) cover every parameterized key of
that collection, e.g. one expense write touches every month's profit/loss.
Entity-specific keys (product(id), customer(id)) are added per call: updates
mark them stale, deletes evict them from the cache.
"""

from src.bm_cache.domain import keys
from src.bm_cache.domain.keys import QueryKey
from src.bm_common.enums import WriteOp

_PRODUCT_READS = (
    keys.products(),
    keys.low_stock_products(),
    keys.dashboard_stats(),
)

_EXPENSE_READS = (
    keys.expenses(),
    QueryKey.all(keys.EXPENSES_BY_CATEGORY),
    QueryKey.all(keys.EXPENSES_BY_MONTH),
    QueryKey.all(keys.PROFIT_LOSS),
)

_SALE_READS = (
    keys.sales(),
    keys.dashboard_stats(),
    QueryKey.all(keys.PROFIT_LOSS),
    QueryKey.all(keys.TOTAL_SALES),
)

WRITE_INVALIDATIONS: dict[WriteOp, tuple[QueryKey, ...]] = {
    WriteOp.CREATE_PRODUCT: _PRODUCT_READS,
    WriteOp.UPDATE_PRODUCT: _PRODUCT_READS,
    WriteOp.DELETE_PRODUCT: _PRODUCT_READS,
    WriteOp.CREATE_CUSTOMER: (keys.customers(), keys.dashboard_stats()),
    WriteOp.UPDATE_CUSTOMER: (keys.customers(),),
    WriteOp.DELETE_CUSTOMER: (keys.customers(), keys.dashboard_stats()),
    WriteOp.CREATE_INVOICE: (keys.invoices(), keys.sales(), keys.dashboard_stats()),
    WriteOp.CREATE_SALE: _SALE_READS,
    WriteOp.CREATE_EXPENSE: _EXPENSE_READS,
    WriteOp.UPDATE_EXPENSE: _EXPENSE_READS,
    WriteOp.DELETE_EXPENSE: _EXPENSE_READS,
    WriteOp.UPDATE_SETTINGS: (keys.settings(),),
    WriteOp.SAVE_PROFILE: (keys.current_user_profile(),),
}

_ENTITY_KEY = {
    WriteOp.UPDATE_PRODUCT: keys.product,
    WriteOp.DELETE_PRODUCT: keys.product,
    WriteOp.UPDATE_CUSTOMER: keys.customer,
    WriteOp.DELETE_CUSTOMER: keys.customer,
}

# Deleted records are permanent; their own keys are dropped, not refetched.
_DELETES = frozenset({WriteOp.DELETE_PRODUCT, WriteOp.DELETE_CUSTOMER})


def invalidations_for(op: WriteOp, entity_id: int | None = None) -> tuple[QueryKey, ...]:
    declared = WRITE_INVALIDATIONS[op]
    make_key = _ENTITY_KEY.get(op)
    if make_key is not None and entity_id is not None and op not in _DELETES:
        return (*declared, make_key(entity_id))
    return declared


def evictions_for(op: WriteOp, entity_id: int | None = None) -> tuple[QueryKey, ...]:
    if op in _DELETES and entity_id is not None:
        return (_ENTITY_KEY[op](entity_id),)
    return ()
