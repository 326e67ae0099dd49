"""Aggregation engine: pure functions over fetched collections.

Nothing here is persisted or cached; every figure is re-derived from the
collections the caller passes in. Dashboard stats and profit/loss come
pre-aggregated from the ledger and are only classified/labelled here.

Calendar questions are answered in settings.TIMEZONE unless a tz is given.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo
from decimal import Decimal
from typing import Protocol

from config.settings import settings
from src.bm_common.datetime_utils import from_nanos, month_key
from src.bm_common.enums import ALL_CATEGORIES, ProfitStatus
from src.bm_store.domain.models import Customer, Expense, Invoice, Product, Sale

# Months longer than 28 days fold days 29-31 into the last week.
WEEKS_PER_MONTH = 4
DAYS_PER_WEEK = 7

_ZERO = Decimal("0")
_ONE = Decimal("1")


class _HasAmount(Protocol):
    amount: Decimal


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: Decimal
    # total / max category total, in [0, 1]
    ratio: Decimal


@dataclass(frozen=True)
class WeekBucket:
    index: int
    amount: Decimal

    @property
    def label(self) -> str:
        return f"Week {self.index + 1}"


@dataclass
class MonthGroup:
    key: str  # 'YYYY-MM'
    total: Decimal
    expenses: list[Expense] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def total_amount(records: Iterable[_HasAmount]) -> Decimal:
    return sum((r.amount for r in records), _ZERO)


def category_totals(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Sum expenses per category label (exact, case-sensitive match).

    Categories keep first-seen order. Each ratio is normalized against the
    largest category total, with a denominator of at least 1 so all-zero
    totals give ratio 0 rather than a division error.
    """
    sums: dict[str, Decimal] = {}
    for e in expenses:
        sums[e.category] = sums.get(e.category, _ZERO) + e.amount
    if not sums:
        return []
    denominator = max(max(sums.values()), _ONE)
    return [
        CategoryTotal(category=cat, total=total, ratio=total / denominator)
        for cat, total in sums.items()
    ]


def group_by_month(expenses: Iterable[Expense], tz: tzinfo | None = None) -> list[MonthGroup]:
    """Group by calendar month of the expense date, newest month first."""
    groups: dict[str, MonthGroup] = {}
    for e in expenses:
        key = month_key(e.date, tz)
        group = groups.setdefault(key, MonthGroup(key=key, total=_ZERO))
        group.expenses.append(e)
        group.total += e.amount
    return [groups[k] for k in sorted(groups, reverse=True)]


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


def sales_in_month(
    sales: Iterable[Sale], month: int, year: int, tz: tzinfo | None = None
) -> list[Sale]:
    result = []
    for s in sales:
        dt = from_nanos(s.date, tz)
        if dt.month == month and dt.year == year:
            result.append(s)
    return result


def week_index(day_of_month: int) -> int:
    """floor((day - 1) / 7), clamped to the last bucket."""
    return min((day_of_month - 1) // DAYS_PER_WEEK, WEEKS_PER_MONTH - 1)


def weekly_buckets(
    sales: Iterable[Sale], month: int, year: int, tz: tzinfo | None = None
) -> list[WeekBucket]:
    """Always exactly four buckets for the chosen month, regardless of its length."""
    amounts = [_ZERO] * WEEKS_PER_MONTH
    for s in sales_in_month(sales, month, year, tz):
        amounts[week_index(from_nanos(s.date, tz).day)] += s.amount
    return [WeekBucket(index=i, amount=a) for i, a in enumerate(amounts)]


def customer_sales(sales: Iterable[Sale], customer_id: int) -> list[Sale]:
    return [s for s in sales if s.customer_id == customer_id]


# ---------------------------------------------------------------------------
# Products / customers
# ---------------------------------------------------------------------------


def is_low_stock(product: Product, threshold: int | None = None) -> bool:
    limit = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    return product.quantity < limit


def low_stock(products: Iterable[Product], threshold: int | None = None) -> list[Product]:
    """Low-stock filter over the full product collection."""
    return [p for p in products if is_low_stock(p, threshold)]


def due_customers(customers: Iterable[Customer]) -> list[Customer]:
    return [c for c in customers if c.due_amount > 0]


def filter_products(
    products: Iterable[Product], search: str = "", category: str = ALL_CATEGORIES
) -> list[Product]:
    needle = search.lower()
    return [
        p
        for p in products
        if needle in p.name.lower() and (category == ALL_CATEGORIES or p.category == category)
    ]


def filter_customers(customers: Iterable[Customer], search: str = "") -> list[Customer]:
    needle = search.lower()
    return [c for c in customers if needle in c.name.lower() or search in c.phone]


def customer_name(customers: Sequence[Customer], customer_id: int) -> str:
    for c in customers:
        if c.id == customer_id:
            return c.name
    return "Unknown"


def invoice_number(invoices: Sequence[Invoice], invoice_id: int) -> str:
    for inv in invoices:
        if inv.id == invoice_id:
            return inv.invoice_number
    return f"#{invoice_id}"


# ---------------------------------------------------------------------------
# Profit / loss and month navigation
# ---------------------------------------------------------------------------


def classify_profit(profit: Decimal) -> ProfitStatus:
    if profit > 0:
        return ProfitStatus.PROFIT
    if profit < 0:
        return ProfitStatus.LOSS
    return ProfitStatus.BREAK_EVEN


def previous_month(month: int, year: int) -> tuple[int, int]:
    if month == 1:
        return 12, year - 1
    return month - 1, year


def next_month(month: int, year: int, today: date) -> tuple[int, int]:
    """Step forward one month, but never past the month containing today."""
    if (year, month) >= (today.year, today.month):
        return month, year
    if month == 12:
        return 1, year + 1
    return month + 1, year
