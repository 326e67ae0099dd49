"""ReportService: reads through the cache, derives figures on every call.

No derived value is stored: each method pulls the current cached
collections (stale-while-revalidate applies) and recomputes.
"""

import asyncio
from datetime import tzinfo
from decimal import Decimal

from src.bm_cache.application.queries import LedgerQueries
from src.bm_common.datetime_utils import month_label
from src.bm_common.money import amount_to_display
from src.bm_reports.application.schemas import (
    CategoryBar,
    DashboardView,
    ExpenseSummary,
    MonthExpenses,
    ProfitLossReport,
    WeeklyBucketOut,
    WeeklySalesReport,
    dashboard_cards,
)
from src.bm_reports.domain import aggregation
from src.bm_store.domain.models import Customer, Product, Sale


class ReportService:
    def __init__(self, queries: LedgerQueries, tz: tzinfo | None = None) -> None:
        self._queries = queries
        self._tz = tz

    async def dashboard(self) -> DashboardView:
        stats, products, customers = await asyncio.gather(
            self._queries.dashboard_stats(),
            self._queries.products(),
            self._queries.customers(),
        )
        return DashboardView(
            cards=dashboard_cards(stats),
            low_stock=aggregation.low_stock(products),
            due_customers=aggregation.due_customers(customers),
        )

    async def low_stock_products(self) -> list[Product]:
        """Low-stock list derived from the full product collection."""
        return aggregation.low_stock(await self._queries.products())

    async def due_customers(self) -> list[Customer]:
        return aggregation.due_customers(await self._queries.customers())

    async def expense_summary(self) -> ExpenseSummary:
        expenses = await self._queries.expenses()
        total = aggregation.total_amount(expenses)
        return ExpenseSummary(
            total=total,
            total_display=amount_to_display(total),
            categories=[CategoryBar.from_domain(c) for c in aggregation.category_totals(expenses)],
            months=[
                MonthExpenses.from_domain(g)
                for g in aggregation.group_by_month(expenses, self._tz)
            ],
        )

    async def weekly_sales(self, month: int, year: int) -> WeeklySalesReport:
        sales = await self._queries.sales()
        buckets = aggregation.weekly_buckets(sales, month, year, self._tz)
        total = sum((b.amount for b in buckets), Decimal("0"))
        return WeeklySalesReport(
            month=month,
            year=year,
            label=month_label(month, year),
            buckets=[WeeklyBucketOut.from_domain(b) for b in buckets],
            total=total,
            total_display=amount_to_display(total),
        )

    async def profit_loss(self, month: int, year: int) -> ProfitLossReport:
        pl = await self._queries.profit_loss(month, year)
        return ProfitLossReport.from_domain(pl, month, year)

    async def customer_sales(self, customer_id: int) -> list[Sale]:
        return aggregation.customer_sales(await self._queries.sales(), customer_id)
