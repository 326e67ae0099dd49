"""Named report records handed to the presentation layer.

Amounts stay Decimal; every amount has a matching ``*_display`` string in
the configured currency ("PKR 1,250.00").
"""

from decimal import Decimal

from pydantic import BaseModel

from src.bm_common.datetime_utils import month_label
from src.bm_common.enums import ProfitStatus
from src.bm_common.money import amount_to_display
from src.bm_reports.domain.aggregation import (
    CategoryTotal,
    MonthGroup,
    WeekBucket,
    classify_profit,
)
from src.bm_store.domain.models import Customer, DashboardStats, Expense, Product, ProfitLoss


class StatCard(BaseModel):
    key: str
    label: str
    value: str


def dashboard_cards(stats: DashboardStats) -> list[StatCard]:
    return [
        StatCard(key="totalCustomers", label="Total Customers", value=str(stats.total_customers)),
        StatCard(
            key="totalSalesAmount",
            label="Total Sales",
            value=amount_to_display(stats.total_sales_amount),
        ),
        StatCard(key="totalProducts", label="Total Products", value=str(stats.total_products)),
        StatCard(
            key="todayRevenue",
            label="Today's Revenue",
            value=amount_to_display(stats.today_revenue),
        ),
    ]


class DashboardView(BaseModel):
    cards: list[StatCard]
    low_stock: list[Product]
    due_customers: list[Customer]


class CategoryBar(BaseModel):
    category: str
    total: Decimal
    total_display: str
    width_ratio: Decimal

    @classmethod
    def from_domain(cls, c: CategoryTotal) -> "CategoryBar":
        return cls(
            category=c.category,
            total=c.total,
            total_display=amount_to_display(c.total),
            width_ratio=c.ratio,
        )


class MonthExpenses(BaseModel):
    month_key: str
    label: str
    total: Decimal
    total_display: str
    expenses: list[Expense]

    @classmethod
    def from_domain(cls, g: MonthGroup) -> "MonthExpenses":
        year, month = (int(part) for part in g.key.split("-"))
        return cls(
            month_key=g.key,
            label=month_label(month, year),
            total=g.total,
            total_display=amount_to_display(g.total),
            expenses=g.expenses,
        )


class ExpenseSummary(BaseModel):
    total: Decimal
    total_display: str
    categories: list[CategoryBar]
    months: list[MonthExpenses]


class WeeklyBucketOut(BaseModel):
    week: str
    amount: Decimal
    amount_display: str

    @classmethod
    def from_domain(cls, b: WeekBucket) -> "WeeklyBucketOut":
        return cls(week=b.label, amount=b.amount, amount_display=amount_to_display(b.amount))


class WeeklySalesReport(BaseModel):
    month: int
    year: int
    label: str
    buckets: list[WeeklyBucketOut]
    total: Decimal
    total_display: str


class ProfitLossReport(BaseModel):
    month: int
    year: int
    label: str
    sales: Decimal
    expenses: Decimal
    profit: Decimal
    sales_display: str
    expenses_display: str
    profit_display: str
    status: ProfitStatus

    @classmethod
    def from_domain(cls, pl: ProfitLoss, month: int, year: int) -> "ProfitLossReport":
        return cls(
            month=month,
            year=year,
            label=month_label(month, year),
            sales=pl.sales,
            expenses=pl.expenses,
            profit=pl.profit,
            sales_display=amount_to_display(pl.sales),
            expenses_display=amount_to_display(pl.expenses),
            profit_display=amount_to_display(pl.profit),
            status=classify_profit(pl.profit),
        )
