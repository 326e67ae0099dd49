"""Unit tests for ReportService and its report records."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from src.bm_common.datetime_utils import to_nanos
from src.bm_common.enums import ProfitStatus
from src.bm_reports.application.schemas import ProfitLossReport, dashboard_cards
from src.bm_reports.application.service import ReportService
from src.bm_store.domain.models import (
    Customer,
    DashboardStats,
    Expense,
    Product,
    ProfitLoss,
    Sale,
)


def _make_stats() -> DashboardStats:
    return DashboardStats(
        total_products=3,
        total_sales_amount=Decimal("1250.5"),
        today_revenue=Decimal("0"),
        total_customers=2,
    )


def _make_service(**returns) -> tuple[ReportService, AsyncMock]:
    queries = AsyncMock()
    for name, value in returns.items():
        getattr(queries, name).return_value = value
    return ReportService(queries, tz=UTC), queries


class TestReportSchemas:
    def test_dashboard_cards(self) -> None:
        cards = dashboard_cards(_make_stats())

        assert [c.key for c in cards] == [
            "totalCustomers",
            "totalSalesAmount",
            "totalProducts",
            "todayRevenue",
        ]
        assert cards[1].label == "Total Sales"
        assert cards[1].value == "PKR 1,250.50"
        assert cards[3].value == "PKR 0.00"

    def test_loss_report(self) -> None:
        pl = ProfitLoss(sales=Decimal("1000"), expenses=Decimal("1200"), profit=Decimal("-200"))

        report = ProfitLossReport.from_domain(pl, 3, 2025)

        assert report.status == ProfitStatus.LOSS
        assert report.profit_display == "-PKR 200.00"
        assert report.label == "March 2025"


class TestReportService:
    async def test_dashboard(self) -> None:
        service, _ = _make_service(
            dashboard_stats=_make_stats(),
            products=[
                Product(id=1, name="Soap", price=Decimal("1"), quantity=4),
                Product(id=2, name="Rice", price=Decimal("1"), quantity=5),
            ],
            customers=[
                Customer(id=1, name="Ali", due_amount=Decimal("300")),
                Customer(id=2, name="Sara"),
            ],
        )

        view = await service.dashboard()

        assert len(view.cards) == 4
        assert [p.name for p in view.low_stock] == ["Soap"]
        assert [c.name for c in view.due_customers] == ["Ali"]

    async def test_expense_summary(self) -> None:
        march = to_nanos(datetime(2025, 3, 2, tzinfo=UTC))
        april = to_nanos(datetime(2025, 4, 2, tzinfo=UTC))
        service, _ = _make_service(
            expenses=[
                Expense(id=1, amount=Decimal("100"), category="Rent", date=march),
                Expense(id=2, amount=Decimal("50"), category="Food", date=april),
            ]
        )

        summary = await service.expense_summary()

        assert summary.total == Decimal("150")
        assert summary.total_display == "PKR 150.00"
        assert [(c.category, c.width_ratio) for c in summary.categories] == [
            ("Rent", Decimal("1")),
            ("Food", Decimal("0.5")),
        ]
        assert [m.label for m in summary.months] == ["April 2025", "March 2025"]

    async def test_weekly_sales(self) -> None:
        service, _ = _make_service(
            sales=[
                Sale(
                    id=1,
                    invoice_id=1,
                    customer_id=1,
                    amount=Decimal("70"),
                    date=to_nanos(datetime(2025, 3, 31, tzinfo=UTC)),
                )
            ]
        )

        report = await service.weekly_sales(3, 2025)

        assert [b.week for b in report.buckets] == ["Week 1", "Week 2", "Week 3", "Week 4"]
        assert report.buckets[3].amount == Decimal("70")
        assert report.total_display == "PKR 70.00"

    async def test_profit_loss_reads_the_month_key(self) -> None:
        service, queries = _make_service(
            profit_loss=ProfitLoss(
                sales=Decimal("1000"), expenses=Decimal("1200"), profit=Decimal("-200")
            )
        )

        report = await service.profit_loss(3, 2025)

        queries.profit_loss.assert_awaited_once_with(3, 2025)
        assert report.status == ProfitStatus.LOSS
