"""Full AppContext over HttpEntityStore, with the ledger replaced by httpx.MockTransport."""

import json

import httpx
import pytest

from src.bm_app.context import build_app_context
from src.bm_common.enums import NoticeLevel
from src.bm_store.infrastructure.http_client import HttpEntityStore

_PRODUCTS = [
    {"id": 1, "name": "Soap", "price": "100", "quantity": 2, "imageUrl": "", "category": "Care",
     "description": "", "unit": "pc", "barcode": "", "createdAt": 0},
    {"id": 2, "name": "Rice", "price": "50", "quantity": 40, "imageUrl": "", "category": "Food",
     "description": "", "unit": "kg", "barcode": "", "createdAt": 0},
]
_CUSTOMERS = [
    {"id": 3, "name": "Ali", "phone": "0300", "dueAmount": "450", "createdAt": 0},
]
_STATS = {"totalProducts": 2, "totalSalesAmount": "1250.5", "todayRevenue": "0", "totalCustomers": 1}


class _Ledger:
    """Canned ledger answering /rpc/{operation}; records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.down = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        operation = request.url.path.rsplit("/", 1)[-1]
        self.calls.append((operation, json.loads(request.content or b"{}")))
        if self.down:
            raise httpx.ConnectError("ledger unreachable", request=request)
        data = {
            "getAllProducts": _PRODUCTS,
            "getAllCustomers": _CUSTOMERS,
            "getDashboardStats": _STATS,
            "updateCustomer": {**_CUSTOMERS[0], "dueAmount": "0"},
        }.get(operation)
        if data is None:
            return httpx.Response(200, json={"code": 2002, "message": f"{operation} not found", "data": None})
        return httpx.Response(200, json={"code": 0, "message": "success", "data": data})


@pytest.fixture
def ledger() -> _Ledger:
    return _Ledger()


@pytest.fixture
async def http_ctx(ledger: _Ledger):
    client = httpx.AsyncClient(transport=httpx.MockTransport(ledger), base_url="http://ledger")
    store = HttpEntityStore(client)
    ctx = build_app_context(store)
    yield ctx
    await ctx.cache.wait_for_pending()
    await store.aclose()


class TestHttpFlow:
    async def test_dashboard_over_http(self, http_ctx, ledger) -> None:
        view = await http_ctx.reports.dashboard()

        assert {c.key: c.value for c in view.cards}["totalSalesAmount"] == "PKR 1,250.50"
        assert [p.name for p in view.low_stock] == ["Soap"]
        assert [c.name for c in view.due_customers] == ["Ali"]
        assert sorted(op for op, _ in ledger.calls) == [
            "getAllCustomers",
            "getAllProducts",
            "getDashboardStats",
        ]

    async def test_cached_reads_issue_no_calls(self, http_ctx, ledger) -> None:
        await http_ctx.queries.products()
        await http_ctx.queries.products()

        assert [op for op, _ in ledger.calls] == ["getAllProducts"]

    async def test_mark_paid_sends_zero_due(self, http_ctx, ledger) -> None:
        customer = (await http_ctx.queries.customers())[0]

        await http_ctx.commands.mark_customer_paid(customer)

        op, body = ledger.calls[-1]
        assert op == "updateCustomer"
        assert body == {"id": 3, "name": "Ali", "phone": "0300", "dueAmount": "0"}

    async def test_unreachable_ledger_becomes_notice(self, http_ctx, ledger) -> None:
        ledger.down = True

        outcome = await http_ctx.run_intent(http_ctx.reports.dashboard)

        assert outcome is None
        notice = http_ctx.notifications.history[-1]
        assert notice.level == NoticeLevel.ERROR
        assert notice.message == "Something went wrong. Please try again."
