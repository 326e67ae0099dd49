"""Tests for HttpEntityStore over httpx.MockTransport."""

import json
from decimal import Decimal

import httpx
import pytest

from src.bm_common.errors import EntityNotFoundError, RemoteError, TransportError
from src.bm_store.domain.models import InvoiceItem
from src.bm_store.infrastructure.http_client import HttpEntityStore


def _envelope(data=None, code: int = 0, message: str = "success") -> dict:
    return {"code": code, "message": message, "data": data}


def _store(handler) -> HttpEntityStore:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://ledger")
    return HttpEntityStore(client)


_PRODUCT = {
    "id": 1, "name": "Soap", "price": "100", "quantity": 4, "imageUrl": "",
    "category": "", "description": "", "unit": "", "barcode": "", "createdAt": 0,
}


class TestCalls:
    async def test_posts_named_args_to_operation(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_envelope(_PRODUCT))

        store = _store(handler)
        product = await store.create_product(
            "Soap", Decimal("100"), 4, "", "", "", "", ""
        )

        assert product.quantity == 4
        assert seen[0].url.path == "/rpc/createProduct"
        body = json.loads(seen[0].content)
        assert body["price"] == "100"
        assert body["imageUrl"] == ""

    async def test_list_decoding(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope([_PRODUCT, _PRODUCT])))
        assert len(await store.get_all_products()) == 2

    async def test_invoice_items_encoded(self) -> None:
        seen: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=_envelope({
                "id": 9, "invoiceNumber": "INV-0009", "customerId": 2, "total": "200",
                "items": seen[0]["items"], "notes": "", "date": 0,
            }))

        store = _store(handler)
        items = [InvoiceItem(product_id=1, product_name="Soap", qty=2, unit_price=Decimal("100"))]
        invoice = await store.create_invoice(2, items, Decimal("200"), "")

        assert seen[0]["items"][0]["unitPrice"] == "100"
        assert invoice.items[0].qty == 2

    async def test_missing_profile_is_none(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope(None)))
        assert await store.get_caller_user_profile() is None

    async def test_total_sales_decimal(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope("1250.75")))
        assert await store.get_total_sales(0, 10) == Decimal("1250.75")


class TestFailures:
    async def test_ledger_rejection(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope(code=2001, message="nope")))
        with pytest.raises(RemoteError) as exc_info:
            await store.get_all_sales()
        assert exc_info.value.operation == "getAllSales"

    async def test_not_found(self) -> None:
        store = _store(
            lambda r: httpx.Response(404, json=_envelope(code=2002, message="Product 5 not found"))
        )
        with pytest.raises(EntityNotFoundError):
            await store.get_product(5)

    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError):
            await _store(handler).get_dashboard_stats()

    async def test_non_json_body(self) -> None:
        store = _store(lambda r: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(TransportError, match="502"):
            await store.get_all_customers()

    async def test_malformed_payload(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope({"id": "x"})))
        with pytest.raises(TransportError):
            await store.get_product(1)

    async def test_server_error_without_envelope_fails_void_write(self) -> None:
        store = _store(lambda r: httpx.Response(500, json={"detail": "Internal Server Error"}))
        with pytest.raises(TransportError, match="500"):
            await store.delete_product(1)

    async def test_error_status_overrides_success_code(self) -> None:
        store = _store(lambda r: httpx.Response(503, json=_envelope(message="maintenance")))
        with pytest.raises(TransportError, match="503"):
            await store.delete_customer(2)

    async def test_total_sales_not_a_number(self) -> None:
        store = _store(lambda r: httpx.Response(200, json=_envelope("lots")))
        with pytest.raises(TransportError, match="not a decimal"):
            await store.get_total_sales(0, 10)
