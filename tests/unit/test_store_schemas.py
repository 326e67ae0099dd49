"""Tests for bm_store wire schemas (camelCase ledger payloads)."""

from decimal import Decimal

from src.bm_store.application.schemas import (
    CustomerWire,
    DashboardStatsWire,
    InvoiceItemWire,
    InvoiceWire,
    ProductWire,
    ProfitLossWire,
)
from src.bm_store.domain.models import InvoiceItem, Product


class TestDecode:
    def test_product_from_camel_case(self) -> None:
        product = ProductWire.model_validate({
            "id": 12, "name": "Soap", "price": "100.50", "quantity": 3,
            "imageUrl": "", "category": "Care", "description": "", "unit": "pc",
            "barcode": "123", "createdAt": 1_700_000_000_000_000_000,
        }).to_domain()

        assert isinstance(product, Product)
        assert product.price == Decimal("100.50")
        assert product.created_at == 1_700_000_000_000_000_000

    def test_numeric_amount_accepted(self) -> None:
        customer = CustomerWire.model_validate(
            {"id": 1, "name": "Ali", "phone": "0300", "dueAmount": 250.5}
        ).to_domain()
        assert customer.due_amount == Decimal("250.5")

    def test_invoice_with_items(self) -> None:
        invoice = InvoiceWire.model_validate({
            "id": 4, "invoiceNumber": "INV-0001", "customerId": 2, "total": "350",
            "items": [{"productId": 1, "productName": "Soap", "qty": 2, "unitPrice": "100"}],
            "notes": "", "date": 1,
        }).to_domain()

        assert invoice.items[0].line_total == Decimal("200")
        assert invoice.customer_id == 2

    def test_aggregates(self) -> None:
        stats = DashboardStatsWire.model_validate({
            "totalProducts": 3, "totalSalesAmount": "10", "todayRevenue": "0",
            "totalCustomers": 2,
        }).to_domain()
        pl = ProfitLossWire.model_validate(
            {"sales": "1000", "expenses": "1200", "profit": "-200"}
        ).to_domain()

        assert stats.total_customers == 2
        assert pl.profit == Decimal("-200")


class TestEncode:
    def test_item_to_wire_uses_aliases_and_strings(self) -> None:
        item = InvoiceItem(product_id=1, product_name="Soap", qty=2, unit_price=Decimal("99.90"))
        assert InvoiceItemWire.from_domain(item).to_wire() == {
            "productId": 1, "productName": "Soap", "qty": 2, "unitPrice": "99.90",
        }
