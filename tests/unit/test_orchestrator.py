"""Unit tests for InvoiceTransactionOrchestrator: invoice first, then sale."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.bm_common.errors import (
    PartialTransactionError,
    RemoteError,
    SessionRequiredError,
    ValidationError,
)
from src.bm_invoice.application.orchestrator import InvoiceTransactionOrchestrator
from src.bm_invoice.domain.cart import Cart
from src.bm_store.domain.models import Invoice, Product, Sale


def _make_cart() -> Cart:
    cart = Cart()
    cart.add(Product(id=1, name="Soap", price=Decimal("100"), quantity=10), 2)
    cart.add(Product(id=2, name="Rice", price=Decimal("50"), quantity=10), 3)
    return cart


def _make_invoice(total: Decimal = Decimal("350")) -> Invoice:
    return Invoice(id=11, invoice_number="INV-0011", customer_id=7, total=total)


def _make_orchestrator() -> tuple[InvoiceTransactionOrchestrator, AsyncMock]:
    commands = AsyncMock()
    commands.create_invoice.return_value = _make_invoice()
    commands.create_sale.return_value = Sale(
        id=12, invoice_id=11, customer_id=7, amount=Decimal("350")
    )
    return InvoiceTransactionOrchestrator(commands), commands


class TestCreateInvoiceWithSale:
    async def test_invoice_then_sale_with_cart_total(self) -> None:
        orchestrator, commands = _make_orchestrator()

        result = await orchestrator.create_invoice_with_sale(7, _make_cart(), "thanks")

        items, total = commands.create_invoice.await_args.args[1:3]
        assert total == Decimal("350")
        assert [i.qty for i in items] == [2, 3]
        commands.create_sale.assert_awaited_once_with(7, 11, Decimal("350"))
        assert result.invoice.id == 11
        assert result.sale.invoice_id == 11

    async def test_no_customer(self) -> None:
        orchestrator, commands = _make_orchestrator()

        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.create_invoice_with_sale(None, _make_cart())

        assert exc_info.value.field == "customer_id"
        commands.create_invoice.assert_not_awaited()

    async def test_empty_cart(self) -> None:
        orchestrator, commands = _make_orchestrator()

        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.create_invoice_with_sale(7, Cart())

        assert exc_info.value.field == "cart"
        commands.create_invoice.assert_not_awaited()

    async def test_invoice_failure_skips_sale(self) -> None:
        orchestrator, commands = _make_orchestrator()
        commands.create_invoice.side_effect = RemoteError("createInvoice", "down")

        with pytest.raises(RemoteError):
            await orchestrator.create_invoice_with_sale(7, _make_cart())

        commands.create_sale.assert_not_awaited()

    async def test_sale_failure_is_partial(self) -> None:
        orchestrator, commands = _make_orchestrator()
        cause = RemoteError("createSale", "down")
        commands.create_sale.side_effect = cause

        with pytest.raises(PartialTransactionError) as exc_info:
            await orchestrator.create_invoice_with_sale(7, _make_cart())

        failed = exc_info.value
        assert not isinstance(failed, RemoteError)
        assert failed.invoice.id == 11
        assert failed.customer_id == 7
        assert failed.amount == Decimal("350")
        assert failed.cause is cause
        assert "INV-0011" in failed.message

    async def test_session_loss_during_sale_is_partial(self) -> None:
        orchestrator, commands = _make_orchestrator()
        commands.create_sale.side_effect = SessionRequiredError("create_sale")

        with pytest.raises(PartialTransactionError):
            await orchestrator.create_invoice_with_sale(7, _make_cart())


class TestRetrySale:
    async def test_retry_records_only_the_sale(self) -> None:
        orchestrator, commands = _make_orchestrator()
        failed = PartialTransactionError(
            _make_invoice(), 7, Decimal("350"), RemoteError("createSale", "down")
        )

        result = await orchestrator.retry_sale(failed)

        commands.create_invoice.assert_not_awaited()
        commands.create_sale.assert_awaited_once_with(7, 11, Decimal("350"))
        assert result.invoice is failed.invoice

    async def test_retry_failure_raises_partial_again(self) -> None:
        orchestrator, commands = _make_orchestrator()
        commands.create_sale.side_effect = RemoteError("createSale", "still down")
        failed = PartialTransactionError(
            _make_invoice(), 7, Decimal("350"), RemoteError("createSale", "down")
        )

        with pytest.raises(PartialTransactionError) as exc_info:
            await orchestrator.retry_sale(failed)

        assert exc_info.value.invoice is failed.invoice
