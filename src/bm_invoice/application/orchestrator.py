"""InvoiceTransactionOrchestrator — invoice creation followed by sale recording.

The ledger offers no atomicity across the two writes, so the sequence is:

  1. compute the total from the cart (client-side)
  2. create the invoice            -- failure: RemoteError, nothing created
  3. record the sale for it        -- failure: PartialTransactionError

The invoice is the authoritative document and is never rolled back or
re-created; a PartialTransactionError carries everything needed to retry
only step 3 via ``retry_sale``.
"""

import logging
from decimal import Decimal

from src.bm_common.errors import (
    PartialTransactionError,
    RemoteError,
    SessionRequiredError,
    ValidationError,
)
from src.bm_invoice.domain.cart import Cart
from src.bm_invoice.domain.models import InvoiceTransactionResult
from src.bm_mutation.application.commands import LedgerCommands
from src.bm_store.domain.models import Invoice

logger = logging.getLogger(__name__)


class InvoiceTransactionOrchestrator:
    def __init__(self, commands: LedgerCommands) -> None:
        self._commands = commands

    async def create_invoice_with_sale(
        self,
        customer_id: int | None,
        cart: Cart,
        notes: str = "",
    ) -> InvoiceTransactionResult:
        if customer_id is None:
            raise ValidationError("customer_id", "select a customer")
        if cart.is_empty():
            raise ValidationError("cart", "add at least one product")

        total = cart.total()
        invoice = await self._commands.create_invoice(
            customer_id, cart.to_invoice_items(), total, notes
        )
        logger.info("Invoice %s created (id=%d, total=%s)", invoice.invoice_number, invoice.id, total)
        return await self._record_sale(invoice, customer_id, total)

    async def retry_sale(self, failed: PartialTransactionError) -> InvoiceTransactionResult:
        """Record the missing sale for an invoice that already exists."""
        logger.info("Retrying sale for invoice %s", failed.invoice.invoice_number)
        return await self._record_sale(failed.invoice, failed.customer_id, failed.amount)

    async def _record_sale(
        self, invoice: Invoice, customer_id: int, amount: Decimal
    ) -> InvoiceTransactionResult:
        try:
            sale = await self._commands.create_sale(customer_id, invoice.id, amount)
        except (RemoteError, SessionRequiredError) as exc:
            logger.error(
                "Invoice %s (id=%d) has no sale: %s", invoice.invoice_number, invoice.id, exc.message
            )
            raise PartialTransactionError(invoice, customer_id, amount, exc) from exc
        return InvoiceTransactionResult(invoice=invoice, sale=sale)
