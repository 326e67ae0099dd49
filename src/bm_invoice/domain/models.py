"""Results of the invoice-then-sale sequence."""

from dataclasses import dataclass

from src.bm_store.domain.models import Invoice, Sale


@dataclass(frozen=True)
class InvoiceTransactionResult:
    invoice: Invoice
    sale: Sale
