"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation (raised before any ledger call)
  2xxx: Remote ledger / transport
  3xxx: Multi-step transactions
  9xxx: Session / system
"""

from decimal import Decimal
from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationError(AppError):
    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(1001, f"Invalid {field}: {detail}")


# --- 2xxx: Remote ---

class RemoteError(AppError):
    """A ledger call was rejected or never completed."""

    def __init__(self, operation: str, detail: str, code: int = 2001) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(code, f"{operation} failed: {detail}")


class EntityNotFoundError(RemoteError):
    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(operation, detail, 2002)


class TransportError(RemoteError):
    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(operation, detail, 2003)


# --- 3xxx: Transactions ---

class PartialTransactionError(AppError):
    """Invoice was created but the matching sale was not recorded.

    Not a RemoteError; callers retry only the sale step
    (see InvoiceTransactionOrchestrator.retry_sale) instead of re-creating
    the invoice.
    """

    def __init__(
        self,
        invoice: Any,
        customer_id: int,
        amount: Decimal,
        cause: AppError,
    ) -> None:
        self.invoice = invoice
        self.customer_id = customer_id
        self.amount = amount
        self.cause = cause
        super().__init__(
            3001,
            f"Invoice {invoice.invoice_number} (id={invoice.id}) was created "
            f"but its sale was not recorded: {cause.message}",
        )


# --- 9xxx: Session / system ---

class SessionRequiredError(AppError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(9001, f"No active session; {operation} was not issued")
