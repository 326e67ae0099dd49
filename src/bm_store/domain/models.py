"""Domain models for bm_store: pure dataclasses mirroring ledger records.

Identifiers are 64-bit ints owned by the ledger; timestamps are integer
nanoseconds since epoch; amounts are Decimal.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class Product:
    id: int
    name: str
    price: Decimal
    quantity: int
    category: str = ""
    description: str = ""
    unit: str = ""
    barcode: str = ""
    image_url: str = ""
    created_at: int = 0


@dataclass
class Customer:
    id: int
    name: str
    phone: str = ""
    # Set by hand; never derived from unpaid invoices.
    due_amount: Decimal = Decimal("0")
    created_at: int = 0


@dataclass
class InvoiceItem:
    product_id: int
    product_name: str
    qty: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.qty


@dataclass
class Invoice:
    id: int
    invoice_number: str
    customer_id: int
    total: Decimal
    items: list[InvoiceItem] = field(default_factory=list)
    notes: str = ""
    date: int = 0


@dataclass
class Expense:
    id: int
    amount: Decimal
    category: str
    description: str = ""
    date: int = 0


@dataclass
class Sale:
    id: int
    invoice_id: int
    customer_id: int
    amount: Decimal
    date: int = 0


@dataclass
class BusinessSettings:
    owner_name: str
    business_name: str
    logo_url: str = ""


@dataclass
class UserProfile:
    name: str


# ---------------------------------------------------------------------------
# Aggregate results (pre-computed by the ledger)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashboardStats:
    total_products: int
    total_sales_amount: Decimal
    today_revenue: Decimal
    total_customers: int


@dataclass(frozen=True)
class ProfitLoss:
    sales: Decimal
    expenses: Decimal
    profit: Decimal
