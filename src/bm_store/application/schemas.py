"""Pydantic schemas for bm_store.

Two families live here:

* Wire schemas (``*Wire``) decode/encode ledger payloads. The ledger speaks
  camelCase; decimals travel as JSON strings (numbers are also accepted).
* Request schemas (``*Request``) validate user input before any write is
  issued. Whitespace is stripped; names are required; money and stock
  counts are non-negative.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.bm_common.enums import DEFAULT_EXPENSE_CATEGORY
from src.bm_store.domain.models import (
    BusinessSettings,
    Customer,
    DashboardStats,
    Expense,
    Invoice,
    InvoiceItem,
    Product,
    ProfitLoss,
    Sale,
    UserProfile,
)

# ---------------------------------------------------------------------------
# Wire schemas
# ---------------------------------------------------------------------------


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProductWire(_Wire):
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

    def to_domain(self) -> Product:
        return Product(**self.model_dump())

    @classmethod
    def from_domain(cls, p: Product) -> "ProductWire":
        return cls(**vars(p))


class CustomerWire(_Wire):
    id: int
    name: str
    phone: str = ""
    due_amount: Decimal = Decimal("0")
    created_at: int = 0

    def to_domain(self) -> Customer:
        return Customer(**self.model_dump())

    @classmethod
    def from_domain(cls, c: Customer) -> "CustomerWire":
        return cls(**vars(c))


class InvoiceItemWire(_Wire):
    product_id: int
    product_name: str
    qty: int
    unit_price: Decimal

    def to_domain(self) -> InvoiceItem:
        return InvoiceItem(**self.model_dump())

    @classmethod
    def from_domain(cls, item: InvoiceItem) -> "InvoiceItemWire":
        return cls(**vars(item))


class InvoiceWire(_Wire):
    id: int
    invoice_number: str
    customer_id: int
    total: Decimal
    items: list[InvoiceItemWire] = []
    notes: str = ""
    date: int = 0

    def to_domain(self) -> Invoice:
        return Invoice(
            id=self.id,
            invoice_number=self.invoice_number,
            customer_id=self.customer_id,
            total=self.total,
            items=[i.to_domain() for i in self.items],
            notes=self.notes,
            date=self.date,
        )

    @classmethod
    def from_domain(cls, inv: Invoice) -> "InvoiceWire":
        return cls(
            id=inv.id,
            invoice_number=inv.invoice_number,
            customer_id=inv.customer_id,
            total=inv.total,
            items=[InvoiceItemWire.from_domain(i) for i in inv.items],
            notes=inv.notes,
            date=inv.date,
        )


class ExpenseWire(_Wire):
    id: int
    amount: Decimal
    category: str
    description: str = ""
    date: int = 0

    def to_domain(self) -> Expense:
        return Expense(**self.model_dump())

    @classmethod
    def from_domain(cls, e: Expense) -> "ExpenseWire":
        return cls(**vars(e))


class SaleWire(_Wire):
    id: int
    invoice_id: int
    customer_id: int
    amount: Decimal
    date: int = 0

    def to_domain(self) -> Sale:
        return Sale(**self.model_dump())

    @classmethod
    def from_domain(cls, s: Sale) -> "SaleWire":
        return cls(**vars(s))


class SettingsWire(_Wire):
    owner_name: str
    business_name: str
    logo_url: str = ""

    def to_domain(self) -> BusinessSettings:
        return BusinessSettings(**self.model_dump())

    @classmethod
    def from_domain(cls, s: BusinessSettings) -> "SettingsWire":
        return cls(**vars(s))


class UserProfileWire(_Wire):
    name: str

    def to_domain(self) -> UserProfile:
        return UserProfile(name=self.name)


class DashboardStatsWire(_Wire):
    total_products: int
    total_sales_amount: Decimal
    today_revenue: Decimal
    total_customers: int

    def to_domain(self) -> DashboardStats:
        return DashboardStats(**self.model_dump())


class ProfitLossWire(_Wire):
    sales: Decimal
    expenses: Decimal
    profit: Decimal

    def to_domain(self) -> ProfitLoss:
        return ProfitLoss(**self.model_dump())


# ---------------------------------------------------------------------------
# Request schemas (validated before any ledger call)
# ---------------------------------------------------------------------------


class _Request(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)


class ProductRequest(_Request):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=0)
    category: str = ""
    description: str = ""
    unit: str = ""
    barcode: str = ""
    image_url: str = ""


class CustomerCreateRequest(_Request):
    name: str = Field(min_length=1)
    phone: str = ""


class CustomerUpdateRequest(_Request):
    name: str = Field(min_length=1)
    phone: str = ""
    due_amount: Decimal = Field(default=Decimal("0"), ge=0)


class ExpenseRequest(_Request):
    amount: Decimal = Field(gt=0)
    category: str = Field(default=DEFAULT_EXPENSE_CATEGORY, min_length=1)
    description: str = ""


class SettingsRequest(_Request):
    owner_name: str = Field(min_length=1)
    business_name: str = Field(min_length=1)
    logo_url: str = ""


class ProfileRequest(_Request):
    name: str = Field(min_length=1)
