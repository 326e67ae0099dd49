"""InMemoryEntityStore — an in-process ledger implementing EntityStoreProtocol.

Used when settings.LEDGER_URL is empty (offline/dev) and by the integration
tests. Behaves like the remote ledger as far as the sync layer can tell:

- ids come from one monotonically increasing counter, never reused
- timestamps are time.time_ns() at write time
- deletes are permanent; reads of a deleted id raise EntityNotFoundError
- aggregates (dashboard, profit/loss, low stock, filters) are computed
  here, the way the ledger computes them
- invoice totals are stored as submitted, not re-checked
- a sale must reference an existing invoice and customer
- callers always receive copies of stored records

Every method awaits once so callers observe a real suspension point.
"""

import asyncio
import copy
import itertools
from collections.abc import Callable
from decimal import Decimal
from typing import TypeVar

from config.settings import settings
from src.bm_common.datetime_utils import from_nanos, now_ns
from src.bm_common.errors import EntityNotFoundError, RemoteError
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

T = TypeVar("T")


class InMemoryEntityStore:
    def __init__(self, clock: Callable[[], int] = now_ns) -> None:
        self._clock = clock
        self._ids = itertools.count(1)
        self._products: dict[int, Product] = {}
        self._customers: dict[int, Customer] = {}
        self._invoices: dict[int, Invoice] = {}
        self._expenses: dict[int, Expense] = {}
        self._sales: dict[int, Sale] = {}
        self._settings = BusinessSettings(
            owner_name=settings.DEFAULT_OWNER_NAME,
            business_name=settings.DEFAULT_BUSINESS_NAME,
        )
        self._profile: UserProfile | None = None
        self._invoice_seq = itertools.count(1)

    @staticmethod
    async def _yield() -> None:
        await asyncio.sleep(0)

    @staticmethod
    def _lookup(table: dict[int, T], entity_id: int, entity: str, operation: str) -> T:
        try:
            return table[entity_id]
        except KeyError:
            raise EntityNotFoundError(operation, f"{entity} {entity_id} not found") from None

    # --- Products ---

    async def create_product(
        self,
        name: str,
        price: Decimal,
        quantity: int,
        image_url: str,
        category: str,
        description: str,
        unit: str,
        barcode: str,
    ) -> Product:
        await self._yield()
        product = Product(
            id=next(self._ids),
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
            image_url=image_url,
            created_at=self._clock(),
        )
        self._products[product.id] = product
        return copy.deepcopy(product)

    async def get_product(self, product_id: int) -> Product:
        await self._yield()
        return copy.deepcopy(self._lookup(self._products, product_id, "Product", "getProduct"))

    async def get_all_products(self) -> list[Product]:
        await self._yield()
        return copy.deepcopy(list(self._products.values()))

    async def update_product(
        self,
        product_id: int,
        name: str,
        price: Decimal,
        quantity: int,
        image_url: str,
        category: str,
        description: str,
        unit: str,
        barcode: str,
    ) -> Product:
        await self._yield()
        existing = self._lookup(self._products, product_id, "Product", "updateProduct")
        updated = Product(
            id=product_id,
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
            image_url=image_url,
            created_at=existing.created_at,
        )
        self._products[product_id] = updated
        return copy.deepcopy(updated)

    async def delete_product(self, product_id: int) -> None:
        await self._yield()
        self._lookup(self._products, product_id, "Product", "deleteProduct")
        del self._products[product_id]

    # --- Customers ---

    async def create_customer(self, name: str, phone: str) -> Customer:
        await self._yield()
        customer = Customer(id=next(self._ids), name=name, phone=phone, created_at=self._clock())
        self._customers[customer.id] = customer
        return copy.deepcopy(customer)

    async def get_customer(self, customer_id: int) -> Customer:
        await self._yield()
        return copy.deepcopy(
            self._lookup(self._customers, customer_id, "Customer", "getCustomer")
        )

    async def get_all_customers(self) -> list[Customer]:
        await self._yield()
        return copy.deepcopy(list(self._customers.values()))

    async def update_customer(
        self, customer_id: int, name: str, phone: str, due_amount: Decimal
    ) -> Customer:
        await self._yield()
        existing = self._lookup(self._customers, customer_id, "Customer", "updateCustomer")
        updated = Customer(
            id=customer_id,
            name=name,
            phone=phone,
            due_amount=due_amount,
            created_at=existing.created_at,
        )
        self._customers[customer_id] = updated
        return copy.deepcopy(updated)

    async def delete_customer(self, customer_id: int) -> None:
        await self._yield()
        self._lookup(self._customers, customer_id, "Customer", "deleteCustomer")
        del self._customers[customer_id]

    # --- Invoices ---

    async def create_invoice(
        self,
        customer_id: int,
        items: list[InvoiceItem],
        total: Decimal,
        notes: str,
    ) -> Invoice:
        await self._yield()
        invoice = Invoice(
            id=next(self._ids),
            invoice_number=f"INV-{next(self._invoice_seq):04d}",
            customer_id=customer_id,
            total=total,
            items=copy.deepcopy(items),
            notes=notes,
            date=self._clock(),
        )
        self._invoices[invoice.id] = invoice
        return copy.deepcopy(invoice)

    async def get_invoice(self, invoice_id: int) -> Invoice:
        await self._yield()
        return copy.deepcopy(self._lookup(self._invoices, invoice_id, "Invoice", "getInvoice"))

    async def get_all_invoices(self) -> list[Invoice]:
        await self._yield()
        return copy.deepcopy(list(self._invoices.values()))

    # --- Expenses ---

    async def create_expense(
        self, amount: Decimal, category: str, description: str
    ) -> Expense:
        await self._yield()
        expense = Expense(
            id=next(self._ids),
            amount=amount,
            category=category,
            description=description,
            date=self._clock(),
        )
        self._expenses[expense.id] = expense
        return copy.deepcopy(expense)

    async def get_expense(self, expense_id: int) -> Expense:
        await self._yield()
        return copy.deepcopy(self._lookup(self._expenses, expense_id, "Expense", "getExpense"))

    async def get_all_expenses(self) -> list[Expense]:
        await self._yield()
        return copy.deepcopy(list(self._expenses.values()))

    async def update_expense(
        self, expense_id: int, amount: Decimal, category: str, description: str
    ) -> Expense:
        await self._yield()
        existing = self._lookup(self._expenses, expense_id, "Expense", "updateExpense")
        updated = Expense(
            id=expense_id,
            amount=amount,
            category=category,
            description=description,
            date=existing.date,
        )
        self._expenses[expense_id] = updated
        return copy.deepcopy(updated)

    async def delete_expense(self, expense_id: int) -> None:
        await self._yield()
        self._lookup(self._expenses, expense_id, "Expense", "deleteExpense")
        del self._expenses[expense_id]

    # --- Sales ---

    async def create_sale(
        self, customer_id: int, invoice_id: int, amount: Decimal
    ) -> Sale:
        await self._yield()
        if invoice_id not in self._invoices:
            raise RemoteError("createSale", f"Invoice {invoice_id} does not exist")
        if customer_id not in self._customers:
            raise RemoteError("createSale", f"Customer {customer_id} does not exist")
        sale = Sale(
            id=next(self._ids),
            invoice_id=invoice_id,
            customer_id=customer_id,
            amount=amount,
            date=self._clock(),
        )
        self._sales[sale.id] = sale
        return copy.deepcopy(sale)

    async def get_sale(self, sale_id: int) -> Sale:
        await self._yield()
        return copy.deepcopy(self._lookup(self._sales, sale_id, "Sale", "getSale"))

    async def get_all_sales(self) -> list[Sale]:
        await self._yield()
        return copy.deepcopy(list(self._sales.values()))

    # --- Aggregate reads ---

    def _in_month(self, ns: int, month: int, year: int) -> bool:
        dt = from_nanos(ns)
        return dt.month == month and dt.year == year

    async def get_dashboard_stats(self) -> DashboardStats:
        await self._yield()
        today = from_nanos(self._clock()).date()
        sales = list(self._sales.values())
        return DashboardStats(
            total_products=len(self._products),
            total_sales_amount=sum((s.amount for s in sales), Decimal("0")),
            today_revenue=sum(
                (s.amount for s in sales if from_nanos(s.date).date() == today),
                Decimal("0"),
            ),
            total_customers=len(self._customers),
        )

    async def get_profit_loss(self, month: int, year: int) -> ProfitLoss:
        await self._yield()
        sales = sum(
            (s.amount for s in self._sales.values() if self._in_month(s.date, month, year)),
            Decimal("0"),
        )
        expenses = sum(
            (e.amount for e in self._expenses.values() if self._in_month(e.date, month, year)),
            Decimal("0"),
        )
        return ProfitLoss(sales=sales, expenses=expenses, profit=sales - expenses)

    async def get_low_stock_products(self) -> list[Product]:
        await self._yield()
        return copy.deepcopy(
            [p for p in self._products.values() if p.quantity < settings.LOW_STOCK_THRESHOLD]
        )

    async def get_expenses_by_category(self, category: str) -> list[Expense]:
        await self._yield()
        return copy.deepcopy([e for e in self._expenses.values() if e.category == category])

    async def get_expenses_by_month(self, month: int, year: int) -> list[Expense]:
        await self._yield()
        return copy.deepcopy(
            [e for e in self._expenses.values() if self._in_month(e.date, month, year)]
        )

    async def get_total_sales(self, start_date: int, end_date: int) -> Decimal:
        await self._yield()
        return sum(
            (s.amount for s in self._sales.values() if start_date <= s.date <= end_date),
            Decimal("0"),
        )

    # --- Settings / profile ---

    async def get_settings(self) -> BusinessSettings:
        await self._yield()
        return copy.deepcopy(self._settings)

    async def update_settings(self, new_settings: BusinessSettings) -> None:
        await self._yield()
        self._settings = copy.deepcopy(new_settings)

    async def get_caller_user_profile(self) -> UserProfile | None:
        await self._yield()
        return copy.deepcopy(self._profile)

    async def save_caller_user_profile(self, profile: UserProfile) -> None:
        await self._yield()
        self._profile = copy.deepcopy(profile)
