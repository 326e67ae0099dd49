# src/bm_store/domain/client.py
"""Entity store Protocol: the contract the sync layer consumes.

One coroutine per remote operation. Each resolves with the value or raises
RemoteError; retries and timeouts belong to the transport, not here.
Unit tests inject an AsyncMock conforming to this Protocol.
"""

from decimal import Decimal
from typing import Protocol

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


class EntityStoreProtocol(Protocol):
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
    ) -> Product: ...

    async def get_product(self, product_id: int) -> Product: ...

    async def get_all_products(self) -> list[Product]: ...

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
    ) -> Product: ...

    async def delete_product(self, product_id: int) -> None: ...

    # --- Customers ---
    async def create_customer(self, name: str, phone: str) -> Customer: ...

    async def get_customer(self, customer_id: int) -> Customer: ...

    async def get_all_customers(self) -> list[Customer]: ...

    async def update_customer(
        self, customer_id: int, name: str, phone: str, due_amount: Decimal
    ) -> Customer: ...

    async def delete_customer(self, customer_id: int) -> None: ...

    # --- Invoices ---
    async def create_invoice(
        self,
        customer_id: int,
        items: list[InvoiceItem],
        total: Decimal,
        notes: str,
    ) -> Invoice: ...

    async def get_invoice(self, invoice_id: int) -> Invoice: ...

    async def get_all_invoices(self) -> list[Invoice]: ...

    # --- Expenses ---
    async def create_expense(
        self, amount: Decimal, category: str, description: str
    ) -> Expense: ...

    async def get_expense(self, expense_id: int) -> Expense: ...

    async def get_all_expenses(self) -> list[Expense]: ...

    async def update_expense(
        self, expense_id: int, amount: Decimal, category: str, description: str
    ) -> Expense: ...

    async def delete_expense(self, expense_id: int) -> None: ...

    # --- Sales ---
    async def create_sale(
        self, customer_id: int, invoice_id: int, amount: Decimal
    ) -> Sale: ...

    async def get_sale(self, sale_id: int) -> Sale: ...

    async def get_all_sales(self) -> list[Sale]: ...

    # --- Aggregate reads ---
    async def get_dashboard_stats(self) -> DashboardStats: ...

    async def get_profit_loss(self, month: int, year: int) -> ProfitLoss: ...

    async def get_low_stock_products(self) -> list[Product]: ...

    async def get_expenses_by_category(self, category: str) -> list[Expense]: ...

    async def get_expenses_by_month(self, month: int, year: int) -> list[Expense]: ...

    async def get_total_sales(self, start_date: int, end_date: int) -> Decimal: ...

    # --- Settings / profile ---
    async def get_settings(self) -> BusinessSettings: ...

    async def update_settings(self, new_settings: BusinessSettings) -> None: ...

    async def get_caller_user_profile(self) -> UserProfile | None: ...

    async def save_caller_user_profile(self, profile: UserProfile) -> None: ...
