"""Structured cache keys: (collection, params).

Parameterized reads cache independently, e.g. profit_loss(3, 2025) and
profit_loss(4, 2025) are different keys. ``QueryKey.all(collection)`` is a
pattern matching every key of that collection, used for invalidation.
"""

from dataclasses import dataclass
from typing import Any

# Collection names
PRODUCTS = "products"
PRODUCT = "product"
LOW_STOCK_PRODUCTS = "low_stock_products"
CUSTOMERS = "customers"
CUSTOMER = "customer"
INVOICES = "invoices"
INVOICE = "invoice"
EXPENSES = "expenses"
EXPENSES_BY_CATEGORY = "expenses_by_category"
EXPENSES_BY_MONTH = "expenses_by_month"
SALES = "sales"
TOTAL_SALES = "total_sales"
DASHBOARD_STATS = "dashboard_stats"
PROFIT_LOSS = "profit_loss"
SETTINGS = "settings"
CURRENT_USER_PROFILE = "current_user_profile"


@dataclass(frozen=True)
class QueryKey:
    collection: str
    params: tuple[Any, ...] | None = ()

    @classmethod
    def all(cls, collection: str) -> "QueryKey":
        return cls(collection, None)

    @property
    def is_pattern(self) -> bool:
        return self.params is None

    def matches(self, other: "QueryKey") -> bool:
        if self.collection != other.collection:
            return False
        return self.params is None or self.params == other.params

    def __str__(self) -> str:
        if self.params is None:
            return f"{self.collection}(*)"
        if not self.params:
            return self.collection
        return f"{self.collection}({', '.join(repr(p) for p in self.params)})"


def products() -> QueryKey:
    return QueryKey(PRODUCTS)


def product(product_id: int) -> QueryKey:
    return QueryKey(PRODUCT, (product_id,))


def low_stock_products() -> QueryKey:
    return QueryKey(LOW_STOCK_PRODUCTS)


def customers() -> QueryKey:
    return QueryKey(CUSTOMERS)


def customer(customer_id: int) -> QueryKey:
    return QueryKey(CUSTOMER, (customer_id,))


def invoices() -> QueryKey:
    return QueryKey(INVOICES)


def invoice(invoice_id: int) -> QueryKey:
    return QueryKey(INVOICE, (invoice_id,))


def expenses() -> QueryKey:
    return QueryKey(EXPENSES)


def expenses_by_category(category: str) -> QueryKey:
    return QueryKey(EXPENSES_BY_CATEGORY, (category,))


def expenses_by_month(month: int, year: int) -> QueryKey:
    return QueryKey(EXPENSES_BY_MONTH, (month, year))


def sales() -> QueryKey:
    return QueryKey(SALES)


def total_sales(start_date: int, end_date: int) -> QueryKey:
    return QueryKey(TOTAL_SALES, (start_date, end_date))


def dashboard_stats() -> QueryKey:
    return QueryKey(DASHBOARD_STATS)


def profit_loss(month: int, year: int) -> QueryKey:
    return QueryKey(PROFIT_LOSS, (month, year))


def settings() -> QueryKey:
    return QueryKey(SETTINGS)


def current_user_profile() -> QueryKey:
    return QueryKey(CURRENT_USER_PROFILE)
