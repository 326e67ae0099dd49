"""LedgerQueries: typed reads served through the QueryCache.

Registers one fetcher per collection on construction, mapping a key's
params onto the matching store call, then exposes one coroutine per read.
"""

from decimal import Decimal

from config.settings import settings as app_settings
from src.bm_cache.domain import keys
from src.bm_cache.domain.keys import QueryKey
from src.bm_cache.engine.query_cache import Fetcher, QueryCache
from src.bm_store.application.session import SessionProvider
from src.bm_store.domain.client import EntityStoreProtocol
from src.bm_store.domain.models import (
    BusinessSettings,
    Customer,
    DashboardStats,
    Expense,
    Invoice,
    Product,
    ProfitLoss,
    Sale,
    UserProfile,
)


def build_fetchers(store: EntityStoreProtocol) -> dict[str, Fetcher]:
    async def products(key: QueryKey) -> list[Product]:
        return await store.get_all_products()

    async def product(key: QueryKey) -> Product:
        return await store.get_product(*key.params)

    async def low_stock_products(key: QueryKey) -> list[Product]:
        return await store.get_low_stock_products()

    async def customers(key: QueryKey) -> list[Customer]:
        return await store.get_all_customers()

    async def customer(key: QueryKey) -> Customer:
        return await store.get_customer(*key.params)

    async def invoices(key: QueryKey) -> list[Invoice]:
        return await store.get_all_invoices()

    async def invoice(key: QueryKey) -> Invoice:
        return await store.get_invoice(*key.params)

    async def expenses(key: QueryKey) -> list[Expense]:
        return await store.get_all_expenses()

    async def expenses_by_category(key: QueryKey) -> list[Expense]:
        return await store.get_expenses_by_category(*key.params)

    async def expenses_by_month(key: QueryKey) -> list[Expense]:
        return await store.get_expenses_by_month(*key.params)

    async def sales(key: QueryKey) -> list[Sale]:
        return await store.get_all_sales()

    async def total_sales(key: QueryKey) -> Decimal:
        return await store.get_total_sales(*key.params)

    async def dashboard_stats(key: QueryKey) -> DashboardStats:
        return await store.get_dashboard_stats()

    async def profit_loss(key: QueryKey) -> ProfitLoss:
        return await store.get_profit_loss(*key.params)

    async def business_settings(key: QueryKey) -> BusinessSettings:
        return await store.get_settings()

    async def current_user_profile(key: QueryKey) -> UserProfile | None:
        return await store.get_caller_user_profile()

    return {
        keys.PRODUCTS: products,
        keys.PRODUCT: product,
        keys.LOW_STOCK_PRODUCTS: low_stock_products,
        keys.CUSTOMERS: customers,
        keys.CUSTOMER: customer,
        keys.INVOICES: invoices,
        keys.INVOICE: invoice,
        keys.EXPENSES: expenses,
        keys.EXPENSES_BY_CATEGORY: expenses_by_category,
        keys.EXPENSES_BY_MONTH: expenses_by_month,
        keys.SALES: sales,
        keys.TOTAL_SALES: total_sales,
        keys.DASHBOARD_STATS: dashboard_stats,
        keys.PROFIT_LOSS: profit_loss,
        keys.SETTINGS: business_settings,
        keys.CURRENT_USER_PROFILE: current_user_profile,
    }


class LedgerQueries:
    def __init__(
        self,
        cache: QueryCache,
        store: EntityStoreProtocol,
        session: SessionProvider,
    ) -> None:
        self._cache = cache
        self._session = session
        for collection, fetcher in build_fetchers(store).items():
            cache.register(collection, fetcher)

    async def products(self) -> list[Product]:
        return await self._cache.fetch_or_cached(keys.products())

    async def product(self, product_id: int) -> Product:
        return await self._cache.fetch_or_cached(keys.product(product_id))

    async def low_stock_products(self) -> list[Product]:
        return await self._cache.fetch_or_cached(keys.low_stock_products())

    async def customers(self) -> list[Customer]:
        return await self._cache.fetch_or_cached(keys.customers())

    async def customer(self, customer_id: int) -> Customer:
        return await self._cache.fetch_or_cached(keys.customer(customer_id))

    async def invoices(self) -> list[Invoice]:
        return await self._cache.fetch_or_cached(keys.invoices())

    async def invoice(self, invoice_id: int) -> Invoice:
        return await self._cache.fetch_or_cached(keys.invoice(invoice_id))

    async def expenses(self) -> list[Expense]:
        return await self._cache.fetch_or_cached(keys.expenses())

    async def expenses_by_category(self, category: str) -> list[Expense]:
        return await self._cache.fetch_or_cached(keys.expenses_by_category(category))

    async def expenses_by_month(self, month: int, year: int) -> list[Expense]:
        return await self._cache.fetch_or_cached(keys.expenses_by_month(month, year))

    async def sales(self) -> list[Sale]:
        return await self._cache.fetch_or_cached(keys.sales())

    async def total_sales(self, start_date: int, end_date: int) -> Decimal:
        return await self._cache.fetch_or_cached(keys.total_sales(start_date, end_date))

    async def dashboard_stats(self) -> DashboardStats:
        return await self._cache.fetch_or_cached(keys.dashboard_stats())

    async def profit_loss(self, month: int, year: int) -> ProfitLoss:
        return await self._cache.fetch_or_cached(keys.profit_loss(month, year))

    async def settings(self) -> BusinessSettings:
        # Before sign-in the screen still needs a business name to show.
        if not self._session.has_session():
            return BusinessSettings(
                owner_name=app_settings.DEFAULT_OWNER_NAME,
                business_name=app_settings.DEFAULT_BUSINESS_NAME,
            )
        return await self._cache.fetch_or_cached(keys.settings())

    async def current_user_profile(self) -> UserProfile | None:
        return await self._cache.fetch_or_cached(keys.current_user_profile())
