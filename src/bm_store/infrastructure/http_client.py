"""HttpEntityStore — EntityStoreProtocol over the ledger's JSON RPC endpoint.

Each operation is one ``POST {LEDGER_URL}/rpc/{operation}`` whose body holds
the named arguments (camelCase) and whose answer is an ApiResponse envelope.

Failure mapping:
  envelope code 2002            -> EntityNotFoundError
  any other non-zero code       -> RemoteError (carries the ledger's code)
  httpx.HTTPError / bad payload -> TransportError
  HTTP 4xx/5xx without an error code in the envelope -> TransportError

No retries and no timeout policy beyond what the httpx client is built with.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from src.bm_common.errors import TransportError
from src.bm_common.money import to_amount
from src.bm_common.response import ApiResponse
from src.bm_store.application.schemas import (
    CustomerWire,
    DashboardStatsWire,
    ExpenseWire,
    InvoiceItemWire,
    InvoiceWire,
    ProductWire,
    ProfitLossWire,
    SaleWire,
    SettingsWire,
    UserProfileWire,
)
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

logger = logging.getLogger(__name__)


def build_http_client(base_url: str | None = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url if base_url is not None else settings.LEDGER_URL,
        timeout=settings.LEDGER_TIMEOUT_SECONDS,
    )


class HttpEntityStore:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _call(self, operation: str, **args: Any) -> Any:
        try:
            resp = await self._client.post(f"/rpc/{operation}", json=args)
        except httpx.HTTPError as exc:
            logger.warning("Ledger call %s failed in transport: %r", operation, exc)
            raise TransportError(operation, str(exc) or type(exc).__name__) from exc

        try:
            envelope = ApiResponse.model_validate(resp.json())
        except (ValueError, PydanticValidationError) as exc:
            raise TransportError(
                operation, f"HTTP {resp.status_code}: malformed ledger response"
            ) from exc

        if not envelope.ok:
            logger.info(
                "Ledger rejected %s: code=%d %s", operation, envelope.code, envelope.message
            )
        elif resp.is_error:
            # An error status never confirms a call, whatever the body says.
            logger.warning("Ledger call %s answered HTTP %d", operation, resp.status_code)
            raise TransportError(operation, f"HTTP {resp.status_code}: {envelope.message}")
        return envelope.unwrap(operation)

    @staticmethod
    def _decode(operation: str, wire: type, payload: Any) -> Any:
        try:
            return wire.model_validate(payload).to_domain()
        except PydanticValidationError as exc:
            raise TransportError(operation, f"unexpected payload: {exc.error_count()} errors") from exc

    def _decode_list(self, operation: str, wire: type, payload: Any) -> list[Any]:
        if not isinstance(payload, list):
            raise TransportError(operation, "expected a list payload")
        return [self._decode(operation, wire, item) for item in payload]

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
        data = await self._call(
            "createProduct",
            name=name,
            price=str(price),
            quantity=quantity,
            imageUrl=image_url,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
        )
        return self._decode("createProduct", ProductWire, data)

    async def get_product(self, product_id: int) -> Product:
        data = await self._call("getProduct", id=product_id)
        return self._decode("getProduct", ProductWire, data)

    async def get_all_products(self) -> list[Product]:
        data = await self._call("getAllProducts")
        return self._decode_list("getAllProducts", ProductWire, data)

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
        data = await self._call(
            "updateProduct",
            id=product_id,
            name=name,
            price=str(price),
            quantity=quantity,
            imageUrl=image_url,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
        )
        return self._decode("updateProduct", ProductWire, data)

    async def delete_product(self, product_id: int) -> None:
        await self._call("deleteProduct", id=product_id)

    # --- Customers ---

    async def create_customer(self, name: str, phone: str) -> Customer:
        data = await self._call("createCustomer", name=name, phone=phone)
        return self._decode("createCustomer", CustomerWire, data)

    async def get_customer(self, customer_id: int) -> Customer:
        data = await self._call("getCustomer", id=customer_id)
        return self._decode("getCustomer", CustomerWire, data)

    async def get_all_customers(self) -> list[Customer]:
        data = await self._call("getAllCustomers")
        return self._decode_list("getAllCustomers", CustomerWire, data)

    async def update_customer(
        self, customer_id: int, name: str, phone: str, due_amount: Decimal
    ) -> Customer:
        data = await self._call(
            "updateCustomer",
            id=customer_id,
            name=name,
            phone=phone,
            dueAmount=str(due_amount),
        )
        return self._decode("updateCustomer", CustomerWire, data)

    async def delete_customer(self, customer_id: int) -> None:
        await self._call("deleteCustomer", id=customer_id)

    # --- Invoices ---

    async def create_invoice(
        self,
        customer_id: int,
        items: list[InvoiceItem],
        total: Decimal,
        notes: str,
    ) -> Invoice:
        data = await self._call(
            "createInvoice",
            customerId=customer_id,
            items=[InvoiceItemWire.from_domain(i).to_wire() for i in items],
            total=str(total),
            notes=notes,
        )
        return self._decode("createInvoice", InvoiceWire, data)

    async def get_invoice(self, invoice_id: int) -> Invoice:
        data = await self._call("getInvoice", id=invoice_id)
        return self._decode("getInvoice", InvoiceWire, data)

    async def get_all_invoices(self) -> list[Invoice]:
        data = await self._call("getAllInvoices")
        return self._decode_list("getAllInvoices", InvoiceWire, data)

    # --- Expenses ---

    async def create_expense(
        self, amount: Decimal, category: str, description: str
    ) -> Expense:
        data = await self._call(
            "createExpense", amount=str(amount), category=category, description=description
        )
        return self._decode("createExpense", ExpenseWire, data)

    async def get_expense(self, expense_id: int) -> Expense:
        data = await self._call("getExpense", id=expense_id)
        return self._decode("getExpense", ExpenseWire, data)

    async def get_all_expenses(self) -> list[Expense]:
        data = await self._call("getAllExpenses")
        return self._decode_list("getAllExpenses", ExpenseWire, data)

    async def update_expense(
        self, expense_id: int, amount: Decimal, category: str, description: str
    ) -> Expense:
        data = await self._call(
            "updateExpense",
            id=expense_id,
            amount=str(amount),
            category=category,
            description=description,
        )
        return self._decode("updateExpense", ExpenseWire, data)

    async def delete_expense(self, expense_id: int) -> None:
        await self._call("deleteExpense", id=expense_id)

    # --- Sales ---

    async def create_sale(
        self, customer_id: int, invoice_id: int, amount: Decimal
    ) -> Sale:
        data = await self._call(
            "createSale", customerId=customer_id, invoiceId=invoice_id, amount=str(amount)
        )
        return self._decode("createSale", SaleWire, data)

    async def get_sale(self, sale_id: int) -> Sale:
        data = await self._call("getSale", id=sale_id)
        return self._decode("getSale", SaleWire, data)

    async def get_all_sales(self) -> list[Sale]:
        data = await self._call("getAllSales")
        return self._decode_list("getAllSales", SaleWire, data)

    # --- Aggregate reads ---

    async def get_dashboard_stats(self) -> DashboardStats:
        data = await self._call("getDashboardStats")
        return self._decode("getDashboardStats", DashboardStatsWire, data)

    async def get_profit_loss(self, month: int, year: int) -> ProfitLoss:
        data = await self._call("getProfitLoss", month=month, year=year)
        return self._decode("getProfitLoss", ProfitLossWire, data)

    async def get_low_stock_products(self) -> list[Product]:
        data = await self._call("getLowStockProducts")
        return self._decode_list("getLowStockProducts", ProductWire, data)

    async def get_expenses_by_category(self, category: str) -> list[Expense]:
        data = await self._call("getExpensesByCategory", category=category)
        return self._decode_list("getExpensesByCategory", ExpenseWire, data)

    async def get_expenses_by_month(self, month: int, year: int) -> list[Expense]:
        data = await self._call("getExpensesByMonth", month=month, year=year)
        return self._decode_list("getExpensesByMonth", ExpenseWire, data)

    async def get_total_sales(self, start_date: int, end_date: int) -> Decimal:
        data = await self._call("getTotalSales", startDate=start_date, endDate=end_date)
        try:
            return to_amount(data)
        except (TypeError, ValueError) as exc:
            raise TransportError("getTotalSales", f"not a decimal: {data!r}") from exc

    # --- Settings / profile ---

    async def get_settings(self) -> BusinessSettings:
        data = await self._call("getSettings")
        return self._decode("getSettings", SettingsWire, data)

    async def update_settings(self, new_settings: BusinessSettings) -> None:
        await self._call(
            "updateSettings", newSettings=SettingsWire.from_domain(new_settings).to_wire()
        )

    async def get_caller_user_profile(self) -> UserProfile | None:
        data = await self._call("getCallerUserProfile")
        if data is None:
            return None
        return self._decode("getCallerUserProfile", UserProfileWire, data)

    async def save_caller_user_profile(self, profile: UserProfile) -> None:
        await self._call("saveCallerUserProfile", profile={"name": profile.name})
