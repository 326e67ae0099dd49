"""LedgerCommands: user-initiated writes.

Each command parses its input first (ValidationError, no ledger call), then
runs exactly one store write through the MutationCoordinator so the
dependent cached reads are invalidated only once the ledger confirms it.
"""

from decimal import Decimal

from src.bm_common.enums import DEFAULT_EXPENSE_CATEGORY, WriteOp
from src.bm_common.validation import parse_request
from src.bm_mutation.application.coordinator import MutationCoordinator
from src.bm_store.application.schemas import (
    CustomerCreateRequest,
    CustomerUpdateRequest,
    ExpenseRequest,
    ProductRequest,
    ProfileRequest,
    SettingsRequest,
)
from src.bm_store.domain.client import EntityStoreProtocol
from src.bm_store.domain.models import (
    BusinessSettings,
    Customer,
    Expense,
    Invoice,
    InvoiceItem,
    Product,
    Sale,
    UserProfile,
)


class LedgerCommands:
    def __init__(self, store: EntityStoreProtocol, coordinator: MutationCoordinator) -> None:
        self._store = store
        self._coordinator = coordinator

    # --- Products ---

    async def create_product(
        self,
        name: str,
        price: Decimal | str,
        quantity: int | str,
        category: str = "",
        description: str = "",
        unit: str = "",
        barcode: str = "",
        image_url: str = "",
    ) -> Product:
        req = parse_request(
            ProductRequest,
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
            image_url=image_url,
        )
        return await self._coordinator.execute(
            WriteOp.CREATE_PRODUCT,
            lambda: self._store.create_product(
                req.name,
                req.price,
                req.quantity,
                req.image_url,
                req.category,
                req.description,
                req.unit,
                req.barcode,
            ),
        )

    async def update_product(
        self,
        product_id: int,
        name: str,
        price: Decimal | str,
        quantity: int | str,
        category: str = "",
        description: str = "",
        unit: str = "",
        barcode: str = "",
        image_url: str = "",
    ) -> Product:
        req = parse_request(
            ProductRequest,
            name=name,
            price=price,
            quantity=quantity,
            category=category,
            description=description,
            unit=unit,
            barcode=barcode,
            image_url=image_url,
        )
        return await self._coordinator.execute(
            WriteOp.UPDATE_PRODUCT,
            lambda: self._store.update_product(
                product_id,
                req.name,
                req.price,
                req.quantity,
                req.image_url,
                req.category,
                req.description,
                req.unit,
                req.barcode,
            ),
            entity_id=product_id,
        )

    async def delete_product(self, product_id: int) -> None:
        await self._coordinator.execute(
            WriteOp.DELETE_PRODUCT,
            lambda: self._store.delete_product(product_id),
            entity_id=product_id,
        )

    # --- Customers ---

    async def create_customer(self, name: str, phone: str = "") -> Customer:
        req = parse_request(CustomerCreateRequest, name=name, phone=phone)
        return await self._coordinator.execute(
            WriteOp.CREATE_CUSTOMER,
            lambda: self._store.create_customer(req.name, req.phone),
        )

    async def update_customer(
        self,
        customer_id: int,
        name: str,
        phone: str = "",
        due_amount: Decimal | str = Decimal("0"),
    ) -> Customer:
        # due_amount is whatever the owner enters; it is never derived from invoices.
        req = parse_request(
            CustomerUpdateRequest, name=name, phone=phone, due_amount=due_amount
        )
        return await self._coordinator.execute(
            WriteOp.UPDATE_CUSTOMER,
            lambda: self._store.update_customer(
                customer_id, req.name, req.phone, req.due_amount
            ),
            entity_id=customer_id,
        )

    async def mark_customer_paid(self, customer: Customer) -> Customer:
        return await self.update_customer(
            customer.id, customer.name, customer.phone, Decimal("0")
        )

    async def delete_customer(self, customer_id: int) -> None:
        await self._coordinator.execute(
            WriteOp.DELETE_CUSTOMER,
            lambda: self._store.delete_customer(customer_id),
            entity_id=customer_id,
        )

    # --- Expenses ---

    async def create_expense(
        self,
        amount: Decimal | str,
        category: str = DEFAULT_EXPENSE_CATEGORY,
        description: str = "",
    ) -> Expense:
        req = parse_request(
            ExpenseRequest, amount=amount, category=category, description=description
        )
        return await self._coordinator.execute(
            WriteOp.CREATE_EXPENSE,
            lambda: self._store.create_expense(req.amount, req.category, req.description),
        )

    async def update_expense(
        self,
        expense_id: int,
        amount: Decimal | str,
        category: str = DEFAULT_EXPENSE_CATEGORY,
        description: str = "",
    ) -> Expense:
        req = parse_request(
            ExpenseRequest, amount=amount, category=category, description=description
        )
        return await self._coordinator.execute(
            WriteOp.UPDATE_EXPENSE,
            lambda: self._store.update_expense(
                expense_id, req.amount, req.category, req.description
            ),
        )

    async def delete_expense(self, expense_id: int) -> None:
        await self._coordinator.execute(
            WriteOp.DELETE_EXPENSE,
            lambda: self._store.delete_expense(expense_id),
        )

    # --- Invoices / sales (sequenced by InvoiceTransactionOrchestrator) ---

    async def create_invoice(
        self,
        customer_id: int,
        items: list[InvoiceItem],
        total: Decimal,
        notes: str = "",
    ) -> Invoice:
        return await self._coordinator.execute(
            WriteOp.CREATE_INVOICE,
            lambda: self._store.create_invoice(customer_id, items, total, notes.strip()),
        )

    async def create_sale(self, customer_id: int, invoice_id: int, amount: Decimal) -> Sale:
        return await self._coordinator.execute(
            WriteOp.CREATE_SALE,
            lambda: self._store.create_sale(customer_id, invoice_id, amount),
        )

    # --- Settings / profile ---

    async def update_settings(
        self, owner_name: str, business_name: str, logo_url: str = ""
    ) -> None:
        req = parse_request(
            SettingsRequest,
            owner_name=owner_name,
            business_name=business_name,
            logo_url=logo_url,
        )
        await self._coordinator.execute(
            WriteOp.UPDATE_SETTINGS,
            lambda: self._store.update_settings(
                BusinessSettings(
                    owner_name=req.owner_name,
                    business_name=req.business_name,
                    logo_url=req.logo_url,
                )
            ),
        )

    async def save_profile(self, name: str) -> None:
        req = parse_request(ProfileRequest, name=name)
        await self._coordinator.execute(
            WriteOp.SAVE_PROFILE,
            lambda: self._store.save_caller_user_profile(UserProfile(name=req.name)),
        )
