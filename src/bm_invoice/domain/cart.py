"""Cart: line items collected before an invoice is issued.

Adding a product already in the cart raises its quantity instead of adding
a second line. The invoice total is computed here, client-side, and
submitted as-is; the ledger does not re-check it.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from src.bm_common.errors import ValidationError
from src.bm_common.money import line_total
from src.bm_store.domain.models import InvoiceItem, Product


@dataclass
class CartLine:
    product_id: int
    product_name: str
    unit_price: Decimal
    qty: int

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.qty)


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)

    def add(self, product: Product, qty: int = 1) -> CartLine:
        if qty < 1:
            raise ValidationError("qty", f"must be at least 1, got {qty}")
        for line in self.lines:
            if line.product_id == product.id:
                line.qty += qty
                return line
        line = CartLine(
            product_id=product.id,
            product_name=product.name,
            unit_price=product.price,
            qty=qty,
        )
        self.lines.append(line)
        return line

    def remove(self, product_id: int) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        self.lines.clear()

    def is_empty(self) -> bool:
        return not self.lines

    def total(self) -> Decimal:
        """Sum of qty x unit price over all lines."""
        return sum((line.line_total for line in self.lines), Decimal("0"))

    def to_invoice_items(self) -> list[InvoiceItem]:
        return [
            InvoiceItem(
                product_id=line.product_id,
                product_name=line.product_name,
                qty=line.qty,
                unit_price=line.unit_price,
            )
            for line in self.lines
        ]
