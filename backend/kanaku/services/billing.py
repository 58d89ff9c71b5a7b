"""
Bill total calculation and the checkout cart.

All arithmetic is done in Decimal and left unrounded; amounts are rounded to
two places only when a bill is rendered.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, List, Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """Convert numbers (including floats coming from JSON) without binary noise."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def clamp_discount(discount_percent: Any) -> Decimal:
    """Clamp a discount percentage into [0, 100]; NaN and infinities count as no discount."""
    value = to_decimal(discount_percent)
    if not value.is_finite():
        return ZERO
    return max(ZERO, min(HUNDRED, value))


@dataclass
class LineItem:
    """Input to the calculator: one product line."""

    quantity: Decimal
    unit_price: Decimal
    gst_percent: Decimal = ZERO

    def __post_init__(self):
        self.quantity = to_decimal(self.quantity)
        self.unit_price = to_decimal(self.unit_price)
        self.gst_percent = to_decimal(self.gst_percent)
        if not all(v.is_finite() for v in (self.quantity, self.unit_price, self.gst_percent)):
            raise ValueError("Quantity, price and GST must be finite numbers")
        if self.quantity < 0:
            raise ValueError("Quantity cannot be negative")
        if self.unit_price < 0:
            raise ValueError("Unit price cannot be negative")
        if self.gst_percent < 0:
            raise ValueError("GST percent cannot be negative")

    @property
    def line_subtotal(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class LineTotals:
    subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    gst_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class BillTotals:
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    gst_amount: Decimal
    total: Decimal
    lines: List[LineTotals] = field(default_factory=list)


def calculate_line(item: LineItem, discount_percent: Any = 0) -> LineTotals:
    """Per-line share of the bill-level discount and GST."""
    d = clamp_discount(discount_percent)
    multiplier = 1 - d / HUNDRED
    subtotal = item.line_subtotal
    discount_amount = subtotal * d / HUNDRED
    taxable_amount = subtotal - discount_amount
    gst_amount = subtotal * item.gst_percent / HUNDRED * multiplier
    return LineTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        gst_amount=gst_amount,
        total=taxable_amount + gst_amount,
    )


def calculate_totals(items: Iterable[LineItem], discount_percent: Any = 0) -> BillTotals:
    """
    Compute bill totals.

    subtotal        = sum(quantity * unit_price)
    discount_amount = subtotal * d / 100
    taxable_amount  = subtotal - discount_amount
    gst_amount      = sum(quantity * unit_price * gst_percent / 100) * (1 - d / 100)
    total           = taxable_amount + gst_amount

    d is clamped to [0, 100]. An empty list gives zeros everywhere.
    """
    items = list(items)
    d = clamp_discount(discount_percent)

    subtotal = sum((item.line_subtotal for item in items), ZERO)
    discount_amount = subtotal * d / HUNDRED
    taxable_amount = subtotal - discount_amount
    gross_gst = sum(
        (item.line_subtotal * item.gst_percent / HUNDRED for item in items), ZERO
    )
    gst_amount = gross_gst * (1 - d / HUNDRED)

    return BillTotals(
        subtotal=subtotal,
        discount_percent=d,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        gst_amount=gst_amount,
        total=taxable_amount + gst_amount,
        lines=[calculate_line(item, d) for item in items],
    )


@dataclass
class CartItem:
    product: Any
    quantity: Decimal
    unit_price: Decimal

    @property
    def product_id(self):
        return self.product.id

    @property
    def gst_percent(self) -> Decimal:
        return to_decimal(self.product.gst_percent)

    def as_line(self) -> LineItem:
        return LineItem(self.quantity, self.unit_price, self.gst_percent)


class Cart:
    """Checkout cart. One line per product; adding a product again merges the lines."""

    def __init__(self, discount_percent: Any = 0):
        self.items: List[CartItem] = []
        self.discount_percent = clamp_discount(discount_percent)

    def _find(self, product_id) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, product, quantity: Any = 1, unit_price: Any = None) -> CartItem:
        quantity = to_decimal(quantity)
        if not quantity.is_finite() or quantity <= 0:
            raise ValueError("The quantity must be a positive number.")
        price = to_decimal(
            unit_price if unit_price is not None else product.default_selling_price
        )
        if not price.is_finite() or price < 0:
            raise ValueError("Unit price must be a non-negative number")

        existing = self._find(product.id)
        if existing:
            existing.quantity += quantity
            existing.unit_price = price
            return existing

        item = CartItem(product=product, quantity=quantity, unit_price=price)
        self.items.append(item)
        return item

    def remove_item(self, product_id) -> None:
        self.items = [item for item in self.items if item.product_id != product_id]

    def update_quantity(self, product_id, quantity: Any) -> None:
        quantity = to_decimal(quantity)
        if not quantity.is_finite():
            raise ValueError("The quantity must be a finite number.")
        if quantity <= 0:
            self.remove_item(product_id)
            return
        item = self._find(product_id)
        if item:
            item.quantity = quantity

    def update_item_price(self, product_id, unit_price: Any) -> None:
        price = to_decimal(unit_price)
        if not price.is_finite() or price < 0:
            raise ValueError("Unit price must be a non-negative number")
        item = self._find(product_id)
        if item:
            item.unit_price = price

    def set_discount_percent(self, discount_percent: Any) -> None:
        self.discount_percent = clamp_discount(discount_percent)

    def clear(self) -> None:
        self.items.clear()
        self.discount_percent = ZERO

    def is_empty(self) -> bool:
        return not self.items

    def totals(self) -> BillTotals:
        return calculate_totals([item.as_line() for item in self.items], self.discount_percent)
