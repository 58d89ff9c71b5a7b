"""
Plain-text bill receipt for 80mm thermal printers.

The layout follows the on-screen invoice: shop header, bill info, items with
their GST, totals, payment method and a CGST/SGST split for GST-registered
shops.
"""

import textwrap
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from kanaku.config import settings
from kanaku.services.billing import to_decimal
from kanaku.services.units import is_decimal_unit, unit_label

CENT = Decimal("0.01")
FOOTER_NOTE = "Please retain this bill for any returns or exchanges."


def format_amount(amount) -> str:
    """Two decimals with Indian digit grouping (1,23,456.78)."""
    value = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.2f}".partition(".")
    if len(integer) > 3:
        head, tail = integer[:-3], integer[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        integer = ",".join(groups + [tail])
    return f"{sign}{integer}.{fraction}"


def format_currency(amount, symbol: Optional[str] = None) -> str:
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    text = format_amount(amount)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"


def format_quantity(quantity, unit: str) -> str:
    value = to_decimal(quantity)
    if is_decimal_unit(unit):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
    else:
        text = str(int(value))
    return f"{text} {unit_label(unit)}"


def format_percent(value) -> str:
    return f"{to_decimal(value).normalize():f}"


def _pair(left: str, right: str, width: int) -> str:
    gap = width - len(left) - len(right)
    if gap < 1:
        return f"{left}\n{right.rjust(width)}"
    return f"{left}{' ' * gap}{right}"


def _center(text: str, width: int) -> List[str]:
    return [line.center(width).rstrip() for line in textwrap.wrap(text, width)]


def render_receipt(bill, shop, width: Optional[int] = None, currency: Optional[str] = None) -> str:
    """Render a bill (with items loaded) as printable text."""
    width = width or settings.RECEIPT_WIDTH
    rule = "-" * width
    money = lambda amount: format_currency(amount, currency)  # noqa: E731
    lines: List[str] = []

    # Header
    lines.extend(_center(shop.name.upper(), width))
    if shop.name_tamil:
        lines.extend(_center(shop.name_tamil, width))
    if shop.address:
        lines.extend(_center(shop.address, width))
    if shop.phone:
        lines.extend(_center(f"Ph: {shop.phone}", width))
    if shop.gstin:
        lines.extend(_center(f"GSTIN: {shop.gstin}", width))
    lines.append(rule)

    # Bill info
    lines.append(_pair("Bill No:", bill.bill_number, width))
    lines.append(_pair("Date:", bill.created_at.strftime("%d %b %Y, %I:%M %p"), width))
    if bill.customer_name:
        lines.append(_pair("Customer:", bill.customer_name, width))
    if bill.customer_phone:
        lines.append(_pair("Phone:", bill.customer_phone, width))
    lines.append(rule)

    # Items
    # 17/10/10/11 on 48 columns, squeezed proportionally on narrower paper
    name_w = max(4, width - 31)
    numbers_w = width - name_w
    qty_w = rate_w = numbers_w * 10 // 31
    amount_w = numbers_w - qty_w - rate_w
    lines.append(f"{'Item':<{name_w}}{'Qty':>{qty_w}}{'Rate':>{rate_w}}{'Amount':>{amount_w}}")
    lines.append(rule)
    for item in bill.items:
        name = item.product_name_tamil or item.product_name
        lines.extend(textwrap.wrap(name, width) or [""])
        line_amount = to_decimal(item.quantity) * to_decimal(item.unit_price)
        lines.append(
            f"{'':<{name_w}}"
            f"{format_quantity(item.quantity, item.unit):>{qty_w}}"
            f"{format_amount(item.unit_price):>{rate_w}}"
            f"{format_amount(line_amount):>{amount_w}}"
        )
        if to_decimal(item.gst_percent) > 0:
            lines.append(f"  GST @{format_percent(item.gst_percent)}%: {money(item.gst_amount)}")
    lines.append(rule)

    # Totals
    lines.append(_pair("Subtotal:", money(bill.subtotal), width))
    if to_decimal(bill.discount_amount) > 0:
        lines.append(_pair(
            f"Discount ({format_percent(bill.discount_percent)}%):",
            f"-{money(bill.discount_amount)}",
            width,
        ))
    lines.append(_pair("Taxable Amount:", money(bill.taxable_amount), width))
    lines.append(_pair("GST:", money(bill.gst_amount), width))
    lines.append(rule)
    lines.append(_pair("TOTAL:", money(bill.total), width))
    lines.append(rule)

    # Payment
    payment = getattr(bill.payment_method, "value", bill.payment_method)
    lines.append(_pair("Payment Method:", str(payment).upper(), width))
    lines.append(rule)

    # Footer
    lines.append("Thank you for shopping with us!".center(width).rstrip())
    lines.extend(_center(FOOTER_NOTE, width))

    # GST summary
    gst_amount = to_decimal(bill.gst_amount)
    if gst_amount > 0 and shop.gstin:
        # SGST takes the remainder so the halves add up to the printed GST
        gst_printed = gst_amount.quantize(CENT, rounding=ROUND_HALF_UP)
        cgst = (gst_amount / 2).quantize(CENT, rounding=ROUND_HALF_UP)
        lines.append(rule)
        lines.append(_pair("CGST:", money(cgst), width))
        lines.append(_pair("SGST:", money(gst_printed - cgst), width))

    return "\n".join(lines) + "\n"
