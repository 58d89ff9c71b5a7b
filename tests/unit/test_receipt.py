"""
Unit tests for the thermal receipt renderer.
"""
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from kanaku.services.receipt import (
    format_amount,
    format_currency,
    format_quantity,
    render_receipt,
)


@pytest.fixture
def shop():
    return SimpleNamespace(
        name="Murugan Stores",
        name_tamil="முருகன் ஸ்டோர்ஸ்",
        address="12 Car Street, Madurai",
        phone="9876543210",
        gstin="33ABCDE1234F1Z5",
    )


@pytest.fixture
def bill():
    items = [
        SimpleNamespace(
            product_name="Ponni Rice",
            product_name_tamil="பொன்னி அரிசி",
            quantity=Decimal("2.500"),
            unit="kg",
            unit_price=Decimal("65.00"),
            gst_percent=Decimal("5.00"),
            gst_amount=Decimal("7.31"),
        ),
        SimpleNamespace(
            product_name="Carry Bag",
            product_name_tamil=None,
            quantity=Decimal("1"),
            unit="pcs",
            unit_price=Decimal("5.00"),
            gst_percent=Decimal("0"),
            gst_amount=Decimal("0"),
        ),
    ]
    return SimpleNamespace(
        bill_number="BILL-202610-0007",
        created_at=datetime(2026, 10, 19, 18, 5),
        customer_name="Lakshmi",
        customer_phone=None,
        items=items,
        subtotal=Decimal("167.50"),
        discount_percent=Decimal("10"),
        discount_amount=Decimal("16.75"),
        taxable_amount=Decimal("150.75"),
        gst_amount=Decimal("7.31"),
        total=Decimal("158.06"),
        payment_method="upi",
    )


class TestFormatting:

    @pytest.mark.parametrize("amount, expected", [
        (0, "0.00"),
        (5, "5.00"),
        (999.999, "1,000.00"),
        (123456.78, "1,23,456.78"),
        (12345678, "1,23,45,678.00"),
        (-1500, "-1,500.00"),
    ])
    def test_indian_grouping(self, amount, expected):
        assert format_amount(amount) == expected

    def test_currency(self):
        assert format_currency(1500, "₹") == "₹1,500.00"
        assert format_currency(-2, "Rs.") == "-Rs.2.00"

    def test_quantity(self):
        assert format_quantity(Decimal("2.500"), "kg") == "2.5 kg"
        assert format_quantity(Decimal("3.000"), "pcs") == "3 pcs"
        assert format_quantity(Decimal("0.750"), "l") == "0.75 L"


class TestRenderReceipt:

    def test_layout(self, bill, shop):
        text = render_receipt(bill, shop, width=48, currency="₹")
        lines = text.splitlines()

        assert lines[0].strip() == "MURUGAN STORES"
        assert "முருகன் ஸ்டோர்ஸ்" in text
        assert "Ph: 9876543210" in text
        assert "GSTIN: 33ABCDE1234F1Z5" in text
        assert "BILL-202610-0007" in text
        assert "19 Oct 2026, 06:05 PM" in text
        assert "Lakshmi" in text
        assert "Phone:" not in text

        # Tamil name preferred on item lines
        assert "பொன்னி அரிசி" in text
        assert "2.5 kg" in text
        assert "GST @5%: ₹7.31" in text
        assert "Discount (10%):" in text
        assert "-₹16.75" in text
        assert "TOTAL:" in text and "₹158.06" in text
        assert "UPI" in text
        assert "Please retain this bill for any returns or exchanges." in text

    def test_gst_split_for_registered_shop(self, bill, shop):
        text = render_receipt(bill, shop, width=48, currency="₹")
        lines = text.splitlines()
        cgst = next(line for line in lines if line.startswith("CGST:"))
        sgst = next(line for line in lines if line.startswith("SGST:"))
        # 7.31 does not halve evenly; SGST takes the remaining paisa
        assert cgst.endswith("₹3.66")
        assert sgst.endswith("₹3.65")

    def test_gst_halves_add_up_to_printed_gst(self, bill, shop):
        bill.gst_amount = Decimal("0.05")
        text = render_receipt(bill, shop, width=48, currency="₹")
        lines = text.splitlines()
        assert next(line for line in lines if line.startswith("GST:")).endswith("₹0.05")
        assert next(line for line in lines if line.startswith("CGST:")).endswith("₹0.03")
        assert next(line for line in lines if line.startswith("SGST:")).endswith("₹0.02")

    def test_no_gst_split_without_gstin(self, bill, shop):
        shop.gstin = None
        text = render_receipt(bill, shop, width=48, currency="₹")
        assert "CGST" not in text
        assert "GSTIN" not in text

    def test_no_discount_line_without_discount(self, bill, shop):
        bill.discount_amount = Decimal("0")
        text = render_receipt(bill, shop, width=48, currency="₹")
        assert "Discount" not in text

    def test_lines_fit_the_paper(self, bill, shop):
        text = render_receipt(bill, shop, width=32, currency="₹")
        assert all(len(line) <= 32 for line in text.splitlines())
