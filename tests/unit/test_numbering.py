"""
Unit tests for bill and purchase order numbering.
"""
from datetime import datetime

from kanaku.models.bill import Bill
from kanaku.models.purchase_order import PurchaseOrder
from kanaku.models.supplier import Supplier
from kanaku.services.numbering import generate_bill_number, generate_po_number

OCT = datetime(2026, 10, 19, 11, 30)
NOV = datetime(2026, 11, 1, 9, 0)


def add_bill(session, shop, user, number):
    session.add(Bill(shop_id=shop.id, bill_number=number, created_by=user.id))
    session.commit()


class TestBillNumbers:

    def test_first_bill_of_the_month(self, db_session, shop):
        assert generate_bill_number(db_session, shop.id, OCT) == "BILL-202610-0001"

    def test_sequence_continues_from_highest(self, db_session, shop, owner):
        add_bill(db_session, shop, owner, "BILL-202610-0001")
        add_bill(db_session, shop, owner, "BILL-202610-0009")
        assert generate_bill_number(db_session, shop.id, OCT) == "BILL-202610-0010"

    def test_sequence_restarts_every_month(self, db_session, shop, owner):
        add_bill(db_session, shop, owner, "BILL-202610-0041")
        assert generate_bill_number(db_session, shop.id, NOV) == "BILL-202611-0001"

    def test_sequence_is_per_shop(self, db_session, shop, owner, stranger):
        from kanaku.schemas import ShopCreate
        from kanaku.services.shop_service import shop_service

        other = shop_service.create_shop(db_session, stranger, ShopCreate(name="Other"))
        add_bill(db_session, other, stranger, "BILL-202610-0005")
        assert generate_bill_number(db_session, shop.id, OCT) == "BILL-202610-0001"
        assert generate_bill_number(db_session, other.id, OCT) == "BILL-202610-0006"


class TestPurchaseOrderNumbers:

    def test_po_numbers(self, db_session, shop, owner):
        supplier = Supplier(shop_id=shop.id, name="Meenakshi Traders")
        db_session.add(supplier)
        db_session.commit()
        assert generate_po_number(db_session, shop.id, OCT) == "PO-202610-0001"

        db_session.add(PurchaseOrder(
            shop_id=shop.id, supplier_id=supplier.id, po_number="PO-202610-0001", created_by=owner.id
        ))
        db_session.commit()
        assert generate_po_number(db_session, shop.id, OCT) == "PO-202610-0002"
