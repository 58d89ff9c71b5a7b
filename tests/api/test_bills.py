"""
API tests for checkout, bill history and receipts.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from kanaku.models.bill import Bill
from kanaku.models.stock_movement import StockMovement


def checkout(client, shop_id, items, **extra):
    return client.post(f"/api/shops/{shop_id}/bills", json={"items": items, **extra})


class TestCheckoutApi:

    def test_checkout_totals_and_snapshot(self, act_as, populated_shop, cashier, shop_with_cashier):
        shop_id = populated_shop["shop"].id
        rice = populated_shop["rice"]
        masala = populated_shop["masala"]

        response = checkout(act_as(cashier), shop_id, [
            {"product_id": rice.id, "quantity": 2},
            {"product_id": masala.id, "quantity": 1},
        ], discount_percent=10, customer_name="Lakshmi", payment_method="upi")
        assert response.status_code == 201
        bill = response.json()

        # subtotal 2 x 65 + 40 = 170, 10% off, GST 6.50 + 4.80 scaled by 0.9
        assert bill["subtotal"] == 170
        assert bill["discount_amount"] == 17
        assert bill["taxable_amount"] == 153
        assert bill["gst_amount"] == 10.17
        assert bill["total"] == 163.17
        assert bill["payment_method"] == "upi"
        assert bill["payment_status"] == "paid"
        assert bill["created_by"] == cashier.id

        rice_line = bill["items"][0]
        assert rice_line["product_name"] == "Ponni Rice"
        assert rice_line["product_name_tamil"] == "பொன்னி அரிசி"
        assert rice_line["hsn_code"] == "1006"
        assert rice_line["unit"] == "kg"
        assert rice_line["gst_percent"] == 5
        assert rice_line["discount_amount"] == 13
        assert rice_line["total"] == 122.85

    def test_bill_numbers_increase(self, act_as, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        bag = populated_shop["bag"]
        prefix = f"BILL-{datetime.now():%Y%m}-"

        numbers = [
            checkout(client, shop_id, [{"product_id": bag.id, "quantity": 1}]).json()["bill_number"]
            for _ in range(3)
        ]
        assert numbers == [f"{prefix}0001", f"{prefix}0002", f"{prefix}0003"]

    def test_stock_is_taken_out_for_tracked_products(self, act_as, test_db, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        masala = populated_shop["masala"]
        bag = populated_shop["bag"]

        bill = checkout(client, shop_id, [
            {"product_id": masala.id, "quantity": 7},
            {"product_id": bag.id, "quantity": 2},
        ]).json()

        # Sales are not blocked by stock
        product = client.get(f"/api/shops/{shop_id}/products/{masala.id}").json()
        assert product["stock_quantity"] == -2
        bag_after = client.get(f"/api/shops/{shop_id}/products/{bag.id}").json()
        assert bag_after["stock_quantity"] == 0

        sale = test_db.query(StockMovement).filter_by(reference_id=bill["id"]).one()
        assert sale.type.value == "sale"
        assert sale.reference_type.value == "bill"
        assert float(sale.quantity) == -7
        assert float(sale.quantity_before) == 5

    def test_price_type_prices(self, act_as, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        rice = populated_shop["rice"]

        retail = checkout(client, shop_id, [{"product_id": rice.id, "quantity": 1}]).json()
        assert retail["items"][0]["unit_price"] == 65

        wholesale = checkout(
            client, shop_id, [{"product_id": rice.id, "quantity": 1}],
            price_type_id=populated_shop["wholesale"].id,
        ).json()
        assert wholesale["items"][0]["unit_price"] == 60
        assert wholesale["price_type_id"] == populated_shop["wholesale"].id

        override = checkout(client, shop_id, [{"product_id": rice.id, "quantity": 1, "unit_price": 58}]).json()
        assert override["items"][0]["unit_price"] == 58

    def test_rejected_checkouts_leave_no_trace(self, act_as, test_db, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        masala = populated_shop["masala"]
        bag = populated_shop["bag"]

        assert checkout(client, shop_id, []).status_code == 400
        # Whole units only for pcs
        assert checkout(client, shop_id, [{"product_id": masala.id, "quantity": 1.5}]).status_code == 400
        assert checkout(client, shop_id, [{"product_id": 4242, "quantity": 1}]).status_code == 404
        assert checkout(client, shop_id, [{"product_id": bag.id, "quantity": -1}]).status_code == 422

        client.patch(f"/api/shops/{shop_id}/products/{bag.id}/active", json={"is_active": False})
        response = checkout(client, shop_id, [
            {"product_id": masala.id, "quantity": 1},
            {"product_id": bag.id, "quantity": 1},
        ])
        assert response.status_code == 400

        test_db.expire_all()
        assert test_db.query(Bill).count() == 0
        product = client.get(f"/api/shops/{shop_id}/products/{masala.id}").json()
        assert product["stock_quantity"] == 5

    def test_discount_is_clamped(self, act_as, populated_shop, owner):
        client = act_as(owner)
        bill = checkout(
            client, populated_shop["shop"].id,
            [{"product_id": populated_shop["bag"].id, "quantity": 2}],
            discount_percent=150,
        ).json()
        assert bill["discount_percent"] == 100
        assert bill["total"] == 0

    @pytest.mark.parametrize("unit_price", [0.15, 1.05, 2.35, 3.45])
    @pytest.mark.parametrize("discount", [5, 10, 15, 65])
    def test_stored_bill_adds_up(self, act_as, test_db, populated_shop, owner, unit_price, discount):
        masala = populated_shop["masala"]  # 12% GST
        response = checkout(
            act_as(owner), populated_shop["shop"].id,
            [{"product_id": masala.id, "quantity": 1, "unit_price": unit_price}],
            discount_percent=discount,
        )
        assert response.status_code == 201
        data = response.json()
        assert Decimal(str(data["total"])) == (
            Decimal(str(data["taxable_amount"])) + Decimal(str(data["gst_amount"]))
        )

        test_db.expire_all()
        bill = test_db.get(Bill, data["id"])
        assert bill.total == bill.taxable_amount + bill.gst_amount
        assert sum(item.total for item in bill.items) == bill.total
        assert sum(item.gst_amount for item in bill.items) == bill.gst_amount

    def test_non_finite_numbers_are_rejected(self, act_as, test_db, populated_shop, owner):
        client = act_as(owner)
        url = f"/api/shops/{populated_shop['shop'].id}/bills"
        bag_id = populated_shop["bag"].id
        bodies = [
            '{"items": [{"product_id": %d, "quantity": 1}], "discount_percent": NaN}' % bag_id,
            '{"items": [{"product_id": %d, "quantity": Infinity}]}' % bag_id,
            '{"items": [{"product_id": %d, "quantity": 1, "unit_price": NaN}]}' % bag_id,
        ]
        for body in bodies:
            response = client.post(url, content=body, headers={"Content-Type": "application/json"})
            assert response.status_code == 422
        assert test_db.query(Bill).count() == 0


class TestBillHistoryApi:

    def test_list_search_and_period(self, act_as, test_db, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        bag = populated_shop["bag"]

        first = checkout(client, shop_id, [{"product_id": bag.id, "quantity": 1}],
                         customer_name="Lakshmi", customer_phone="9000000001").json()
        second = checkout(client, shop_id, [{"product_id": bag.id, "quantity": 1}],
                          customer_name="Ravi").json()

        old = test_db.get(Bill, first["id"])
        old.created_at = datetime.now() - timedelta(days=10)
        test_db.commit()

        url = f"/api/shops/{shop_id}/bills"
        assert [b["id"] for b in client.get(url).json()] == [second["id"], first["id"]]
        assert [b["id"] for b in client.get(url, params={"period": "today"}).json()] == [second["id"]]
        assert [b["id"] for b in client.get(url, params={"period": "week"}).json()] == [second["id"]]
        assert len(client.get(url, params={"period": "month"}).json()) == 2
        assert client.get(url, params={"period": "year"}).status_code == 400

        assert [b["id"] for b in client.get(url, params={"search": "lak"}).json()] == [first["id"]]
        assert [b["id"] for b in client.get(url, params={"search": "90000"}).json()] == [first["id"]]
        assert [b["id"] for b in client.get(url, params={"search": second["bill_number"]}).json()] == [second["id"]]

    def test_bill_from_another_shop_is_not_found(self, act_as, populated_shop, owner, stranger):
        bill = checkout(
            act_as(owner), populated_shop["shop"].id,
            [{"product_id": populated_shop["bag"].id, "quantity": 1}],
        ).json()

        client = act_as(stranger)
        other = client.post("/api/shops", json={"name": "Other Shop"}).json()
        assert client.get(f"/api/shops/{other['id']}/bills/{bill['id']}").status_code == 404
        assert client.get(f"/api/shops/{populated_shop['shop'].id}/bills/{bill['id']}").status_code == 403

    def test_receipt(self, act_as, populated_shop, owner):
        client = act_as(owner)
        shop_id = populated_shop["shop"].id
        bill = checkout(client, shop_id, [
            {"product_id": populated_shop["rice"].id, "quantity": 2},
        ], customer_name="Lakshmi").json()

        response = client.get(f"/api/shops/{shop_id}/bills/{bill['id']}/receipt")
        assert response.status_code == 200
        receipt = response.json()
        assert receipt["bill_number"] == bill["bill_number"]
        assert receipt["width"] == 48
        assert "MURUGAN STORES" in receipt["text"]
        assert "பொன்னி அரிசி" in receipt["text"]
        assert "CGST:" in receipt["text"]

        narrow = client.get(f"/api/shops/{shop_id}/bills/{bill['id']}/receipt", params={"width": 32}).json()
        assert all(len(line) <= 32 for line in narrow["text"].splitlines())
