"""
API tests for stock levels, adjustments and the movement ledger.
"""


class TestInventoryApi:

    def test_stock_filters(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/inventory"

        def names(**params):
            return [p["name"] for p in client.get(url, params=params).json()]

        # Untracked products never show up
        assert names() == ["Ponni Rice", "Sambar Powder"]
        assert names(stock="low") == ["Sambar Powder"]
        assert names(stock="ok") == ["Ponni Rice"]
        assert names(stock="out") == []
        assert names(search="sambar") == ["Sambar Powder"]
        assert client.get(url, params={"stock": "plenty"}).status_code == 400

    def test_adjust_and_return(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        masala = populated_shop["masala"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/inventory"

        response = client.post(f"{url}/adjust", json={
            "product_id": masala.id, "quantity": -5, "notes": "Damaged packets",
        })
        assert response.status_code == 201
        movement = response.json()
        assert movement["type"] == "adjustment"
        assert movement["quantity_before"] == 5
        assert movement["quantity_after"] == 0
        assert movement["reference_type"] == "adjustment"
        assert movement["product_name"] == "Sambar Powder"

        assert [p["name"] for p in client.get(url, params={"stock": "out"}).json()] == ["Sambar Powder"]

        response = client.post(f"{url}/adjust", json={
            "product_id": masala.id, "type": "return", "quantity": 2,
        })
        assert response.json()["quantity_after"] == 2

    def test_stock_cannot_go_negative(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        response = act_as(owner).post(f"/api/shops/{shop.id}/inventory/adjust", json={
            "product_id": populated_shop["masala"].id, "quantity": -6,
        })
        assert response.status_code == 400
        assert response.json()["detail"] == "Stock cannot go below zero"

    def test_invalid_adjustments(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/inventory/adjust"

        assert client.post(url, json={
            "product_id": populated_shop["rice"].id, "quantity": 0,
        }).status_code == 422
        assert client.post(url, json={
            "product_id": populated_shop["rice"].id, "type": "sale", "quantity": -1,
        }).status_code == 422
        assert client.post(url, json={
            "product_id": populated_shop["bag"].id, "quantity": 3,
        }).status_code == 400

    def test_movements_ledger(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        rice = populated_shop["rice"]
        client = act_as(owner)

        client.post(f"/api/shops/{shop.id}/bills", json={
            "items": [{"product_id": rice.id, "quantity": 2.5}],
        })
        client.post(f"/api/shops/{shop.id}/inventory/adjust", json={
            "product_id": rice.id, "quantity": 10,
        })

        movements = client.get(
            f"/api/shops/{shop.id}/inventory/movements", params={"product_id": rice.id}
        ).json()
        # Newest first
        assert [m["type"] for m in movements] == ["adjustment", "sale", "adjustment"]
        assert [m["quantity"] for m in movements] == [10, -2.5, 50]

        chronological = list(reversed(movements))
        for previous, current in zip(chronological, chronological[1:]):
            assert current["quantity_before"] == previous["quantity_after"]
        for movement in movements:
            assert movement["quantity_after"] == movement["quantity_before"] + movement["quantity"]

        product = client.get(f"/api/shops/{shop.id}/products/{rice.id}").json()
        assert product["stock_quantity"] == movements[0]["quantity_after"] == 57.5

        all_movements = client.get(f"/api/shops/{shop.id}/inventory/movements").json()
        assert len(all_movements) == 4
