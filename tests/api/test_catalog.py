"""
API tests for categories, brands, price types and suppliers.
"""
from kanaku.models.category import Category
from kanaku.models.product import Product


class TestCategoriesApi:

    def test_tree(self, act_as, shop, owner):
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/categories"
        food = client.post(url, json={"name": "Food", "sort_order": 1}).json()
        drinks = client.post(url, json={"name": "Drinks", "sort_order": 0}).json()
        snacks = client.post(url, json={"name": "Snacks", "parent_id": food["id"]}).json()
        chips = client.post(url, json={"name": "Chips", "parent_id": snacks["id"]}).json()

        tree = client.get(f"{url}/tree").json()
        assert [node["name"] for node in tree] == ["Drinks", "Food"]
        assert tree[1]["children"][0]["id"] == snacks["id"]
        assert tree[1]["children"][0]["children"][0]["id"] == chips["id"]
        assert tree[0]["children"] == []
        assert len(client.get(url).json()) == 4
        assert drinks["parent_id"] is None

    def test_cycles_are_rejected(self, act_as, shop, owner):
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/categories"
        parent = client.post(url, json={"name": "Parent"}).json()
        child = client.post(url, json={"name": "Child", "parent_id": parent["id"]}).json()

        response = client.put(f"{url}/{parent['id']}", json={"name": "Parent", "parent_id": parent["id"]})
        assert response.status_code == 400

        response = client.put(f"{url}/{parent['id']}", json={"name": "Parent", "parent_id": child["id"]})
        assert response.status_code == 400
        assert "subcategories" in response.json()["detail"]

    def test_parent_must_exist_in_shop(self, act_as, shop, owner):
        response = act_as(owner).post(
            f"/api/shops/{shop.id}/categories", json={"name": "Orphan", "parent_id": 999}
        )
        assert response.status_code == 404

    def test_delete_keeps_products_and_children(self, act_as, test_db, populated_shop, owner):
        shop = populated_shop["shop"]
        groceries = populated_shop["category"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/categories"
        sub = client.post(url, json={"name": "Rice", "parent_id": groceries.id}).json()

        assert client.delete(f"{url}/{groceries.id}").status_code == 204

        test_db.expire_all()
        assert test_db.get(Product, populated_shop["rice"].id).category_id is None
        assert test_db.get(Category, sub["id"]).parent_id is None


class TestBrandsApi:

    def test_crud(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/brands"

        created = client.post(url, json={"name": "Sakthi", "name_tamil": "சக்தி"}).json()
        assert [b["name"] for b in client.get(url).json()] == ["Aachi", "Sakthi"]

        response = client.put(f"{url}/{created['id']}", json={"name": "Sakthi Masala"})
        assert response.json()["name"] == "Sakthi Masala"

        brand_id = populated_shop["brand"].id
        assert client.delete(f"{url}/{brand_id}").status_code == 204
        product = client.get(f"/api/shops/{shop.id}/products/{populated_shop['masala'].id}").json()
        assert product["brand_id"] is None


class TestPriceTypesApi:

    def test_single_default(self, act_as, shop, owner, retail_price_type):
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/price-types"

        wholesale = client.post(url, json={"name": "Wholesale", "is_default": True}).json()
        listed = client.get(url).json()
        assert [(p["name"], p["is_default"]) for p in listed] == [("Wholesale", True), ("Retail", False)]

        response = client.post(f"{url}/{retail_price_type.id}/default")
        assert response.status_code == 200
        defaults = [p["id"] for p in client.get(url).json() if p["is_default"]]
        assert defaults == [retail_price_type.id]

        assert client.delete(f"{url}/{wholesale['id']}").status_code == 204

    def test_default_cannot_be_deleted(self, act_as, shop, owner, retail_price_type):
        response = act_as(owner).delete(f"/api/shops/{shop.id}/price-types/{retail_price_type.id}")
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete the default price type"

    def test_default_cannot_be_unset_directly(self, act_as, shop, owner, retail_price_type):
        response = act_as(owner).put(
            f"/api/shops/{shop.id}/price-types/{retail_price_type.id}",
            json={"name": "Retail", "is_default": False},
        )
        assert response.status_code == 400


class TestSuppliersApi:

    def test_search(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/suppliers"
        client.post(url, json={"name": "Velan Agencies", "phone": "0452-2345678"})

        assert len(client.get(url).json()) == 2
        assert [s["name"] for s in client.get(url, params={"search": "kumar"}).json()] == ["Meenakshi Traders"]
        assert [s["name"] for s in client.get(url, params={"search": "0452"}).json()] == ["Velan Agencies"]

    def test_supplier_with_orders_cannot_be_deleted(self, act_as, populated_shop, owner):
        shop = populated_shop["shop"]
        supplier = populated_shop["supplier"]
        client = act_as(owner)
        client.post(f"/api/shops/{shop.id}/purchase-orders", json={
            "supplier_id": supplier.id,
            "items": [{"product_id": populated_shop["rice"].id, "quantity": 10}],
        })
        response = client.delete(f"/api/shops/{shop.id}/suppliers/{supplier.id}")
        assert response.status_code == 409

    def test_other_shop_supplier_is_not_found(self, act_as, populated_shop, stranger):
        client = act_as(stranger)
        other = client.post("/api/shops", json={"name": "Other Shop"}).json()
        response = client.get(
            f"/api/shops/{other['id']}/suppliers/{populated_shop['supplier'].id}"
        )
        assert response.status_code == 404
