"""
API tests for shop employees.
"""
from kanaku.models.employee import ShopEmployee


class TestEmployeesApi:

    def test_invite_existing_user_is_active(self, act_as, shop, owner, cashier):
        response = act_as(owner).post(
            f"/api/shops/{shop.id}/employees",
            json={"email": "CASHIER@kadai.in", "role": "cashier"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["invited_email"] == "cashier@kadai.in"
        assert data["status"] == "active"
        assert data["user_id"] == cashier.id

        # The new employee can now open the shop
        assert act_as(cashier).get(f"/api/shops/{shop.id}").json()["role"] == "cashier"

    def test_invite_unknown_email_is_pending(self, act_as, shop, owner):
        response = act_as(owner).post(
            f"/api/shops/{shop.id}/employees", json={"email": "later@kadai.in"}
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert response.json()["user_id"] is None
        assert response.json()["role"] == "cashier"

    def test_duplicate_invite(self, act_as, shop, owner):
        client = act_as(owner)
        url = f"/api/shops/{shop.id}/employees"
        assert client.post(url, json={"email": "x@kadai.in"}).status_code == 201
        response = client.post(url, json={"email": "X@kadai.in"})
        assert response.status_code == 400
        assert response.json()["detail"] == "This email has already been invited"

    def test_owner_cannot_be_invited(self, act_as, shop, owner):
        response = act_as(owner).post(
            f"/api/shops/{shop.id}/employees", json={"email": owner.email}
        )
        assert response.status_code == 400

    def test_change_role_and_remove(self, act_as, test_db, shop_with_cashier, owner, cashier):
        shop = shop_with_cashier
        employee = test_db.query(ShopEmployee).filter_by(shop_id=shop.id).one()
        client = act_as(owner)

        response = client.put(
            f"/api/shops/{shop.id}/employees/{employee.id}", json={"role": "admin"}
        )
        assert response.status_code == 200
        assert response.json()["role"] == "admin"

        # Promoted cashier now sees admin screens
        assert act_as(cashier).get(f"/api/shops/{shop.id}/employees").status_code == 200

        client = act_as(owner)
        response = client.delete(f"/api/shops/{shop.id}/employees/{employee.id}")
        assert response.status_code == 204
        assert act_as(cashier).get(f"/api/shops/{shop.id}").status_code == 403

    def test_unknown_employee(self, act_as, shop, owner):
        response = act_as(owner).delete(f"/api/shops/{shop.id}/employees/42")
        assert response.status_code == 404
