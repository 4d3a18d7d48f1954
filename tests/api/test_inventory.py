"""API tests for inventory endpoints."""

from httpx import AsyncClient

from agrostock.core.entities.inventory import InventoryItem


def seed(inventory_store, user_id, product_id="fert", stock=10.0, **fields) -> InventoryItem:
    values = {
        "user_id": user_id,
        "product_id": product_id,
        "product_name": "Nitrato",
        "current_stock": stock,
        "min_stock": 5,
        "critical_stock": 2,
    }
    values.update(fields)
    return inventory_store.add_item(InventoryItem(**values))


class TestItems:
    async def test_create_and_get(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory",
            json={
                "product_id": "fert",
                "product_name": "Nitrato",
                "current_stock": 3,
                "min_stock": 5,
                "critical_stock": 2,
                "unit": "Kilos",
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["unit"] == "kg"
        assert body["is_low"] is True
        assert body["is_critical"] is False

        fetched = await client.get(f"/api/inventory/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["product_id"] == "fert"

        alerts = await client.get("/api/inventory/alerts")
        assert [a["type"] for a in alerts.json()["alerts"]] == ["low_stock"]

    async def test_create_rejects_negative_stock(self, client: AsyncClient):
        response = await client.post(
            "/api/inventory", json={"product_name": "Nitrato", "current_stock": -1}
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_update_cannot_set_stock(self, client, inventory_store, user_id):
        item = seed(inventory_store, user_id)

        response = await client.put(f"/api/inventory/{item.id}", json={"current_stock": 99})

        assert response.status_code == 422
        assert inventory_store.items[item.id].current_stock == 10

    async def test_update_cannot_switch_unit(self, client, inventory_store, user_id):
        item = seed(inventory_store, user_id)

        response = await client.put(f"/api/inventory/{item.id}", json={"unit": "g"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"
        stored = inventory_store.items[item.id]
        assert (stored.current_stock, stored.unit) == (10, "kg")

    async def test_update_thresholds(self, client, inventory_store, user_id):
        item = seed(inventory_store, user_id)

        response = await client.put(f"/api/inventory/{item.id}", json={"min_stock": 12})

        assert response.status_code == 200
        assert response.json()["min_stock"] == 12
        assert response.json()["current_stock"] == 10

    async def test_delete_hides_item(self, client, inventory_store, user_id):
        item = seed(inventory_store, user_id)

        response = await client.delete(f"/api/inventory/{item.id}")
        assert response.status_code == 204

        missing = await client.get(f"/api/inventory/{item.id}")
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "INVENTORY_ITEM_NOT_FOUND"
        assert (await client.get("/api/inventory")).json()["total"] == 0

    async def test_missing_user_header(self, anonymous_client: AsyncClient):
        response = await anonymous_client.get("/api/inventory")
        assert response.status_code == 401
        assert response.json()["error_code"] == "MISSING_USER"

    async def test_items_are_per_user(self, client, inventory_store):
        seed(inventory_store, "someone-else")
        response = await client.get("/api/inventory")
        assert response.json()["items"] == []


class TestAdjust:
    async def test_success(self, client, inventory_store, user_id):
        seed(inventory_store, user_id)

        response = await client.post(
            "/api/inventory/adjust",
            json={
                "operations": [
                    {
                        "product_id": "fert",
                        "amount": 3000,
                        "amount_unit": "g",
                        "context": {"activity_id": "act-1", "module": "fertigation", "day_index": 2},
                    }
                ]
            },
        )

        assert response.status_code == 200
        assert response.json() == {"ok": True, "error": None, "details": None, "balances": {"fert": 7.0}}

        movements = await client.get("/api/inventory/movements", params={"activity_id": "act-1"})
        [movement] = movements.json()["movements"]
        assert movement["day_index"] == 2
        assert movement["amount_in_item_unit"] == 3

    async def test_insufficient_is_conflict(self, client, inventory_store, user_id):
        seed(inventory_store, user_id, stock=4)

        response = await client.post(
            "/api/inventory/adjust",
            json={"operations": [{"product_id": "fert", "amount": 6}]},
        )

        assert response.status_code == 409
        body = response.json()
        assert body["ok"] is False
        assert body["error"] == "insufficient_stock"
        assert body["details"] == [
            {"product_id": "fert", "available": 4.0, "requested": 6.0, "unit": "kg"}
        ]

    async def test_unknown_product_is_not_found(self, client):
        response = await client.post(
            "/api/inventory/adjust",
            json={"operations": [{"product_id": "ghost", "amount": 1}]},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "inventory_item_not_found"

    async def test_empty_batch(self, client):
        response = await client.post("/api/inventory/adjust", json={"operations": []})
        assert response.status_code == 200
        assert response.json()["balances"] == {}

    async def test_negative_amount_rejected(self, client):
        response = await client.post(
            "/api/inventory/adjust",
            json={"operations": [{"product_id": "fert", "amount": -1}]},
        )
        assert response.status_code == 422


class TestQueries:
    async def test_by_products(self, client, inventory_store, user_id):
        seed(inventory_store, user_id, product_id="a", stock=3)

        response = await client.get("/api/inventory/by-products", params={"ids": "a, b,,a"})

        assert response.status_code == 200
        assert response.json() == {
            "a": {"item_id": 1, "product_id": "a", "current_stock": 3.0, "unit": "kg"}
        }

    async def test_resolve_product(self, client, inventory_store, user_id):
        seed(inventory_store, user_id)

        found = await client.get("/api/inventory/product/fert")
        missing = await client.get("/api/inventory/product/ghost")

        assert found.status_code == 200
        assert found.json()["product_name"] == "Nitrato"
        assert missing.status_code == 404

    async def test_mark_alert_read(self, client, inventory_store, user_id):
        seed(inventory_store, user_id, stock=4)
        await client.post(
            "/api/inventory/adjust",
            json={"operations": [{"product_id": "fert", "amount": 1}]},
        )
        [alert] = (await client.get("/api/inventory/alerts")).json()["alerts"]

        response = await client.post(f"/api/inventory/alerts/{alert['id']}/read")

        assert response.status_code == 200
        assert response.json()["read"] is True
        assert (await client.get("/api/inventory/alerts")).json()["alerts"] == []

        missing = await client.post("/api/inventory/alerts/424242/read")
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "ALERT_NOT_FOUND"
