async def _adjust(client, product_id, location_id, quantity, adjustment_type="add"):
    resp = await client.post(
        "/inventory/adjust",
        json={
            "productId": product_id,
            "locationId": location_id,
            "quantity": quantity,
            "adjustmentType": adjustment_type,
            "reason": "cycle count",
            "performedBy": "maria",
        },
    )
    assert resp.status_code == 200


async def test_audit_history_is_newest_first_and_paginated(client, store):
    product_id = await store.product()
    location_id = await store.location()
    for quantity in (1, 2, 3):
        await _adjust(client, product_id, location_id, quantity)

    resp = await client.get(
        "/inventory/audit",
        params={"productId": product_id, "page": 1, "pageSize": 2},
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total"] == 3
    assert [item["quantity"] for item in data["items"]] == [3, 2]
    assert data["items"][0]["previousStock"] == 3
    assert data["items"][0]["newStock"] == 6
    assert data["items"][0]["userId"] == "maria"

    resp = await client.get(
        "/inventory/audit",
        params={"productId": product_id, "page": 2, "pageSize": 2},
    )
    assert [item["quantity"] for item in resp.json()["data"]["items"]] == [1]


async def test_audit_history_filters_by_location(client, store):
    product_id = await store.product()
    loc_a = await store.location("Downtown Salon")
    loc_b = await store.location("Uptown Spa")
    await _adjust(client, product_id, loc_a, 4)
    await _adjust(client, product_id, loc_b, 9)

    resp = await client.get("/inventory/audit", params={"locationId": loc_b})

    items = resp.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["locationId"] == loc_b


async def test_invalid_page_is_rejected(client):
    resp = await client.get("/inventory/audit", params={"page": 0})

    assert resp.status_code == 400
    assert resp.json()["details"]["invalidFields"] == ["page"]


async def test_stock_levels_include_names(client, store):
    product_id = await store.product("Argan Oil Shampoo")
    location_id = await store.location("Downtown Salon")
    await store.set_stock(product_id, location_id, 12)

    resp = await client.get("/inventory/stock", params={"productId": product_id})

    assert resp.status_code == 200
    rows = resp.json()["data"]
    assert len(rows) == 1
    assert rows[0]["productName"] == "Argan Oil Shampoo"
    assert rows[0]["locationName"] == "Downtown Salon"
    assert rows[0]["stock"] == 12


async def test_activity_feed_filters_and_sorts(client, store):
    product_id = await store.product()
    location_id = await store.location()
    await _adjust(client, product_id, location_id, 5)
    await _adjust(client, product_id, location_id, 2, "remove")
    await client.post("/inventory/add-stock-all-locations", json={"stockToAdd": 1})

    resp = await client.get("/activities", params={"actor": "mar", "sortOrder": "asc"})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total"] == 2
    assert [item["code"] for item in data["items"]] == ["ADJUST_STOCK", "ADJUST_STOCK"]
    assert "stock add of 5 units" in data["items"][0]["message"]

    resp = await client.get("/activities", params={"code": "BULK_ADD_STOCK"})
    items = resp.json()["data"]["items"]
    assert len(items) == 1
    assert items[0]["actor"] == "system"


async def test_health_check(client):
    resp = await client.get("/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
