async def test_policy_inherits_global_default(client, store):
    product_id = await store.product()

    resp = await client.get(f"/products/{product_id}/stock-policy")

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["allowNegativeStock"] is None
    assert data["effectiveAllowNegativeStock"] is False


async def test_enabling_override_allows_negative_stock(client, store):
    product_id = await store.product("Color Developer")
    location_id = await store.location()
    await store.set_stock(product_id, location_id, 1)

    resp = await client.patch(
        f"/products/{product_id}/stock-policy",
        json={"allowNegativeStock": True, "performedBy": "owner"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["effectiveAllowNegativeStock"] is True

    resp = await client.post(
        "/inventory/adjust",
        json={
            "productId": product_id,
            "locationId": location_id,
            "quantity": 3,
            "adjustmentType": "remove",
            "reason": "service use",
        },
    )
    assert resp.status_code == 200
    assert await store.stock(product_id, location_id) == -2


async def test_policy_change_is_recorded_with_actor(client, store):
    product_id = await store.product("Color Developer")

    await client.patch(
        f"/products/{product_id}/stock-policy",
        json={"allowNegativeStock": True, "performedBy": "owner"},
    )

    activities = await store.activities()
    assert len(activities) == 1
    assert activities[0].code == "UPDATE_STOCK_POLICY"
    assert activities[0].actor == "owner"
    assert "Color Developer" in activities[0].message
    assert "allowed" in activities[0].message


async def test_unchanged_policy_is_not_recorded(client, store):
    product_id = await store.product(allow_negative_stock=False)

    resp = await client.patch(
        f"/products/{product_id}/stock-policy",
        json={"allowNegativeStock": False},
    )

    assert resp.status_code == 200
    assert await store.activities() == []


async def test_policy_value_is_required(client, store):
    product_id = await store.product()

    resp = await client.patch(f"/products/{product_id}/stock-policy", json={})

    assert resp.status_code == 400
    assert resp.json()["details"]["missingFields"] == ["allowNegativeStock"]


async def test_unknown_product_is_404(client):
    resp = await client.patch(
        "/products/missing/stock-policy", json={"allowNegativeStock": True}
    )

    assert resp.status_code == 404
    assert resp.json()["error_code"] == "PRODUCT_NOT_FOUND"
