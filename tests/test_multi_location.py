import pytest

from app.models.inventory.inventory_audit_models import InventoryAudit
from app.services.inventory import multi_location_service


@pytest.fixture
async def setup(store):
    product_id = await store.product("Keratin Conditioner")
    loc_a = await store.location("Downtown Salon")
    loc_b = await store.location("Uptown Spa")
    loc_c = await store.location("Warehouse")
    await store.set_stock(product_id, loc_a, 10)
    await store.set_stock(product_id, loc_b, 3)
    return product_id, loc_a, loc_b, loc_c


async def test_sets_each_location_and_summarises(client, store, setup):
    product_id, loc_a, loc_b, loc_c = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 5, "operation": "set"},
                {"locationId": loc_b, "newStock": 8, "operation": "add"},
                {"locationId": loc_c, "newStock": 4, "operation": "set"},
            ],
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["auditTrail"] is True
    assert body["message"] == "Stock adjusted successfully for 3 location(s)"
    assert body["productName"] == "Keratin Conditioner"
    assert [a["locationId"] for a in body["adjustments"]] == [loc_a, loc_b, loc_c]
    assert body["adjustments"][0] == {
        "locationId": loc_a,
        "locationName": "Downtown Salon",
        "previousStock": 10,
        "newStock": 5,
        "change": -5,
        "operation": "set",
    }
    assert body["summary"] == {
        "locationsUpdated": 3,
        "totalPreviousStock": 13,
        "totalNewStock": 17,
        "totalChange": 4,
    }

    assert await store.stock(product_id, loc_a) == 5
    assert await store.stock(product_id, loc_b) == 8
    assert await store.stock(product_id, loc_c) == 4


async def test_writes_one_audit_per_location(client, store, setup):
    product_id, loc_a, loc_b, _ = setup

    await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 5, "operation": "remove"},
                {"locationId": loc_b, "newStock": 8, "operation": "add"},
            ],
        },
    )

    audits = await store.audits(product_id)
    assert [(a.location_id, a.adjustment_type, a.quantity, a.previous_stock, a.new_stock)
            for a in audits] == [
        (loc_a, "remove", 5, 10, 5),
        (loc_b, "add", 5, 3, 8),
    ]
    assert audits[0].notes == "Multi-location adjustment: remove operation"


async def test_missing_location_rejects_whole_batch(client, store, setup):
    product_id, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 5, "operation": "set"},
                {"locationId": "no-such-location", "newStock": 8, "operation": "set"},
            ],
        },
    )

    assert resp.status_code == 404
    body = resp.json()
    assert "no-such-location" in body["error"]
    assert body["details"]["missingLocationIds"] == ["no-such-location"]
    assert await store.stock(product_id, loc_a) == 10
    assert await store.count(InventoryAudit) == 0


async def test_inactive_location_rejects_whole_batch(client, store, setup):
    product_id, loc_a, _, _ = setup
    closed = await store.location("Closed Branch", is_active=False)

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 1, "operation": "set"},
                {"locationId": closed, "newStock": 2, "operation": "set"},
            ],
        },
    )

    assert resp.status_code == 404
    assert resp.json()["details"]["missingLocationIds"] == [closed]
    assert await store.stock(product_id, loc_a) == 10


async def test_failure_on_last_item_rolls_back_earlier_items(client, store, setup, monkeypatch):
    product_id, loc_a, loc_b, loc_c = setup
    real_record_audit = multi_location_service.record_audit
    calls = []

    def failing_record_audit(db, **fields):
        calls.append(fields["location_id"])
        if len(calls) == 3:
            raise RuntimeError("audit store unavailable")
        return real_record_audit(db, **fields)

    monkeypatch.setattr(multi_location_service, "record_audit", failing_record_audit)

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 1, "operation": "set"},
                {"locationId": loc_b, "newStock": 2, "operation": "set"},
                {"locationId": loc_c, "newStock": 3, "operation": "set"},
            ],
        },
    )

    assert resp.status_code == 500
    assert resp.json()["error_code"] == "INTERNAL_ERROR"
    assert await store.stock(product_id, loc_a) == 10
    assert await store.stock(product_id, loc_b) == 3
    assert await store.stock(product_id, loc_c) is None
    assert await store.count(InventoryAudit) == 0


async def test_duplicate_locations_are_rejected(client, store, setup):
    product_id, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_a, "newStock": 1, "operation": "set"},
                {"locationId": loc_a, "newStock": 2, "operation": "set"},
            ],
        },
    )

    assert resp.status_code == 400
    assert resp.json()["details"]["invalidFields"] == ["adjustments"]
    assert await store.stock(product_id, loc_a) == 10


@pytest.mark.parametrize(
    "adjustments",
    [
        [],
        [{"locationId": "x", "newStock": -1, "operation": "set"}],
        [{"locationId": "x", "newStock": 1, "operation": "multiply"}],
        [{"locationId": "x", "newStock": 2**63, "operation": "set"}],
        [{"locationId": "x", "newStock": True, "operation": "set"}],
        [{"newStock": 1, "operation": "set"}],
    ],
)
async def test_malformed_batches_never_write(client, store, setup, adjustments):
    product_id, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={"productId": product_id, "reason": "count", "adjustments": adjustments},
    )

    assert resp.status_code == 400
    assert resp.json()["error_code"] == "VALIDATION_ERROR"
    assert await store.count(InventoryAudit) == 0


async def test_missing_reason_is_named(client, store, setup):
    product_id, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "adjustments": [{"locationId": loc_a, "newStock": 1, "operation": "set"}],
        },
    )

    assert resp.status_code == 400
    assert resp.json()["details"]["missingFields"] == ["reason"]


async def test_unknown_product_is_404(client, store, setup):
    _, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": "missing",
            "reason": "count",
            "adjustments": [{"locationId": loc_a, "newStock": 1, "operation": "set"}],
        },
    )

    assert resp.status_code == 404
    assert resp.json()["error_code"] == "PRODUCT_NOT_FOUND"


async def test_descriptor_lists_adjustment_fields(client):
    resp = await client.get("/inventory/adjust-multi-location")

    assert resp.status_code == 200
    body = resp.json()
    assert body["requiredFields"] == ["productId", "adjustments", "reason"]
    assert body["adjustmentFields"] == ["locationId", "newStock", "operation"]


async def test_over_long_reason_is_rejected(client, store, setup):
    product_id, loc_a, _, _ = setup

    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "x" * 256,
            "adjustments": [{"locationId": loc_a, "newStock": 1, "operation": "set"}],
        },
    )

    assert resp.status_code == 400
    assert resp.json()["details"]["invalidFields"] == ["reason"]
    assert await store.stock(product_id, loc_a) == 10


async def test_rows_are_locked_in_id_order(client, store, setup, monkeypatch):
    product_id, loc_a, loc_b, loc_c = setup
    real_lock_stock_row = multi_location_service.lock_stock_row
    locked = []

    async def recording_lock_stock_row(db, **pair):
        locked.append(pair["location_id"])
        return await real_lock_stock_row(db, **pair)

    monkeypatch.setattr(multi_location_service, "lock_stock_row", recording_lock_stock_row)

    requested = sorted([loc_a, loc_b, loc_c], reverse=True)
    resp = await client.post(
        "/inventory/adjust-multi-location",
        json={
            "productId": product_id,
            "reason": "stock count",
            "adjustments": [
                {"locationId": loc_id, "newStock": 7, "operation": "set"}
                for loc_id in requested
            ],
        },
    )

    assert resp.status_code == 200
    assert locked == sorted(requested)
    # Results keep the order the caller gave
    assert [a["locationId"] for a in resp.json()["adjustments"]] == requested

    previous = {loc_a: 10, loc_b: 3, loc_c: 0}
    audits = await store.audits(product_id)
    assert [a.location_id for a in audits] == requested
    for audit in audits:
        assert audit.previous_stock == previous[audit.location_id]
        assert audit.new_stock == 7
