from __future__ import annotations

import pytest

from invdb.apps.inventory.router import router as inventory_router

BASE = "/api/v1/inventory"


def _create(client, **fields):
    response = client.post(BASE, json=fields)
    assert response.status_code == 201, response.text
    return response.json()


def _audit(client, **params):
    response = client.get("/api/v1/audit", params=params)
    assert response.status_code == 200, response.text
    return response.json()


def test_router_has_expected_routes():
    def _has(path: str, method: str) -> bool:
        return any(route.path == path and method in (route.methods or []) for route in inventory_router.routes)

    assert _has(BASE, "GET")
    assert _has(BASE, "POST")
    assert _has(BASE + "/{item_id}", "GET")
    assert _has(BASE + "/{item_id}", "PUT")
    assert _has(BASE + "/{item_id}", "DELETE")
    assert _has(BASE + "/{item_id}/quantity", "PATCH")


def test_create_returns_row_and_single_create_audit(client):
    body = _create(client, name="Widget A", sku="WIDGET-A-001", quantity=100, unit_price=49.99)

    assert body["name"] == "Widget A"
    assert body["sku"] == "WIDGET-A-001"
    assert body["quantity"] == 100
    assert body["unit_price"] == 49.99
    assert body["deleted"] is False
    assert {"id", "created_at", "updated_at"} <= set(body)

    audit = _audit(client, inventory_id=body["id"])
    assert len(audit) == 1
    assert audit[0]["action"] == "CREATE"
    assert audit[0]["after_state"]["sku"] == "WIDGET-A-001"


def test_create_missing_fields_is_400(client):
    response = client.post(BASE, json={"name": "No sku"})
    assert response.status_code == 400
    assert response.json() == {"error": "name and sku required"}


def test_create_duplicate_sku_is_409(client):
    _create(client, name="Widget A", sku="DUP-1", quantity=1)

    response = client.post(BASE, json={"name": "Other", "sku": "DUP-1", "quantity": 50})

    assert response.status_code == 409
    assert response.json() == {
        "code": "SKU_DUPLICATE",
        "message": "SKU already exists",
        "details": {"sku": "DUP-1"},
    }
    listed = client.get(BASE).json()
    assert [(row["name"], row["quantity"]) for row in listed] == [("Widget A", 1)]


def test_list_filters(client):
    _create(client, name="Widget A", sku="WID-1", category="Widgets", location="WH-01")
    _create(client, name="Gadget B", sku="GAD-1", category="Gadgets", location="WH-02")

    assert [row["sku"] for row in client.get(BASE).json()] == ["WID-1", "GAD-1"]
    assert [row["sku"] for row in client.get(BASE, params={"category": "Gadgets"}).json()] == ["GAD-1"]
    assert [row["sku"] for row in client.get(BASE, params={"location": "WH-01"}).json()] == ["WID-1"]
    assert [row["sku"] for row in client.get(BASE, params={"q": "gad"}).json()] == ["GAD-1"]


def test_get_missing_item_is_404(client):
    response = client.get(f"{BASE}/12345")
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_update_changes_fields_and_audits(client):
    item = _create(client, name="Widget", sku="UPD-1", quantity=4)

    response = client.put(f"{BASE}/{item['id']}", json={"location": "WH-09", "reason": "moved"})

    assert response.status_code == 200
    assert response.json()["location"] == "WH-09"
    assert response.json()["quantity"] == 4
    latest = _audit(client, inventory_id=item["id"])[0]
    assert latest["action"] == "UPDATE"
    assert latest["reason"] == "moved"


def test_update_empty_body_is_400_without_audit(client):
    item = _create(client, name="Widget", sku="UPD-2")

    response = client.put(f"{BASE}/{item['id']}", json={})

    assert response.status_code == 400
    assert len(_audit(client, inventory_id=item["id"])) == 1


def test_update_missing_item_is_404(client):
    response = client.put(f"{BASE}/999", json={"name": "ghost"})
    assert response.status_code == 404


def test_adjust_quantity(client):
    item = _create(client, name="Widget A", sku="QTY-1", quantity=100)

    response = client.patch(f"{BASE}/{item['id']}/quantity", json={"delta": -30, "reason": "sold"})

    assert response.status_code == 200
    assert response.json()["quantity"] == 70
    latest = _audit(client, inventory_id=item["id"])[0]
    assert latest["action"] == "QTY_ADJUST"
    assert latest["before_state"]["quantity"] == 100
    assert latest["after_state"]["quantity"] == 70
    assert latest["reason"] == "sold"


def test_adjust_quantity_coerces_delta(client):
    item = _create(client, name="Widget", sku="QTY-2", quantity=10)
    url = f"{BASE}/{item['id']}/quantity"

    assert client.patch(url, json={"delta": "5"}).json()["quantity"] == 15
    assert client.patch(url, json={"delta": "abc"}).json()["quantity"] == 15
    assert client.patch(url, json={}).json()["quantity"] == 15


def test_adjust_quantity_missing_item_is_404(client):
    response = client.patch(f"{BASE}/999/quantity", json={"delta": 1})
    assert response.status_code == 404


def test_soft_delete_hides_item_but_hard_delete_still_works(client):
    item = _create(client, name="Widget", sku="DEL-1")
    url = f"{BASE}/{item['id']}"

    response = client.delete(url)
    assert response.status_code == 200
    assert response.json() == {"deleted": True}
    assert client.get(url).status_code == 404
    assert client.get(BASE).json() == []

    response = client.delete(url, params={"mode": "hard", "reason": "obsolete"})
    assert response.status_code == 200
    assert response.json() == {"deleted": True}

    actions = [row["action"] for row in _audit(client, inventory_id=item["id"])]
    assert actions[0] == "DELETE"
    assert sorted(actions) == ["CREATE", "DELETE", "SOFT_DELETE"]
    assert client.delete(url, params={"mode": "hard"}).status_code == 404


def test_non_integer_id_is_400(client):
    response = client.get(f"{BASE}/abc")
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_adjust_quantity_without_body_is_zero_delta(client):
    item = _create(client, name="Widget", sku="QTY-3", quantity=12)

    response = client.patch(f"{BASE}/{item['id']}/quantity")

    assert response.status_code == 200
    assert response.json()["quantity"] == 12
    latest = _audit(client, inventory_id=item["id"])[0]
    assert latest["action"] == "QTY_ADJUST"
    assert latest["before_state"]["quantity"] == latest["after_state"]["quantity"] == 12


def test_search_underscore_is_literal(client):
    _create(client, name="Alpha", sku="A-1")
    _create(client, name="Be_ta", sku="B-1")

    assert [row["sku"] for row in client.get(BASE, params={"q": "_"}).json()] == ["B-1"]


@pytest.mark.parametrize("field", ["deleted", "quantity", "name", "sku"])
def test_update_null_required_field_is_400(client, field):
    item = _create(client, name="Widget", sku=f"NULL-{field}", quantity=3)

    response = client.put(f"{BASE}/{item['id']}", json={field: None})

    assert response.status_code == 400
    assert response.json() == {"error": f"{field} cannot be null"}
    assert client.get(f"{BASE}/{item['id']}").json()["quantity"] == 3


def test_update_to_taken_sku_is_409(client):
    _create(client, name="First", sku="TAKEN-1")
    second = _create(client, name="Second", sku="FREE-1")

    response = client.put(f"{BASE}/{second['id']}", json={"sku": "TAKEN-1"})

    assert response.status_code == 409
    assert response.json()["code"] == "SKU_DUPLICATE"
    assert response.json()["details"] == {"sku": "TAKEN-1"}
    assert client.get(f"{BASE}/{second['id']}").json()["sku"] == "FREE-1"


def test_delete_unknown_mode_falls_back_to_soft(client):
    item = _create(client, name="Widget", sku="DEL-2")

    response = client.delete(f"{BASE}/{item['id']}", params={"mode": "bogus"})

    assert response.status_code == 200
    assert _audit(client, inventory_id=item["id"])[0]["action"] == "SOFT_DELETE"
    assert client.get(f"{BASE}/{item['id']}").status_code == 404
