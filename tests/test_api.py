"""
HTTP surface: routing, camelCase payloads and the error envelope.
"""

from enterprise_ledger.core.deps import get_settings
from enterprise_ledger.core.settings import AppSettings


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["message"] == "Healthy"
        assert resp.headers["X-Correlation-ID"]

    def test_correlation_id_is_echoed(self, client):
        resp = client.get("/api/v1/health", headers={"X-Correlation-ID": "cid-123"})
        assert resp.headers["X-Correlation-ID"] == "cid-123"


class TestInventoryEndpoints:
    def test_lots_use_camel_case(self, client):
        lots = client.get("/api/v1/inventory/lots", params={"itemId": "item-raw-001"}).json()
        assert lots == [
            {
                "id": "lot-raw-001",
                "itemId": "item-raw-001",
                "lotNo": "PCB-2403A",
                "qty": 120.0,
                "locationId": "loc-main-raw",
                "status": "available",
            }
        ]

    def test_record_move_and_read_journal(self, client):
        resp = client.post(
            "/api/v1/inventory/moves",
            json={
                "itemId": "item-raw-002",
                "qty": 50,
                "fromLocationId": "loc-main-raw",
                "toLocationId": "loc-main-wip",
                "refType": "Adjustment",
                "refId": "adj-1",
            },
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["qty"] == 50
        assert "note" not in body
        journal = client.get("/api/v1/inventory/moves", params={"limit": 1}).json()
        assert journal[0]["id"] == body["id"]

    def test_set_location_roles_unknown_warehouse(self, client):
        resp = client.put("/api/v1/inventory/location-roles/wh-x", json={"raw": "loc-main-raw"})
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"]["type"] == "not_found"
        assert body["error"]["message"] == "Warehouse wh-x not found"

    def test_validation_error_envelope(self, client):
        resp = client.post("/api/v1/inventory/receipts", json={"itemId": "item-raw-001"})
        assert resp.status_code == 422
        assert resp.json()["error"]["type"] == "validation_error"


class TestProductionEndpoints:
    def test_generate_start_complete(self, client):
        created = client.post(
            "/api/v1/production/orders",
            json={"itemId": "item-fin-001", "qty": 2, "dueDate": "2026-03-01T00:00:00Z"},
        ).json()
        assert created["status"] == "draft"

        work_orders = client.post(f"/api/v1/production/orders/{created['id']}/work-orders").json()
        assert [w["opId"] for w in work_orders] == ["ROUTER-ASM", "ROUTER-TEST", "ROUTER-PACK"]

        started = client.post(f"/api/v1/production/work-orders/{work_orders[0]['id']}/start", json={"assignee": "alexei"})
        assert started.json()["assignee"] == "alexei"

        for work_order in work_orders:
            resp = client.post(f"/api/v1/production/work-orders/{work_order['id']}/complete")
            assert resp.json()["status"] == "completed"

        orders = client.get("/api/v1/production/orders", params={"status": "completed"}).json()
        assert [o["id"] for o in orders] == [created["id"]]

    def test_release_status(self, client):
        resp = client.post("/api/v1/production/orders/po-router-11/status", json={"status": "closed"})
        assert resp.json()["status"] == "closed"

    def test_unknown_work_order_is_404(self, client):
        resp = client.post("/api/v1/production/work-orders/wo-x/complete")
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Work order wo-x not found"


class TestFulfillmentEndpoints:
    def test_receive_purchase_order(self, client):
        resp = client.post("/api/v1/procurement/purchase-orders/po-2024-1045/receive")
        assert resp.json()["status"] == "received"
        balance = client.get("/api/v1/inventory/items/item-raw-001/balance").json()
        assert balance["byLocation"]["loc-main-raw"] == 320

    def test_ship_sales_order(self, client):
        resp = client.post("/api/v1/sales/sales-orders/so-2024-202/ship")
        assert resp.json()["status"] == "shipped"

    def test_create_invoice(self, client):
        resp = client.post(
            "/api/v1/invoices",
            json={
                "partnerType": "customer",
                "partnerId": "cust-fastfiber",
                "lines": [{"description": "Router", "qty": 1, "price": 5500}],
                "total": 5500,
                "status": "open",
                "issuedAt": "2026-02-01T00:00:00Z",
            },
        )
        assert resp.json()["id"].startswith("invoice-")


class TestPeripheralEndpoints:
    def test_trigger_playbook(self, client):
        resp = client.post("/api/v1/automation/playbooks/playbook-receiving/runs", json={"actor": "olga", "dryRun": True})
        assert resp.json()["output"] == "Executed 3 steps in dry-run mode."

    def test_patch_task(self, client):
        resp = client.patch("/api/v1/tasks/task-002", json={"assignee": "irina"})
        assert resp.json()["assignee"] == "irina"
        assert resp.json()["title"] == "Schedule maintenance window"

    def test_patch_task_rejects_null_title(self, client):
        resp = client.patch("/api/v1/tasks/task-002", json={"title": None})
        assert resp.status_code == 422
        assert resp.json()["error"]["type"] == "validation_error"
        task = next(t for t in client.get("/api/v1/tasks").json() if t["id"] == "task-002")
        assert task["title"] == "Schedule maintenance window"

    def test_patch_task_clears_optional_assignee(self, client):
        resp = client.patch("/api/v1/tasks/task-002", json={"assignee": None})
        assert resp.status_code == 200
        assert "assignee" not in resp.json()

    def test_passport_not_found(self, client):
        assert client.get("/api/v1/passports/pp-x").status_code == 404

    def test_passport_draft_to_ready(self, client):
        draft = client.post(
            "/api/v1/passports", json={"deviceId": "device-ast-1005", "templateId": "tpl-router-base-v1"}
        ).json()
        assert draft["status"] == "draft"
        assert draft["fieldValues"]["serialNumber"] == "ER1U-24-1005"

        resp = client.post(f"/api/v1/passports/{draft['id']}/finalize", json={"actor": "qa-lead"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "ready"
        assert resp.json()["history"][-1]["actor"] == "qa-lead"

    def test_attachment_is_recorded_in_history(self, client):
        resp = client.post("/api/v1/passports/pp-router-0001/attachments", json={"name": "Audit.pdf", "url": "/a.pdf"})
        body = resp.json()
        assert body["attachments"][-1]["uploadedAt"]
        assert body["history"][-1]["action"] == "attachment"

    def test_activate_unknown_template(self, client):
        resp = client.post("/api/v1/passports/templates/tpl-x/activate")
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Template tpl-x not found"

    def test_device_routes_do_not_collide_with_passport_ids(self, client):
        devices = client.get("/api/v1/passports/devices", params={"q": "contractor"}).json()
        assert [d["id"] for d in devices] == ["device-ast-1042"]
        active = client.get("/api/v1/passports/templates/active", params={"deviceModelId": "model-dell-r650"}).json()
        assert active["id"] == "tpl-server-base-v1"

    def test_workforce_teams(self, client):
        assert len(client.get("/api/v1/workforce/teams").json()) == 2


class TestSystemReset:
    def test_reset_disabled_by_default(self, client):
        from enterprise_ledger.api.main import app

        app.dependency_overrides[get_settings] = lambda: AppSettings(ENABLE_STATE_RESET=False)
        resp = client.post("/api/v1/system/reset")
        assert resp.status_code == 403
        assert resp.json()["error"]["type"] == "http_error"

    def test_reset_restores_seed(self, client):
        from enterprise_ledger.api.main import app

        app.dependency_overrides[get_settings] = lambda: AppSettings(ENABLE_STATE_RESET=True)
        client.post("/api/v1/sales/sales-orders/so-2024-201/ship")
        assert client.post("/api/v1/system/reset").status_code == 200
        orders = {o["id"]: o for o in client.get("/api/v1/sales/sales-orders").json()}
        assert orders["so-2024-201"]["status"] == "approved"
