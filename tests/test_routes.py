"""
Tests for API routes — health, invoices, activity feed.
"""

import pytest

from bizdesk.services.activity import ACTIVITY_COLLECTION
from bizdesk.services.store import DocumentStoreError, MemoryDocumentStore

DESC = "Changed report status to Pending for invoice INV-1"


async def _seed_invoice(store, doc_id="INV-1", status="Paid", **extra):
    await store.set("invoices", doc_id, {
        "clientName": "Acme",
        "amount": 500.0,
        "status": status,
        "createdAt": "2026-10-01T09:00:00.000+00:00",
        **extra,
    })


class FailingUpdateStore(MemoryDocumentStore):
    async def update(self, collection, doc_id, fields):
        raise DocumentStoreError("backend unavailable")


class FailingActivityStore(MemoryDocumentStore):
    """Invoice writes succeed; every activity-log read or write fails."""

    async def add(self, collection, data):
        if collection == ACTIVITY_COLLECTION:
            raise DocumentStoreError("activity log unavailable")
        return await super().add(collection, data)

    async def query(self, collection, **kwargs):
        if collection == ACTIVITY_COLLECTION:
            raise DocumentStoreError("activity log unavailable")
        return await super().query(collection, **kwargs)


class TestHealthEndpoint:
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["store"] == "sql"
        assert "version" in data
        assert "timestamp" in data


class TestRootEndpoint:
    async def test_root(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert "BizDesk" in data["service"]


class TestInvoiceList:
    async def test_list_empty(self, client):
        resp = await client.get("/api/invoices")
        assert resp.status_code == 200
        assert resp.json() == []

    async def test_derives_report_status(self, client, sql_store):
        await _seed_invoice(sql_store, "INV-1", status="Paid")
        await _seed_invoice(sql_store, "INV-2", status="Draft",
                            createdAt="2026-10-02T09:00:00.000+00:00")

        resp = await client.get("/api/invoices")
        assert resp.status_code == 200
        by_id = {inv["id"]: inv for inv in resp.json()}
        assert by_id["INV-1"]["reportStatus"] == "Released"
        assert by_id["INV-2"]["reportStatus"] == "Pending"

    async def test_persisted_report_status_wins(self, client, sql_store):
        await _seed_invoice(sql_store, status="Paid", reportStatus="Pending")
        [inv] = (await client.get("/api/invoices")).json()
        assert inv["reportStatus"] == "Pending"

    async def test_newest_first(self, client, sql_store):
        await _seed_invoice(sql_store, "INV-1")
        await _seed_invoice(sql_store, "INV-2", createdAt="2026-10-05T09:00:00.000+00:00")
        ids = [inv["id"] for inv in (await client.get("/api/invoices")).json()]
        assert ids == ["INV-2", "INV-1"]

    async def test_filter_by_report_status(self, client, sql_store):
        await _seed_invoice(sql_store, "INV-1", status="Sent")
        await _seed_invoice(sql_store, "INV-2", status="Draft")
        resp = await client.get("/api/invoices", params={"reportStatus": "Pending"})
        assert [inv["id"] for inv in resp.json()] == ["INV-2"]

    async def test_filter_rejects_unknown_value(self, client):
        resp = await client.get("/api/invoices", params={"reportStatus": "Archived"})
        assert resp.status_code == 422


class TestInvoiceCreate:
    async def test_create(self, client, sample_invoice):
        resp = await client.post("/api/invoices", json=sample_invoice)
        assert resp.status_code == 201
        data = resp.json()
        assert data["id"]
        assert data["clientName"] == "Sunrise Bakery"
        assert data["createdAt"] == data["updatedAt"]

    async def test_create_logs_activity(self, client, sample_invoice):
        await client.post("/api/invoices", json=sample_invoice)
        feed = (await client.get("/api/activities")).json()
        assert [a["description"] for a in feed] == ["Created invoice for Sunrise Bakery"]
        assert feed[0]["type"] == "invoice"
        assert feed[0]["action"] == "create"

    async def test_create_without_client_name(self, client):
        await client.post("/api/invoices", json={"amount": 10})
        feed = (await client.get("/api/activities")).json()
        assert feed[0]["description"] == "Created invoice for Client"

    async def test_create_validation(self, client):
        resp = await client.post("/api/invoices", json={"clientName": "X", "status": "Cancelled"})
        assert resp.status_code == 422


class TestInvoiceUpdate:
    async def test_update_merges_fields(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={"id": "INV-1", "reportStatus": "Pending"})
        assert resp.status_code == 200
        assert resp.json() == {"id": "INV-1", "reportStatus": "Pending"}

        stored = await sql_store.get("invoices", "INV-1")
        assert stored["reportStatus"] == "Pending"
        assert stored["status"] == "Paid"
        assert stored["clientName"] == "Acme"
        assert stored["updatedAt"]

    async def test_update_then_list_shows_new_status(self, client, sql_store):
        await _seed_invoice(sql_store)
        await client.put("/api/invoices", json={"id": "INV-1", "reportStatus": "Pending"})
        [inv] = (await client.get("/api/invoices")).json()
        assert inv["reportStatus"] == "Pending"

    async def test_missing_id_is_rejected(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={"reportStatus": "Pending"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "ID is required"

        stored = await sql_store.get("invoices", "INV-1")
        assert "reportStatus" not in stored
        assert await sql_store.query(ACTIVITY_COLLECTION) == []

    async def test_unknown_id(self, client):
        resp = await client.put("/api/invoices", json={"id": "INV-404", "status": "Paid"})
        assert resp.status_code == 404

    async def test_plain_edit_writes_no_activity(self, client, sql_store):
        await _seed_invoice(sql_store)
        await client.put("/api/invoices", json={"id": "INV-1", "amount": 750})
        assert await sql_store.query(ACTIVITY_COLLECTION) == []

    async def test_description_writes_one_entry(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={
            "id": "INV-1", "reportStatus": "Pending", "activityDescription": DESC,
        })
        assert resp.status_code == 200
        # The description is metadata, not an invoice field
        assert "activityDescription" not in resp.json()
        assert "activityDescription" not in await sql_store.get("invoices", "INV-1")

        entries = await sql_store.query(ACTIVITY_COLLECTION)
        assert [e["description"] for e in entries] == [DESC]
        assert entries[0]["type"] == "invoice"
        assert entries[0]["action"] == "update"

    async def test_double_submit_logs_once(self, client, sql_store):
        await _seed_invoice(sql_store)
        body = {"id": "INV-1", "reportStatus": "Pending", "activityDescription": DESC}
        first = await client.put("/api/invoices", json=body)
        second = await client.put("/api/invoices", json=body)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        entries = await sql_store.query(ACTIVITY_COLLECTION)
        assert [e["description"] for e in entries] == [DESC]

    async def test_different_description_is_not_suppressed(self, client, sql_store):
        await _seed_invoice(sql_store)
        await client.put("/api/invoices", json={
            "id": "INV-1", "reportStatus": "Pending", "activityDescription": DESC,
        })
        await client.put("/api/invoices", json={
            "id": "INV-1", "reportStatus": "Released",
            "activityDescription": "Changed report status to Released for invoice INV-1",
        })
        assert len(await sql_store.query(ACTIVITY_COLLECTION)) == 2

    async def test_storage_failure_returns_500(self, client_factory):
        store = FailingUpdateStore()
        await _seed_invoice(store)
        async with client_factory(store) as ac:
            resp = await ac.put("/api/invoices", json={
                "id": "INV-1", "reportStatus": "Pending", "activityDescription": DESC,
            })
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to update invoice"
        assert await store.query(ACTIVITY_COLLECTION) == []

    async def test_log_failure_does_not_fail_update(self, client_factory):
        store = FailingActivityStore()
        await _seed_invoice(store)
        async with client_factory(store) as ac:
            resp = await ac.put("/api/invoices", json={
                "id": "INV-1", "reportStatus": "Pending", "activityDescription": DESC,
            })
        assert resp.status_code == 200
        assert (await store.get("invoices", "INV-1"))["reportStatus"] == "Pending"

    @pytest.mark.parametrize("field", ["amount", "status", "clientName", "items"])
    async def test_null_field_is_rejected(self, client, sql_store, field):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={"id": "INV-1", field: None})
        assert resp.status_code == 422

        stored = await sql_store.get("invoices", "INV-1")
        assert stored["amount"] == 500.0
        assert stored["status"] == "Paid"
        assert stored["clientName"] == "Acme"
        assert "updatedAt" not in stored

    async def test_null_amount_and_status_keep_report_status(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={"id": "INV-1", "amount": None, "status": None})
        assert resp.status_code == 422
        [inv] = (await client.get("/api/invoices")).json()
        assert inv["reportStatus"] == "Released"

    async def test_null_report_status_clears_override(self, client, sql_store):
        await _seed_invoice(sql_store, status="Paid", reportStatus="Pending")
        resp = await client.put("/api/invoices", json={"id": "INV-1", "reportStatus": None})
        assert resp.status_code == 200
        [inv] = (await client.get("/api/invoices")).json()
        assert inv["reportStatus"] == "Released"

    async def test_null_description_writes_no_activity(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={
            "id": "INV-1", "amount": 600, "activityDescription": None,
        })
        assert resp.status_code == 200
        assert await sql_store.query(ACTIVITY_COLLECTION) == []

    async def test_rejects_unknown_fields(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.put("/api/invoices", json={"id": "INV-1", "isAdmin": True})
        assert resp.status_code == 422


class TestInvoiceDelete:
    async def test_delete(self, client, sql_store):
        await _seed_invoice(sql_store)
        resp = await client.delete("/api/invoices", params={"id": "INV-1"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert await sql_store.get("invoices", "INV-1") is None

        feed = (await client.get("/api/activities")).json()
        assert feed[0]["description"] == "Deleted invoice INV-1"

    async def test_delete_requires_id(self, client):
        resp = await client.delete("/api/invoices")
        assert resp.status_code == 400


class TestActivityFeed:
    async def test_default_limit(self, client, sql_store):
        for i in range(25):
            await sql_store.add(ACTIVITY_COLLECTION, {
                "type": "contact", "action": "create", "description": f"Added contact {i}",
                "createdAt": f"2026-10-19T12:00:{i:02d}.000+00:00",
            })
        feed = (await client.get("/api/activities")).json()
        assert len(feed) == 20
        assert feed[0]["description"] == "Added contact 24"

    async def test_explicit_limit(self, client, sql_store):
        for i in range(3):
            await sql_store.add(ACTIVITY_COLLECTION, {
                "description": f"entry {i}", "createdAt": f"2026-10-19T12:00:0{i}.000+00:00",
            })
        feed = (await client.get("/api/activities", params={"limit": 2})).json()
        assert [a["description"] for a in feed] == ["entry 2", "entry 1"]

    @pytest.mark.parametrize("limit", [0, 101])
    async def test_limit_bounds(self, client, limit):
        resp = await client.get("/api/activities", params={"limit": limit})
        assert resp.status_code == 422

    async def test_feed_failure(self, client_factory):
        async with client_factory(FailingActivityStore()) as ac:
            resp = await ac.get("/api/activities")
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Failed to fetch activities"
