"""
Tests for HttpEntityStore, in process against the FastAPI app and against
httpx mock transports.
"""
from datetime import date

import httpx
import pytest

from apps.clients.errors import DeleteFailed, NotFound
from apps.clients.manager import ClientRecordManager
from apps.clients.store import HttpEntityStore, StoreError, StoreNotFound
from floral_crm.fastapi_app import fastapi_app

BASE_URL = "http://testserver/api/clients"


@pytest.fixture
def http_store(mongo):
    return HttpEntityStore(BASE_URL, transport=httpx.ASGITransport(app=fastapi_app))


def _mock_store(handler):
    return HttpEntityStore(BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.integration
class TestHttpEntityStore:

    async def test_create_list_update_delete(self, http_store):
        created = await http_store.create({"firstName": "Ana", "lastName": "Li", "status": "prospect"})
        assert created["_id"]

        result = await http_store.list()
        assert result.success is True
        assert [c["_id"] for c in result.data] == [created["_id"]]

        updated = await http_store.update(
            created["_id"], {"firstName": "Ana", "lastName": "Li", "status": "quoted"}
        )
        assert updated["status"] == "quoted"

        await http_store.delete(created["_id"])
        assert (await http_store.list()).data == []

    async def test_missing_id_raises_not_found(self, http_store):
        with pytest.raises(StoreNotFound):
            await http_store.delete("65f0c0ffee0000000000beef")

    async def test_validation_error_is_store_error(self, http_store):
        with pytest.raises(StoreError):
            await http_store.create({"firstName": "Ana"})


@pytest.mark.integration
class TestManagerOverHttp:

    async def test_scenarios_end_to_end(self, http_store):
        manager = ClientRecordManager(http_store)
        await manager.create_record({"firstName": "Maria", "lastName": "Gomez", "status": "booked"})
        n = len(manager.records)

        ana = await manager.create_record({"firstName": "Ana", "lastName": "Li", "status": "prospect"})
        assert len(manager.records) == n + 1

        values = ana.to_form_values()
        values["eventDate"] = "2025-06-14"
        await manager.update_record(ana.id, values)
        reloaded = manager.get(ana.id)
        assert reloaded.event_date == date(2025, 6, 14)
        stored = [c for c in (await http_store.list()).data if c["_id"] == ana.id]
        assert stored[0]["eventDate"] == "2025-06-14"

        await manager.delete_record(ana.id)
        assert manager.get(ana.id) is None
        assert len(manager.records) == n

        with pytest.raises(DeleteFailed):
            await manager.delete_record(ana.id)
        with pytest.raises(NotFound):
            await manager.update_record(ana.id, values)


@pytest.mark.unit
class TestHttpFailures:

    async def test_server_error(self):
        store = _mock_store(lambda request: httpx.Response(500, json={"detail": "boom"}))
        with pytest.raises(StoreError):
            await store.list()

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = _mock_store(handler)
        with pytest.raises(StoreError):
            await store.delete("abc")

    async def test_unsuccessful_envelope(self):
        store = _mock_store(lambda request: httpx.Response(200, json={"success": False, "data": None}))
        result = await store.list()
        assert result.success is False
        with pytest.raises(StoreError):
            await store.create({"firstName": "Ana", "lastName": "Li", "status": "prospect"})

    async def test_requests_hit_expected_urls(self):
        seen = []

        def handler(request):
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, json={"success": True, "data": {"_id": "1"}})

        store = _mock_store(handler)
        await store.update("1", {"firstName": "Ana"})
        await store.delete("1")

        assert seen == [
            ("PUT", f"{BASE_URL}/1"),
            ("DELETE", f"{BASE_URL}/1"),
        ]

